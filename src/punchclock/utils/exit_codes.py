"""
Exit codes for punchclock.

Semantic exit codes let scripts tell a missing project apart from a busy
database without parsing error text.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error (including an edit with end < start)
ERROR_INVALID_ARGS = 2

# Resource not found
ERROR_NOT_FOUND = 5

# Name already taken
ERROR_CONFLICT = 7

# Storage failure (locked or unreachable database); safe to retry
ERROR_STORAGE = 8

# Stored intervals break an invariant (negative duration, several open logs)
ERROR_DATA_INTEGRITY = 9


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_CONFLICT: "ERROR_CONFLICT",
        ERROR_STORAGE: "ERROR_STORAGE",
        ERROR_DATA_INTEGRITY: "ERROR_DATA_INTEGRITY",
    }
    return code_names.get(code, f"UNKNOWN({code})")
