"""punchclock - project time tracking with a punch toggle."""

__version__ = "0.3.0"
