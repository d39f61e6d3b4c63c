"""Tests for output formatters."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest
import yaml

from punchclock.models import Log, Project, ProjectWithLatestLog
from punchclock.utils.ui.formatters import (
    describe_duration,
    format_output,
    format_timestamp,
    log_to_row,
    status_to_row,
)

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
PROJECT = Project(id=3, name="Website", owner_id="local", created_at=T0)


def _log(end: datetime | None = None, log_id: int = 10) -> Log:
    return Log(id=log_id, project_id=3, start=T0, end=end)


class TestRows:
    def test_format_timestamp(self):
        assert format_timestamp(T0) == "2024-03-01 09:00:00"
        assert format_timestamp(None) == "n/a"

    def test_describe_duration_flags_negative(self):
        assert describe_duration(_log(T0 - timedelta(minutes=1))) == "invalid (end < start)"

    def test_log_row_open(self):
        row = log_to_row(_log())

        assert row == {
            "id": 10,
            "project_id": 3,
            "start": T0.isoformat(),
            "end": None,
            "duration": "In Progress",
        }

    def test_log_row_with_project_name(self):
        row = log_to_row(_log(T0 + timedelta(minutes=90)), "Website")

        assert row["project"] == "Website"
        assert "project_id" not in row
        assert row["duration"] == "1h 30m"

    def test_status_row_without_logs(self):
        row = status_to_row(ProjectWithLatestLog(project=PROJECT))

        assert row["state"] == "no_open_log"
        assert row["latest_start"] is None
        assert row["duration"] is None

    def test_status_row_running(self):
        row = status_to_row(ProjectWithLatestLog(project=PROJECT, latest_log=_log()))

        assert row["state"] == "open_log"
        assert row["latest_start"] == T0.isoformat()
        assert row["duration"] == "In Progress"


class TestFormatOutput:
    def test_json(self, capsys):
        format_output({"logs": [log_to_row(_log())]}, "json")

        data = json.loads(capsys.readouterr().out)
        assert data["logs"][0]["id"] == 10

    def test_yaml(self, capsys):
        format_output({"projects": [status_to_row(ProjectWithLatestLog(project=PROJECT))]}, "yaml")

        data = yaml.safe_load(capsys.readouterr().out)
        assert data["projects"][0]["name"] == "Website"

    @pytest.mark.parametrize("fmt", ["table", "pretty"])
    def test_status_rendering_mentions_project(self, fmt):
        result = {"projects": [status_to_row(ProjectWithLatestLog(project=PROJECT, latest_log=_log()))]}

        with patch("punchclock.utils.ui.formatters.console") as console:
            format_output(result, fmt)

        assert console.print.called

    def test_pretty_empty_projects_hint(self):
        with patch("punchclock.utils.ui.formatters.console") as console:
            format_output({"projects": []}, "pretty")

        [call] = console.print.call_args_list
        assert "projects create" in call.args[0]

    def test_pretty_logs_table(self):
        rows = [log_to_row(_log(T0 + timedelta(hours=1)), "Website")]

        with patch("punchclock.utils.ui.formatters.console") as console:
            format_output({"logs": rows}, "pretty")

        table = console.print.call_args.args[0]
        assert table.row_count == 1
