"""Tests for project commands.

This module tests the project management commands using mocked services.
"""
# pylint: disable=redefined-outer-name

from __future__ import annotations

import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from punchclock.commands.projects import app
from punchclock.exceptions import DuplicateNameError, InvalidNameError, NotFoundError
from punchclock.models import DeleteOutcome, Log, Project, ProjectWithLatestLog

runner = CliRunner()

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def mock_project():
    return Project(id=4, name="Website", owner_id="local", created_at=T0)


@pytest.fixture
def mock_service(mock_project):
    service = MagicMock()
    service.create_project = AsyncMock(return_value=mock_project)
    service.resolve_project = AsyncMock(return_value=mock_project)
    service.list_projects_with_latest_log = AsyncMock(
        return_value=[
            ProjectWithLatestLog(
                project=mock_project,
                latest_log=Log(id=9, project_id=4, start=T0),
            )
        ]
    )
    service.delete_project = AsyncMock(return_value=DeleteOutcome.DELETED)
    return service


@pytest.fixture(autouse=True)
def patched(mock_service, patch_config_service):
    with patch("punchclock.commands.projects.get_project_service", return_value=mock_service):
        with patch("punchclock.commands.common.get_project_service", return_value=mock_service):
            yield mock_service


class TestCreate:
    def test_create(self, mock_service):
        result = runner.invoke(app, ["create", "Website"])

        assert result.exit_code == 0
        assert "Project created: Website" in result.output
        mock_service.create_project.assert_awaited_once_with("local", "Website")

    def test_create_uses_configured_owner(self, mock_service, patch_config_service):
        patch_config_service.config.owner_id = "alice"

        runner.invoke(app, ["create", "Website"])

        mock_service.create_project.assert_awaited_once_with("alice", "Website")

    def test_duplicate_exits_conflict(self, mock_service):
        mock_service.create_project.side_effect = DuplicateNameError(
            "A project named 'Website' already exists"
        )

        result = runner.invoke(app, ["create", "Website"])

        assert result.exit_code == 7
        assert "already exists" in result.output

    def test_blank_name_exits_invalid_args(self, mock_service):
        mock_service.create_project.side_effect = InvalidNameError("Project name cannot be empty")

        result = runner.invoke(app, ["create", " "])

        assert result.exit_code == 2


class TestList:
    def test_list_json(self, mock_service):
        result = runner.invoke(app, ["list", "--output", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        [row] = data["projects"]
        assert row["name"] == "Website"
        assert row["state"] == "open_log"
        assert row["duration"] == "In Progress"

    def test_list_uses_configured_format(self, patch_config_service):
        patch_config_service.config.output.format = "json"

        result = runner.invoke(app, ["list"])

        assert json.loads(result.output)["projects"][0]["id"] == 4

    def test_list_pretty(self):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Website" in result.output


class TestDelete:
    def test_delete_with_yes(self, mock_service):
        result = runner.invoke(app, ["delete", "Website", "--yes"])

        assert result.exit_code == 0
        assert "Project deleted: Website" in result.output
        mock_service.delete_project.assert_awaited_once_with(4)

    def test_delete_confirm_declined(self, mock_service):
        result = runner.invoke(app, ["delete", "Website"], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        mock_service.delete_project.assert_not_awaited()

    def test_delete_confirm_accepted(self, mock_service):
        result = runner.invoke(app, ["delete", "Website"], input="y\n")

        assert result.exit_code == 0
        mock_service.delete_project.assert_awaited_once_with(4)

    def test_delete_noop_reported(self, mock_service):
        mock_service.delete_project.return_value = DeleteOutcome.NOOP

        result = runner.invoke(app, ["delete", "Website", "-y"])

        assert result.exit_code == 0
        assert "already gone" in result.output

    def test_delete_unknown_name_is_noop(self, mock_service):
        mock_service.resolve_project.side_effect = NotFoundError("project", "Ghost")

        result = runner.invoke(app, ["delete", "Ghost", "-y"])

        assert result.exit_code == 0
        assert "No project Ghost; nothing deleted" in result.output
        mock_service.delete_project.assert_not_awaited()

    def test_delete_unknown_id_is_noop(self, mock_service):
        mock_service.resolve_project.side_effect = NotFoundError("project", "999")

        result = runner.invoke(app, ["delete", "999", "--yes"])

        assert result.exit_code == 0
        assert "nothing deleted" in result.output

    def test_delete_unknown_skips_confirmation(self, mock_service):
        mock_service.resolve_project.side_effect = NotFoundError("project", "Ghost")

        result = runner.invoke(app, ["delete", "Ghost"])

        assert result.exit_code == 0
        assert "nothing deleted" in result.output
