"""
Tests for the devgraph-migrate command group
"""

from unittest.mock import patch

from click.testing import CliRunner

from devgraph.database.cli import main


def test_lists_migration_commands():
    result = CliRunner().invoke(main, ["--help"])

    assert result.exit_code == 0
    listing = result.output.split("Commands:")[1]
    commands = [line.split()[0] for line in listing.splitlines() if line.strip()]
    assert sorted(commands) == ["current", "downgrade", "history", "upgrade"]


def test_upgrade_defaults_to_head():
    with patch("devgraph.database.cli.command") as alembic_command, patch(
        "devgraph.database.cli.get_alembic_config"
    ) as get_config:
        result = CliRunner().invoke(main, ["upgrade"])

    assert result.exit_code == 0
    alembic_command.upgrade.assert_called_once_with(get_config.return_value, "head")


def test_failed_command_exits_non_zero():
    with patch("devgraph.database.cli.command") as alembic_command, patch(
        "devgraph.database.cli.get_alembic_config"
    ):
        alembic_command.downgrade.side_effect = RuntimeError("no such revision")
        result = CliRunner().invoke(main, ["downgrade", "abc"])

    assert result.exit_code == 1
