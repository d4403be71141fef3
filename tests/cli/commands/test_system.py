"""Tests for the nuke and reset commands."""

from unittest.mock import patch

from devobox.cli.commands.system import nuke, reset
from devobox.models.container import ContainerState


class TestNukeCommand:
    """Test cases for nuke."""

    @patch('devobox.cli.commands.system.Confirm.ask', return_value=True)
    def test_nuke_confirmed(self, mock_ask, cli_runner, cli_runtime):
        result = cli_runner.invoke(nuke, [])

        assert result.exit_code == 0
        assert "Nuke complete" in result.output
        assert cli_runtime.commands == ["nuke"]
        mock_ask.assert_called_once()

    @patch('devobox.cli.commands.system.Confirm.ask', return_value=False)
    def test_nuke_declined(self, mock_ask, cli_runner, cli_runtime):
        result = cli_runner.invoke(nuke, [])

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert cli_runtime.commands == []

    @patch('devobox.cli.commands.system.Confirm.ask')
    def test_nuke_yes_skips_prompt(self, mock_ask, cli_runner, cli_runtime):
        result = cli_runner.invoke(nuke, ['--yes'])

        assert result.exit_code == 0
        mock_ask.assert_not_called()
        assert cli_runtime.commands == ["nuke"]


class TestResetCommand:
    """Test cases for reset."""

    @patch('devobox.cli.commands.system.Prompt.ask', return_value="reset")
    def test_reset_confirmed(self, mock_ask, cli_runner, cli_runtime):
        cli_runtime.add_container("pg", ContainerState.RUNNING)

        result = cli_runner.invoke(reset, [])

        assert result.exit_code == 0
        assert "System reset complete" in result.output
        assert cli_runtime.get_state("pg") is None

    @patch('devobox.cli.commands.system.Prompt.ask', return_value="yes")
    def test_reset_requires_exact_word(self, mock_ask, cli_runner, cli_runtime):
        result = cli_runner.invoke(reset, [])

        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert cli_runtime.commands == []

    def test_reset_failure(self, cli_runner, cli_runtime):
        cli_runtime.fail_on("reset")

        result = cli_runner.invoke(reset, ['--yes'])

        assert result.exit_code == 1
        assert "Error: Simulated failure on: reset" in result.output
