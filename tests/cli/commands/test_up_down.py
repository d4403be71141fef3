"""Tests for the up and down commands."""

from devobox.cli.commands.down import down
from devobox.cli.commands.up import up
from devobox.models.container import ContainerState, HealthStatus


def _write_services(config_dirs, write_config):
    global_dir, _ = config_dirs
    write_config(global_dir, {"services": {
        "pg": {"image": "postgres:15"},
        "api": {
            "image": "app:latest",
            "healthcheck_command": "curl -f localhost",
            "healthcheck_interval": "0s",
            "healthcheck_retries": 2,
        },
    }})


class TestUpCommand:
    """Test cases for up."""

    def test_up(self, cli_runner, config_dirs, write_config, cli_runtime):
        _write_services(config_dirs, write_config)
        for name in ("devobox", "pg", "api"):
            cli_runtime.add_container(name)
        cli_runtime.set_health("api", HealthStatus.STARTING, HealthStatus.HEALTHY)

        result = cli_runner.invoke(up, [])

        assert result.exit_code == 0
        assert "Environment is up" in result.output
        for name in ("devobox", "pg", "api"):
            assert cli_runtime.get_state(name) == ContainerState.RUNNING

    def test_up_health_failure(self, cli_runner, config_dirs, write_config, cli_runtime):
        _write_services(config_dirs, write_config)
        for name in ("devobox", "pg", "api"):
            cli_runtime.add_container(name)
        cli_runtime.set_health("api", HealthStatus.UNHEALTHY)

        result = cli_runner.invoke(up, [])

        assert result.exit_code == 1
        assert "Error: Service 'api' failed its healthcheck" in result.output
        assert cli_runtime.get_state("devobox") == ContainerState.STOPPED

    def test_up_without_workspace(self, cli_runner, config_dirs, cli_runtime):
        result = cli_runner.invoke(up, [])

        assert result.exit_code == 1
        assert "Run 'devobox build' first" in result.output

    def test_up_invalid_config(self, cli_runner, config_dirs, write_config, cli_runtime):
        global_dir, _ = config_dirs
        write_config(global_dir, {"services": {"pg": {"ports": ["5432:5432"]}}})

        result = cli_runner.invoke(up, [])

        assert result.exit_code == 1
        assert "Error: Service 'pg'" in result.output
        assert cli_runtime.commands == []


class TestDownCommand:
    """Test cases for down."""

    def test_down(self, cli_runner, config_dirs, write_config, cli_runtime):
        _write_services(config_dirs, write_config)
        for name in ("devobox", "pg", "api"):
            cli_runtime.add_container(name, ContainerState.RUNNING)

        result = cli_runner.invoke(down, [])

        assert result.exit_code == 0
        assert "Everything stopped" in result.output
        for name in ("devobox", "pg", "api"):
            assert cli_runtime.get_state(name) == ContainerState.STOPPED

    def test_down_reports_failures(self, cli_runner, config_dirs, write_config, cli_runtime):
        _write_services(config_dirs, write_config)
        for name in ("devobox", "pg", "api"):
            cli_runtime.add_container(name, ContainerState.RUNNING)
        cli_runtime.fail_on("stop:pg")

        result = cli_runner.invoke(down, [])

        assert result.exit_code == 0
        assert "failed to stop: pg" in result.output
        assert cli_runtime.get_state("api") == ContainerState.STOPPED
