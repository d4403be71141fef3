import pytest
import yaml
from click.testing import CliRunner
from unittest.mock import patch

from devobox.models.service import Service
from devobox.services.container_service import ContainerService
from devobox.services.memory_runtime import InMemoryRuntime
from devobox.services.orchestrator import Orchestrator
from devobox.services.system_service import SystemService


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def runtime():
    """Provides an empty in-memory runtime where the docker CLI is available."""
    return InMemoryRuntime(available_commands={"docker"})


@pytest.fixture
def container_service(runtime):
    return ContainerService(runtime)


@pytest.fixture
def orchestrator(runtime):
    """Provides an orchestrator wired to the in-memory runtime."""
    return Orchestrator(ContainerService(runtime), SystemService(runtime))


@pytest.fixture
def make_service():
    """Factory for named services; health polling defaults to no wait."""
    def _make(name, image="app:latest", **fields):
        if fields.get("healthcheck_command"):
            fields.setdefault("healthcheck_interval", "0s")
        return Service(image=image, **fields).with_name(name)
    return _make


@pytest.fixture
def write_config():
    """Writes a devobox.yml into a directory."""
    def _write(directory, data):
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "devobox.yml"
        path.write_text(yaml.safe_dump(data))
        return path
    return _write


@pytest.fixture
def config_dirs(tmp_path, monkeypatch):
    """Global config dir and a local project dir used as the cwd."""
    global_dir = tmp_path / "global"
    local_dir = tmp_path / "project"
    global_dir.mkdir()
    local_dir.mkdir()
    monkeypatch.setenv("DEVOBOX_CONFIG_DIR", str(global_dir))
    monkeypatch.delenv("DEVOBOX_ENGINE", raising=False)
    monkeypatch.chdir(local_dir)
    return global_dir, local_dir


@pytest.fixture
def cli_runtime(runtime):
    """Routes every CLI command to the in-memory runtime."""
    with patch('devobox.cli.helpers.get_runtime', return_value=runtime), \
         patch('devobox.cli.commands.clean.get_runtime', return_value=runtime), \
         patch('devobox.cli.commands.system.get_runtime', return_value=runtime):
        yield runtime
