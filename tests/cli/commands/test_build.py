"""Tests for the build command."""

from devobox.cli.commands.build import build
from devobox.models.container import ContainerState


class TestBuildCommand:
    """Test cases for build."""

    def test_build(self, cli_runner, config_dirs, write_config, cli_runtime, monkeypatch, tmp_path):
        global_dir, _ = config_dirs
        monkeypatch.setenv("DEVOBOX_CODE_DIR", str(tmp_path / "code"))
        (global_dir / "Containerfile").write_text("FROM fedora:40\n")
        write_config(global_dir, {"services": {"pg": {"image": "postgres:16"}}})

        result = cli_runner.invoke(build, [])

        assert result.exit_code == 0
        assert "Build complete. Created: pg, devobox" in result.output
        assert "build_image:devobox-img" in cli_runtime.commands
        assert "prune:images" in cli_runtime.commands
        assert cli_runtime.get_state("pg") == ContainerState.STOPPED
        assert cli_runtime.get_spec("devobox").volumes[0] == f"{tmp_path / 'code'}:/home/dev/code"

    def test_build_skip_cleanup(self, cli_runner, config_dirs, cli_runtime, monkeypatch, tmp_path):
        global_dir, _ = config_dirs
        monkeypatch.setenv("DEVOBOX_CODE_DIR", str(tmp_path / "code"))
        (global_dir / "Containerfile").write_text("FROM fedora:40\n")

        result = cli_runner.invoke(build, ['--skip-cleanup'])

        assert result.exit_code == 0
        assert not [c for c in cli_runtime.commands if c.startswith("prune")]

    def test_build_missing_containerfile(self, cli_runner, config_dirs, cli_runtime):
        result = cli_runner.invoke(build, [])

        assert result.exit_code == 1
        assert "Error: Containerfile not found" in result.output
