"""Tests for system-wide operations."""

from pathlib import Path

from devobox.models.container import ContainerState
from devobox.services.system_service import SystemService


class TestSystemService:
    """Test cases for SystemService."""

    def test_delegates_to_runtime(self, runtime):
        service = SystemService(runtime)

        service.build_image("devobox-img", Path("Containerfile"), Path("."))
        service.prune_containers()
        service.prune_images()
        service.prune_volumes()
        service.prune_build_cache()

        assert runtime.commands == [
            "build_image:devobox-img",
            "prune:containers",
            "prune:images",
            "prune:volumes",
            "prune:build_cache",
        ]

    def test_reset_removes_everything(self, runtime):
        runtime.add_container("pg", ContainerState.RUNNING)

        SystemService(runtime).reset_system()

        assert runtime.get_state("pg") is None
        assert runtime.commands == ["reset"]

    def test_nuke(self, runtime):
        SystemService(runtime).nuke_system()
        assert runtime.commands == ["nuke"]
