"""Engine-wide operations: image builds and resource pruning."""

from pathlib import Path

from .runtime import ContainerRuntime


class SystemService:
    """System-wide runtime operations (build, prune, reset)."""

    def __init__(self, runtime: ContainerRuntime):
        self.runtime = runtime

    def build_image(self, tag: str, containerfile: Path, context_dir: Path) -> None:
        self.runtime.build_image(tag, containerfile, context_dir)

    def prune_containers(self) -> None:
        self.runtime.prune_containers()

    def prune_images(self) -> None:
        self.runtime.prune_images()

    def prune_volumes(self) -> None:
        self.runtime.prune_volumes()

    def prune_build_cache(self) -> None:
        self.runtime.prune_build_cache()

    def nuke_system(self) -> None:
        self.runtime.nuke_system()

    def reset_system(self) -> None:
        self.runtime.reset_system()
