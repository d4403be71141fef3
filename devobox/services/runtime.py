"""Container runtime capability.

Every container operation Devobox performs goes through this interface, so the
lifecycle and orchestration layers never talk to an engine directly.
Implementations raise :class:`ContainerRuntimeError` on failure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..models.container import Container, ContainerSpec, HealthStatus


class ContainerRuntime(ABC):
    """Operations a container engine must provide."""

    @abstractmethod
    def get_container(self, name: str) -> Container:
        """Get the current state of a container."""

    @abstractmethod
    def get_container_health(self, name: str) -> HealthStatus:
        """Get the health status of a container."""

    @abstractmethod
    def start_container(self, name: str) -> None:
        """Start a container."""

    @abstractmethod
    def stop_container(self, name: str) -> None:
        """Stop a container."""

    @abstractmethod
    def create_container(self, spec: ContainerSpec) -> None:
        """Create a new container from a spec."""

    @abstractmethod
    def remove_container(self, name: str) -> None:
        """Remove a container.

        Raises:
            ContainerNotFoundError: If the container does not exist
        """

    @abstractmethod
    def exec_shell(
        self,
        name: str,
        workdir: Optional[str] = None,
        session_name: Optional[str] = None,
    ) -> None:
        """Open an interactive shell session in a container."""

    @abstractmethod
    def is_command_available(self, cmd: str) -> bool:
        """Check if a command is available on the host."""

    @abstractmethod
    def build_image(self, tag: str, containerfile: Path, context_dir: Path) -> None:
        """Build an image."""

    @abstractmethod
    def prune_containers(self) -> None:
        """Remove stopped containers."""

    @abstractmethod
    def prune_images(self) -> None:
        """Remove unused images."""

    @abstractmethod
    def prune_volumes(self) -> None:
        """Remove unused volumes."""

    @abstractmethod
    def prune_build_cache(self) -> None:
        """Remove the build cache."""

    @abstractmethod
    def nuke_system(self) -> None:
        """Aggressively remove images, containers, volumes and build cache."""

    @abstractmethod
    def reset_system(self) -> None:
        """Reset the engine to a pristine state (most destructive)."""
