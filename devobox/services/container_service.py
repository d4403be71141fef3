"""Single-container lifecycle operations."""

import logging
from typing import Optional

from ..models.container import Container, ContainerSpec, ContainerState, HealthStatus
from .exceptions import ContainerNotFoundError, ContainerRuntimeError
from .runtime import ContainerRuntime

logger = logging.getLogger(__name__)


class ContainerService:
    """Drives one container through NotCreated -> Stopped -> Running and back.

    State is always read live from the runtime; nothing is cached.
    """

    def __init__(self, runtime: ContainerRuntime):
        self.runtime = runtime

    def status(self, name: str) -> Container:
        return self.runtime.get_container(name)

    def ensure_running(self, name: str) -> None:
        """Make sure a container that must exist is running.

        Raises:
            ContainerNotFoundError: If the container was never created
            ContainerRuntimeError: If the runtime fails
        """
        container = self.runtime.get_container(name)

        if container.state == ContainerState.RUNNING:
            return
        if container.state == ContainerState.STOPPED:
            logger.info(f"Starting {name}...")
            self.runtime.start_container(name)
            return
        raise ContainerNotFoundError(
            f"Container {name} does not exist. Run 'devobox build' first."
        )

    def start(self, name: str) -> None:
        """Start a container; already running or missing containers are a no-op."""
        container = self.runtime.get_container(name)

        if container.state == ContainerState.RUNNING:
            logger.warning(f"{name} is already running")
        elif container.state == ContainerState.STOPPED:
            logger.info(f"Starting {name}...")
            self.runtime.start_container(name)
        else:
            logger.warning(f"Container {name} does not exist. Run 'devobox build' first.")

    def stop(self, name: str) -> None:
        """Stop a container; stopped or missing containers are a no-op."""
        container = self.runtime.get_container(name)

        if container.state == ContainerState.RUNNING:
            logger.info(f"Stopping {name}...")
            self.runtime.stop_container(name)
        else:
            logger.warning(f"{name} is already stopped or was never created")

    def recreate(self, spec: ContainerSpec) -> None:
        """Replace any existing container named by ``spec`` with a fresh one.

        Removal failures are logged only, since the container is usually
        absent. Creation failures propagate.
        """
        try:
            self.runtime.remove_container(spec.name)
        except ContainerRuntimeError as e:
            logger.warning(f"Could not remove {spec.name} (it may not exist): {e}")

        logger.info(f"Creating {spec.name} from {spec.image}...")
        self.runtime.create_container(spec)

    def exec_shell(
        self,
        name: str,
        workdir: Optional[str] = None,
        session_name: Optional[str] = None,
    ) -> None:
        self.runtime.exec_shell(name, workdir, session_name)

    def get_health_status(self, name: str) -> HealthStatus:
        return self.runtime.get_container_health(name)

    def is_command_available(self, cmd: str) -> bool:
        return self.runtime.is_command_available(cmd)
