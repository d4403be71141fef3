"""Docker SDK implementation of the container runtime.

Works against Docker or any engine exposing a Docker-compatible API (such as
Podman's socket, selected through ``DOCKER_HOST``).
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional

import docker
import docker.errors
from docker.types import Mount

from ..core.constants import SESSION_PREFIX
from ..models.container import Container, ContainerSpec, ContainerState, HealthStatus
from ..utils.duration import parse_duration
from .exceptions import ContainerNotFoundError, ContainerRuntimeError
from .runtime import ContainerRuntime

logger = logging.getLogger(__name__)

NANOSECONDS = 1_000_000_000

HEALTH_STATUSES = {
    "healthy": HealthStatus.HEALTHY,
    "unhealthy": HealthStatus.UNHEALTHY,
    "starting": HealthStatus.STARTING,
}

# The SDK validates userns_mode client-side and only accepts these values
SDK_USERNS_MODES = ("host",)


class DockerService(ContainerRuntime):
    """Container runtime backed by the Docker SDK."""

    def __init__(self, engine: str = "docker"):
        """Initialize Docker client and test connection.

        Args:
            engine: CLI binary used for interactive sessions
        """
        self.engine = engine
        self._command_availability: Dict[str, bool] = {}
        try:
            self.client = docker.from_env()
            self.client.ping()
        except docker.errors.DockerException as e:
            if "connection refused" in str(e).lower() or "cannot connect" in str(e).lower():
                raise ContainerRuntimeError(
                    "Container engine is not running. Please start Docker or the Podman socket."
                ) from e
            else:
                raise ContainerRuntimeError(f"Failed to connect to container engine: {e}") from e

    def get_container(self, name: str) -> Container:
        try:
            container = self.client.containers.get(name)
        except docker.errors.NotFound:
            return Container(name=name, state=ContainerState.NOT_CREATED)
        except docker.errors.APIError as e:
            raise ContainerRuntimeError(f"Failed to inspect container '{name}': {e}") from e

        if container.status == "running":
            return Container(name=name, state=ContainerState.RUNNING)
        return Container(name=name, state=ContainerState.STOPPED)

    def get_container_health(self, name: str) -> HealthStatus:
        try:
            container = self.client.containers.get(name)
        except docker.errors.NotFound:
            return HealthStatus.UNKNOWN
        except docker.errors.APIError as e:
            raise ContainerRuntimeError(f"Failed to check health of '{name}': {e}") from e

        health = container.attrs.get("State", {}).get("Health") or {}
        status = health.get("Status")
        if not status:
            return HealthStatus.NOT_APPLICABLE
        return HEALTH_STATUSES.get(status, HealthStatus.UNKNOWN)

    def start_container(self, name: str) -> None:
        try:
            self.client.containers.get(name).start()
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError(f"Container '{name}' not found") from e
        except docker.errors.APIError as e:
            raise ContainerRuntimeError(f"Failed to start container '{name}': {e}") from e

    def stop_container(self, name: str) -> None:
        try:
            self.client.containers.get(name).stop()
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError(f"Container '{name}' not found") from e
        except docker.errors.APIError as e:
            raise ContainerRuntimeError(f"Failed to stop container '{name}': {e}") from e

    def create_container(self, spec: ContainerSpec) -> None:
        """Create a container from a spec.

        Raises:
            ContainerRuntimeError: If the spec is invalid, the image is missing
                or creation fails
        """
        kwargs = self._create_kwargs(spec)
        logger.debug(f"Creating container {spec.name} with {kwargs}")
        try:
            self.client.containers.create(**kwargs)
        except docker.errors.ImageNotFound as e:
            raise ContainerRuntimeError(f"Image '{spec.image}' not found") from e
        except (docker.errors.DockerException, ValueError) as e:
            raise ContainerRuntimeError(f"Failed to create container '{spec.name}': {e}") from e

    def remove_container(self, name: str) -> None:
        try:
            self.client.containers.get(name).remove(force=True)
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError(f"Container '{name}' not found") from e
        except docker.errors.APIError as e:
            raise ContainerRuntimeError(f"Failed to remove container '{name}': {e}") from e

    def exec_shell(
        self,
        name: str,
        workdir: Optional[str] = None,
        session_name: Optional[str] = None,
    ) -> None:
        # Interactive sessions need a real TTY, so go through the CLI
        cmd = [self.engine, "exec", "-it"]
        if workdir:
            cmd.extend(["-w", workdir])
        cmd.extend([name, "zellij", "attach", "--create", session_name or SESSION_PREFIX])

        logger.debug(f"Running {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd)
        except OSError as e:
            raise ContainerRuntimeError(f"Failed to open shell in '{name}': {e}") from e
        if result.returncode != 0:
            raise ContainerRuntimeError(f"Shell in '{name}' exited with status {result.returncode}")

    def is_command_available(self, cmd: str) -> bool:
        if cmd not in self._command_availability:
            self._command_availability[cmd] = shutil.which(cmd) is not None
        return self._command_availability[cmd]

    def build_image(self, tag: str, containerfile: Path, context_dir: Path) -> None:
        try:
            _, logs = self.client.images.build(
                path=str(context_dir),
                dockerfile=str(containerfile),
                tag=tag,
                rm=True,
            )
        except docker.errors.BuildError as e:
            raise ContainerRuntimeError(f"Failed to build image '{tag}': {e}") from e
        except docker.errors.APIError as e:
            raise ContainerRuntimeError(f"Failed to build image '{tag}': {e}") from e

        for log in logs:
            if 'stream' in log:
                logger.info(log['stream'].rstrip())

    def prune_containers(self) -> None:
        self._prune("stopped containers", self.client.containers.prune)

    def prune_images(self) -> None:
        self._prune("unused images", self.client.images.prune, filters={"dangling": False})

    def prune_volumes(self) -> None:
        self._prune("unused volumes", self.client.volumes.prune)

    def prune_build_cache(self) -> None:
        self._prune("build cache", self.client.api.prune_builds)

    def nuke_system(self) -> None:
        logger.info("Removing all images, containers, volumes and build cache...")
        self.prune_containers()
        self.prune_images()
        self.prune_volumes()
        self._prune("unused networks", self.client.networks.prune)
        self.prune_build_cache()
        logger.info("Aggressive cleanup complete")

    def reset_system(self) -> None:
        logger.warning("System reset will DELETE EVERYTHING: containers, images and volumes")
        try:
            containers = self.client.containers.list(all=True)
        except docker.errors.APIError as e:
            raise ContainerRuntimeError(f"Failed to list containers: {e}") from e
        for container in containers:
            self._remove_if_present(f"container {container.name}", container.remove, force=True)

        self.nuke_system()

        try:
            images = self.client.images.list(all=True)
        except docker.errors.APIError as e:
            raise ContainerRuntimeError(f"Failed to list images: {e}") from e
        for image in images:
            # Removing a child image can take its untagged parents with it
            self._remove_if_present(f"image {image.id}", self.client.images.remove, image.id, force=True)
        logger.info("System reset complete")

    def _remove_if_present(self, what: str, remove, *args, **kwargs) -> None:
        try:
            remove(*args, **kwargs)
        except docker.errors.NotFound:
            logger.debug(f"{what} is already gone")
        except docker.errors.APIError as e:
            raise ContainerRuntimeError(f"Failed to remove {what}: {e}") from e

    def _prune(self, what: str, prune, **kwargs) -> None:
        logger.debug(f"Pruning {what}")
        try:
            result = prune(**kwargs)
        except docker.errors.APIError as e:
            raise ContainerRuntimeError(f"Failed to prune {what}: {e}") from e
        reclaimed = (result or {}).get("SpaceReclaimed")
        if reclaimed:
            logger.info(f"Reclaimed {reclaimed} bytes from {what}")

    def _create_kwargs(self, spec: ContainerSpec) -> Dict[str, Any]:
        binds = [volume for volume in spec.volumes if ":" in volume]
        mounts = [
            Mount(target=volume, source=None, type="volume")
            for volume in spec.volumes
            if ":" not in volume
        ]

        kwargs: Dict[str, Any] = {
            "image": spec.image,
            "name": spec.name,
            "environment": spec.env or None,
            "ports": _port_bindings(spec.ports) or None,
            "volumes": binds or None,
            "mounts": mounts or None,
            "network_mode": spec.network,
            "userns_mode": self._userns_mode(spec),
            "security_opt": [spec.security_opt] if spec.security_opt else None,
            "working_dir": spec.workdir,
            "healthcheck": _healthcheck(spec),
        }
        kwargs.update(spec.extra_options)
        return {key: value for key, value in kwargs.items() if value is not None}

    def _userns_mode(self, spec: ContainerSpec) -> Optional[str]:
        if spec.userns is None or spec.userns in SDK_USERNS_MODES:
            return spec.userns
        logger.warning(
            f"User namespace mode '{spec.userns}' cannot be set through the container API; "
            f"creating {spec.name} with the engine default"
        )
        return None


def _port_bindings(ports: List[str]) -> Dict[str, Any]:
    """Translate ``[ip:][host:]container[/proto]`` strings to SDK port bindings."""
    bindings: Dict[str, Any] = {}
    for entry in ports:
        mapping, _, protocol = entry.partition("/")
        parts = mapping.split(":")
        try:
            container_port = f"{int(parts[-1])}/{protocol or 'tcp'}"
            if len(parts) == 1:
                host: Any = None
            elif len(parts) == 2:
                host = int(parts[0]) if parts[0] else None
            else:
                host_ip = ":".join(parts[:-2])
                host = (host_ip, int(parts[-2])) if parts[-2] else (host_ip,)
        except ValueError as e:
            raise ContainerRuntimeError(f"Invalid port mapping '{entry}'") from e
        bindings[container_port] = host
    return bindings


def _healthcheck(spec: ContainerSpec) -> Optional[Dict[str, Any]]:
    if not spec.healthcheck_command:
        return None

    healthcheck: Dict[str, Any] = {"test": ["CMD-SHELL", spec.healthcheck_command]}
    for key, value in (("interval", spec.healthcheck_interval), ("timeout", spec.healthcheck_timeout)):
        if value:
            try:
                healthcheck[key] = parse_duration(value) * NANOSECONDS
            except ValueError as e:
                raise ContainerRuntimeError(f"Invalid healthcheck {key} for '{spec.name}': {e}") from e
    if spec.healthcheck_retries is not None:
        healthcheck["retries"] = spec.healthcheck_retries
    return healthcheck
