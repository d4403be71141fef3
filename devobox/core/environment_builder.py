"""Build workflow: image build plus recreation of every container."""

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from ..models.config import AppConfig
from ..models.container import ContainerSpec
from ..models.service import Service
from ..services.exceptions import ConfigValidationError
from ..services.orchestrator import CleanupOptions, Orchestrator
from .constants import (
    CODE_DIR_ENV,
    CONTAINER_CODE_DIR,
    CONTAINER_MARKER_ENV,
    DEFAULT_CODE_DIR,
    TOOLS_VOLUME,
    WORKSPACE_NETWORK,
    WORKSPACE_SECURITY_OPT,
    WORKSPACE_USERNS,
)

logger = logging.getLogger(__name__)


def code_dir() -> Path:
    """Host directory mounted into the workspace ($DEVOBOX_CODE_DIR or ~/code)."""
    override = os.environ.get(CODE_DIR_ENV)
    return Path(override).expanduser() if override else DEFAULT_CODE_DIR


def workspace_spec(config: AppConfig, host_code_dir: Path) -> ContainerSpec:
    """Container spec for the primary workspace container."""
    env = [f"{CONTAINER_MARKER_ENV}=1"] + list(config.project.env)
    return ContainerSpec(
        name=config.container_name,
        image=config.image_name,
        env=env,
        volumes=[f"{host_code_dir}:{CONTAINER_CODE_DIR}", TOOLS_VOLUME],
        network=WORKSPACE_NETWORK,
        userns=WORKSPACE_USERNS,
        security_opt=WORKSPACE_SECURITY_OPT,
        workdir=config.container.workdir,
        extra_options={"tty": True, "stdin_open": True},
    )


class EnvironmentBuilder:
    """Builds the workspace image and recreates the workspace and service containers."""

    def __init__(self, orchestrator: Orchestrator, config: AppConfig, config_dir: Path,
                 containerfile: Path, host_code_dir: Optional[Path] = None,
                 tool_manifest: Optional[Path] = None):
        """Initialize environment builder.

        Args:
            orchestrator: Orchestrator wired to the runtime
            config: Merged configuration with defaults applied
            config_dir: Build context directory
            containerfile: Containerfile to build from
            host_code_dir: Host directory to mount as the code dir
            tool_manifest: Tool manifest the Containerfile installs from
        """
        self.orchestrator = orchestrator
        self.config = config
        self.config_dir = config_dir
        self.containerfile = containerfile
        self.host_code_dir = host_code_dir or code_dir()
        self.tool_manifest = tool_manifest

    def build(self, services: Sequence[Service], skip_cleanup: bool = False) -> List[str]:
        """Run the full build.

        Args:
            services: Resolved services to recreate
            skip_cleanup: Skip pruning stale containers, images and build cache

        Returns:
            Names of every container that was recreated

        Raises:
            ConfigValidationError: If the Containerfile is missing
            ContainerRuntimeError: If the build or a container creation fails
        """
        if not self.containerfile.exists():
            raise ConfigValidationError(
                f"Containerfile not found at {self.containerfile}"
            )
        if self.tool_manifest and not self.tool_manifest.exists():
            logger.warning(f"Tool manifest not found at {self.tool_manifest}; tools it pins will be missing from the image")

        if not skip_cleanup:
            self.orchestrator.cleanup(
                CleanupOptions(containers=True, images=True, volumes=False, build_cache=True)
            )

        logger.info(f"Building image {self.config.image_name}...")
        self.orchestrator.system_service.build_image(
            self.config.image_name, self.containerfile, self.config_dir
        )

        if not services:
            logger.warning("No services configured. Skipping service containers.")

        container_service = self.orchestrator.container_service
        for service in services:
            container_service.recreate(service.to_spec())

        self._ensure_code_dir()
        container_service.recreate(workspace_spec(self.config, self.host_code_dir))

        logger.info("Build complete")
        return [service.name for service in services] + [self.config.container_name]

    def _ensure_code_dir(self) -> None:
        if not self.host_code_dir.exists():
            logger.warning(f"Directory {self.host_code_dir} does not exist. Creating it for the bind mount...")
            self.host_code_dir.mkdir(parents=True, exist_ok=True)
