"""CLI Helper Functions for Devobox.

This module provides the wiring shared by every command:
- Runtime construction
- Loading the merged configuration and resolving services
- Consistent error reporting and table output
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

import click
from tabulate import tabulate

from devobox.core.config_loader import ConfigLoader
from devobox.core.resolver import ServiceResolver
from devobox.models.config import AppConfig
from devobox.models.service import Service
from devobox.services.container_service import ContainerService
from devobox.services.docker_service import DockerService
from devobox.services.exceptions import DevoboxError
from devobox.services.orchestrator import Orchestrator
from devobox.services.runtime import ContainerRuntime
from devobox.services.system_service import SystemService

ENGINE_ENV = "DEVOBOX_ENGINE"


@dataclass
class DevoboxContext:
    """Everything a command needs to act on the environment."""
    loader: ConfigLoader
    config: AppConfig
    services: List[Service]
    orchestrator: Orchestrator

    @property
    def container_service(self) -> ContainerService:
        return self.orchestrator.container_service

    def all_container_names(self) -> List[str]:
        """Workspace container first, then every service."""
        return [self.config.container_name] + [service.name for service in self.services]


def engine_name() -> str:
    """CLI binary of the container engine ($DEVOBOX_ENGINE, default docker)."""
    return os.environ.get(ENGINE_ENV, "docker")


def get_runtime() -> ContainerRuntime:
    """Create the container runtime used by commands."""
    return DockerService(engine=engine_name())


def load_context(runtime: Optional[ContainerRuntime] = None) -> DevoboxContext:
    """Load configuration, resolve services and wire the orchestrator.

    Raises:
        DevoboxError: If configuration is invalid or the runtime is unreachable
    """
    loader = ConfigLoader()
    config = loader.load()
    services = ServiceResolver().resolve(loader.local_dir, config)

    runtime = runtime or get_runtime()
    orchestrator = Orchestrator(ContainerService(runtime), SystemService(runtime))
    return DevoboxContext(loader=loader, config=config, services=services, orchestrator=orchestrator)


def fail(error: DevoboxError) -> None:
    """Report an error and exit with status 1."""
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def report_failures(action: str, names: List[str]) -> None:
    """Summarize the entities a best-effort operation could not handle."""
    if names:
        click.echo(f"Warning: failed to {action}: {', '.join(names)}", err=True)


def container_workdir(default: Optional[str] = None) -> Optional[str]:
    """Map the current directory to its path inside the workspace container.

    Directories under $HOME map to the same relative path under /home/dev.
    """
    cwd = Path.cwd()
    home = Path.home()
    try:
        relative = cwd.relative_to(home)
    except ValueError:
        return default
    return str(Path("/home/dev") / relative)


def print_table(headers: list[str], rows: list[list[Any]],
                tablefmt: str = "simple") -> None:
    """Print a table with project-wide defaults.

    Args:
        headers: Table headers
        rows: Table rows
        tablefmt: Table format (default: "simple")
    """
    table_str = tabulate(rows, headers=headers, tablefmt=tablefmt)
    click.echo(table_str)
