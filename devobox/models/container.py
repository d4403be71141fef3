"""Runtime-observed container models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ContainerState(Enum):
    """Lifecycle state of a container as reported by the runtime."""
    RUNNING = "running"
    STOPPED = "stopped"
    NOT_CREATED = "not_created"


class HealthStatus(Enum):
    """Health status of a container."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    STARTING = "starting"
    UNKNOWN = "unknown"
    NOT_APPLICABLE = "not_applicable"  # No healthcheck configured


@dataclass
class Container:
    """A container and its live state."""
    name: str
    state: ContainerState


@dataclass
class ContainerSpec:
    """Everything the runtime needs to create a container."""
    name: str
    image: str
    ports: List[str] = field(default_factory=list)
    env: List[str] = field(default_factory=list)
    volumes: List[str] = field(default_factory=list)
    network: Optional[str] = None
    userns: Optional[str] = None
    security_opt: Optional[str] = None
    workdir: Optional[str] = None
    healthcheck_command: Optional[str] = None
    healthcheck_interval: Optional[str] = None  # e.g. "5s"
    healthcheck_timeout: Optional[str] = None  # e.g. "3s"
    healthcheck_retries: Optional[int] = None
    # Passed through to the runtime untouched (e.g. tty, stdin_open)
    extra_options: Dict[str, Any] = field(default_factory=dict)
