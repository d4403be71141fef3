"""Service layer for abstracting container runtime operations."""

from .container_service import ContainerService
from .docker_service import DockerService
from .exceptions import (
    ConfigValidationError,
    ContainerNotFoundError,
    ContainerRuntimeError,
    DevoboxError,
    HealthCheckError,
    ServiceNotFoundError,
)
from .memory_runtime import InMemoryRuntime
from .orchestrator import CleanupOptions, Orchestrator, ServiceStatus
from .runtime import ContainerRuntime
from .system_service import SystemService

__all__ = [
    "ContainerService",
    "DockerService",
    "InMemoryRuntime",
    "ContainerRuntime",
    "SystemService",
    "Orchestrator",
    "CleanupOptions",
    "ServiceStatus",
    "DevoboxError",
    "ConfigValidationError",
    "ContainerNotFoundError",
    "ContainerRuntimeError",
    "HealthCheckError",
    "ServiceNotFoundError",
]
