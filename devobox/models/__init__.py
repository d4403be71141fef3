"""Models for Devobox."""

from .config import AppConfig, BuildConfig, ContainerSection, PathsConfig
from .container import Container, ContainerSpec, ContainerState, HealthStatus
from .project import DependenciesConfig, Project, ProjectConfig, ProjectSettings
from .service import Service, ServiceKind

__all__ = [
    'AppConfig',
    'BuildConfig',
    'ContainerSection',
    'PathsConfig',
    'Container',
    'ContainerSpec',
    'ContainerState',
    'HealthStatus',
    'DependenciesConfig',
    'Project',
    'ProjectConfig',
    'ProjectSettings',
    'Service',
    'ServiceKind',
]
