"""Project models.

A project is a workspace directory carrying its own ``devobox.yml``. Projects
are the unit of dependency inclusion: a project can pull in the services of
the projects it lists under ``dependencies.include_projects``.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .service import Service


class ProjectSettings(BaseModel):
    """Project-specific settings."""
    name: Optional[str] = None
    env: List[str] = Field(default_factory=list)
    shell: Optional[str] = None
    startup_command: Optional[str] = None


class DependenciesConfig(BaseModel):
    """Other projects to include services from."""
    include_projects: List[str] = Field(default_factory=list)


class ProjectConfig(BaseModel):
    """Configuration declared by a project's devobox.yml."""
    project: ProjectSettings = Field(default_factory=ProjectSettings)
    dependencies: DependenciesConfig = Field(default_factory=DependenciesConfig)
    services: Dict[str, Service] = Field(default_factory=dict)


@dataclass
class Project:
    """A workspace directory and its declared configuration."""
    name: str
    path: Path
    config: ProjectConfig

    @classmethod
    def from_path(cls, path: Path, config: Optional[ProjectConfig] = None) -> "Project":
        """Create a project, resolving its name from config or directory name."""
        config = config or ProjectConfig()
        name = config.project.name or path.name or "unknown"
        return cls(name=name, path=path, config=config)

    @property
    def session_name(self) -> str:
        return f"devobox-{self.name}"

    @property
    def env_vars(self) -> List[str]:
        return self.config.project.env

    @property
    def shell(self) -> Optional[str]:
        return self.config.project.shell

    @property
    def startup_command(self) -> Optional[str]:
        return self.config.project.startup_command
