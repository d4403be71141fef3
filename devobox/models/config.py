"""Layered application configuration models."""

from typing import Dict, List, Optional, TypeVar

from pydantic import BaseModel, Field

from ..core.constants import (
    DEFAULT_CONTAINER_NAME,
    DEFAULT_CONTAINER_WORKDIR,
    DEFAULT_CONTAINERFILE,
    DEFAULT_IMAGE_NAME,
    DEFAULT_TOOL_MANIFEST,
)
from .project import DependenciesConfig, ProjectSettings
from .service import Service

SectionT = TypeVar("SectionT", bound=BaseModel)


class PathsConfig(BaseModel):
    """Locations of build inputs, relative to the config directory."""
    containerfile: Optional[str] = None
    tool_manifest: Optional[str] = None


class BuildConfig(BaseModel):
    """Image build settings."""
    image_name: Optional[str] = None


class ContainerSection(BaseModel):
    """Workspace container settings."""
    name: Optional[str] = None
    workdir: Optional[str] = None


class AppConfig(BaseModel):
    """Configuration read from a devobox.yml file.

    A global file and an optional local file are combined with
    :meth:`merge`; :meth:`with_defaults` fills whatever is still unset.
    """

    paths: PathsConfig = Field(default_factory=PathsConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    container: ContainerSection = Field(default_factory=ContainerSection)
    project: ProjectSettings = Field(default_factory=ProjectSettings)
    dependencies: DependenciesConfig = Field(default_factory=DependenciesConfig)
    services: Dict[str, Service] = Field(default_factory=dict)

    def merge(self, local: "AppConfig") -> "AppConfig":
        """Overlay a local config on top of this (global) one.

        Scalar fields present in ``local`` win. ``include_projects`` lists are
        unioned keeping first-seen order, and ``services`` maps are unioned with
        local entries replacing global ones on the same key.
        """
        include_projects = _unique(
            self.dependencies.include_projects + local.dependencies.include_projects
        )
        return AppConfig(
            paths=_overlay(self.paths, local.paths),
            build=_overlay(self.build, local.build),
            container=_overlay(self.container, local.container),
            project=_overlay(self.project, local.project),
            dependencies=DependenciesConfig(include_projects=include_projects),
            services={**self.services, **local.services},
        )

    def with_defaults(self) -> "AppConfig":
        """Return a copy with defaults applied to every unset field."""
        return self.model_copy(
            update={
                "paths": PathsConfig(
                    containerfile=self.paths.containerfile or DEFAULT_CONTAINERFILE,
                    tool_manifest=self.paths.tool_manifest or DEFAULT_TOOL_MANIFEST,
                ),
                "build": BuildConfig(
                    image_name=self.build.image_name or DEFAULT_IMAGE_NAME
                ),
                "container": ContainerSection(
                    name=self.container.name or DEFAULT_CONTAINER_NAME,
                    workdir=self.container.workdir or DEFAULT_CONTAINER_WORKDIR,
                ),
            }
        )

    @property
    def container_name(self) -> str:
        return self.container.name or DEFAULT_CONTAINER_NAME

    @property
    def image_name(self) -> str:
        return self.build.image_name or DEFAULT_IMAGE_NAME


def _overlay(base: SectionT, override: SectionT) -> SectionT:
    """Copy ``base`` with every field explicitly set in ``override``."""
    return base.model_copy(
        update=override.model_dump(exclude_unset=True, exclude_none=True)
    )


def _unique(items: List[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
