"""Resolution of the configured services into a flat, validated list."""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union

from ..models.config import AppConfig
from ..models.project import Project, ProjectConfig
from ..models.service import Service
from ..services.exceptions import ConfigValidationError
from .config_loader import load_project_config

logger = logging.getLogger(__name__)


class ServiceResolver:
    """Expands a config and its included projects into a deduplicated service list.

    Inclusion is one level deep: services declared by an included project are
    collected, but the projects *it* includes are not followed.
    """

    def __init__(self, project_loader: Optional[Callable[[Path], ProjectConfig]] = None):
        """Initialize resolver.

        Args:
            project_loader: Loads the config declared in a project directory
        """
        self.project_loader = project_loader or load_project_config

    def resolve(
        self, start_dir: Path, start_config: Union[AppConfig, ProjectConfig]
    ) -> List[Service]:
        """Resolve services declared by ``start_config`` and its included projects.

        Args:
            start_dir: Directory the start config belongs to
            start_config: Merged configuration to expand

        Returns:
            Services in first-seen order, unique by name

        Raises:
            ConfigValidationError: If any service entry is malformed
        """
        start = Path(start_dir).expanduser().resolve()
        visited = {start}
        collected = self._collect(start_config.services, source=str(start))

        for entry in start_config.dependencies.include_projects:
            path = Path(entry).expanduser()
            if not path.is_absolute():
                path = start / path

            try:
                canonical = path.resolve(strict=True)
            except (OSError, RuntimeError) as e:
                logger.warning(f"Skipping included project {entry}: {e}")
                continue

            if canonical in visited:
                logger.warning(f"Skipping included project {entry}: already included")
                continue
            visited.add(canonical)

            project = Project.from_path(canonical, self.project_loader(canonical))
            logger.debug(f"Including services from project '{project.name}'")
            collected.extend(self._collect(project.config.services, source=str(canonical)))

        return deduplicate(collected)

    def _collect(self, services: Mapping[str, Service], source: str) -> List[Service]:
        collected = []
        for key, service in services.items():
            named = service.with_name(key)
            errors = named.validation_errors()
            if errors:
                raise ConfigValidationError(
                    f"Service '{key}' in {source}: {', '.join(errors)}"
                )
            collected.append(named)
        return collected


def deduplicate(services: Iterable[Service]) -> List[Service]:
    """Keep the first service seen for each name, dropping later duplicates."""
    by_name: Dict[str, Service] = {}
    for service in services:
        if service.name in by_name:
            logger.warning(f"Duplicate service '{service.name}' ignored; keeping the first definition")
            continue
        by_name[service.name] = service
    return list(by_name.values())
