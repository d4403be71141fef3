"""Loading and merging of devobox.yml configuration files."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from ..models.config import AppConfig
from ..models.project import ProjectConfig
from ..services.exceptions import ConfigValidationError
from .constants import CONFIG_DIR_ENV, CONFIG_FILE_NAME, DEFAULT_CONFIG_DIR

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def default_config_dir() -> Path:
    """Global configuration directory ($DEVOBOX_CONFIG_DIR or ~/.config/devobox)."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_DIR


def load_app_config(path: Path) -> AppConfig:
    """Load an AppConfig from a file, empty if the file does not exist."""
    return _load_model(path, AppConfig)


def load_project_config(project_dir: Path) -> ProjectConfig:
    """Load the configuration a project directory declares."""
    return _load_model(project_dir / CONFIG_FILE_NAME, ProjectConfig)


class ConfigLoader:
    """Loads the global config and the local override and merges them."""

    def __init__(self, config_dir: Optional[Path] = None, local_dir: Optional[Path] = None):
        """Initialize config loader."""
        self.config_dir = config_dir or default_config_dir()
        self.local_dir = local_dir or Path.cwd()

    @property
    def global_file(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    @property
    def local_file(self) -> Path:
        return self.local_dir / CONFIG_FILE_NAME

    def load(self) -> AppConfig:
        """Load global and local config, merge them and apply defaults."""
        global_config = load_app_config(self.global_file)
        if self.local_file.resolve() == self.global_file.resolve():
            return global_config.with_defaults()

        local_config = load_app_config(self.local_file)
        return global_config.merge(local_config).with_defaults()

    def containerfile_path(self, config: AppConfig) -> Path:
        """Absolute path of the Containerfile named by the config."""
        return self._in_config_dir(config.paths.containerfile)

    def tool_manifest_path(self, config: AppConfig) -> Path:
        """Absolute path of the tool manifest named by the config."""
        return self._in_config_dir(config.paths.tool_manifest)

    def _in_config_dir(self, name: Optional[str]) -> Path:
        path = Path(name).expanduser()
        return path if path.is_absolute() else self.config_dir / path


def _load_model(path: Path, model: Type[ModelT]) -> ModelT:
    data = _read_yaml(path)
    try:
        config = model.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {path}: {e}") from e
    return _anchor_includes(config, path.parent)


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.debug(f"No configuration at {path}")
        return {}

    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise ConfigValidationError(f"Could not read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError(f"Invalid configuration in {path}: expected a mapping")
    return data


def _anchor_includes(config: ModelT, base_dir: Path) -> ModelT:
    """Make relative include_projects paths relative to the declaring file."""
    anchored = []
    for entry in config.dependencies.include_projects:
        path = Path(entry).expanduser()
        anchored.append(str(path if path.is_absolute() else base_dir / path))
    dependencies = config.dependencies.model_copy(update={"include_projects": anchored})
    return config.model_copy(update={"dependencies": dependencies})
