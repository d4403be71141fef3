"""Constants used throughout the Devobox application."""

from pathlib import Path

# Configuration files
CONFIG_FILE_NAME = "devobox.yml"
CONFIG_DIR_ENV = "DEVOBOX_CONFIG_DIR"
DEFAULT_CONFIG_DIR = Path.home() / ".config" / "devobox"

# Defaults applied after merging global and local config
DEFAULT_CONTAINERFILE = "Containerfile"
DEFAULT_TOOL_MANIFEST = "mise.toml"
DEFAULT_IMAGE_NAME = "devobox-img"
DEFAULT_CONTAINER_NAME = "devobox"
DEFAULT_CONTAINER_WORKDIR = "/home/dev"

# Workspace container
CODE_DIR_ENV = "DEVOBOX_CODE_DIR"
DEFAULT_CODE_DIR = Path.home() / "code"
CONTAINER_CODE_DIR = "/home/dev/code"
TOOLS_VOLUME = "devobox_mise:/home/dev/.local/share/mise"
CONTAINER_MARKER_ENV = "DEVOBOX_CONTAINER"
WORKSPACE_NETWORK = "host"
WORKSPACE_USERNS = "keep-id"
WORKSPACE_SECURITY_OPT = "label=disable"
SESSION_PREFIX = "devobox"

# Health gate
DEFAULT_HEALTHCHECK_INTERVAL = "1s"
DEFAULT_HEALTHCHECK_RETRIES = 3

# Confirmation word required by `devobox reset`
RESET_CONFIRMATION = "reset"
