"""Paths and default values used across the project."""

from pathlib import Path

# Base directory for all routing-studio data
ROUTING_STUDIO_HOME = Path.home() / ".routing-studio"

CONFIG_FILE = ROUTING_STUDIO_HOME / "config.json"
# Local key-value store holding editor-only state (the UI config)
UI_CONFIG_FILE = ROUTING_STUDIO_HOME / "ui_state.json"
UI_CONFIG_KEY = "routing-studio.ui-config.v1"

# Routing files
ROUTING_FILE_SUFFIX = ".routing.json"
DEFAULT_FILE_NAME = "routing.json"

# Debounce before pushing document text to the host
DEFAULT_DEBOUNCE_MS = 250

# Transient notifications kept at once
MAX_TOASTS = 3

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
