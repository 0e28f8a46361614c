"""
Settings persisted as JSON next to the application.
"""

import json
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_ENV = "TAPCALC_CONFIG"
LOG_LEVEL_ENV = "TAPCALC_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DEFAULTS = {
    "mode": "expression",
    "show_history": False,
    "display_font": None,
    "theme": "dark",
}

# Allowed values per key; None means any value of the default's type
CHOICES = {
    "mode": ("expression", "accumulator"),
    "theme": ("dark", "light", "auto"),
}


def get_app_path():
    """Resolve the correct path for both script and frozen (PyInstaller) execution."""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def log_level(level_name=None):
    """Resolve a level name (default from TAPCALC_LOG_LEVEL), WARNING if unknown"""
    if level_name is None:
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    level = logging.getLevelName(level_name.strip().upper())
    # getLevelName returns "Level X" for names it does not know
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(level_name=None):
    """Configure the root logger once"""
    logging.basicConfig(level=log_level(level_name), format=LOG_FORMAT)


def default_config_file():
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override)
    return get_app_path() / "config.json"


def _valid(key, value):
    if key in CHOICES:
        return value in CHOICES[key]
    if key == "display_font":
        return value is None or isinstance(value, str)
    return isinstance(value, type(DEFAULTS[key]))


def load_settings(path=None):
    """Load settings from JSON file, falling back to defaults"""
    path = Path(path) if path is not None else default_config_file()
    config = dict(DEFAULTS)

    if not path.exists():
        return config

    try:
        with open(path, 'r') as f:
            saved_config = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Error loading config %s: %s", path, e)
        return config

    if not isinstance(saved_config, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return config

    for key, value in saved_config.items():
        if key in DEFAULTS and not _valid(key, value):
            logger.warning("Ignoring invalid %r in config: %r", key, value)
            continue
        config[key] = value

    return config


def save_settings(config, path=None):
    """Save settings to JSON file"""
    path = Path(path) if path is not None else default_config_file()
    try:
        with open(path, 'w') as f:
            json.dump(config, f, indent=4)
    except OSError as e:
        logger.error("Error saving config %s: %s", path, e)
        return False
    return True
