"""Settings for the work tracker.

Paths and the debug switch are module constants that can be overridden from
the environment.  The user's own choices (categories, label style and the
autosave flag) live in a small ``key=value`` file read by ``load_settings``.
"""
from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass, field
from typing import List

logger = logging.getLogger(__name__)

CONFIG_PATH: str = os.environ.get("WORKTRACKER_CONFIG", "config.txt")
LOGS_DIR: str = os.environ.get("WORKTRACKER_LOGS_DIR", "work_logs")

VERSION = "0.1.0"

# Debug mode - logs skipped rows and every toggle
DEBUG_MODE: bool = os.environ.get("WORKTRACKER_DEBUG", "0") == "1"

# configparser wants a section header; the settings file has none.
_SECTION = "settings"


class ConfigError(Exception):
    """Raised when the settings file cannot provide a usable category list."""


@dataclass
class Settings:
    categories: List[str] = field(default_factory=list)
    display_minutes: bool = False
    autosave_on_exit: bool = False


def parse_bool(value: str | None) -> bool:
    """Only a literal ``true`` (any case) enables a flag."""
    return value is not None and value.strip().lower() == "true"


def parse_categories(value: str) -> List[str]:
    """Split the comma separated list, keeping declaration order."""
    names = (name.strip() for name in value.split(","))
    return list(dict.fromkeys(name for name in names if name))


def load_settings(path: str = CONFIG_PATH) -> Settings:
    """
    Read ``path`` and return the parsed settings.

    :raises ConfigError: if the file is missing or unreadable, or if it does
        not name at least one category.
    """
    parser = configparser.ConfigParser(
        delimiters=("=", ":"),
        comment_prefixes=("#", "!"),
        strict=False,
        allow_no_value=True,
        interpolation=None,
    )
    # keys are case sensitive (displayMinutes, autoSaveOnExit)
    parser.optionxform = str  # type: ignore[assignment]
    try:
        with open(path, "r", encoding="utf-8") as f:
            parser.read_string(f"[{_SECTION}]\n" + f.read(), source=path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc
    except configparser.Error as exc:
        raise ConfigError(f"Malformed settings file {path}: {exc}") from exc

    values = parser[_SECTION]
    categories = parse_categories(values.get("categories") or "")
    if not categories:
        raise ConfigError(f"No categories defined in {path}")

    settings = Settings(
        categories=categories,
        display_minutes=parse_bool(values.get("displayMinutes")),
        autosave_on_exit=parse_bool(values.get("autoSaveOnExit")),
    )
    logger.debug("Loaded settings from %s: %s", path, settings)
    return settings
