"""Editor settings loaded once at session start.

Settings live in a JSON file in the OS-appropriate config directory. They
set the buffer bounds, the line terminator and the scroll policy. The
values cannot be changed mid-session.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

APP_NAME = "ke"


@dataclass(frozen=True)
class EditorSettings:
    max_lines: int = EditorConstants.MAX_LINES
    max_line_length: int = EditorConstants.MAX_LINE_LENGTH
    line_terminator: Optional[str] = None  # None keeps the file's own terminator
    scroll_mode: str = EditorConstants.DEFAULT_SCROLL_MODE


def settings_path() -> Path:
    return Path(platformdirs.user_config_dir(APP_NAME)) / "settings.json"


def _validate(key: str, value: Any) -> bool:
    if key in ("max_lines", "max_line_length"):
        # bool is an int subclass; reject it explicitly
        return isinstance(value, int) and not isinstance(value, bool) and value >= 1
    if key == "line_terminator":
        return value is None or value in (EditorConstants.LF, EditorConstants.CRLF)
    if key == "scroll_mode":
        return value in (EditorConstants.SCROLL_STEP, EditorConstants.SCROLL_REVEAL)
    return False


def settings_from_dict(data: Dict[str, Any]) -> EditorSettings:
    """Build settings from a mapping, skipping invalid entries.

    Unknown keys and invalid values are logged and fall back to defaults.
    """
    known = {f.name for f in fields(EditorSettings)}
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown setting {key!r}")
        elif not _validate(key, value):
            logger.warning(f"Ignoring invalid value for {key}: {value!r}")
        else:
            values[key] = value
    return EditorSettings(**values)


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Load settings from disk.

    Args:
        path: Settings file to read. Defaults to the user config location.

    Returns:
        The loaded settings, or defaults if the file is missing or unreadable.
    """
    settings_file = path or settings_path()
    if not settings_file.exists():
        return EditorSettings()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {settings_file}: {e}")
        return EditorSettings()

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return EditorSettings()

    return settings_from_dict(data)
