"""Editor configuration.

The configuration is a static object: it is built once at startup (from
defaults, optionally overridden by a JSON file) and only read afterwards.

Example ``~/.config/termpad/config.json``::

    {
        "line_number_padding_left": 1,
        "tab_width": 2
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "termpad" / "config.json"


@dataclass(frozen=True)
class EditorConfig:
    """Layout and behaviour settings consumed by the editor core.

    Attributes:
        line_number_padding_left: Spaces before each line number
        line_number_padding_right: Spaces between line number and text
        tab_width: Spaces inserted for the Tab key
        scroll_lines: Lines moved per mouse wheel notch
        filler: Row drawn below the end of a document
    """
    line_number_padding_left: int = 2
    line_number_padding_right: int = 3
    tab_width: int = 4
    scroll_lines: int = 1
    filler: str = "~"


def load_config(path: Path | None = None) -> EditorConfig:
    """Load configuration from a JSON file.

    A missing file yields the defaults. Malformed JSON, a non-object
    document, unknown keys or wrongly typed values raise ValueError.
    """
    path = path or DEFAULT_CONFIG_PATH
    config = EditorConfig()
    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return config

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")

    known = {f.name: f for f in fields(EditorConfig)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ValueError(f"{path}: unknown settings: {', '.join(unknown)}")

    for name, value in data.items():
        expected = type(getattr(config, name))
        # bool is an int subclass; reject it for numeric settings
        if not isinstance(value, expected) or isinstance(value, bool):
            raise ValueError(f"{path}: '{name}' must be of type {expected.__name__}")
        if expected is int and value < 0:
            raise ValueError(f"{path}: '{name}' must not be negative")

    logger.info("Loaded config from %s", path)
    return replace(config, **data)
