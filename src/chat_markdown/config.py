"""Style configuration: font sizes read by the renderer, loaded from style.toml."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

HEADING_LEVELS = range(1, 7)


class ConfigError(Exception):
    """Raised when style.toml is malformed or holds invalid sizes."""


@dataclass(frozen=True)
class StyleConfig:
    """Point sizes for every rendered element.

    Passed explicitly to every render call; a changed config takes effect on
    the next render.
    """

    default_font_size: float = 17
    heading1_font_size: float = 24
    heading2_font_size: float = 22
    heading3_font_size: float = 20
    heading4_font_size: float = 18
    heading5_font_size: float = 17
    heading6_font_size: float = 16
    divider_font_size: float = 8
    code_font_size: float = 15
    table_font_size: float = 15

    def heading_font_size(self, level: int) -> float:
        """Return the size for heading *level* (1-6)."""
        if level not in HEADING_LEVELS:
            msg = f"Heading level must be between 1 and 6, got {level}"
            raise ValueError(msg)
        size: float = getattr(self, f"heading{level}_font_size")
        return size

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> StyleConfig:
        """Build a config from a partial mapping; missing keys keep defaults.

        Raises ConfigError if a known key holds a non-numeric or non-positive
        value.
        """
        known = {f.name for f in fields(cls)}
        overrides: dict[str, float] = {}
        for key, value in data.items():
            if key not in known:
                logger.debug("Ignoring unknown style option %r", key)
                continue
            # bool is an int subclass but never a font size
            if isinstance(value, bool) or not isinstance(value, int | float):
                msg = f"Style option '{key}' must be a number, got {value!r}"
                raise ConfigError(msg)
            if value <= 0:
                msg = f"Style option '{key}' must be positive, got {value!r}"
                raise ConfigError(msg)
            overrides[key] = float(value)
        return replace(cls(), **overrides)

    def as_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def get_config_path() -> Path:
    """Return the path to style.toml, respecting XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "chat-markdown" / "style.toml"


def load_style_config(path: Path) -> StyleConfig:
    """Load font sizes from the ``[fonts]`` table of a TOML file.

    Returns the defaults if the file does not exist.
    Raises ConfigError on parse errors or invalid values.
    """
    if not path.exists():
        return StyleConfig()

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e

    fonts = data.get("fonts", {})
    if not isinstance(fonts, dict):
        msg = f"'fonts' in {path} must be a table"
        raise ConfigError(msg)
    return StyleConfig.from_mapping(fonts)
