"""Colour theme for batchctl output.

The bundled ``data/theme.toml`` defines every colour. A user
``theme.toml`` in the config directory may override any subset of them;
an invalid override is ignored with a warning rather than breaking the
CLI.
"""

import logging
import re
import tomllib
from functools import lru_cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from batchctl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


class ThemeColors(BaseModel):
    """Colours used by the CLI, as ``#RGB`` or ``#RRGGBB`` hex codes."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Per-item outcome markers
    skipped: str = "#b2bec3"
    planned: str = "#0e8ac8"
    deleted: str = "#c1ff62"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, v: object) -> str:
        """Require a hex colour code."""
        if not isinstance(v, str) or not _HEX_COLOR.match(v.strip()):
            msg = f"expected a #RGB or #RRGGBB colour, got {v!r}"
            raise ValueError(msg)
        return v.strip()


def _parse_colors(text: str, source: str) -> dict[str, object]:
    """Extract the ``[colors]`` table of a theme document.

    Returns:
        The colour table, or an empty dict if the document is unusable.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring theme %s: %s", source, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme %s: [colors] is not a table", source)
        return {}
    return colors


def load_bundled_colors() -> ThemeColors:
    """Load the colours shipped with the package."""
    text = resources.files("batchctl.data").joinpath("theme.toml").read_text(encoding="utf-8")
    return ThemeColors.model_validate(_parse_colors(text, "bundled theme.toml"))


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Load the bundled colours merged with the user's overrides.

    Args:
        user_path: Override file. Defaults to ``~/.config/batchctl/theme.toml``.

    Returns:
        Validated colours. Invalid overrides fall back to the bundled set.
    """
    bundled = load_bundled_colors()
    path = user_path or get_user_theme_path()

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return bundled
    except OSError as e:
        logger.warning("Cannot read theme %s: %s", path, e)
        return bundled

    overrides = _parse_colors(text, str(path))
    if not overrides:
        return bundled

    try:
        return ThemeColors.model_validate({**bundled.model_dump(), **overrides})
    except ValidationError as e:
        logger.warning("Invalid theme %s, using bundled colours: %s", path, e)
        return bundled


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme: one style per colour plus derived styles."""
    colors = colors or load_theme()
    styles: dict[str, str] = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["bold_header"] = f"bold {colors.header}"
    return Theme(styles)


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Get the Rich theme used by the shared consoles (loaded once)."""
    return get_rich_theme()
