"""Configuration helpers for curve slider style persistence."""
from __future__ import annotations

from configparser import ConfigParser, Error
from dataclasses import dataclass, fields
import logging
import os
from pathlib import Path
import sys
from typing import Optional

CONFIG_FILENAME = "curve_slider.ini"
_THUMB_SECTION = "thumb"
_CURVE_SECTION = "curve"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SliderStyle:
    thumb_fill_color: str = "#ffffff"
    thumb_stroke_color: str = "#d3d3d3"
    thumb_line_width: float = 3.0
    thumb_size: tuple[float, float] = (30.0, 30.0)
    curve_stroke_color: str = "#0000ff"
    curve_line_width: float = 3.0
    sample_count: int = 200


_DEFAULTS = SliderStyle()

# field name -> (section, key)
_LAYOUT = {
    "thumb_fill_color": (_THUMB_SECTION, "fill_color"),
    "thumb_stroke_color": (_THUMB_SECTION, "stroke_color"),
    "thumb_line_width": (_THUMB_SECTION, "line_width"),
    "thumb_size": (_THUMB_SECTION, "size"),
    "curve_stroke_color": (_CURVE_SECTION, "stroke_color"),
    "curve_line_width": (_CURVE_SECTION, "line_width"),
    "sample_count": (_CURVE_SECTION, "sample_count"),
}


def _config_dir(main_script_path: Optional[Path]) -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent
    if main_script_path is not None:
        return main_script_path.resolve().parent
    main_module = sys.modules.get("__main__")
    if main_module and getattr(main_module, "__file__", None):
        return Path(main_module.__file__).resolve().parent
    return Path.cwd()


def config_path(main_script_path: Optional[Path]) -> Path:
    return _config_dir(main_script_path) / CONFIG_FILENAME


def _parse_width(raw: str) -> float:
    value = float(raw)
    if value < 0:
        raise ValueError(f"negative width {value}")
    return value


def _parse_size(raw: str) -> tuple[float, float]:
    parts = [part.strip() for part in raw.replace("x", ",").split(",")]
    if len(parts) != 2:
        raise ValueError(f"expected WIDTH,HEIGHT, got {raw!r}")
    width, height = float(parts[0]), float(parts[1])
    if width <= 0 or height <= 0:
        raise ValueError(f"non-positive size {raw!r}")
    return width, height


def _parse_sample_count(raw: str) -> int:
    value = int(raw)
    if value < 2:
        raise ValueError(f"sample count {value} is below 2")
    return value


def _parse_color(raw: str) -> str:
    value = raw.strip()
    if not value:
        raise ValueError("empty color")
    return value


_PARSERS = {
    "thumb_fill_color": _parse_color,
    "thumb_stroke_color": _parse_color,
    "thumb_line_width": _parse_width,
    "thumb_size": _parse_size,
    "curve_stroke_color": _parse_color,
    "curve_line_width": _parse_width,
    "sample_count": _parse_sample_count,
}


def load_slider_style(ini_path: Path) -> SliderStyle:
    """Read a :class:`SliderStyle` from ``ini_path``.

    A missing or unreadable file yields the defaults. Individual keys that
    fail to parse fall back to their default value.
    """

    if not ini_path.exists():
        return SliderStyle()
    parser = ConfigParser()
    try:
        with ini_path.open("r", encoding="utf-8") as handle:
            parser.read_file(handle)
    except (OSError, Error):
        logger.warning("Could not read slider config %s", ini_path, exc_info=True)
        return SliderStyle()

    values: dict[str, object] = {}
    for field in fields(SliderStyle):
        section, key = _LAYOUT[field.name]
        raw = parser.get(section, key, fallback=None)
        if raw is None:
            continue
        try:
            values[field.name] = _PARSERS[field.name](raw)
        except ValueError:
            logger.warning(
                "Ignoring invalid %s.%s=%r in %s; using %r",
                section,
                key,
                raw,
                ini_path,
                getattr(_DEFAULTS, field.name),
            )
    return SliderStyle(**values)


def _format_value(value: object) -> str:
    if isinstance(value, tuple):
        return ",".join(str(part) for part in value)
    return str(value)


def save_slider_style(ini_path: Path, style: SliderStyle) -> None:
    parser = ConfigParser()
    if ini_path.exists():
        try:
            with ini_path.open("r", encoding="utf-8") as handle:
                parser.read_file(handle)
        except (OSError, Error):
            parser = ConfigParser()
    for field in fields(SliderStyle):
        section, key = _LAYOUT[field.name]
        if not parser.has_section(section):
            parser.add_section(section)
        parser.set(section, key, _format_value(getattr(style, field.name)))
    os.makedirs(ini_path.parent, exist_ok=True)
    with ini_path.open("w", encoding="utf-8") as handle:
        parser.write(handle)
