"""Reading and validation of the scene description of a ``.cub`` file."""

from __future__ import annotations

import os
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from .gamemap import Spawn, extract_map, is_map_line, validate_map
from .settings import SCREEN_HEIGHT, SCREEN_WIDTH, ConfigError

_DIGITS = frozenset("0123456789")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]*)")

# (line prefix, identifier, attribute of CubConfig), in matching order.
_TEXTURE_ELEMENTS: tuple[tuple[str, str, str], ...] = (
    ("NO ", "NO", "no_texture"),
    ("SO ", "SO", "so_texture"),
    ("WE ", "WE", "we_texture"),
    ("EA ", "EA", "ea_texture"),
    ("S ", "S", "sprite"),
    ("DO ", "DO", "door_texture"),
)
_COLOR_ELEMENTS: tuple[tuple[str, str, str], ...] = (
    ("F ", "F", "floor_color"),
    ("C ", "C", "ceiling_color"),
)
_REQUIRED_TEXTURES: tuple[tuple[str, str, str], ...] = (
    ("NO", "north", "no_texture"),
    ("SO", "south", "so_texture"),
    ("WE", "west", "we_texture"),
    ("EA", "east", "ea_texture"),
)


@dataclass
class CubConfig:
    """Everything a scene file describes: textures, colours, size and map."""

    no_texture: str | None = None
    so_texture: str | None = None
    we_texture: str | None = None
    ea_texture: str | None = None
    sprite: str | None = None
    door_texture: str | None = None
    floor_color: int | None = None
    ceiling_color: int | None = None
    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    grid: list[str] = field(default_factory=list)
    spawn: Spawn | None = None


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def _skip(line: str, i: int, chars: str | frozenset[str]) -> int:
    while i < len(line) and line[i] in chars:
        i += 1
    return i


def _can_open(path: str | None) -> bool:
    if not path:
        return False
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError:
        return False
    os.close(fd)
    return True


def is_valid_map_file(filename: str) -> bool:
    """Tell whether a file name ends in ``.cub`` and has a stem."""
    return len(filename) > 4 and filename.endswith(".cub")


def read_map_file(path: str | os.PathLike[str]) -> list[str]:
    """Read a scene file into its non-empty lines, trimmed of spaces and tabs."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise ConfigError(f"failed to open file {path}: {exc}") from exc
    lines = [cleaned for raw in text.split("\n") if (cleaned := raw.strip(" \t"))]
    if not lines:
        raise ConfigError("empty map file or failed to process content")
    return lines


def parse_resolution(line: str) -> tuple[int, int]:
    """Read the width and height of an ``R`` line."""
    i = _skip(line, 1, " ")
    width = _atoi(line[i:])
    i = _skip(line, i, _DIGITS)
    i = _skip(line, i, " ")
    height = _atoi(line[i:])
    return width, height


def parse_texture_path(line: str, identifier: str) -> str:
    """Return the path that follows a texture identifier and its spaces."""
    return line[_skip(line, len(identifier), " ") :]


def check_color_format(line: str, identifier: str) -> None:
    """Raise ConfigError unless the line holds exactly ``R,G,B`` numbers."""
    i = _skip(line, 1, " ")
    if line[i:].count(",") != 2:
        raise ConfigError(f"invalid RGB format for {identifier}, expected R,G,B")
    sections = 0
    while i < len(line):
        i = _skip(line, i, " ")
        if i >= len(line):
            break
        char = line[i]
        if char in _DIGITS:
            sections += 1
            i = _skip(line, i, _DIGITS)
        elif char in ",\n":
            i += 1
        else:
            raise ConfigError(f"invalid character in RGB format for {identifier}")
    if sections != 3:
        raise ConfigError(f"invalid RGB format for {identifier}, expected R,G,B")


def parse_color(line: str, identifier: str) -> int:
    """Parse an ``F`` or ``C`` line into a packed 0xRRGGBB colour."""
    check_color_format(line, identifier)
    components = []
    i = _skip(line, 1, " ")
    for _ in range(3):
        components.append(_atoi(line[i:]))
        i = _skip(line, i, _DIGITS)
        i = _skip(line, i, " ,")
    red, green, blue = components
    if any(not 0 <= value <= 255 for value in components):
        raise ConfigError(f"invalid RGB value for {identifier}")
    return (red << 16) | (green << 8) | blue


def is_valid_texture_file(path: str) -> bool:
    """Tell whether a trimmed path names a readable ``.xpm`` file."""
    trimmed = path.strip(" \n\t")
    if not trimmed:
        return False
    if not _can_open(trimmed):
        return False
    return len(trimmed) >= 4 and trimmed.endswith(".xpm")


def validate_textures(config: CubConfig) -> None:
    """Raise ConfigError if a texture that is set cannot be opened."""
    for identifier, _, attr in _REQUIRED_TEXTURES:
        if not _can_open(getattr(config, attr)):
            raise ConfigError(f"texture {identifier} cannot be opened")
    for identifier, attr in (("S", "sprite"), ("DO", "door_texture")):
        path = getattr(config, attr)
        if path is not None and not _can_open(path):
            raise ConfigError(f"texture {identifier} cannot be opened")


def check_elements(config: CubConfig) -> None:
    """Raise ConfigError if a wall texture or a colour is missing."""
    if any(getattr(config, attr) is None for _, _, attr in _REQUIRED_TEXTURES):
        raise ConfigError("missing texture")
    if config.floor_color is None or config.ceiling_color is None:
        raise ConfigError("missing colour")


def check_required_elements(config: CubConfig) -> None:
    """Like check_elements, naming the first element that is missing."""
    for identifier, name, attr in _REQUIRED_TEXTURES:
        if getattr(config, attr) is None:
            raise ConfigError(f"{name} texture ({identifier}) missing")
    if config.floor_color is None:
        raise ConfigError("floor colour (F) missing")
    if config.ceiling_color is None:
        raise ConfigError("ceiling colour (C) missing")


def _process_line(config: CubConfig, line: str) -> bool:
    """Apply one header line; return True when the map begins."""
    if line.startswith("R "):
        config.width, config.height = parse_resolution(line)
        return False
    for prefix, identifier, attr in _TEXTURE_ELEMENTS:
        if line.startswith(prefix):
            if getattr(config, attr) is not None:
                raise ConfigError(f"duplicate texture {identifier}")
            setattr(config, attr, parse_texture_path(line, identifier))
            return False
    for prefix, identifier, attr in _COLOR_ELEMENTS:
        if line.startswith(prefix):
            setattr(config, attr, parse_color(line, identifier))
            return False
    if is_map_line(line):
        return True
    if line:
        raise ConfigError(f"unrecognised line: {line}")
    return False


def parse_config(lines: Sequence[str]) -> CubConfig:
    """Build and validate a scene from the lines of a scene file."""
    config = CubConfig()
    for line in lines:
        if _process_line(config, line):
            break
    config.grid = extract_map(lines)
    check_elements(config)
    validate_textures(config)
    config.spawn = validate_map(config.grid)
    return config


def load_config(path: str | os.PathLike[str]) -> CubConfig:
    """Read and validate a scene file."""
    return parse_config(read_map_file(path))