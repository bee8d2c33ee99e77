"""Loading of wall and door textures into 64x64 colour tables."""

from __future__ import annotations

import os
from collections.abc import Sequence

import numpy as np
from PIL import Image

from .config import CubConfig
from .settings import DOOR_CLOSE, DOOR_OPEN, IMG_SIZE, ConfigError, TextureSlot

_WALL_SLOTS: tuple[tuple[TextureSlot, str], ...] = (
    (TextureSlot.NO, "no_texture"),
    (TextureSlot.SO, "so_texture"),
    (TextureSlot.WE, "we_texture"),
    (TextureSlot.EA, "ea_texture"),
)


def load_texture(path: str | os.PathLike[str]) -> np.ndarray:
    """Load an image and return its top-left 64x64 pixels as 0xRRGGBB ints.

    The result is indexed ``[row, column]``.
    """
    try:
        with Image.open(path) as image:
            rgb = image.convert("RGB")
    except (OSError, ValueError, SyntaxError) as exc:
        raise ConfigError(f"failed to load texture: {path}") from exc
    width, height = rgb.size
    if width < IMG_SIZE or height < IMG_SIZE:
        raise ConfigError(
            f"texture {path} is {width}x{height}, at least {IMG_SIZE}x{IMG_SIZE} is needed"
        )
    pixels = np.asarray(rgb, dtype=np.int32)[:IMG_SIZE, :IMG_SIZE]
    packed = (pixels[..., 0] << 16) | (pixels[..., 1] << 8) | pixels[..., 2]
    return np.ascontiguousarray(packed, dtype=np.int32)


def has_doors(grid: Sequence[str]) -> bool:
    """Tell whether the grid holds at least one door, open or closed."""
    return any(DOOR_CLOSE in row or DOOR_OPEN in row for row in grid)


def load_textures(config: CubConfig) -> dict[TextureSlot, np.ndarray]:
    """Load the four wall textures and, when the map has doors, the door texture.

    A map with doors needs a door texture, and a door texture needs doors.
    """
    textures: dict[TextureSlot, np.ndarray] = {}
    for slot, attr in _WALL_SLOTS:
        path = getattr(config, attr)
        if path is None:
            raise ConfigError(f"texture {slot.name} missing")
        textures[slot] = load_texture(path)
    doors = has_doors(config.grid)
    if doors and config.door_texture is None:
        raise ConfigError("the map has doors but no door texture (DO) is defined")
    if not doors and config.door_texture is not None:
        raise ConfigError("a door texture (DO) is defined but the map has no doors")
    if config.door_texture is not None:
        textures[TextureSlot.DOOR] = load_texture(config.door_texture)
    return textures