"""Game constants, texture slots and the error hierarchy."""

from __future__ import annotations

from enum import IntEnum

ESC_KEYCODE = 65307

IMG_SIZE = 64
P_SPEED = 0.06
R_SPEED = 0.06
SCREEN_WIDTH = 1600
SCREEN_HEIGHT = 900
MINI_MAP_SCALE = 10

DOOR_OPEN = "D"
DOOR_CLOSE = "d"

PLAYER_CHARS = frozenset("NSEW")
MAP_CHARS = frozenset("01 NSEWDd")

MISSING_TEXTURE_COLOR = 0xFF00FF


class TextureSlot(IntEnum):
    """Index of each wall texture in the loaded texture table."""

    NO = 0
    SO = 1
    WE = 2
    EA = 3
    DOOR = 4


class CubError(Exception):
    """Base class for every error raised while loading or running a scene."""


class MapError(CubError):
    """The map grid is missing, malformed or not closed."""


class ConfigError(CubError):
    """The scene description holds an invalid or missing element."""