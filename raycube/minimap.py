"""Pixel lists for the overhead minimap and the plain map overview."""

from __future__ import annotations

from collections.abc import Sequence

from .player import Player
from .settings import MINI_MAP_SCALE

Pixel = tuple[int, int, int]
Point = tuple[int, int]

WALL_COLOR = 0xFFFFFF
FLOOR_COLOR = 0x444444
VOID_COLOR = 0x000000
PLAYER_COLOR = 0xFF0000

_MINIMAP_ORIGIN = 10
_OVERVIEW_ORIGIN = 50
_OVERVIEW_SCALE = 10
_DOT_RADIUS = 2


def tile_color(tile: str) -> int:
    """Return the minimap colour of a map tile."""
    if tile == "1":
        return WALL_COLOR
    if tile == "0":
        return FLOOR_COLOR
    return VOID_COLOR


def square_pixels(x: int, y: int, size: int, color: int) -> list[Pixel]:
    """Return the pixels of a filled square whose top-left corner is ``(x, y)``."""
    return [(x + dx, y + dy, color) for dy in range(size) for dx in range(size)]


def line_points(start: Point, end: Point) -> list[Point]:
    """Return the points of a Bresenham line from ``start`` to ``end``, both included."""
    x0, y0 = start
    x1, y1 = end
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy
    points = []
    while True:
        points.append((x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy
    return points


def player_dot(x: int, y: int) -> list[Point]:
    """Return the points of the 5x5 dot that marks the player."""
    span = range(-_DOT_RADIUS, _DOT_RADIUS + 1)
    return [(x + dx, y + dy) for dx in span for dy in span]


def minimap_pixels(grid: Sequence[str], player: Player) -> list[Pixel]:
    """Return the minimap pixels in drawing order: tiles, view line, player dot.

    Later pixels are drawn over earlier ones.
    """
    pixels: list[Pixel] = []
    for i, row in enumerate(grid):
        y = _MINIMAP_ORIGIN + i * MINI_MAP_SCALE
        for j, tile in enumerate(row):
            x = _MINIMAP_ORIGIN + j * MINI_MAP_SCALE
            pixels.extend(square_pixels(x, y, MINI_MAP_SCALE, tile_color(tile)))
    px = int(_MINIMAP_ORIGIN + player.x * MINI_MAP_SCALE)
    py = int(_MINIMAP_ORIGIN + player.y * MINI_MAP_SCALE)
    tip_x = int(px + player.dir_x * (MINI_MAP_SCALE // 2))
    tip_y = int(py + player.dir_y * (MINI_MAP_SCALE // 2))
    pixels.extend((x, y, PLAYER_COLOR) for x, y in line_points((px, py), (tip_x, tip_y)))
    pixels.extend((x, y, PLAYER_COLOR) for x, y in player_dot(px, py))
    return pixels


def overview_pixels(grid: Sequence[str]) -> list[Pixel]:
    """Return the pixels of a flat overview: walls white, floor black, others skipped."""
    pixels: list[Pixel] = []
    for i, row in enumerate(grid):
        y = _OVERVIEW_ORIGIN + i * _OVERVIEW_SCALE
        for j, tile in enumerate(row):
            x = _OVERVIEW_ORIGIN + j * _OVERVIEW_SCALE
            if tile == "1":
                pixels.extend(square_pixels(x, y, _OVERVIEW_SCALE, WALL_COLOR))
            elif tile == "0":
                pixels.extend(square_pixels(x, y, _OVERVIEW_SCALE, VOID_COLOR))
    return pixels