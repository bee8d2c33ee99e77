"""Ray casting of the map into a frame of 0xRRGGBB pixels."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np

from .player import Player
from .settings import (
    DOOR_CLOSE,
    IMG_SIZE,
    MISSING_TEXTURE_COLOR,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TextureSlot,
)

_BLOCKING = frozenset(("1", DOOR_CLOSE))
_FAR = 1e30
_MIN_DIST = 0.001
_SHADE_MASK = 0x7F7F7F


@dataclass(frozen=True)
class RayHit:
    """Result of casting one screen column: the cell reached and how to draw it.

    ``side`` is 0 when an x-side of a cell was crossed last, 1 for a y-side.
    """

    map_x: int
    map_y: int
    side: int
    ray_dir_x: float
    ray_dir_y: float
    wall_dist: float
    line_height: int
    draw_start: int
    draw_end: int
    texture: TextureSlot
    hit: bool


def _tile(grid: Sequence[str], x: int, y: int) -> str | None:
    if x < 0 or y < 0 or y >= len(grid) or x >= len(grid[y]):
        return None
    return grid[y][x]


def _choose_texture(tile: str | None, side: int, ray_dir_x: float, ray_dir_y: float) -> TextureSlot:
    if tile == DOOR_CLOSE:
        return TextureSlot.DOOR
    if side == 0:
        return TextureSlot.WE if ray_dir_x < 0 else TextureSlot.EA
    return TextureSlot.NO if ray_dir_y < 0 else TextureSlot.SO


def cast_ray(grid: Sequence[str], player: Player, column: int, width: int, height: int) -> RayHit:
    """Cast the ray of a screen column through the grid with a DDA walk.

    The walk stops at a wall or closed door, or when it leaves the area
    given by the resolution (one cell per ten pixels) or the grid.
    """
    camera_x = 2 * column / SCREEN_WIDTH - 1
    ray_dir_x = player.dir_x + player.plane_x * camera_x
    ray_dir_y = player.dir_y + player.plane_y * camera_x
    map_x, map_y = int(player.x), int(player.y)
    delta_x = _FAR if ray_dir_x == 0 else abs(1 / ray_dir_x)
    delta_y = _FAR if ray_dir_y == 0 else abs(1 / ray_dir_y)

    if ray_dir_x < 0:
        step_x, side_x = -1, (player.x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - player.x) * delta_x
    if ray_dir_y < 0:
        step_y, side_y = -1, (player.y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - player.y) * delta_y

    cols, rows = int(width / 10), int(height / 10)
    grid_width = max((len(row) for row in grid), default=0)
    hit = False
    side = 0
    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if not (0 <= map_x < cols and 0 <= map_y < rows):
            break
        if map_y >= len(grid) or map_x >= grid_width:
            break
        if _tile(grid, map_x, map_y) in _BLOCKING:
            hit = True
            break

    wall_dist = side_x - delta_x if side == 0 else side_y - delta_y
    if wall_dist <= _MIN_DIST:
        wall_dist = _MIN_DIST
    line_height = min(int(SCREEN_HEIGHT / wall_dist), SCREEN_HEIGHT * 10)
    draw_start = max(-(line_height // 2) + SCREEN_HEIGHT // 2, 0)
    draw_end = min(line_height // 2 + SCREEN_HEIGHT // 2, SCREEN_HEIGHT - 1)
    return RayHit(
        map_x=map_x,
        map_y=map_y,
        side=side,
        ray_dir_x=ray_dir_x,
        ray_dir_y=ray_dir_y,
        wall_dist=wall_dist,
        line_height=line_height,
        draw_start=draw_start,
        draw_end=draw_end,
        texture=_choose_texture(_tile(grid, map_x, map_y), side, ray_dir_x, ray_dir_y),
        hit=hit,
    )


def texture_column(hit: RayHit, player: Player) -> int:
    """Return the texture column where the ray struck the wall."""
    if hit.side == 0:
        wall_x = player.y + hit.wall_dist * hit.ray_dir_y
    else:
        wall_x = player.x + hit.wall_dist * hit.ray_dir_x
    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * IMG_SIZE)
    if (hit.side == 0 and hit.ray_dir_x > 0) or (hit.side == 1 and hit.ray_dir_y < 0):
        tex_x = IMG_SIZE - tex_x - 1
    return tex_x


def draw_column(
    buffer: np.ndarray,
    hit: RayHit,
    player: Player,
    textures: Mapping[TextureSlot, np.ndarray],
    column: int,
) -> None:
    """Paint the textured wall slice of one column into ``buffer`` in place.

    Walls seen on a y-side are drawn at half brightness; a missing texture
    is drawn in magenta.
    """
    count = hit.draw_end - hit.draw_start
    if count <= 0:
        return
    rows = slice(hit.draw_start, hit.draw_end)
    texture = textures.get(hit.texture)
    if texture is None:
        buffer[rows, column] = MISSING_TEXTURE_COLOR
        return
    tex_x = texture_column(hit, player)
    step = IMG_SIZE / hit.line_height
    tex_pos = (hit.draw_start - SCREEN_HEIGHT // 2 + hit.line_height // 2) * step
    positions = np.cumsum(np.concatenate(([tex_pos], np.full(count - 1, step))))
    tex_y = positions.astype(np.int64) & (IMG_SIZE - 1)
    colors = np.asarray(texture)[tex_y, tex_x]
    if hit.side == 1:
        colors = (colors >> 1) & _SHADE_MASK
    buffer[rows, column] = colors


def render_walls(
    grid: Sequence[str],
    player: Player,
    textures: Mapping[TextureSlot, np.ndarray],
    width: int,
    height: int,
) -> np.ndarray:
    """Cast every screen column and return the wall buffer, zero where empty."""
    buffer = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=np.int32)
    for column in range(SCREEN_WIDTH):
        hit = cast_ray(grid, player, column, width, height)
        draw_column(buffer, hit, player, textures, column)
    return buffer


def compose_frame(buffer: np.ndarray, floor: int, ceiling: int) -> np.ndarray:
    """Fill the empty pixels of a wall buffer with ceiling above and floor below."""
    upper = (np.arange(buffer.shape[0]) < SCREEN_HEIGHT // 2)[:, None]
    background = np.where(upper, ceiling, floor)
    return np.where(buffer > 0, buffer, background).astype(np.int32)


def render_frame(
    grid: Sequence[str],
    player: Player,
    textures: Mapping[TextureSlot, np.ndarray],
    width: int,
    height: int,
    floor: int,
    ceiling: int,
) -> np.ndarray:
    """Render a full frame: walls, then ceiling and floor."""
    return compose_frame(render_walls(grid, player, textures, width, height), floor, ceiling)