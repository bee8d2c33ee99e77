"""Player position, facing and movement through the map grid."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .settings import DOOR_CLOSE, P_SPEED, PLAYER_CHARS, R_SPEED, MapError

# Facing letter -> (dir_x, dir_y, plane_x, plane_y).
_FACINGS: dict[str, tuple[float, float, float, float]] = {
    "N": (0.0, -1.0, 0.66, 0.0),
    "S": (0.0, 1.0, -0.66, 0.0),
    "E": (1.0, 0.0, 0.0, 0.66),
    "W": (-1.0, 0.0, 0.0, -0.66),
}

_BLOCKING = frozenset(("1", DOOR_CLOSE))
_MARGIN = 0.25


def can_move(grid: Sequence[str], x: float, y: float, width: int, height: int) -> bool:
    """Tell whether the player may stand at ``(x, y)``.

    The position must keep a quarter-cell margin from the bounds given by
    the resolution (one cell per ten pixels) and must not lie in a wall or
    a closed door. Cells outside the grid count as blocked.
    """
    if x < _MARGIN or x >= width // 10 - _MARGIN:
        return False
    if y < _MARGIN or y >= height // 10 - _MARGIN:
        return False
    row_index, col_index = int(y), int(x)
    if row_index >= len(grid) or col_index >= len(grid[row_index]):
        return False
    return grid[row_index][col_index] not in _BLOCKING


@dataclass
class Player:
    """Position, view direction and camera plane of the player."""

    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float

    @classmethod
    def facing(cls, direction: str, x: float, y: float) -> Player:
        """Create a player at ``(x, y)`` looking towards N, S, E or W."""
        try:
            dir_x, dir_y, plane_x, plane_y = _FACINGS[direction]
        except KeyError:
            raise ValueError(f"unknown facing {direction!r}") from None
        return cls(x, y, dir_x, dir_y, plane_x, plane_y)

    def rotate(self, angle: float) -> None:
        """Turn the view direction and camera plane by ``angle`` radians."""
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def rotate_left(self) -> None:
        """Turn left by one rotation step."""
        self.rotate(-R_SPEED)

    def rotate_right(self) -> None:
        """Turn right by one rotation step."""
        self.rotate(R_SPEED)

    def _try_move(self, grid: Sequence[str], x: float, y: float, width: int, height: int) -> bool:
        if not can_move(grid, x, y, width, height):
            return False
        self.x, self.y = x, y
        return True

    def move_forward(self, grid: Sequence[str], direction: int, width: int, height: int) -> bool:
        """Step forward (1) or backward (-1) along the view; return whether it moved."""
        if direction not in (1, -1):
            return False
        new_x = self.x + direction * self.dir_x * P_SPEED
        new_y = self.y + direction * self.dir_y * P_SPEED
        return self._try_move(grid, new_x, new_y, width, height)

    def strafe(self, grid: Sequence[str], direction: int, width: int, height: int) -> bool:
        """Step sideways, right (1) or left (-1); return whether it moved."""
        if direction not in (1, -1):
            return False
        new_x = self.x - direction * self.dir_y * P_SPEED
        new_y = self.y + direction * self.dir_x * P_SPEED
        return self._try_move(grid, new_x, new_y, width, height)


def spawn_player(grid: Sequence[str]) -> Player:
    """Place the player at the centre of the last player letter of the grid."""
    spawn = None
    for i, row in enumerate(grid):
        for j, char in enumerate(row):
            if char in PLAYER_CHARS:
                spawn = (char, j, i)
    if spawn is None:
        raise MapError("no player in map")
    char, j, i = spawn
    return Player.facing(char, j + 0.5, i + 0.5)