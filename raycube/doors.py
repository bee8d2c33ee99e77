"""Doors in the map grid and opening or closing them."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, field

from .player import Player
from .settings import DOOR_CLOSE, DOOR_OPEN


def _tile(grid: Sequence[str], x: int, y: int) -> str | None:
    if x < 0 or y < 0 or y >= len(grid) or x >= len(grid[y]):
        return None
    return grid[y][x]


def is_door(grid: Sequence[str], x: int, y: int) -> bool:
    """Tell whether the cell holds a door, open or closed."""
    return _tile(grid, x, y) in (DOOR_OPEN, DOOR_CLOSE)


def is_door_closed(grid: Sequence[str], x: int, y: int) -> bool:
    """Tell whether the cell holds a closed door."""
    return _tile(grid, x, y) == DOOR_CLOSE


@dataclass
class Doors:
    """The doors that can be operated: those closed when the map was loaded."""

    positions: list[tuple[int, int]] = field(default_factory=list)

    @classmethod
    def from_grid(cls, grid: Sequence[str]) -> Doors:
        """Register every closed door of the grid, row by row."""
        return cls(
            [(x, y) for y, row in enumerate(grid) for x, char in enumerate(row) if char == DOOR_CLOSE]
        )

    def index(self, x: int, y: int) -> int | None:
        """Return the index of the door at ``(x, y)``, or None if unknown."""
        try:
            return self.positions.index((x, y))
        except ValueError:
            return None

    def toggle(self, grid: MutableSequence[str], x: int, y: int) -> str | None:
        """Open or close a known door in place; return its new tile, or None."""
        if self.index(x, y) is None:
            return None
        row = grid[y]
        current = row[x]
        if current == DOOR_CLOSE:
            new = DOOR_OPEN
        elif current == DOOR_OPEN:
            new = DOOR_CLOSE
        else:
            return None
        grid[y] = row[:x] + new + row[x + 1 :]
        return new

    def __len__(self) -> int:
        return len(self.positions)


def interact(grid: MutableSequence[str], doors: Doors, player: Player) -> str | None:
    """Toggle the door one step ahead of the player; return its new tile, or None."""
    target_x = int(player.x + player.dir_x)
    target_y = int(player.y + player.dir_y)
    if not is_door(grid, target_x, target_y):
        return None
    return doors.toggle(grid, target_x, target_y)