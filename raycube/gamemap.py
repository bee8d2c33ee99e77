"""Extraction and validation of the map grid of a scene file."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .settings import MAP_CHARS, PLAYER_CHARS, MapError

Grid = Sequence[Sequence[str]]

# Clockwise from north, as (row offset, column offset).
NEIGHBOURS: tuple[tuple[int, int], ...] = (
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
)


@dataclass(frozen=True)
class Spawn:
    """Where the player starts: facing letter, column and row."""

    direction: str
    x: int
    y: int


def is_map_line(line: str | None) -> bool:
    """Tell whether a line looks like a row of the map.

    Only '0', '1', ' ' and the player letters are accepted, and the line
    must hold at least one wall or space.
    """
    if not line:
        return False
    valid = False
    for char in line:
        if char in "1 ":
            valid = True
        elif char != "0" and char not in PLAYER_CHARS:
            return False
    return valid


def map_bounds(lines: Sequence[str]) -> tuple[int, int] | None:
    """Return the indices of the first and last map lines, or None."""
    indices = [i for i, line in enumerate(lines) if is_map_line(line)]
    if not indices:
        return None
    return indices[0], indices[-1]


def extract_map(lines: Sequence[str]) -> list[str]:
    """Keep only the lines from the first map line to the last one.

    When no map line is present the lines are returned unchanged.
    """
    bounds = map_bounds(lines)
    if bounds is None:
        return list(lines)
    start, end = bounds
    return list(lines[start : end + 1])


def check_valid_chars(grid: Grid) -> None:
    """Raise MapError on an unknown character or a player count other than one."""
    player_count = 0
    for i, row in enumerate(grid):
        for j, char in enumerate(row):
            if char not in MAP_CHARS:
                raise MapError(f"invalid character {char!r} at [{i},{j}]")
            if char in PLAYER_CHARS:
                player_count += 1
    if player_count != 1:
        raise MapError(f"wrong number of players ({player_count} found)")


def is_empty_or_edge(grid: Grid, i: int, j: int) -> bool:
    """Tell whether a cell lies outside the grid or holds a space."""
    if i < 0 or j < 0 or i >= len(grid):
        return True
    row = grid[i]
    return j >= len(row) or row[j] == " "


def is_surrounded(grid: Grid, i: int, j: int) -> bool:
    """Tell whether none of the eight neighbours of a cell is empty or outside."""
    return not any(is_empty_or_edge(grid, i + di, j + dj) for di, dj in NEIGHBOURS)


def check_map_closed(grid: Grid) -> None:
    """Raise MapError if any floor cell touches a space or the grid edge."""
    for i, row in enumerate(grid):
        for j, char in enumerate(row):
            if char == "0" and not is_surrounded(grid, i, j):
                raise MapError(f"map not closed at [{i},{j}]")


def find_player(grid: Grid) -> Spawn | None:
    """Return the spawn of the last player letter in the grid, if any."""
    spawn = None
    for i, row in enumerate(grid):
        for j, char in enumerate(row):
            if char in PLAYER_CHARS:
                spawn = Spawn(char, j, i)
    return spawn


def _normalized(grid: Grid) -> list[str]:
    return ["".join("0" if c in PLAYER_CHARS else c for c in row) for row in grid]


def validate_map(grid: Grid) -> Spawn:
    """Check characters, player count and closure; return the player spawn.

    The player cell counts as floor for the closure check. The grid is
    left unchanged.
    """
    if not grid:
        raise MapError("no map to validate")
    check_valid_chars(grid)
    spawn = find_player(grid)
    check_map_closed(_normalized(grid))
    if spawn is None:
        raise MapError("wrong number of players (0 found)")
    return spawn