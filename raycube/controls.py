"""Keyboard and mouse input turned into player movement."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, IntEnum

from .player import Player
from .settings import ESC_KEYCODE

_RECENTER_DISTANCE = 10


class Key(IntEnum):
    """X11 keysyms of the keys the game reacts to."""

    ESCAPE = ESC_KEYCODE
    A = 0x61
    D = 0x64
    E = 0x65
    M = 0x6D
    S = 0x73
    W = 0x77
    LEFT = 0xFF51
    RIGHT = 0xFF53


class Action(Enum):
    """What a key press asks the game to do beyond setting movement state."""

    NONE = "none"
    QUIT = "quit"
    INTERACT = "interact"
    TOGGLE_MOUSE = "toggle_mouse"


@dataclass
class Controls:
    """The movement and rotation keys currently held down."""

    move_x: int = 0
    move_y: int = 0
    rot_left: int = 0
    rot_right: int = 0

    def press(self, key: int) -> Action:
        """Record a key press and return the action it triggers."""
        if key == Key.W:
            self.move_y = 1
        elif key == Key.S:
            self.move_y = -1
        elif key == Key.A:
            self.move_x = -1
        elif key == Key.D:
            self.move_x = 1
        elif key == Key.LEFT:
            self.rot_left = -1
        elif key == Key.RIGHT:
            self.rot_right = 1
        elif key == Key.ESCAPE:
            return Action.QUIT
        elif key == Key.E:
            return Action.INTERACT
        elif key == Key.M:
            return Action.TOGGLE_MOUSE
        return Action.NONE

    def release(self, key: int) -> None:
        """Record a key release; a key only clears the state it set itself."""
        if key == Key.W and self.move_y == 1:
            self.move_y = 0
        elif key == Key.S and self.move_y == -1:
            self.move_y = 0
        elif key == Key.A and self.move_x == -1:
            self.move_x = 0
        elif key == Key.D and self.move_x == 1:
            self.move_x = 0
        elif key == Key.LEFT and self.rot_left == -1:
            self.rot_left = 0
        elif key == Key.RIGHT and self.rot_right == 1:
            self.rot_right = 0

    def active(self) -> bool:
        """Tell whether any movement or rotation key is held."""
        return bool(self.move_x or self.move_y or self.rot_left or self.rot_right)

    def step(self, player: Player, grid: Sequence[str], width: int, height: int) -> bool:
        """Apply one frame of held keys to the player; return whether it changed.

        Sideways then forward movement is tried first, then rotation.
        """
        if not self.active():
            return False
        moved = False
        if self.move_x:
            moved = player.strafe(grid, self.move_x, width, height)
        if self.move_y:
            moved = player.move_forward(grid, self.move_y, width, height) or moved
        if self.rot_left:
            player.rotate_left()
            moved = True
        if self.rot_right:
            player.rotate_right()
            moved = True
        return moved


@dataclass
class Mouse:
    """Pointer state for mouse-look."""

    prev_x: int = 0
    x: int = 0
    y: int = 0
    captured: bool = False
    rot_speed: float = 0.002

    def toggle(self, center_x: int) -> bool:
        """Switch capture on or off; return the new capture state.

        On capture the reference point is reset to the window centre, where
        the caller is expected to move the pointer.
        """
        self.captured = not self.captured
        if self.captured:
            self.prev_x = center_x
        return self.captured

    def motion(self, player: Player, x: int, y: int, center_x: int) -> bool:
        """Turn the player by the horizontal pointer motion.

        Return True when the pointer strayed from the centre and the caller
        should move it back there.
        """
        self.x, self.y = x, y
        if not self.captured:
            return False
        delta = x - self.prev_x
        if delta:
            player.rotate(delta * self.rot_speed)
        if abs(x - center_x) > _RECENTER_DISTANCE:
            self.prev_x = center_x
            return True
        self.prev_x = x
        return False