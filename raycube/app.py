"""The game window, its event loop and the command-line entry point."""

from __future__ import annotations

import sys
from collections.abc import Sequence

import numpy as np
import pygame

from .config import CubConfig, is_valid_map_file, load_config
from .controls import Action, Controls, Key, Mouse
from .doors import Doors, interact, is_door
from .minimap import minimap_pixels
from .player import spawn_player
from .raycast import render_frame
from .settings import SCREEN_HEIGHT, SCREEN_WIDTH, CubError
from .textures import load_textures

_FPS = 60
_TITLE = "Cub3D"


def _key_map() -> dict[int, Key]:
    return {
        pygame.K_ESCAPE: Key.ESCAPE,
        pygame.K_w: Key.W,
        pygame.K_s: Key.S,
        pygame.K_a: Key.A,
        pygame.K_d: Key.D,
        pygame.K_e: Key.E,
        pygame.K_m: Key.M,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
    }


class Game:
    """A loaded scene with its player, doors, input state and textures."""

    def __init__(self, config: CubConfig) -> None:
        self.config = config
        self.grid = list(config.grid)
        self.player = spawn_player(self.grid)
        self.doors = Doors.from_grid(self.grid)
        print(f"Found {len(self.doors)} doors in map")
        self.controls = Controls()
        center_x, center_y = SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2
        self.mouse = Mouse(prev_x=center_x, x=center_x, y=center_y)
        print("Mouse controls initialized. Press 'm' to toggle mouse capture.")
        print("Loading textures...")
        self.textures = load_textures(config)
        print("Textures loaded")
        self.running = False

    def frame(self) -> np.ndarray:
        """Apply the held keys for one frame and return the rendered 0xRRGGBB image."""
        self.controls.step(self.player, self.grid, self.config.width, self.config.height)
        image = render_frame(
            self.grid,
            self.player,
            self.textures,
            self.config.width,
            self.config.height,
            self.config.floor_color or 0,
            self.config.ceiling_color or 0,
        )
        height, width = image.shape
        overlay: dict[tuple[int, int], int] = {}
        for x, y, color in minimap_pixels(self.grid, self.player):
            if 0 <= x < width and 0 <= y < height:
                overlay[(x, y)] = color
        for (x, y), color in overlay.items():
            image[y, x] = color
        return image

    def run(self) -> None:
        """Open the window and run the game until it is closed."""
        pygame.init()
        try:
            screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
            pygame.display.set_caption(_TITLE)
            clock = pygame.time.Clock()
            keys = _key_map()
            self.running = True
            while self.running:
                for event in pygame.event.get():
                    self._handle_event(event, keys)
                if not self.running:
                    break
                self._present(screen, self.frame())
                clock.tick(_FPS)
        finally:
            pygame.quit()
        print("Game successfully destroyed")

    def _handle_event(self, event: pygame.event.Event, keys: dict[int, Key]) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            key = keys.get(event.key)
            if key is not None:
                self._dispatch(self.controls.press(key))
        elif event.type == pygame.KEYUP:
            key = keys.get(event.key)
            if key is not None:
                self.controls.release(key)
        elif event.type == pygame.MOUSEMOTION:
            x, y = event.pos
            if self.mouse.motion(self.player, x, y, SCREEN_WIDTH // 2):
                pygame.mouse.set_pos((SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2))

    def _dispatch(self, action: Action) -> None:
        if action is Action.QUIT:
            self.running = False
        elif action is Action.INTERACT:
            self._interact()
        elif action is Action.TOGGLE_MOUSE:
            captured = self.mouse.toggle(SCREEN_WIDTH // 2)
            print(f"Mouse capture toggled: {'ON' if captured else 'OFF'}")
            if captured:
                pygame.mouse.set_pos((SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2))
            else:
                pygame.mouse.set_visible(True)

    def _interact(self) -> None:
        target_x = int(self.player.x + self.player.dir_x)
        target_y = int(self.player.y + self.player.dir_y)
        if not is_door(self.grid, target_x, target_y):
            print("No door to interact with")
            return
        state = interact(self.grid, self.doors, self.player)
        if state is not None:
            verb = "opened" if state == "D" else "closed"
            print(f"Door {verb} at position [{target_x},{target_y}]")

    @staticmethod
    def _present(screen: pygame.Surface, image: np.ndarray) -> None:
        pixels = image.T
        rgb = np.empty(pixels.shape + (3,), dtype=np.uint8)
        rgb[..., 0] = (pixels >> 16) & 0xFF
        rgb[..., 1] = (pixels >> 8) & 0xFF
        rgb[..., 2] = pixels & 0xFF
        pygame.surfarray.blit_array(screen, rgb)
        pygame.display.flip()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene file named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Error:\n Usage: raycube map_file.cub")
        return 1
    if not is_valid_map_file(args[0]):
        print("Error:\n Invalid map file")
        return 1
    try:
        game = Game(load_config(args[0]))
    except CubError as exc:
        print(f"Error:\n {exc}")
        return 1
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())