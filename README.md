# raycube

raycube lets you walk through a maze in first person. It reads the maze from a `.cub` scene file and draws the walls with textures using raycasting. A minimap in the top-left corner shows the layout, your position and the direction you face.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
raycube path/to/scene.cub
```

The command takes exactly one argument, and its name must end in `.cub`. When the arguments are wrong, the file cannot be read, or the scene is not valid, raycube prints `Error:` and a message, then exits with status 1. The game opens a 1600×900 window and runs at up to 60 frames per second.

## Controls

| Key          | Action                                  |
|--------------|-----------------------------------------|
| W / S        | move forward / backward                 |
| A / D        | strafe left / right                     |
| Left / Right | turn                                    |
| E            | open or close the door one step ahead   |
| M            | switch mouse-look capture on or off     |
| Esc          | quit                                    |

With mouse capture on, moving the pointer sideways turns the view. If the pointer drifts more than 10 pixels from the centre of the window, it is moved back to the centre. Only doors that were closed when the map was loaded can be opened and closed.

## The `.cub` format

A scene file starts with element lines and ends with the map. Blank lines are ignored. Spaces and tabs are stripped from both ends of every line.

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
DO ./textures/door.xpm
F 220,100,0
C 225,30,0

111111
100001
10N0d1
111111
```

### Elements

- `NO`, `SO`, `WE` and `EA` set the four wall textures. All four are required, and each path must name a file that can be opened. A texture may be in any image format Pillow can read. It must be at least 64×64 pixels; only its top-left 64×64 pixels are used.
- `DO` sets the door texture. It is required when the map has doors and not allowed when it has none.
- `S` sets an optional sprite path. The file is checked for existence but never drawn.
- `F` and `C` set the floor and ceiling colours as `R,G,B`. Each needs exactly two commas and three numbers, and every number must be between 0 and 255.
- `R width height` sets the resolution. The map area the player can walk and see covers one cell for every ten pixels of resolution; the default is 1600×900. The window size does not change.

A texture defined twice is an error. A line before the map that is neither an element nor a map row is also an error.

### Map characters

- `1` is a wall.
- `0` is floor.
- A space is void, outside the map.
- `N`, `S`, `E` or `W` marks the player's start cell and the direction they face. The map must have exactly one.
- `d` is a closed door and `D` is an open door. Doors cannot be in the first or last row of the map.

Each floor cell and the player's cell must have a non-void cell on all eight sides. Neither may touch a space or the edge of the map.

## Using it as a library

- `raycube.config.load_config(path)` reads and validates a scene file and returns a `CubConfig`. `parse_config(lines)` does the same from a list of lines.
- `raycube.gamemap.validate_map(grid)` checks a map grid and returns the player `Spawn`.
- `raycube.player.spawn_player(grid)` creates a `Player` at the start cell.
- `raycube.textures.load_textures(config)` loads the texture tables.
- `raycube.raycast.render_frame(grid, player, textures, width, height, floor, ceiling)` renders a frame without opening a window. It returns a 900×1600 numpy array of `0xRRGGBB` integers.
- `raycube.minimap.minimap_pixels(grid, player)` returns the minimap pixels as `(x, y, colour)` tuples.

Errors raise `raycube.settings.CubError`. Its subclasses are `ConfigError` for scene elements and `MapError` for the map grid.

## Limitations

- Sprites are not rendered.
- There are no enemies, weapons or shooting.
- Doors open and close instantly; they are not animated.