import pytest
from PIL import Image

from raycube.app import Game, main
from raycube.config import load_config
from raycube.controls import Key
from raycube.settings import P_SPEED, SCREEN_HEIGHT, SCREEN_WIDTH, ConfigError

ROOM = ["111111", "100001", "10N001", "100001", "111111"]


def _write_scene(tmp_path, grid, door=False):
    colors = {
        "NO": (200, 0, 0),
        "SO": (0, 200, 0),
        "WE": (0, 0, 200),
        "EA": (200, 200, 0),
        "DO": (0, 200, 200),
    }
    lines = []
    for name, color in colors.items():
        if name == "DO" and not door:
            continue
        path = tmp_path / f"{name.lower()}.png"
        Image.new("RGB", (64, 64), color).save(path)
        lines.append(f"{name} {path}")
    lines.append("F 220,100,0")
    lines.append("C 10,20,30")
    lines.append("")
    lines.extend(grid)
    scene = tmp_path / "scene.cub"
    scene.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return scene


def test_game_frame_renders_room(tmp_path):
    config = load_config(_write_scene(tmp_path, ROOM))
    game = Game(config)
    image = game.frame()
    assert image.shape == (SCREEN_HEIGHT, SCREEN_WIDTH)
    assert image[0, SCREEN_WIDTH - 1] == config.ceiling_color
    assert image[SCREEN_HEIGHT - 1, SCREEN_WIDTH - 1] == config.floor_color
    # North wall seen on a y-side: the red texture at half brightness.
    assert image[SCREEN_HEIGHT // 2, SCREEN_WIDTH // 2] == 0x640000


def test_game_frame_draws_minimap(tmp_path):
    game = Game(load_config(_write_scene(tmp_path, ROOM)))
    image = game.frame()
    assert image[10, 10] == 0xFFFFFF
    assert image[35, 35] == 0xFF0000


def test_game_frame_applies_held_keys(tmp_path):
    game = Game(load_config(_write_scene(tmp_path, ROOM)))
    game.controls.press(Key.W)
    game.frame()
    assert game.player.x == pytest.approx(2.5)
    assert game.player.y == pytest.approx(2.5 - P_SPEED)
    game.controls.release(Key.W)
    game.frame()
    assert game.player.y == pytest.approx(2.5 - P_SPEED)


def test_game_registers_doors(tmp_path):
    grid = ["111111", "100001", "100Ed1", "100001", "111111"]
    game = Game(load_config(_write_scene(tmp_path, grid, door=True)))
    assert len(game.doors) == 1
    assert game.doors.index(4, 2) == 0


def test_game_rejects_doors_without_texture(tmp_path):
    grid = ["111111", "100001", "100Ed1", "100001", "111111"]
    config = load_config(_write_scene(tmp_path, grid))
    with pytest.raises(ConfigError):
        Game(config)


def test_game_rejects_door_texture_without_doors(tmp_path):
    config = load_config(_write_scene(tmp_path, ROOM, door=True))
    with pytest.raises(ConfigError):
        Game(config)


def test_main_usage(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().out


def test_main_too_many_arguments(capsys):
    assert main(["a.cub", "b.cub"]) == 1
    assert "Usage" in capsys.readouterr().out


def test_main_invalid_name(capsys):
    assert main(["scene.txt"]) == 1
    assert "Invalid map file" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert "Error" in capsys.readouterr().out


def test_main_reports_texture_error(tmp_path, capsys):
    grid = ["111111", "100001", "100Ed1", "100001", "111111"]
    scene = _write_scene(tmp_path, grid)
    assert main([str(scene)]) == 1
    assert "door texture" in capsys.readouterr().out