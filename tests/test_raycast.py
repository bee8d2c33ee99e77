import numpy as np
import pytest

from raycube.player import Player
from raycube.raycast import (
    cast_ray,
    compose_frame,
    draw_column,
    render_frame,
    render_walls,
    texture_column,
)
from raycube.settings import (
    IMG_SIZE,
    MISSING_TEXTURE_COLOR,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TextureSlot,
)

ROOM = [
    "11111",
    "10001",
    "10001",
    "10001",
    "11111",
]
CENTER = SCREEN_WIDTH // 2
COLORS = {
    TextureSlot.NO: 0x204060,
    TextureSlot.SO: 0x406080,
    TextureSlot.WE: 0x6080A0,
    TextureSlot.EA: 0x80A0C0,
    TextureSlot.DOOR: 0xA0C0E0,
}


def uniform_textures():
    return {slot: np.full((IMG_SIZE, IMG_SIZE), color, dtype=np.int32) for slot, color in COLORS.items()}


def cast(grid, player, column=CENTER):
    return cast_ray(grid, player, column, SCREEN_WIDTH, SCREEN_HEIGHT)


def empty_buffer():
    return np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=np.int32)


def test_center_ray_north_hits_wall_above():
    player = Player.facing("N", 2.5, 2.5)
    hit = cast(ROOM, player)
    assert hit.hit
    assert hit.texture == TextureSlot.NO
    assert hit.map_x == int(player.x)
    assert hit.map_y < int(player.y)
    assert ROOM[hit.map_y][hit.map_x] == "1"


@pytest.mark.parametrize(
    ("facing", "slot"),
    [("N", TextureSlot.NO), ("S", TextureSlot.SO), ("E", TextureSlot.EA), ("W", TextureSlot.WE)],
)
def test_texture_follows_facing(facing, slot):
    hit = cast(ROOM, Player.facing(facing, 2.5, 2.5))
    assert hit.hit
    assert hit.texture == slot


def test_unclamped_span_is_centered():
    hit = cast(ROOM, Player.facing("E", 2.5, 2.5))
    assert 0 < hit.draw_start < hit.draw_end < SCREEN_HEIGHT - 1
    assert hit.draw_start + hit.draw_end == SCREEN_HEIGHT


def test_closer_wall_is_taller():
    far = cast(ROOM, Player.facing("N", 2.5, 3.5))
    near = cast(ROOM, Player.facing("N", 2.5, 1.5))
    assert near.wall_dist < far.wall_dist
    assert near.line_height > far.line_height
    assert near.draw_start <= far.draw_start


def test_very_close_wall_is_clamped():
    hit = cast(ROOM, Player.facing("N", 2.5, 1.0005))
    assert hit.line_height == SCREEN_HEIGHT * 10
    assert hit.draw_start == 0
    assert hit.draw_end == SCREEN_HEIGHT - 1


def test_closed_door_stops_ray():
    grid = ["11111", "1d001", "10001", "1N001", "11111"]
    hit = cast(grid, Player.facing("N", 1.5, 3.5))
    assert hit.hit
    assert hit.texture == TextureSlot.DOOR
    assert grid[hit.map_y][hit.map_x] == "d"


def test_open_door_lets_ray_through():
    grid = ["11111", "1D001", "10001", "1N001", "11111"]
    hit = cast(grid, Player.facing("N", 1.5, 3.5))
    assert hit.hit
    assert hit.texture == TextureSlot.NO
    assert grid[hit.map_y][hit.map_x] == "1"


def test_no_cells_in_resolution_means_no_hit():
    hit = cast_ray(ROOM, Player.facing("N", 2.5, 2.5), CENTER, 0, 0)
    assert not hit.hit


def test_texture_column_stays_in_texture():
    player = Player.facing("N", 2.3, 2.7)
    for column in range(0, SCREEN_WIDTH, 37):
        tex_x = texture_column(cast(ROOM, player, column), player)
        assert 0 <= tex_x < IMG_SIZE


def test_x_side_is_drawn_unshaded():
    player = Player.facing("E", 2.5, 2.5)
    hit = cast(ROOM, player)
    buffer = empty_buffer()
    draw_column(buffer, hit, player, uniform_textures(), CENTER)
    span = buffer[hit.draw_start : hit.draw_end, CENTER]
    assert (span == COLORS[TextureSlot.EA]).all()


def test_y_side_is_drawn_shaded():
    player = Player.facing("N", 2.5, 2.5)
    hit = cast(ROOM, player)
    buffer = empty_buffer()
    draw_column(buffer, hit, player, uniform_textures(), CENTER)
    span = buffer[hit.draw_start : hit.draw_end, CENTER]
    assert (span == (COLORS[TextureSlot.NO] >> 1) & 0x7F7F7F).all()


def test_missing_texture_is_magenta():
    player = Player.facing("E", 2.5, 2.5)
    hit = cast(ROOM, player)
    buffer = empty_buffer()
    draw_column(buffer, hit, player, {}, CENTER)
    assert (buffer[hit.draw_start : hit.draw_end, CENTER] == MISSING_TEXTURE_COLOR).all()


def test_draw_column_touches_only_its_span():
    player = Player.facing("E", 2.5, 2.5)
    hit = cast(ROOM, player)
    buffer = empty_buffer()
    draw_column(buffer, hit, player, uniform_textures(), CENTER)
    assert (buffer[: hit.draw_start, CENTER] == 0).all()
    assert (buffer[hit.draw_end :, CENTER] == 0).all()
    assert (buffer[:, CENTER + 1] == 0).all()


def test_texture_rows_are_walked_top_to_bottom():
    gradient = np.repeat(np.arange(1, IMG_SIZE + 1, dtype=np.int32)[:, None], IMG_SIZE, axis=1)
    player = Player.facing("E", 2.5, 2.5)
    hit = cast(ROOM, player)
    buffer = empty_buffer()
    draw_column(buffer, hit, player, {TextureSlot.EA: gradient}, CENTER)
    span = buffer[hit.draw_start : hit.draw_end, CENTER]
    assert (np.diff(span) >= 0).all()
    assert span[0] == gradient[0, 0]
    assert span[-1] == gradient[IMG_SIZE - 1, 0]


def test_compose_frame_fills_background():
    buffer = empty_buffer()
    buffer[10, 20] = 0x123456
    frame = compose_frame(buffer, 0x00AA00, 0x0000BB)
    assert frame[10, 20] == 0x123456
    assert frame[0, 0] == 0x0000BB
    assert frame[SCREEN_HEIGHT // 2 - 1, 5] == 0x0000BB
    assert frame[SCREEN_HEIGHT // 2, 5] == 0x00AA00
    assert frame[SCREEN_HEIGHT - 1, SCREEN_WIDTH - 1] == 0x00AA00


def test_render_walls_fills_every_column():
    buffer = render_walls(ROOM, Player.facing("E", 2.5, 2.5), uniform_textures(), SCREEN_WIDTH, SCREEN_HEIGHT)
    assert buffer.shape == (SCREEN_HEIGHT, SCREEN_WIDTH)
    assert (buffer[SCREEN_HEIGHT // 2] > 0).all()


def test_render_frame_has_wall_and_background():
    floor, ceiling = 0x00AA00, 0x0000BB
    frame = render_frame(
        ROOM, Player.facing("E", 2.5, 2.5), uniform_textures(), SCREEN_WIDTH, SCREEN_HEIGHT, floor, ceiling
    )
    assert frame.shape == (SCREEN_HEIGHT, SCREEN_WIDTH)
    assert frame[SCREEN_HEIGHT // 2, CENTER] == COLORS[TextureSlot.EA]
    assert frame[0, CENTER] == ceiling
    assert frame[SCREEN_HEIGHT - 1, CENTER] == floor
    assert (frame > 0).all()