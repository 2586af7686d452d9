import math
import random

import numpy as np
import pytest

from constants import MARCH_STEP, MOVE_STEP, PAN_STEP
from errors import MapError
from raycast import (
    GridMap,
    Heading,
    PanDirection,
    RayBatch,
    World,
    degs_to_rads,
    generate_ray_angles,
    march,
    move_forward,
)


def test_move_forward_zero_distance_keeps_position():
    for pos in [(0.0, 0.0), (2.5, 1.25), (-3.0, 7.0)]:
        for direction in [0.0, 1.0, math.pi, -2.0]:
            assert move_forward(pos, direction, 0.0) == pos


def test_move_forward_cardinal_directions():
    assert move_forward((0.0, 0.0), 0.0, 1.0) == (1.0, 0.0)

    x, y = move_forward((0.0, 0.0), math.pi, 1.0)
    assert x == pytest.approx(-1.0)
    assert y == pytest.approx(0.0, abs=1e-9)

    x, y = move_forward((0.0, 0.0), math.pi / 2, 1.0)
    assert x == pytest.approx(0.0, abs=1e-9)
    assert y == pytest.approx(1.0)

    x, y = move_forward((0.0, 0.0), math.pi / 2 * 3, 1.0)
    assert x == pytest.approx(0.0, abs=1e-9)
    assert y == pytest.approx(-1.0)


def test_degs_to_rads():
    assert degs_to_rads(180) == pytest.approx(math.pi)
    assert degs_to_rads(0) == 0


@pytest.mark.parametrize("count", [2, 3, 4, 5, 64, 640])
@pytest.mark.parametrize("fov", [0.5, math.radians(70), 3.0, 4.0])
def test_ray_angles_span_fov_evenly(count, fov):
    angles = generate_ray_angles(count, fov)
    assert len(angles) == count
    assert angles[0] == pytest.approx(-fov / 2)
    assert angles[-1] == pytest.approx(fov / 2)
    spacing = fov / (count - 1)
    for left, right in zip(angles, angles[1:]):
        assert right - left == pytest.approx(spacing)


def test_ray_angles_small_counts():
    assert generate_ray_angles(1, 1.2) == [0.0]
    assert generate_ray_angles(0, 1.2) == []
    assert generate_ray_angles(3, 3.0) == pytest.approx([-1.5, 0.0, 1.5])
    assert generate_ray_angles(4, 4.0) == pytest.approx([-2.0, -2 / 3, 2 / 3, 2.0])


#region GridMap
def test_bordered_map_walls():
    grid = GridMap.bordered(5, 5)
    assert (grid.width, grid.height) == (5, 5)
    assert grid.is_wall((0.5, 2.5))
    assert grid.is_wall((4.2, 2.5))
    assert grid.is_wall((2.5, 0.0))
    assert not grid.is_wall((2.5, 2.5))
    assert not grid.is_wall((1.0, 3.99))


def test_out_of_bounds_is_wall():
    grid = GridMap(np.zeros((3, 3), dtype=np.uint8))
    assert not grid.is_wall((1.5, 1.5))
    assert grid.is_wall((-0.5, 1.0))
    assert grid.is_wall((1.0, -0.01))
    assert grid.is_wall((3.0, 1.0))
    assert grid.is_wall((1.0, 3.5))
    assert grid.is_wall((100.0, 100.0))
    assert grid.is_wall((math.nan, 1.0))
    assert grid.is_wall((1.0, math.inf))


def test_from_rows():
    grid = GridMap.from_rows([
        "XXXX",
        "X  #",
        "XXXX",
    ])
    assert (grid.width, grid.height) == (4, 3)
    assert not grid.is_wall((1.5, 1.5))
    assert not grid.is_wall((2.5, 1.5))
    assert grid.is_wall((3.5, 1.5))


def test_grid_is_read_only():
    cells = np.zeros((3, 3), dtype=np.uint8)
    grid = GridMap(cells)
    with pytest.raises(ValueError):
        grid.cells[1, 1] = 1
    # The caller's array is copied, not shared
    cells[1, 1] = 1
    assert not grid.is_wall((1.5, 1.5))


def test_invalid_grids_rejected():
    with pytest.raises(MapError):
        GridMap([])
    with pytest.raises(MapError):
        GridMap([1, 0, 1])
    with pytest.raises(MapError):
        GridMap.from_rows([])
    with pytest.raises(MapError):
        GridMap.from_rows(["XXX", "X"])
#endregion


#region World
def test_world_rejects_spawn_in_wall():
    with pytest.raises(MapError):
        World(GridMap.bordered(5, 5), (0.5, 0.5))
    with pytest.raises(MapError):
        World(GridMap.bordered(5, 5), (7.0, 2.0))


def test_distance_to_border_in_5x5_room():
    world = World.default()
    assert world.position == (2.0, 2.0)
    assert world.heading == 0.0

    # Border cell starts at x=4
    assert abs(world.distance_to_wall(0.0) - 2.0) <= MARCH_STEP + 1e-9
    # Westward the wall cell ends at x=1
    assert abs(world.distance_to_wall(math.pi) - 1.0) <= MARCH_STEP + 1e-9
    assert abs(world.distance_to_wall(math.pi / 2) - 2.0) <= MARCH_STEP + 1e-9


def test_march_stops_at_guard_distance():
    grid = GridMap(np.zeros((50, 50), dtype=np.uint8))
    assert march(grid, (25.0, 25.0), 0.0, max_distance=0.5) == 0.5
    # Default guard is the grid diagonal, rays leave the grid before that
    assert march(grid, (25.0, 25.0), 0.0) <= grid.diagonal


def test_cast_column_distances():
    world = World.default()
    batch = world.cast_column_distances(9)
    assert isinstance(batch, RayBatch)
    assert len(batch) == 9

    distances = list(batch)
    assert len(distances) == 9
    # Iterating again replays the same rays
    assert list(batch) == distances
    # Middle ray looks straight ahead
    assert distances[4] == pytest.approx(world.distance_to_wall(0.0))
    assert all(d > 0 for d in distances)


def test_ray_batch_keeps_pose_of_its_frame():
    world = World.default()
    batch = world.cast_column_distances(3)
    before = list(batch)
    world.move_player(Heading.FORWARD)
    world.pan(PanDirection.LEFT)
    assert list(batch) == before


def test_move_player_directions():
    world = World.default()
    assert world.move_player(Heading.FORWARD)
    assert world.position == pytest.approx((2.0 + MOVE_STEP, 2.0))

    world = World.default()
    assert world.move_player(Heading.BACKWARD)
    assert world.position == pytest.approx((2.0 - MOVE_STEP, 2.0))

    world = World.default()
    assert world.move_player(Heading.STRAFE_RIGHT)
    assert world.position == pytest.approx((2.0, 2.0 + MOVE_STEP))

    world = World.default()
    assert world.move_player(Heading.STRAFE_LEFT)
    assert world.position == pytest.approx((2.0, 2.0 - MOVE_STEP))


def test_move_player_stops_at_wall():
    world = World.default()
    moved = [world.move_player(Heading.FORWARD) for _ in range(20)]
    assert moved[0] is True
    assert moved[-1] is False
    assert 3.5 < world.position[0] < 4.0
    assert not world.is_wall(world.position)

    # Blocked moves do not change anything
    position = world.position
    assert world.move_player(Heading.FORWARD) is False
    assert world.position == position


def test_reachable_positions_are_never_walls():
    rng = random.Random(1234)
    world = World(GridMap.from_rows([
        "XXXXXXX",
        "X   X X",
        "X X   X",
        "X   X X",
        "XXXXXXX",
    ]), (1.5, 1.5))
    for _ in range(2000):
        if rng.random() < 0.3:
            world.pan(rng.choice(list(PanDirection)))
        else:
            world.move_player(rng.choice(list(Heading)))
        assert not world.is_wall(world.position)


def test_pan_changes_only_heading():
    world = World.default()
    world.pan(PanDirection.RIGHT)
    assert world.heading == pytest.approx(PAN_STEP)
    world.pan(PanDirection.LEFT)
    world.pan(PanDirection.LEFT)
    assert world.heading == pytest.approx(-PAN_STEP)
    assert world.position == (2.0, 2.0)


def test_strafe_follows_heading():
    world = World.default()
    world.pan(PanDirection.RIGHT)
    world.pan(PanDirection.RIGHT)
    world.pan(PanDirection.RIGHT)
    world.pan(PanDirection.RIGHT)
    # Now looking along +y, forward moves down the grid
    world.move_player(Heading.FORWARD)
    x, y = world.position
    assert x == pytest.approx(2.0, abs=1e-9)
    assert y == pytest.approx(2.0 + MOVE_STEP)
#endregion
