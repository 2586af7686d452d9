import logging
import math
from enum import Enum, IntEnum

import numpy as np

from constants import FOV, MARCH_STEP, MOVE_STEP, PAN_STEP
from errors import MapError

logger = logging.getLogger(__name__)

WALL_CHARS = 'X#'


class CellKind(IntEnum):
    EMPTY = 0
    WALL = 1


class Heading(Enum):
    """Movement relative to where the player looks. Values are angle offsets."""
    FORWARD = 0.0
    BACKWARD = math.pi
    STRAFE_LEFT = -math.pi / 2
    STRAFE_RIGHT = math.pi / 2


class PanDirection(Enum):
    LEFT = -1
    RIGHT = 1


#region Helpers
def move_forward(pos, direction, distance):
    x = pos[0] + math.cos(direction) * distance
    y = pos[1] + math.sin(direction) * distance
    return x, y

def generate_ray_angles(count: int, fov: float) -> list[float]:
    if count <= 0:
        return []
    if count == 1:
        return [0.0]
    lower_half = -fov / 2
    step = fov / (count - 1)
    return [lower_half + step * idx for idx in range(count)]

def degs_to_rads(degs):
    return degs * (math.pi / 180)

def rads_to_degs(rads):
    return int(rads * (180 / math.pi))
#endregion


class GridMap:
    """Fixed occupancy grid, indexed ``cells[y, x]``. Any non-zero cell is a wall."""

    def __init__(self, cells):
        cells = np.array(cells, dtype=np.uint8)
        if cells.ndim != 2 or cells.size == 0:
            raise MapError(f'grid must be a non-empty 2-D array, got shape {cells.shape}')
        cells.flags.writeable = False
        self.cells = cells
        self.height, self.width = cells.shape

    @classmethod
    def from_rows(cls, rows):
        if not rows:
            raise MapError('grid needs at least one row')
        if len({len(row) for row in rows}) != 1:
            raise MapError('grid rows must all have the same length')
        return cls([[CellKind.WALL if ch in WALL_CHARS else CellKind.EMPTY for ch in row] for row in rows])

    @classmethod
    def bordered(cls, width, height):
        cells = np.zeros((height, width), dtype=np.uint8)
        cells[0, :] = CellKind.WALL
        cells[-1, :] = CellKind.WALL
        cells[:, 0] = CellKind.WALL
        cells[:, -1] = CellKind.WALL
        return cls(cells)

    @property
    def diagonal(self):
        return math.hypot(self.width, self.height)

    def is_wall(self, point) -> bool:
        x, y = point
        # Outside the grid counts as wall, NaN and inf included
        if not (math.isfinite(x) and math.isfinite(y)) or x < 0 or y < 0:
            return True
        grid_x, grid_y = int(x), int(y)
        if grid_x >= self.width or grid_y >= self.height:
            return True
        return bool(self.cells[grid_y, grid_x] != CellKind.EMPTY)


def march(grid, origin, heading, step=MARCH_STEP, max_distance=None):
    """Walk from ``origin`` along ``heading`` until a wall is hit.

    Gives up at ``max_distance`` (the grid diagonal by default) and returns it.
    """
    if max_distance is None:
        max_distance = grid.diagonal
    steps = 0
    distance = 0.0
    point = origin
    while not grid.is_wall(point):
        if distance >= max_distance:
            return max_distance
        steps += 1
        distance = steps * step
        point = move_forward(origin, heading, distance)
    return distance


class RayBatch:
    """Wall distances for one frame, one per screen column, left to right.

    The player pose is captured on creation. Distances are computed while
    iterating and every iteration replays the same rays.
    """

    def __init__(self, grid, origin, heading, angles, step=MARCH_STEP):
        self.grid = grid
        self.origin = origin
        self.heading = heading
        self.angles = list(angles)
        self.step = step

    def __len__(self):
        return len(self.angles)

    def __iter__(self):
        for angle in self.angles:
            yield march(self.grid, self.origin, self.heading + angle, self.step)


class World:
    def __init__(self, grid: GridMap, position, heading=0.0, fov=FOV):
        if grid.is_wall(position):
            raise MapError(f'player position {position} is inside a wall')
        self.grid = grid
        self.position = (float(position[0]), float(position[1]))
        self.heading = heading
        self.fov = fov

    @classmethod
    def default(cls, fov=FOV):
        """5x5 room closed by walls, player in the middle looking along +x."""
        return cls(GridMap.bordered(5, 5), (2.0, 2.0), fov=fov)

    def is_wall(self, point):
        return self.grid.is_wall(point)

    def distance_to_wall(self, heading):
        return march(self.grid, self.position, heading)

    def cast_column_distances(self, screen_width) -> RayBatch:
        angles = generate_ray_angles(screen_width, self.fov)
        return RayBatch(self.grid, self.position, self.heading, angles)

    def move_player(self, heading: Heading) -> bool:
        direction = self.heading + heading.value
        new_pos = move_forward(self.position, direction, MOVE_STEP)
        if self.is_wall(new_pos):
            logger.debug('move %s blocked at (%.2f, %.2f)', heading.name, *new_pos)
            return False
        self.position = new_pos
        return True

    def pan(self, direction: PanDirection):
        self.heading += direction.value * PAN_STEP
        logger.debug('heading %d', rads_to_degs(self.heading))
