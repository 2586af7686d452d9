import argparse
import logging
import math
import random
import sys

from app import AppHost, DoneStatus
from constants import FOV, FOV_DEGREES, HEIGHT, LOG_FORMAT, RAY_STEP, TICK_RATE, VOID_COLOR, WALL_COLOR, WIDTH
from keys import KEY_COMMANDS, Move, Pan, ordered
from maze_generator import find_spawn, wilsons_maze
from raycast import GridMap, World, degs_to_rads
from renderer import draw_columns
from window import PygameWindow

logger = logging.getLogger(__name__)


class RaycastApp:
    """First-person view of a World, walked with the arrows or ZQSD/AE."""

    def __init__(self, world: World, ray_step=RAY_STEP, wall_color=WALL_COLOR, void_color=VOID_COLOR):
        self.world = world
        self.ray_step = ray_step
        self.wall_color = wall_color
        self.void_color = void_color

    def on_tick(self, pressed_keys):
        needs_redraw = False
        for key in ordered(pressed_keys):
            command = KEY_COMMANDS.get(key)
            if isinstance(command, Move):
                if self.world.move_player(command.heading):
                    needs_redraw = True
            elif isinstance(command, Pan):
                self.world.pan(command.direction)
                needs_redraw = True
        return needs_redraw

    def draw(self, frame, width, height):
        rays = math.ceil(width / self.ray_step)
        distances = self.world.cast_column_distances(rays)
        draw_columns(frame, width, height, distances, self.ray_step, self.wall_color, self.void_color)

    def done(self):
        return DoneStatus.NOT_DONE


def build_world(maze_size=None, seed=None, fov=FOV):
    if not maze_size:
        return World.default(fov)
    rng = random.Random(seed)
    maze = wilsons_maze(maze_size, maze_size, maze_size // 8, rng)
    return World(GridMap(maze), find_spawn(maze, rng), fov=fov)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog='raycast', description='Minimal grid raycaster')
    parser.add_argument('--width', type=int, default=WIDTH, help='Window width in pixels')
    parser.add_argument('--height', type=int, default=HEIGHT, help='Window height in pixels')
    parser.add_argument('--tick-rate', type=float, default=TICK_RATE, help='Simulation ticks per second')
    parser.add_argument('--maze', type=int, default=None, metavar='SIZE',
                        help='Walk a generated maze instead of the 5x5 room')
    parser.add_argument('--seed', type=int, default=None, help='Seed for the maze generator')
    parser.add_argument('--fov', type=float, default=FOV_DEGREES, help='Field of view in degrees')
    parser.add_argument('--always-tick', action='store_true', help='Tick even when no key is held')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Increase log verbosity (-v, -vv)')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    _setup_logging(args.verbose)

    world = build_world(args.maze, args.seed, degs_to_rads(args.fov))
    logger.info('player spawned at (%.1f, %.1f) in a %dx%d grid',
                *world.position, world.grid.width, world.grid.height)
    window = PygameWindow(args.width, args.height)
    host = AppHost(RaycastApp(world), window, args.tick_rate, always_tick=args.always_tick)
    host.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
