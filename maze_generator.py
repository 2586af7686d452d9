import random

import numpy as np

from errors import MapError


def wilsons_maze(h: int, w: int, random_changes: int = 1, rng=None):
    """Perfect maze on a (h//2*2+1) x (w//2*2+1) grid, 1 = wall, 0 = open.

    Cells sit on odd coordinates, the border is always wall. ``random_changes``
    knocks out extra walls afterwards so the maze gets a few loops.
    """
    rng = rng or random.Random()
    height = int(h * 0.5)
    width = int(w * 0.5)
    if height < 1 or width < 1:
        raise MapError(f'maze of size {h}x{w} is too small')

    grid_h = height * 2 + 1
    grid_w = width * 2 + 1

    maze = np.ones((grid_h, grid_w), dtype=np.uint8)
    unvisited = {(r, c) for r in range(height) for c in range(width)}

    def to_grid(rc):
        return rc[0] * 2 + 1, rc[1] * 2 + 1

    def get_neighbours(rc):
        r, c = rc
        neighbours = []
        if r > 0:
            neighbours.append((r - 1, c))
        if r < height - 1:
            neighbours.append((r + 1, c))
        if c > 0:
            neighbours.append((r, c - 1))
        if c < width - 1:
            neighbours.append((r, c + 1))
        return neighbours

    start = rng.choice(sorted(unvisited))
    maze[to_grid(start)] = 0
    unvisited.remove(start)

    while unvisited:
        # Loop-erased random walk until it touches the maze
        walk_start = rng.choice(sorted(unvisited))
        path = [walk_start]
        while path[-1] in unvisited:
            neighbours = get_neighbours(path[-1])
            if not neighbours:
                break
            next_cell = rng.choice(neighbours)

            if next_cell in path:
                idx = path.index(next_cell)
                path = path[:idx + 1]
            else:
                path.append(next_cell)

        for i, cell in enumerate(path):
            gr, gc = to_grid(cell)
            maze[gr, gc] = 0
            if i > 0:
                pr, pc = to_grid(path[i - 1])
                maze[(gr + pr) // 2, (gc + pc) // 2] = 0
            unvisited.discard(cell)

    # Only walls between two cells get removed, the border stays closed
    for _ in range(random_changes):
        r = rng.randint(1, grid_h - 2)
        c = rng.randint(1, grid_w - 2)
        if (r % 2) != (c % 2):
            maze[r, c] = 0

    return maze


def find_spawn(maze, rng=None):
    """Centre of a random open cell in the second column, as ``(x, y)``."""
    rng = rng or random.Random()
    spawn_points = [y for y in range(len(maze)) if maze[y][1] == 0]
    if not spawn_points:
        raise MapError('maze has no open cell in column 1')
    y = rng.choice(spawn_points)
    return 1.5, y + 0.5
