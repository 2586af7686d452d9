import math

import numpy as np

from constants import MIN_DISTANCE, VOID_COLOR, WALL_COLOR


def new_frame(width, height):
    """Linear RGBA8 buffer, row-major, pixel (x, y) at ``(y*width + x)*4``."""
    return np.zeros(width * height * 4, dtype=np.uint8)

def as_pixels(frame, width, height):
    """(height, width, 4) view sharing memory with ``frame``."""
    return np.asarray(frame).reshape(height, width, 4)

def put_pixel(frame, width, x, y, color):
    idx = (width * y + x) * 4
    frame[idx:idx + 4] = color

def column_height(distance, screen_height):
    # Walls right in front of the camera would otherwise divide by zero
    distance = max(distance, MIN_DISTANCE)
    return min(screen_height, max(0, math.floor(screen_height / distance)))

def draw_centered_column(buffer, width, height, x, column_height, wall_color, void_color):
    column = as_pixels(buffer, width, height)[:, x]
    top = max(0, height // 2 - column_height // 2)
    bottom = min(height, top + column_height)
    column[:top] = void_color
    column[top:bottom] = wall_color
    column[bottom:] = void_color

def draw_columns(frame, width, height, distances, column_width=1,
                 wall_color=WALL_COLOR, void_color=VOID_COLOR):
    """Project one distance per ``column_width`` pixel columns, left to right."""
    x = 0
    for distance in distances:
        col_height = column_height(distance, height)
        for screen_x in range(x, min(x + column_width, width)):
            draw_centered_column(frame, width, height, screen_x, col_height, wall_color, void_color)
        x += column_width
        if x >= width:
            break
