import math

TICK_RATE = 60

WIDTH, HEIGHT = 640, 400
TITLE = 'RayCast'

FOV_DEGREES = 70
FOV = math.radians(FOV_DEGREES)
MARCH_STEP = 0.01
MOVE_STEP = 0.2
PAN_STEP = math.pi / 8
MIN_DISTANCE = 0.01
RAY_STEP = 2

# RGBA
WALL_COLOR = (200, 200, 200, 255)
VOID_COLOR = (0, 0, 0, 255)
CLEAR_COLOR = (0, 0, 255)
PIXEL_COLOR = (255, 0, 0, 255)

LOG_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'
