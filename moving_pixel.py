import logging
import sys

from app import AppHost, DoneStatus
from constants import LOG_FORMAT, PIXEL_COLOR
from keys import Key
from renderer import put_pixel
from window import PygameWindow


class MovingPixel:
    """A single red pixel pushed around with the arrow keys.

    Leaving the window open once x drops under 50, closing it once y does.
    """

    def __init__(self, x=0, y=0, color=PIXEL_COLOR):
        self.pos = (x, y)
        self.color = color

    def on_tick(self, pressed_keys):
        x, y = self.pos
        needs_redraw = False
        for key in pressed_keys:
            if key == Key.LEFT:
                x = max(0, x - 1)
            elif key == Key.RIGHT:
                x += 1
            elif key == Key.UP:
                y = max(0, y - 1)
            elif key == Key.DOWN:
                y += 1
            else:
                continue
            needs_redraw = True
        self.pos = (x, y)
        return needs_redraw

    def draw(self, frame, width, height):
        x, y = self.pos
        if x < width and y < height:
            put_pixel(frame, width, x, y, self.color)

    def done(self):
        if self.pos[0] < 50:
            return DoneStatus.REMAIN
        if self.pos[1] < 50:
            return DoneStatus.EXIT
        return DoneStatus.NOT_DONE


def main() -> int:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    window = PygameWindow(500, 500, 'Moving pixel')
    host = AppHost(MovingPixel(50, 100), window, 60)
    # No physics or animation here, only keys move the pixel
    host.set_always_tick(False)
    host.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
