"""pygame side of the host: the display surface, its RGBA frame and its events.

Everything else in the project only sees the small event classes below and
the ``frame`` / ``present`` / ``resize`` / ``next_event`` surface of
:class:`PygameWindow`, so any other windowing backend can stand in for it.
"""

import logging
import math
import time
from collections import deque
from dataclasses import dataclass

import pygame

from constants import CLEAR_COLOR, TITLE
from errors import PresentError
from keys import Key, key_from_pygame
from renderer import new_frame

logger = logging.getLogger(__name__)


#region Events
@dataclass(frozen=True)
class KeyInput:
    key: Key
    pressed: bool
    repeat: bool = False


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class CloseRequested:
    pass


@dataclass(frozen=True)
class RedrawRequested:
    pass


@dataclass(frozen=True)
class MouseClicked:
    x: int
    y: int


@dataclass(frozen=True)
class Timeout:
    pass


def translate_event(event):
    """Host event for a pygame event, or ``None`` when it is of no interest."""
    if event.type == pygame.QUIT:
        return CloseRequested()
    if event.type in (pygame.KEYDOWN, pygame.KEYUP):
        key = key_from_pygame(event.key)
        if key is None:
            return None
        return KeyInput(key, event.type == pygame.KEYDOWN, bool(getattr(event, 'repeat', False)))
    if event.type == pygame.VIDEORESIZE:
        return Resized(event.w, event.h)
    if event.type == pygame.MOUSEBUTTONDOWN:
        return MouseClicked(*event.pos)
    return None
#endregion


class PygameWindow:
    def __init__(self, width, height, title=TITLE):
        pygame.display.init()
        pygame.display.set_caption(title)
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.width, self.height = width, height
        self.frame = new_frame(width, height)
        self._pending = deque()
        logger.info('window created (%dx%d)', width, height)

    def request_redraw(self):
        if not self._pending:
            self._pending.append(RedrawRequested())

    def next_event(self, timeout=None):
        """Next host event, waiting at most ``timeout`` seconds (forever if None).

        Events already in pygame's queue come before a queued redraw, so a
        zero timeout still delivers key releases, resizes and close requests.
        """
        event = self._poll()
        if event is not None:
            return event
        if self._pending:
            return self._pending.popleft()

        deadline = None if timeout is None else time.perf_counter() + timeout
        while True:
            if deadline is None:
                raw = pygame.event.wait()
            else:
                remaining = deadline - time.perf_counter()
                if remaining <= 0:
                    return Timeout()
                raw = pygame.event.wait(max(1, math.ceil(remaining * 1000)))
            if raw.type == pygame.NOEVENT:
                return Timeout()
            event = translate_event(raw)
            if event is not None:
                return event

    def _poll(self):
        while True:
            raw = pygame.event.poll()
            if raw.type == pygame.NOEVENT:
                return None
            event = translate_event(raw)
            if event is not None:
                return event

    def present(self):
        try:
            surface = pygame.image.frombuffer(self.frame.tobytes(), (self.width, self.height), 'RGBA')
            self.screen.fill(CLEAR_COLOR)
            self.screen.blit(surface, (0, 0))
            pygame.display.flip()
        except pygame.error as err:
            raise PresentError(f'could not present {self.width}x{self.height} frame: {err}') from err

    def resize(self, width, height):
        # Minimised windows report 0x0
        self.width, self.height = max(1, width), max(1, height)
        self.screen = pygame.display.get_surface()
        self.frame = new_frame(self.width, self.height)
        logger.debug('resized to %dx%d', self.width, self.height)

    def close(self):
        pygame.display.quit()
