import logging
import time
from enum import Enum, auto
from typing import Protocol

from constants import TICK_RATE
from errors import PresentError
from keys import KEY_COMMANDS, KeyState, SystemAction
from scheduler import TickScheduler, hz_to_period
from window import CloseRequested, KeyInput, MouseClicked, RedrawRequested, Resized

logger = logging.getLogger(__name__)


class DoneStatus(Enum):
    # Close the window, the app has nothing left to do
    EXIT = auto()
    # Keep the window and the last frame, but stop ticking the app
    REMAIN = auto()
    NOT_DONE = auto()


class GfxApp(Protocol):
    def on_tick(self, pressed_keys) -> bool:
        """Called once per tick with the held keys. Returns True if a redraw is needed.

        Keys released during the tick are still part of ``pressed_keys``.
        """

    def draw(self, frame, width, height):
        """Paint into the RGBA ``frame`` before it is presented."""

    def done(self) -> DoneStatus:
        ...


class AppHost:
    """Owns the key state and the tick pacing and drives one app in one window.

    The window only needs ``frame``, ``width``, ``height``, ``request_redraw``,
    ``next_event``, ``present``, ``resize`` and ``close``.
    """

    def __init__(self, app: GfxApp, window, tick_rate=TICK_RATE, clock=time.perf_counter, always_tick=False):
        self.app = app
        self.window = window
        self.key_state = KeyState()
        self.scheduler = TickScheduler(hz_to_period(tick_rate), clock, always_tick)
        self.pause = False
        self.needs_render = True
        self.running = False

    def set_always_tick(self, val):
        """Tick even when no key is held, for apps with their own animation."""
        self.scheduler.always_tick = val

    def run(self):
        self.running = True
        self.window.request_redraw()
        try:
            while self.running:
                timeout = self.about_to_wait()
                if not self.running:
                    break
                self.handle_event(self.window.next_event(timeout))
        finally:
            self.window.close()
        logger.info('event loop stopped after %d ticks', self.scheduler.ticks)

    def about_to_wait(self):
        """Tick if one is due and return how long to wait for the next event."""
        if self.app.done() == DoneStatus.EXIT:
            logger.info('app is done; stopping')
            self.exit()
            return None

        decision = self.scheduler.poll(not self.key_state.is_idle())
        if decision.tick:
            self.on_tick()
            self.window.request_redraw()
        return decision.timeout

    def handle_event(self, event):
        if isinstance(event, KeyInput):
            self.process_key(event)
        elif isinstance(event, RedrawRequested):
            self.on_redraw()
        elif isinstance(event, Resized):
            self.process_resize(event.width, event.height)
        elif isinstance(event, CloseRequested):
            logger.info('The close button was pressed; stopping')
            self.exit()
        elif isinstance(event, MouseClicked):
            logger.info('clicked at x: %d, y: %d', event.x, event.y)

    def process_key(self, event: KeyInput):
        if event.repeat:
            return
        command = KEY_COMMANDS.get(event.key)
        if command is None:
            return
        if isinstance(command, SystemAction):
            if event.pressed:
                self.run_system_action(command)
            return
        if event.pressed:
            self.key_state.on_key_down(event.key)
        else:
            self.key_state.on_key_up(event.key)

    def run_system_action(self, action: SystemAction):
        if action == SystemAction.EXIT:
            logger.info('escape pressed; stopping')
            self.exit()
        elif action == SystemAction.PAUSE:
            self.pause = not self.pause
            logger.info('paused' if self.pause else 'resumed')

    def process_resize(self, width, height):
        self.window.resize(width, height)
        self.needs_render = True
        self.window.request_redraw()

    def on_tick(self):
        pressed_keys = self.key_state.drain_tick()
        if self.pause or self.app.done() != DoneStatus.NOT_DONE:
            return
        if self.app.on_tick(pressed_keys):
            self.needs_render = True

    def on_redraw(self):
        if not self.needs_render:
            return
        self.app.draw(self.window.frame, self.window.width, self.window.height)
        try:
            self.window.present()
        except PresentError as err:
            logger.error('failed to render with error %s', err)
            return
        self.needs_render = False

    def exit(self):
        self.running = False
