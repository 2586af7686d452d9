from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

import pygame

from raycast import Heading, PanDirection


class Key(Enum):
    """Recognized logical keys. Declaration order is the order commands apply in a tick."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    Z = auto()
    S = auto()
    Q = auto()
    D = auto()
    A = auto()
    E = auto()
    ESCAPE = auto()
    SPACE = auto()


@dataclass(frozen=True)
class Move:
    heading: Heading


@dataclass(frozen=True)
class Pan:
    direction: PanDirection


class SystemAction(Enum):
    PAUSE = auto()
    EXIT = auto()


# Arrows plus the ZQSD/AE block of an AZERTY keyboard
KEY_COMMANDS = {
    Key.UP: Move(Heading.FORWARD),
    Key.Z: Move(Heading.FORWARD),
    Key.DOWN: Move(Heading.BACKWARD),
    Key.S: Move(Heading.BACKWARD),
    Key.Q: Move(Heading.STRAFE_LEFT),
    Key.D: Move(Heading.STRAFE_RIGHT),
    Key.LEFT: Pan(PanDirection.LEFT),
    Key.A: Pan(PanDirection.LEFT),
    Key.RIGHT: Pan(PanDirection.RIGHT),
    Key.E: Pan(PanDirection.RIGHT),
    Key.ESCAPE: SystemAction.EXIT,
    Key.SPACE: SystemAction.PAUSE,
}

PYGAME_KEYS = {
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_z: Key.Z,
    pygame.K_s: Key.S,
    pygame.K_q: Key.Q,
    pygame.K_d: Key.D,
    pygame.K_a: Key.A,
    pygame.K_e: Key.E,
    pygame.K_ESCAPE: Key.ESCAPE,
    pygame.K_SPACE: Key.SPACE,
}


def key_from_pygame(code) -> Optional[Key]:
    return PYGAME_KEYS.get(code)


def ordered(keys):
    """Keys sorted in declaration order so simultaneous keys always apply the same way."""
    return sorted(keys, key=lambda k: list(Key).index(k))


class KeyState:
    """Held keys, with releases deferred to the end of the current tick.

    A key pressed and released between two ticks is still seen as held by
    the next tick, so short taps are never lost.
    """

    def __init__(self):
        self.held = set()
        self.pending_release = set()

    def on_key_down(self, key: Key):
        self.held.add(key)
        self.pending_release.discard(key)

    def on_key_up(self, key: Key):
        """Release ``key`` at the end of the current tick.

        A release for a key that is not held is ignored and never reaches
        ``pending_release``.
        """
        if key in self.held:
            self.pending_release.add(key)

    def drain_tick(self) -> frozenset:
        snapshot = frozenset(self.held)
        self.held -= self.pending_release
        self.pending_release.clear()
        return snapshot

    def is_idle(self):
        return not self.held
