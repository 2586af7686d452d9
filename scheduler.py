import time
from dataclasses import dataclass
from typing import Optional


def hz_to_period(hz) -> float:
    """Seconds between two ticks at ``hz`` ticks per second."""
    if hz <= 0:
        raise ValueError(f'tick rate must be positive, got {hz}')
    return 1.0 / hz


@dataclass(frozen=True)
class TickDecision:
    """What the loop should do next.

    ``tick`` means run one simulation step now. Otherwise ``timeout`` is how
    long to wait for events before asking again; ``None`` means wait until
    something happens.
    """
    tick: bool
    timeout: Optional[float] = None


class TickScheduler:
    """Fixed-period tick pacing, independent of how fast events arrive.

    With nothing held and ``always_tick`` off the loop sleeps until the next
    event instead of waking up every period.
    """

    def __init__(self, period, clock=time.perf_counter, always_tick=False):
        self.period = period
        self.clock = clock
        self.always_tick = always_tick
        self.last_tick = clock()
        self.ticks = 0

    def poll(self, keys_held, now=None) -> TickDecision:
        if now is None:
            now = self.clock()
        elapsed = now - self.last_tick
        if elapsed >= self.period:
            self.last_tick = now
            self.ticks += 1
            return TickDecision(tick=True, timeout=0.0)
        if keys_held or self.always_tick:
            return TickDecision(tick=False, timeout=self.period - elapsed)
        return TickDecision(tick=False, timeout=None)
