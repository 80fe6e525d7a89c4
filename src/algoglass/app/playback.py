# src/algoglass/app/playback.py
#!/usr/bin/env python3
import time
from typing import Optional

from algoglass.core.config import SPEEDS
from algoglass.core.controller import SimulationController


class PlaybackDriver:
    """Moves the controller's cursor forward on a clock while it is playing.

    The driver never runs algorithms and never touches snapshots; it only calls
    `controller.next_step()` once per elapsed interval. `instant` (0 ms)
    advances on every tick.
    """

    def __init__(self, controller: SimulationController):
        self.controller = controller
        self._last_step_t: Optional[float] = None

    @property
    def interval(self) -> float:
        return SPEEDS[self.controller.state.speed] / 1000.0

    def tick(self, now: Optional[float] = None) -> bool:
        """Returns True when the cursor moved."""
        state = self.controller.state
        if not state.is_playing:
            self._last_step_t = None
            return False
        now = time.monotonic() if now is None else now
        if self._last_step_t is None:
            # first tick after play only arms the clock
            self._last_step_t = now
            return False
        if now - self._last_step_t < self.interval:
            return False
        self._last_step_t = now
        return self.controller.next_step()
