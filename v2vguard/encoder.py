"""Quadrature wheel encoder: edge counting and speed estimation."""

import logging
import math
import threading
import time

log = logging.getLogger(__name__)

ENC_A = 27
ENC_B = 24
WHEEL_DIAMETER = 0.065  # metres
PULSES_PER_REVOLUTION = 11.0


class Encoder:
    """Counts quadrature edges and reports wheel speed in m/s since the last query."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self.wheel_circumference = math.pi * WHEEL_DIAMETER
        self.count = 0
        self._last_count = 0
        self._start = clock()

    def on_edge(self, gpio, level_a, level_b):
        """Record an edge on channel `gpio` given the current levels of both channels."""
        with self._lock:
            if gpio == ENC_A:
                self.count += 1 if level_a == level_b else -1
            elif gpio == ENC_B:
                self.count += 1 if level_a != level_b else -1

    def get_speed(self):
        """Speed in m/s over the time since the previous call (or construction)."""
        end = self._clock()
        with self._lock:
            count = self.count - self._last_count
            self._last_count = self.count
        elapsed = end - self._start
        self._start = end

        revolutions = count / PULSES_PER_REVOLUTION
        if elapsed:
            per_second = revolutions / elapsed
        elif revolutions:
            per_second = math.copysign(math.inf, revolutions)
        else:
            per_second = math.nan
        speed = per_second * self.wheel_circumference
        log.debug("rps: %s, speed: %s m/s", per_second, speed)
        return speed