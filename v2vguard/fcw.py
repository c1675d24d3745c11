"""Forward collision warning from the front-centre ultrasonic sensor."""

import logging
import math
import time
from collections import deque
from typing import NamedTuple

log = logging.getLogger(__name__)

MAX_HISTORY_SIZE = 2


class _DistanceSample(NamedTuple):
    distance: float
    timestamp: float


class FCW:
    """Warns when an obstacle is close and the gap closed fast since the last run."""

    distance_th_front = 15.0  # cm
    gradient_th = 50.0

    def __init__(self):
        self._fc_readings = []
        self.distance_fc = math.nan
        self._history = deque(maxlen=MAX_HISTORY_SIZE)

    def update_us_fc_data(self, reading):
        self._fc_readings = list(reading)

    def _distance_gradient(self):
        if len(self._history) < 2:
            return 0.0
        previous, latest = self._history[-2], self._history[-1]
        return previous.distance - latest.distance

    def run_controller(self, now=None):
        """Average the front readings, record them at `now` and return the warning."""
        readings = self._fc_readings
        if readings:
            self.distance_fc = sum(r.distance for r in readings) / len(readings)
        else:
            self.distance_fc = math.nan
        self._history.append(_DistanceSample(self.distance_fc, time.time() if now is None else now))
        gradient = self._distance_gradient()
        log.debug("distance avg: %s, gradient: %s", self.distance_fc, gradient)
        return self.distance_fc < self.distance_th_front and gradient > self.gradient_th