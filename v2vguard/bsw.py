"""Blind-spot warning from the two rear-corner ultrasonic sensors."""

import logging
import math

log = logging.getLogger(__name__)

NONE = 0
RIGHT = 1
LEFT = 2
BOTH = RIGHT | LEFT


def _mean_distance(readings):
    if not readings:
        return math.nan
    return sum(reading.distance for reading in readings) / len(readings)


class BSW:
    """Flags vehicles beside the rear corners: RIGHT, LEFT or both bits set."""

    distance_th_back_r = 20.0  # cm
    distance_th_back_l = 20.0  # cm

    def __init__(self):
        self._rl_readings = []
        self._rr_readings = []
        self.distance_rl = math.nan
        self.distance_rr = math.nan

    def update_us_rl_data(self, reading):
        self._rl_readings = list(reading)

    def update_us_rr_data(self, reading):
        self._rr_readings = list(reading)

    def run_controller(self):
        """Average the rear readings and return the warning bits."""
        self.distance_rl = _mean_distance(self._rl_readings)
        self.distance_rr = _mean_distance(self._rr_readings)
        log.debug("distance avg for RR: %s, RL: %s", self.distance_rr, self.distance_rl)

        flag = NONE
        if self.distance_rr < self.distance_th_back_r:
            flag |= RIGHT
        if self.distance_rl < self.distance_th_back_l:
            flag |= LEFT
        return flag