"""Do-not-pass warning: a slow vehicle ahead combined with oncoming traffic."""

import logging
import math

from .config import latest
from .geo import distance, is_ahead_and_opposite_direction, is_ahead_and_same_direction

log = logging.getLogger(__name__)

SCAN_INTERVAL = 40000


def _scan_due(counter):
    return counter in (0, SCAN_INTERVAL)


def _advance(counter):
    counter += 1
    return 1 if counter > SCAN_INTERVAL else counter


class DNPW:
    """Decides whether overtaking the vehicle ahead is unsafe.

    The remote vehicle list is rescanned on the first call and then once every
    SCAN_INTERVAL calls; in between, the last scan's result is reused.
    """

    distance_th_front = 60.0
    speed_th_front = 40.0
    distance_th_cross = 0.0
    speed_th_cross = 65.0

    def __init__(self):
        self._gps = []
        self._vehicles = {}
        self._front_counter = 0
        self._cross_counter = 0
        self._front_prev = (0.0, 0.0)
        self._cross_prev = (0.0, 0.0)
        self.distance_fc = math.inf
        self.vehicle_front_speed = 0.0
        self.distance_diff = math.inf
        self.vehicle_cross_speed = 0.0

    def update_gps_data(self, reading):
        self._gps = list(reading)

    def update_vehicles_data(self, vehicles):
        self._vehicles = vehicles

    def _own_track(self):
        now, before = latest(self._gps, 0), latest(self._gps, 1)
        return before.latitude, before.longitude, now.latitude, now.longitude

    def _scan(self, matches, own, carried):
        """Nearest matching vehicle as (gap, velocity) or None, plus the carried previous point."""
        nearest = None
        for _, times in sorted(self._vehicles.items()):
            stamps = sorted(times)
            if not stamps:
                continue
            last = times[stamps[-1]]
            if len(stamps) > 1:
                previous = times[stamps[-2]]
                carried = (previous.latitude, previous.longitude)
            if matches(*own, *carried, last.latitude, last.longitude):
                gap = distance(own[0], own[1], *carried)
                if nearest is None or gap < nearest[0]:
                    nearest = (gap, last.velocity)
        return nearest, carried

    def run_status_front(self):
        """True if a slow vehicle is close ahead in the same direction."""
        own = self._own_track()
        if _scan_due(self._front_counter):
            nearest, self._front_prev = self._scan(is_ahead_and_same_direction, own, self._front_prev)
            if nearest is not None:
                self.distance_fc, self.vehicle_front_speed = nearest
        self._front_counter = _advance(self._front_counter)
        return self.distance_fc < self.distance_th_front and self.vehicle_front_speed <= self.speed_th_front

    def run_status_cross(self):
        """True if an opposite-direction vehicle makes passing unsafe."""
        own = self._own_track()
        if _scan_due(self._cross_counter):
            nearest, self._cross_prev = self._scan(is_ahead_and_opposite_direction, own, self._cross_prev)
            if nearest is not None:
                self.distance_diff, self.vehicle_cross_speed = nearest
        self._cross_counter = _advance(self._cross_counter)
        log.debug("cross distance: %s, speed: %s", self.distance_diff, self.vehicle_cross_speed)
        return self.distance_diff <= self.distance_th_cross or (
            self.distance_diff >= self.distance_th_cross and self.vehicle_cross_speed >= self.speed_th_cross
        )