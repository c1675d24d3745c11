"""Emergency electronic brake light: hard braking of a vehicle ahead."""

import logging

from .config import latest
from .geo import is_ahead_and_same_direction

log = logging.getLogger(__name__)

BRAKE_ACC_Y = -20.0
SPEED_DIFF_TH = 30.0


class EEBL:
    """Warns when a vehicle ahead in the same direction brakes hard or is much slower/faster."""

    def __init__(self):
        self._en = []
        self._gps = []
        self._vehicles = {}

    def update_en_data(self, reading):
        self._en = list(reading)

    def update_gps_data(self, reading):
        self._gps = list(reading)

    def update_vehicles_data(self, vehicles):
        self._vehicles = vehicles

    def run_controller(self):
        """True if any vehicle ahead shows emergency braking.

        Vehicles with fewer than two reports have no known heading and are skipped.
        """
        now, before = latest(self._gps, 0), latest(self._gps, 1)
        speed = latest(self._en, 0).speed

        for mac, times in sorted(self._vehicles.items()):
            stamps = sorted(times)
            if len(stamps) < 2:
                continue
            last = times[stamps[-1]]
            previous = times[stamps[-2]]
            ahead = is_ahead_and_same_direction(
                before.latitude,
                before.longitude,
                now.latitude,
                now.longitude,
                previous.latitude,
                previous.longitude,
                last.latitude,
                last.longitude,
            )
            log.debug("ahead check %s: %s", mac, ahead)
            if ahead and (last.acc_y < BRAKE_ACC_Y or abs(speed - last.velocity) > SPEED_DIFF_TH):
                log.debug("eebl check %s", mac)
                return True
        return False