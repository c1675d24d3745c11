"""Intersection movement assist: vehicles crossing our path from either side."""

import logging
from dataclasses import dataclass

from .config import latest
from .geo import calculate_heading, calculate_heading_difference, determine_relative_position, distance

log = logging.getLogger(__name__)

ALT_THRESH = 5.0
RANGE_M = 100.0


@dataclass(frozen=True)
class IMACar:
    """A crossing vehicle: the side it threatens and its distance in metres."""

    direction: str = "NONE"
    distance: float = 0.0


def is_ima(lat_a1, lon_a1, lat_a2, lon_a2, lat_b1, lon_b1, lat_b2, lon_b2):
    """Classify vehicle B against own vehicle A; distance 0 means no threat."""
    heading_a = calculate_heading(lat_a1, lon_a1, lat_a2, lon_a2)
    heading_b = calculate_heading(lat_b1, lon_b1, lat_b2, lon_b2)
    difference = calculate_heading_difference(heading_a, heading_b)
    gap = distance(lat_b2, lon_b2, lat_a2, lon_a2)
    on_right = determine_relative_position(lat_a1, lon_a1, lat_a2, lon_a2, lat_b1, lon_b1)

    if gap < RANGE_M:
        if 45 < difference < 135 and not on_right:
            return IMACar("Right", gap)
        if 225 < difference < 315 and on_right:
            return IMACar("Left", gap)
    return IMACar()


class IMA:
    """Finds crossing vehicles at the same altitude and reports the nearest."""

    def __init__(self):
        self._gps = []
        self._vehicles = {}
        self._ima = {}

    def update_gps_data(self, reading):
        self._gps = list(reading)

    def update_vehicles_data(self, vehicles):
        self._vehicles = vehicles

    def run_controller1(self):
        """True if any crossing vehicle was found; the findings are kept for run_controller2.

        Vehicles with fewer than two reports have no known heading and are skipped.
        """
        now, before = latest(self._gps, 0), latest(self._gps, 1)
        found = {}
        for _, times in sorted(self._vehicles.items()):
            stamps = sorted(times)
            if len(stamps) < 2:
                continue
            last = times[stamps[-1]]
            previous = times[stamps[-2]]
            if abs(now.altitude - last.altitude) < ALT_THRESH:
                car = is_ima(
                    before.latitude,
                    before.longitude,
                    now.latitude,
                    now.longitude,
                    previous.latitude,
                    previous.longitude,
                    last.latitude,
                    last.longitude,
                )
                if car.distance != 0:
                    found[car.distance] = car.direction
                    nearest = min(found)
                    log.debug("nearest crossing: %s %s", nearest, found[nearest])
        if not found:
            return False
        self._ima = found
        return True

    def run_controller2(self):
        """The nearest crossing vehicle from the last successful detection."""
        if not self._ima:
            raise LookupError("no crossing vehicle has been detected")
        nearest = min(self._ima)
        return IMACar(self._ima[nearest], nearest)