"""Sensor record types, buffer sizes, initial readings and pin assignments."""

from dataclasses import dataclass

GPS_V_LENGTH = 5
US_V_LENGTH = 5
EN_V_LENGTH = 5
IMU_V_LENGTH = 5

SENSOR_NAMES = ("EN", "GPS", "IMU", "US_FC", "US_FL", "US_FR", "US_RC", "US_RL", "US_RR")

# (trigger pin, echo pin) for each ultrasonic sensor
ULTRASONIC_PINS = {
    "US_FC": (0, 1),
    "US_FL": (6, 12),
    "US_FR": (19, 16),
    "US_RC": (26, 20),
    "US_RL": (22, 23),
    "US_RR": (17, 18),
}


@dataclass(frozen=True)
class GPSData:
    """One GPS fix."""

    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0
    time: str = ""


@dataclass(frozen=True)
class IMUData:
    """One accelerometer sample."""

    acc_x: float = 0.0
    acc_y: float = 0.0
    acc_z: float = 0.0


@dataclass(frozen=True)
class USData:
    """One ultrasonic distance sample."""

    distance: float = 0.0


@dataclass(frozen=True)
class ENData:
    """One wheel-encoder speed sample."""

    speed: float = 0.0


@dataclass(frozen=True)
class Vehicle:
    """State of a remote vehicle as reported over the radio link."""

    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0
    acc_x: float = 0.0
    acc_y: float = 0.0
    acc_z: float = 0.0
    velocity: float = 0.0


GPS_INIT = GPSData(0.0, 0.0, 0.0, "15:32:55")
US_INIT = USData(0.0)
EN_INIT = ENData(0.0)
IMU_INIT = IMUData(0.0, 0.0, 0.0)


def latest(readings, offset=0):
    """Return the reading `offset` places before the newest one."""
    if not 0 <= offset < len(readings):
        raise IndexError(f"offset {offset} out of range for {len(readings)} readings")
    return readings[len(readings) - 1 - offset]