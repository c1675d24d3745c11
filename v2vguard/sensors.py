"""Sensor wrappers that keep a short, thread-safe history of recent readings."""

import logging
import threading

from .config import (
    EN_INIT,
    EN_V_LENGTH,
    GPS_INIT,
    GPS_V_LENGTH,
    IMU_INIT,
    IMU_V_LENGTH,
    US_INIT,
    US_V_LENGTH,
    ENData,
    USData,
)

log = logging.getLogger(__name__)


class _ReadingBuffer:
    """History of the latest readings, oldest first, guarded by a lock."""

    def __init__(self, name, initial, length):
        self.name = name
        self._length = length
        self._readings = [initial] * length
        self._lock = threading.Lock()

    def _push(self, reading):
        with self._lock:
            self._readings.append(reading)
            del self._readings[: -self._length]

    def _snapshot(self):
        with self._lock:
            return list(self._readings)


class EN(_ReadingBuffer):
    """Wheel encoder speed history.

    `encoder` must offer get_speed() returning metres per second.
    """

    def __init__(self, encoder):
        super().__init__("EN", EN_INIT, EN_V_LENGTH)
        self._encoder = encoder

    def update_readings(self):
        """Sample the encoder speed and store it."""
        speed = self._encoder.get_speed()
        log.debug("EN speed: %s m/s", speed)
        self._push(ENData(speed))

    def copy_latest_data(self):
        """Return a copy of the stored speeds, oldest first."""
        return self._snapshot()


class GPS(_ReadingBuffer):
    """GPS fix history.

    `interface` must offer get_gps_data() returning a GPSData.
    """

    def __init__(self, name, interface):
        super().__init__(name, GPS_INIT, GPS_V_LENGTH)
        self._interface = interface

    def update_readings(self):
        """Fetch a fix and store it if it carries a time and a non-zero position."""
        data = self._interface.get_gps_data()
        log.debug(
            "GPS latitude: %s, longitude: %s, time: %s",
            data.latitude,
            data.longitude,
            data.time,
        )
        if not data.time:
            return
        if data.latitude != 0.0 or data.longitude != 0.0:
            self._push(data)
        else:
            log.info("read not successful")

    def copy_latest_data(self):
        """Return a copy of the stored fixes, oldest first."""
        return self._snapshot()


class IMU(_ReadingBuffer):
    """Accelerometer history.

    `device` must offer read_accel_data() returning an IMUData.
    """

    def __init__(self, name, device):
        super().__init__(name, IMU_INIT, IMU_V_LENGTH)
        self._device = device

    def update_readings(self):
        """Sample the accelerometer and store the result."""
        data = self._device.read_accel_data()
        log.debug("IMU acc: %s, %s, %s", data.acc_x, data.acc_y, data.acc_z)
        self._push(data)

    def copy_latest_data(self):
        """Return a copy of the stored accelerations, oldest first."""
        return self._snapshot()


class US(_ReadingBuffer):
    """Ultrasonic distance history.

    The oldest reading is dropped before a new one is stored, so once updated
    the history holds US_V_LENGTH + 1 readings. `sensor` must offer
    get_ultrasonic_distance() returning centimetres.
    """

    def __init__(self, name, sensor):
        super().__init__(name, US_INIT, US_V_LENGTH)
        self._sensor = sensor

    def update_readings(self):
        """Measure the distance and store it."""
        reading = USData(float(self._sensor.get_ultrasonic_distance()))
        log.debug("%s distance: %s", self.name, reading.distance)
        with self._lock:
            if len(self._readings) > self._length:
                del self._readings[0]
            self._readings.append(reading)

    def copy_latest_data(self):
        """Return a copy of the stored distances, oldest first."""
        return self._snapshot()

    def set_readings(self, readings):
        """Replace the stored history with the given readings."""
        with self._lock:
            self._readings = list(readings)