"""Owns every on-board sensor and hands out copies of their latest readings."""

import logging

from .config import ULTRASONIC_PINS, USData
from .sensors import EN, GPS, IMU, US

log = logging.getLogger(__name__)

_PRESET_READINGS = {
    "US_RR": [USData(20), USData(10), USData(10), USData(20), USData(15)],
    "US_RL": [USData(20), USData(10), USData(10), USData(20), USData(15.6)],
}


class SensorManager:
    """Groups the encoder, GPS, IMU and the six ultrasonic sensors.

    `ultrasonic` maps each ultrasonic sensor name (US_FC, US_FL, US_FR,
    US_RC, US_RL, US_RR) to a ranger offering get_ultrasonic_distance().
    """

    def __init__(self, encoder, gps, imu, ultrasonic):
        self.en = EN(encoder)
        self.gps = GPS("GPS", gps)
        self.imu = IMU("IMU", imu)
        self.us = {name: US(name, ultrasonic[name]) for name in ULTRASONIC_PINS}
        for name, readings in _PRESET_READINGS.items():
            self.us[name].set_readings(readings)

    def update_once(self):
        """Sample the encoder, the IMU and every ultrasonic sensor once."""
        self.en.update_readings()
        self.imu.update_readings()
        for sensor in self.us.values():
            sensor.update_readings()

    def update_sensors_data(self, stop=None):
        """Keep sampling until `stop` (a threading.Event) is set; forever if None."""
        while stop is None or not stop.is_set():
            self.update_once()

    def get_en_data(self):
        return self.en.copy_latest_data()

    def get_gps_data(self):
        return self.gps.copy_latest_data()

    def get_imu_data(self):
        return self.imu.copy_latest_data()

    def get_us_data(self, name):
        """Readings of the named ultrasonic sensor; KeyError for an unknown name."""
        return self.us[name].copy_latest_data()