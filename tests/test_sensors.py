import threading

import pytest

from v2vguard.config import (
    EN_INIT,
    EN_V_LENGTH,
    GPS_INIT,
    GPS_V_LENGTH,
    IMU_INIT,
    IMU_V_LENGTH,
    US_INIT,
    US_V_LENGTH,
    ENData,
    GPSData,
    IMUData,
    USData,
)
from v2vguard.sensors import EN, GPS, IMU, US


class FakeEncoder:
    def __init__(self, speeds):
        self._speeds = iter(speeds)

    def get_speed(self):
        return next(self._speeds)


class FakeGPS:
    def __init__(self, fixes):
        self._fixes = iter(fixes)

    def get_gps_data(self):
        return next(self._fixes)


class FakeIMU:
    def __init__(self, samples):
        self._samples = iter(samples)

    def read_accel_data(self):
        return next(self._samples)


class FakeRanger:
    def __init__(self, distances):
        self._distances = iter(distances)

    def get_ultrasonic_distance(self):
        return next(self._distances)


def test_en_starts_with_initial_readings():
    en = EN(FakeEncoder([]))
    assert en.copy_latest_data() == [EN_INIT] * EN_V_LENGTH


def test_en_update_appends_latest_speed():
    en = EN(FakeEncoder([1.5]))
    en.update_readings()
    data = en.copy_latest_data()
    assert len(data) == EN_V_LENGTH
    assert data[-1] == ENData(1.5)


def test_en_keeps_only_newest_readings():
    speeds = [float(n) for n in range(EN_V_LENGTH + 3)]
    en = EN(FakeEncoder(speeds))
    for _ in speeds:
        en.update_readings()
    assert en.copy_latest_data() == [ENData(s) for s in speeds[-EN_V_LENGTH:]]


def test_copy_is_independent_of_internal_state():
    en = EN(FakeEncoder([2.0]))
    copy = en.copy_latest_data()
    copy.clear()
    en.update_readings()
    assert len(en.copy_latest_data()) == EN_V_LENGTH


def test_gps_stores_valid_fix():
    fix = GPSData(30.1, 31.2, 20.0, "12:00:01")
    gps = GPS("GPS", FakeGPS([fix]))
    gps.update_readings()
    data = gps.copy_latest_data()
    assert data[-1] == fix
    assert data[:-1] == [GPS_INIT] * (GPS_V_LENGTH - 1)
    assert gps.name == "GPS"


def test_gps_ignores_fix_without_time():
    gps = GPS("GPS", FakeGPS([GPSData(30.1, 31.2, 20.0, "")]))
    gps.update_readings()
    assert gps.copy_latest_data() == [GPS_INIT] * GPS_V_LENGTH


def test_gps_ignores_zero_position():
    gps = GPS("GPS", FakeGPS([GPSData(0.0, 0.0, 20.0, "12:00:01")]))
    gps.update_readings()
    assert gps.copy_latest_data() == [GPS_INIT] * GPS_V_LENGTH


def test_gps_accepts_zero_latitude_with_nonzero_longitude():
    fix = GPSData(0.0, 31.2, 1.0, "12:00:02")
    gps = GPS("GPS", FakeGPS([fix]))
    gps.update_readings()
    assert gps.copy_latest_data()[-1] == fix


def test_imu_update_and_trim():
    samples = [IMUData(float(n), 0.0, 9.8) for n in range(IMU_V_LENGTH + 2)]
    imu = IMU("IMU", FakeIMU(samples))
    assert imu.copy_latest_data() == [IMU_INIT] * IMU_V_LENGTH
    for _ in samples:
        imu.update_readings()
    assert imu.copy_latest_data() == samples[-IMU_V_LENGTH:]


def test_us_grows_by_one_then_holds_steady():
    distances = [10, 11, 12, 13, 14, 15, 16, 17]
    us = US("US_FC", FakeRanger(distances))
    assert us.copy_latest_data() == [US_INIT] * US_V_LENGTH
    us.update_readings()
    assert len(us.copy_latest_data()) == US_V_LENGTH + 1
    for _ in distances[1:]:
        us.update_readings()
    data = us.copy_latest_data()
    assert len(data) == US_V_LENGTH + 1
    assert data == [USData(float(d)) for d in distances[-(US_V_LENGTH + 1):]]


def test_us_set_readings_replaces_history():
    us = US("US_RR", FakeRanger([]))
    readings = [USData(20), USData(10), USData(15)]
    us.set_readings(readings)
    assert us.copy_latest_data() == readings
    assert us.name == "US_RR"


def test_us_propagates_sensor_errors():
    us = US("US_FC", FakeRanger([]))
    with pytest.raises(StopIteration):
        us.update_readings()


def test_concurrent_updates_keep_length():
    en = EN(FakeEncoder([1.0] * 400))

    def worker():
        for _ in range(100):
            en.update_readings()

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert en.copy_latest_data() == [ENData(1.0)] * EN_V_LENGTH