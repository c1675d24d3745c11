from v2vguard.bsw import BOTH
from v2vguard.comm_manager import CommManager
from v2vguard.config import EN_INIT, GPSData, ULTRASONIC_PINS, USData, Vehicle
from v2vguard.feature_manager import FeatureManager
from v2vguard.sensor_manager import SensorManager

OWN_TRACK = [GPSData(30.0, 31.0, 10.0, "12:00:00"), GPSData(30.0001, 31.0, 10.0, "12:00:01")]


class FakeSensors:
    def __init__(self, gps, en=None, us=None):
        self._gps = gps
        self._en = en or [EN_INIT] * 5
        self._us = us or {name: [USData(100.0)] * 5 for name in ULTRASONIC_PINS}

    def get_gps_data(self):
        return list(self._gps)

    def get_en_data(self):
        return list(self._en)

    def get_us_data(self, name):
        return list(self._us[name])


class FakeComm:
    def __init__(self, vehicles):
        self._vehicles = vehicles

    def get_vehicles_data(self):
        return self._vehicles


class CountingStop:
    def __init__(self, runs):
        self.runs = runs
        self.calls = 0

    def is_set(self):
        self.calls += 1
        return self.calls > self.runs


def track(p1, p2, velocity=0.0):
    return {
        "12:00:00": Vehicle(latitude=p1[0], longitude=p1[1], altitude=10.0, velocity=velocity),
        "12:00:01": Vehicle(latitude=p2[0], longitude=p2[1], altitude=10.0, velocity=velocity),
    }


def test_default_sensor_data_gives_both_sides_blind_spot(tmp_path, capsys):
    sensors = SensorManager(None, None, None, {name: None for name in ULTRASONIC_PINS})
    comm = CommManager(sensors, None, tmp_path)
    results = FeatureManager(sensors, comm).run_once()
    assert results["bsw"] == BOTH
    assert results["dnpw"] is False
    assert results["fcw"] is False
    assert results["eebl"] is False
    assert results["ima"] is None
    assert "there is car in left and right" in capsys.readouterr().out


def test_dnpw_warns_with_slow_leader_and_fast_oncoming(capsys):
    vehicles = {
        "02:00:00:00:00:01": track((30.0002, 31.0), (30.0003, 31.0), velocity=10.0),
        "02:00:00:00:00:02": track((29.9999, 31.0), (29.9998, 31.0), velocity=70.0),
    }
    manager = FeatureManager(FakeSensors(OWN_TRACK), FakeComm(vehicles))
    assert manager.run_dnpw() is True
    out = capsys.readouterr().out
    assert "DNBW SYSTEM IS ON" in out
    assert "Don't Pass Warning!" in out


def test_no_bsw_message_when_rear_is_clear(capsys):
    manager = FeatureManager(FakeSensors(OWN_TRACK), FakeComm({}))
    assert manager.run_bsw() == 0
    assert capsys.readouterr().out == ""


def test_ima_reports_crossing_vehicle():
    vehicles = {"02:00:00:00:00:01": track((30.0002, 30.9998), (30.0002, 30.9999))}
    manager = FeatureManager(FakeSensors(OWN_TRACK), FakeComm(vehicles))
    car = manager.run_ima()
    assert car.direction == "Right"


def test_eebl_warns_on_hard_braking_vehicle_ahead(capsys):
    ahead = track((30.0002, 31.0), (30.0003, 31.0))
    ahead["12:00:01"] = Vehicle(latitude=30.0003, longitude=31.0, altitude=10.0, acc_y=-25.0)
    manager = FeatureManager(FakeSensors(OWN_TRACK), FakeComm({"02:00:00:00:00:01": ahead}))
    assert manager.run_eebl() is True
    assert "Warning: EEBL" in capsys.readouterr().out


def test_run_features_stops_when_asked(capsys):
    manager = FeatureManager(FakeSensors(OWN_TRACK), FakeComm({}))
    manager.run_features(CountingStop(2))
    lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("Run_features Done!")]
    assert lines == ["Run_features Done! -> 0", "Run_features Done! -> 1"]