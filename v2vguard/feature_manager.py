"""Runs every driver-assistance feature against the latest sensor and radio data."""

import logging

from .bsw import BOTH, BSW, LEFT, RIGHT
from .dnpw import DNPW
from .eebl import EEBL
from .fcw import FCW
from .ima import IMA

log = logging.getLogger(__name__)

_BSW_MESSAGES = {
    RIGHT: "there is car in right",
    LEFT: "there is car in left",
    BOTH: "there is car in left and right",
}


class FeatureManager:
    """Feeds the feature controllers and prints their warnings.

    `sensor_manager` must offer get_gps_data(), get_en_data() and
    get_us_data(name); `comm_manager` must offer get_vehicles_data().
    """

    def __init__(self, sensor_manager, comm_manager):
        self.sensor_manager = sensor_manager
        self.comm_manager = comm_manager
        self.bsw = BSW()
        self.dnpw = DNPW()
        self.eebl = EEBL()
        self.fcw = FCW()
        self.ima = IMA()
        self._runs = 0

    def run_once(self):
        """Run all features once; return each feature's result by name."""
        return {
            "bsw": self.run_bsw(),
            "dnpw": self.run_dnpw(),
            "fcw": self.run_fcw(),
            "eebl": self.run_eebl(),
            "ima": self.run_ima(),
        }

    def run_features(self, stop=None):
        """Keep running all features until `stop` (a threading.Event) is set; forever if None."""
        while stop is None or not stop.is_set():
            self.run_once()
            print(f"Run_features Done! -> {self._runs}")
            self._runs += 1

    def run_bsw(self):
        """Blind-spot check; returns the warning bits."""
        self.bsw.update_us_rl_data(self.sensor_manager.get_us_data("US_RL"))
        self.bsw.update_us_rr_data(self.sensor_manager.get_us_data("US_RR"))
        flag = self.bsw.run_controller()
        message = _BSW_MESSAGES.get(flag)
        if message:
            print(message)
        return flag

    def run_dnpw(self):
        """Do-not-pass check; True when the warning is raised."""
        self.dnpw.update_vehicles_data(self.comm_manager.get_vehicles_data())
        self.dnpw.update_gps_data(self.sensor_manager.get_gps_data())
        if not self.dnpw.run_status_front():
            return False
        print("DNBW SYSTEM IS ON")
        self.dnpw.update_gps_data(self.sensor_manager.get_gps_data())
        if self.dnpw.run_status_cross():
            print("Don't Pass Warning!")
            return True
        return False

    def run_eebl(self):
        """Emergency brake light check; True when the warning is raised."""
        self.eebl.update_gps_data(self.sensor_manager.get_gps_data())
        self.eebl.update_en_data(self.sensor_manager.get_en_data())
        self.eebl.update_vehicles_data(self.comm_manager.get_vehicles_data())
        if self.eebl.run_controller():
            print("Warning: EEBL")
            return True
        return False

    def run_fcw(self):
        """Forward collision check; True when the warning condition holds."""
        self.fcw.update_us_fc_data(self.sensor_manager.get_us_data("US_FC"))
        warning = self.fcw.run_controller()
        if warning:
            log.info("Forward Collision Warning")
        return warning

    def run_ima(self):
        """Intersection check; the nearest crossing vehicle, or None."""
        self.ima.update_gps_data(self.sensor_manager.get_gps_data())
        self.ima.update_vehicles_data(self.comm_manager.get_vehicles_data())
        if self.ima.run_controller1():
            return self.ima.run_controller2()
        return None