"""Command that starts the on-board sensor sampling and collision-warning features."""

import argparse
import sys
import threading
from contextlib import ExitStack

from .comm_manager import CommManager
from .encoder import Encoder
from .feature_manager import FeatureManager
from .gps_interface import GPSInterface
from .imu_interface import MPU6050, open_i2c_bus
from .sensor_manager import SensorManager
from .spi import DEFAULT_BASE_DIR, SPI, SPI_MODE_0

SPI_SPEED_HZ = 50000
SPI_BITS_PER_WORD = 8


class _UnpolledRanger:
    """Ultrasonic sensor whose driver is not polled; always reports 0 cm."""

    def get_ultrasonic_distance(self):
        return 0


def format_vehicles_data(vehicles):
    """Human-readable listing of {mac: {time: Vehicle}}."""
    lines = []
    for mac, times in sorted(vehicles.items()):
        for time, vehicle in sorted(times.items()):
            lines.append(f"MAC Address: {mac}, Time: {time}")
            lines.append(f"  Latitude: {vehicle.latitude:g}")
            lines.append(f"  Longitude: {vehicle.longitude:g}")
            lines.append(f"  Acceleration X: {vehicle.acc_x:g}")
            lines.append(f"  Acceleration Y: {vehicle.acc_y:g}")
            lines.append(f"  Acceleration Z: {vehicle.acc_z:g}")
            lines.append(f"  Velocity: {vehicle.velocity:g}")
    return "\n".join(lines)


def print_all_vehicles_data(vehicles):
    text = format_vehicles_data(vehicles)
    if text:
        print(text)


def _parse_args(argv):
    parser = argparse.ArgumentParser(description="Vehicle-to-vehicle collision warnings.")
    parser.add_argument("--gps-device", default="/dev/ttyS0")
    parser.add_argument("--gps-baudrate", type=int, default=9600)
    parser.add_argument("--i2c-device", default="/dev/i2c-1")
    parser.add_argument("--imu-address", type=lambda text: int(text, 0), default=0x68)
    parser.add_argument("--spi-device", default="/dev/spidev0.0")
    parser.add_argument("--base-dir", default=DEFAULT_BASE_DIR)
    return parser.parse_args(argv)


def _build_sensor_manager(args, stack):
    gps = GPSInterface.open(args.gps_device, args.gps_baudrate)
    stack.callback(gps.close)
    bus = open_i2c_bus(args.i2c_device, args.imu_address)
    stack.callback(bus.close)
    imu = MPU6050(bus)
    ultrasonic = {name: _UnpolledRanger() for name in ("US_FC", "US_FL", "US_FR", "US_RC", "US_RL", "US_RR")}
    return SensorManager(Encoder(), gps, imu, ultrasonic)


def main(argv=None):
    args = _parse_args(argv)
    with ExitStack() as stack:
        try:
            sensor_manager = _build_sensor_manager(args, stack)
            comm_sensor_manager = _build_sensor_manager(args, stack)
            spi = SPI.open_device(args.spi_device, SPI_MODE_0, SPI_SPEED_HZ, SPI_BITS_PER_WORD, args.base_dir)
            stack.callback(spi.close)
        except OSError as exc:
            print(f"hardware setup failed: {exc}", file=sys.stderr)
            return 1

        comm_manager = CommManager(comm_sensor_manager, spi, args.base_dir)
        features = FeatureManager(sensor_manager, comm_manager)

        stop = threading.Event()
        threads = [
            threading.Thread(target=sensor_manager.update_sensors_data, args=(stop,), daemon=True),
            threading.Thread(target=features.run_features, args=(stop,), daemon=True),
        ]
        for thread in threads:
            thread.start()

        print("Press Enter to exit.")
        try:
            input()
        except EOFError:
            pass
        stop.set()
        for thread in threads:
            thread.join(timeout=1.0)
    return 0


if __name__ == "__main__":
    sys.exit(main())