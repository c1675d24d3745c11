"""MPU-6050 accelerometer over I2C."""

import fcntl
import io
import os

from .config import IMUData

I2C_SLAVE = 0x0703

GRAVITY_MS2 = 9.80665

ACCEL_RANGE_2G = 0x00
ACCEL_RANGE_4G = 0x08
ACCEL_RANGE_8G = 0x10
ACCEL_RANGE_16G = 0x18

PWR_MGMT_1 = 0x6B
ACCEL_XOUT0 = 0x3B
ACCEL_YOUT0 = 0x3D
ACCEL_ZOUT0 = 0x3F
ACCEL_CONFIG = 0x1C

_RANGE_G = {
    ACCEL_RANGE_2G: 2,
    ACCEL_RANGE_4G: 4,
    ACCEL_RANGE_8G: 8,
    ACCEL_RANGE_16G: 16,
}

_SCALE_MODIFIER = {
    ACCEL_RANGE_2G: 16384.0,
    ACCEL_RANGE_4G: 8192.0,
    ACCEL_RANGE_8G: 4096.0,
    ACCEL_RANGE_16G: 2048.0,
}


def open_i2c_bus(device="/dev/i2c-1", address=0x68):
    """Open an I2C bus device and select the slave address."""
    fd = os.open(device, os.O_RDWR)
    try:
        fcntl.ioctl(fd, I2C_SLAVE, address)
    except OSError:
        os.close(fd)
        raise
    return io.FileIO(fd, "r+b", closefd=True)


class MPU6050:
    """Accelerometer on a bus object offering write(bytes), read(n) and close()."""

    def __init__(self, bus):
        self._bus = bus
        self._write_register(PWR_MGMT_1, 0x00)

    def _write_register(self, reg, value):
        if self._bus.write(bytes([reg, value])) != 2:
            raise OSError("Failed to write to the I2C bus")

    def _read_word(self, reg):
        if self._bus.write(bytes([reg])) != 1:
            raise OSError("Failed to write to the I2C bus")
        data = self._bus.read(2)
        if data is None or len(data) != 2:
            raise OSError("Failed to read from the I2C bus")
        return int.from_bytes(data, "big", signed=True)

    def read_accel_range(self, raw=False):
        """Configured range: the raw register word, or the range in g (-1 if unknown)."""
        raw_data = self._read_word(ACCEL_CONFIG)
        if raw:
            return raw_data
        return _RANGE_G.get(raw_data, -1)

    def read_accel_data(self, g=False):
        """Acceleration on three axes, in g if `g`, otherwise in m/s^2."""
        x = self._read_word(ACCEL_XOUT0)
        y = self._read_word(ACCEL_YOUT0)
        z = self._read_word(ACCEL_ZOUT0)
        modifier = _SCALE_MODIFIER.get(self.read_accel_range(True), _SCALE_MODIFIER[ACCEL_RANGE_2G])
        factor = 1.0 if g else GRAVITY_MS2
        return IMUData(x / modifier * factor, y / modifier * factor, z / modifier * factor)

    def close(self):
        self._bus.close()