import pytest

from v2vguard import imu_interface as imu
from v2vguard.imu_interface import MPU6050


class FakeBus:
    def __init__(self, words=None, short_read=False):
        self.words = words or {}
        self.pointer = None
        self.register_writes = []
        self.short_read = short_read
        self.closed = False

    def write(self, data):
        if len(data) == 1:
            self.pointer = data[0]
        else:
            self.register_writes.append(tuple(data))
        return len(data)

    def read(self, size):
        word = self.words.get(self.pointer, 0)
        data = word.to_bytes(2, "big", signed=True)
        return data[:1] if self.short_read else data

    def close(self):
        self.closed = True


def test_init_wakes_device():
    bus = FakeBus()
    MPU6050(bus)
    assert bus.register_writes == [(imu.PWR_MGMT_1, 0x00)]


def test_read_accel_data_in_g():
    bus = FakeBus({imu.ACCEL_XOUT0: 16384, imu.ACCEL_YOUT0: -8192, imu.ACCEL_ZOUT0: 0})
    data = MPU6050(bus).read_accel_data(g=True)
    assert data.acc_x == pytest.approx(1.0)
    assert data.acc_y == pytest.approx(-0.5)
    assert data.acc_z == 0.0


def test_read_accel_data_in_ms2():
    bus = FakeBus({imu.ACCEL_XOUT0: 16384})
    data = MPU6050(bus).read_accel_data()
    assert data.acc_x == pytest.approx(imu.GRAVITY_MS2)


def test_range_scales_readings():
    bus = FakeBus({imu.ACCEL_XOUT0: 2048, imu.ACCEL_CONFIG: imu.ACCEL_RANGE_16G})
    sensor = MPU6050(bus)
    assert sensor.read_accel_range() == 16
    assert sensor.read_accel_data(g=True).acc_x == pytest.approx(1.0)


@pytest.mark.parametrize(
    "word, expected",
    [(imu.ACCEL_RANGE_2G, 2), (imu.ACCEL_RANGE_4G, 4), (imu.ACCEL_RANGE_8G, 8), (0x0101, -1)],
)
def test_read_accel_range(word, expected):
    sensor = MPU6050(FakeBus({imu.ACCEL_CONFIG: word}))
    assert sensor.read_accel_range() == expected
    assert sensor.read_accel_range(raw=True) == word


def test_short_read_raises():
    sensor = MPU6050(FakeBus(short_read=True))
    with pytest.raises(OSError):
        sensor.read_accel_data()


def test_close_closes_bus():
    bus = FakeBus()
    MPU6050(bus).close()
    assert bus.closed is True