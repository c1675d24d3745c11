import math

import pytest

from v2vguard.encoder import ENC_A, ENC_B, PULSES_PER_REVOLUTION, WHEEL_DIAMETER, Encoder


class FakeClock:
    def __init__(self, *times):
        self.times = list(times)

    def __call__(self):
        return self.times.pop(0)


def test_channel_a_direction():
    enc = Encoder(clock=FakeClock(0.0))
    enc.on_edge(ENC_A, 1, 1)
    enc.on_edge(ENC_A, 1, 1)
    enc.on_edge(ENC_A, 0, 1)
    assert enc.count == 1


def test_channel_b_direction():
    enc = Encoder(clock=FakeClock(0.0))
    enc.on_edge(ENC_B, 1, 0)
    enc.on_edge(ENC_B, 0, 0)
    enc.on_edge(ENC_B, 0, 0)
    assert enc.count == -1


def test_other_pin_ignored():
    enc = Encoder(clock=FakeClock(0.0))
    enc.on_edge(5, 1, 1)
    assert enc.count == 0


def test_one_revolution_per_second():
    enc = Encoder(clock=FakeClock(0.0, 1.0))
    for _ in range(int(PULSES_PER_REVOLUTION)):
        enc.on_edge(ENC_A, 1, 1)
    assert enc.get_speed() == pytest.approx(math.pi * WHEEL_DIAMETER)


def test_speed_counts_only_new_edges():
    enc = Encoder(clock=FakeClock(0.0, 1.0, 3.0))
    for _ in range(22):
        enc.on_edge(ENC_A, 1, 1)
    first = enc.get_speed()
    second = enc.get_speed()
    assert first == pytest.approx(2 * math.pi * WHEEL_DIAMETER)
    assert second == 0.0


def test_reverse_gives_negative_speed():
    enc = Encoder(clock=FakeClock(0.0, 2.0))
    for _ in range(11):
        enc.on_edge(ENC_B, 1, 1)
    assert enc.get_speed() < 0


def test_zero_elapsed_with_motion_is_infinite():
    enc = Encoder(clock=FakeClock(1.0, 1.0))
    enc.on_edge(ENC_A, 0, 0)
    assert enc.get_speed() == math.inf