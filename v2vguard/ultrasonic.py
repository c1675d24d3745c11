"""HC-SR04 style ultrasonic ranger driven through a GPIO controller object."""

import threading
import time

PI_INPUT = 0
PI_OUTPUT = 1
PI_OFF = 0
PI_ON = 1

_TICK_MASK = 0xFFFFFFFF
_TICKS_PER_CM = 58


class UltrasonicSensor:
    """Measures distance in centimetres from echo pulse widths.

    `gpio` must offer set_mode(pin, mode), write(pin, level) and
    set_alert_func(pin, callback) where callback(gpio, level, tick) receives
    microsecond ticks.
    """

    def __init__(self, trig_pin, echo_pin, gpio, sleep=time.sleep):
        self.trig_pin = trig_pin
        self.echo_pin = echo_pin
        self._gpio = gpio
        self._sleep = sleep
        self._lock = threading.Lock()
        self._start_tick = 0
        self._last_range = 0

        gpio.set_mode(trig_pin, PI_OUTPUT)
        gpio.set_mode(echo_pin, PI_INPUT)
        gpio.set_alert_func(echo_pin, self.echo_callback)

    def echo_callback(self, gpio, level, tick):
        """Handle an echo edge: a rising edge starts timing, a falling edge ends it."""
        with self._lock:
            if level == PI_ON:
                self._start_tick = tick
            elif level == PI_OFF:
                diff = (tick - self._start_tick) & _TICK_MASK
                self._last_range = diff // _TICKS_PER_CM

    def get_ultrasonic_distance(self):
        """Fire a trigger pulse, wait for the echo and return the distance in cm."""
        self._gpio.write(self.trig_pin, PI_OFF)
        self._sleep(5e-6)
        self._gpio.write(self.trig_pin, PI_ON)
        self._sleep(10e-6)
        self._gpio.write(self.trig_pin, PI_OFF)
        self._sleep(0.005)
        return self.distance()

    def distance(self):
        """Most recently measured distance in cm."""
        with self._lock:
            return self._last_range