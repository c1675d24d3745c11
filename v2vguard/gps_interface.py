"""NMEA GPS receiver on a serial line: GGA sentence parsing and fix reading."""

import re

import serial

from .config import GPSData

_NUMBER_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _leading_float(text):
    """Parse the longest numeric prefix of `text`, like a C library string-to-double."""
    match = _NUMBER_RE.match(text)
    if not match:
        raise ValueError(f"no number at start of {text!r}")
    return float(match.group(1))


def _fields(line):
    parts = line.split(",")
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def parse_gps(line):
    """Return a GPSData from a $GPGGA sentence, or None if the line is not a usable one.

    Raises ValueError when a GGA sentence carries malformed coordinates or altitude.
    """
    if not line.startswith("$GPGGA"):
        return None
    tokens = _fields(line)
    if len(tokens) <= 9:
        return None

    stamp = tokens[1]
    time = f"{stamp[0:2]}:{stamp[2:4]}:{stamp[4:6]}"

    latitude = _leading_float(tokens[2][:2]) + _leading_float(tokens[2][2:]) / 60.0
    if tokens[3] == "S":
        latitude = -latitude

    longitude = _leading_float(tokens[4][:3]) + _leading_float(tokens[4][3:]) / 60.0
    if tokens[5] == "W":
        longitude = -longitude

    altitude = _leading_float(tokens[9])
    return GPSData(latitude, longitude, altitude, time)


class GPSInterface:
    """Reads fixes from a serial port object that offers read() and in_waiting."""

    def __init__(self, port):
        self._port = port

    @classmethod
    def open(cls, device, baudrate):
        """Open a raw 8N1 serial port without flow control."""
        port = serial.Serial(
            device,
            baudrate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            xonxoff=False,
            rtscts=False,
            timeout=None,
        )
        return cls(port)

    def _read_chunk(self):
        waiting = getattr(self._port, "in_waiting", 0)
        return self._port.read(waiting or 1)

    def get_gps_data(self):
        """Block until a GGA sentence arrives and return its fix."""
        buffer = ""
        while True:
            chunk = self._read_chunk()
            if not chunk:
                raise ConnectionError("Serial port closed unexpectedly.")
            buffer += chunk.decode("ascii", errors="replace")
            while "\n" in buffer:
                line, buffer = buffer.split("\n", 1)
                data = parse_gps(line)
                if data is not None:
                    return data

    def close(self):
        self._port.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()