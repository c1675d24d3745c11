"""Exchange of vehicle frames with the radio board and speed commands with the motor board."""

import enum
import logging
import math
import re
import threading
from pathlib import Path

from .config import Vehicle, latest
from .shared_files import append_data_to_file, read_data_from_file, time_difference_in_seconds
from .spi import DEFAULT_BASE_DIR, FROM_ESP_FILE, TO_ESP_FILE, TO_STM_FILE

log = logging.getLogger(__name__)

MY_MAC = "02:00:00:00:00:01"
MAC_LENGTH = 17
IDLE_REFERENCE_TIME = "22:19:50"
IDLE_SECONDS = 10

FRAME_START = b"@@@"
FRAME_END = b"%%%"

_MARKER_RE = re.compile(rb"(?=(@@@|%%%))")
_NUMBER_RE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class TransferCheck(enum.IntEnum):
    TRANSFER_COMPLETE = 0
    TRANSFER_FAILED = 1


def safe_stod(text):
    """Parse the leading number of `text`; 0.0 when there is none or it overflows."""
    match = _NUMBER_RE.match(text)
    if not match:
        return 0.0
    literal = match.group(1)
    value = float(literal)
    if math.isinf(value) and "inf" not in literal.lower():
        return 0.0
    return value


def _format_number(value):
    return f"{value:g}"


def encode_frame(mac, gps, imu, en):
    """Build the wire frame announcing this vehicle's latest state."""
    fields = [
        mac,
        _format_number(gps.latitude),
        _format_number(gps.longitude),
        _format_number(gps.altitude),
        gps.time,
        _format_number(imu.acc_x),
        _format_number(imu.acc_y),
        _format_number(imu.acc_z),
        _format_number(en.speed),
    ]
    return FRAME_START + ",".join(fields).encode("latin-1") + FRAME_END


def _parse_record(record):
    parts = record.split(",", 8)
    parts += [""] * (9 - len(parts))
    mac, lat, lon, alt, time, acc_x, acc_y, acc_z, velocity = parts
    vehicle = Vehicle(
        latitude=safe_stod(lat),
        longitude=safe_stod(lon),
        altitude=safe_stod(alt),
        acc_x=safe_stod(acc_x),
        acc_y=safe_stod(acc_y),
        acc_z=safe_stod(acc_z),
        velocity=safe_stod(velocity),
    )
    return mac, time, vehicle


def parse_frames(data):
    """Extract (mac, time, Vehicle) tuples from a byte stream of frames.

    A frame's body starts after the last "@@@" seen and ends before "%%%".
    """
    data = bytes(data)
    frames = []
    start = 0
    for match in _MARKER_RE.finditer(data):
        end = match.start() + 2
        if match.group(1) == FRAME_START:
            start = end
        else:
            record = data[start + 1 : end - 2].decode("latin-1")
            frames.append(_parse_record(record))
    return frames


class CommManager:
    """Publishes own sensor state and collects states of nearby vehicles.

    `sensor_manager` must offer get_gps_data(), get_imu_data() and
    get_en_data(); `spi` must offer spi_loop().
    """

    mac = MY_MAC

    def __init__(self, sensor_manager, spi, base_dir=DEFAULT_BASE_DIR):
        self.sensor_manager = sensor_manager
        self.spi = spi
        self.base_dir = Path(base_dir)
        self._vehicles = {}
        self._lock = threading.Lock()

    def get_vehicles_data(self):
        """Copy of known vehicles: {mac: {time: Vehicle}}, both levels sorted by key."""
        with self._lock:
            return {
                mac: dict(sorted(times.items()))
                for mac, times in sorted(self._vehicles.items())
            }

    def send_frame_stm(self, velocity):
        """Queue a speed command for the motor board."""
        try:
            append_data_to_file(self.base_dir / TO_STM_FILE, str(velocity).encode("latin-1"))
        except OSError as exc:
            log.error("cannot queue motor command: %s", exc)
            return TransferCheck.TRANSFER_FAILED
        return TransferCheck.TRANSFER_COMPLETE

    def send_frame_esp_once(self):
        """Queue a frame with the latest own readings and run one SPI exchange."""
        gps = latest(self.sensor_manager.get_gps_data(), 0)
        imu = latest(self.sensor_manager.get_imu_data(), 0)
        en = latest(self.sensor_manager.get_en_data(), 0)
        append_data_to_file(self.base_dir / TO_ESP_FILE, encode_frame(self.mac, gps, imu, en))
        self.spi.spi_loop()

    def send_frame_esp(self, stop=None):
        """Keep sending until `stop` (a threading.Event) is set; forever if None."""
        while stop is None or not stop.is_set():
            self.send_frame_esp_once()

    def receive_frame_esp_once(self):
        """Read received frames, record new vehicle states and drop idle vehicles."""
        data = read_data_from_file(self.base_dir / FROM_ESP_FILE)
        frames = parse_frames(data)
        with self._lock:
            for mac, time, vehicle in frames:
                self._vehicles.setdefault(mac, {}).setdefault(time, vehicle)
        self.delete_idle_vehicles()

    def receive_frame_esp(self, stop=None):
        """Keep receiving until `stop` (a threading.Event) is set; forever if None."""
        while stop is None or not stop.is_set():
            self.receive_frame_esp_once()

    def delete_idle_vehicles(self):
        """Forget vehicles with a malformed MAC or no report for IDLE_SECONDS."""
        with self._lock:
            for mac, times in list(self._vehicles.items()):
                if len(mac) != MAC_LENGTH or not times:
                    del self._vehicles[mac]
                    continue
                last_time = max(times)
                if time_difference_in_seconds(last_time, IDLE_REFERENCE_TIME) >= IDLE_SECONDS:
                    del self._vehicles[mac]