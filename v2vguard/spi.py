"""SPI link that shuttles the exchange files to and from the radio and motor boards."""

import array
import fcntl
import logging
import os
import struct
from pathlib import Path

from .shared_files import append_data_to_file, read_data_from_file

log = logging.getLogger(__name__)

DEFAULT_BASE_DIR = "/V2V_APP"
TO_ESP_FILE = "to_esp32_data.txt"
FROM_ESP_FILE = "from_esp32_data.txt"
TO_STM_FILE = "to_stm32_data.txt"

ESP_CS_PIN = 7
STM_CS_PIN = 8

SPI_MODE_0 = 0

_IOC_WRITE = 1


def _iow(number, size):
    return (_IOC_WRITE << 30) | (size << 16) | (ord("k") << 8) | number


SPI_IOC_WR_MODE = _iow(1, 1)
SPI_IOC_WR_BITS_PER_WORD = _iow(3, 1)
SPI_IOC_WR_MAX_SPEED_HZ = _iow(4, 4)

# struct spi_ioc_transfer: tx_buf, rx_buf, len, speed_hz, delay_usecs,
# bits_per_word, cs_change, tx_nbits, rx_nbits, word_delay_usecs, pad
_TRANSFER_STRUCT = struct.Struct("=QQIIHBBBBBB")
SPI_IOC_MESSAGE_1 = _iow(0, _TRANSFER_STRUCT.size)


class _SpiDevice:
    """Full-duplex transfers on an open spidev file descriptor."""

    def __init__(self, fd, speed, bits_per_word):
        self._fd = fd
        self._speed = speed
        self._bits = bits_per_word

    def __call__(self, data, cs_pin):
        # Chip select is asserted by the spidev driver for the duration of the message.
        if not data:
            return b""
        tx = array.array("B", data)
        rx = array.array("B", bytes(len(data)))
        message = _TRANSFER_STRUCT.pack(
            tx.buffer_info()[0],
            rx.buffer_info()[0],
            len(data),
            self._speed,
            0,
            self._bits,
            0,
            0,
            0,
            0,
            0,
        )
        fcntl.ioctl(self._fd, SPI_IOC_MESSAGE_1, message)
        return rx.tobytes()

    def close(self):
        os.close(self._fd)


class SPI:
    """Moves pending outbound data over SPI and stores what the radio answers.

    `transfer(data, cs_pin)` sends bytes to the board selected by `cs_pin`
    and returns the bytes clocked back, of the same length.
    """

    def __init__(self, transfer, base_dir=DEFAULT_BASE_DIR):
        self._transfer = transfer
        self.base_dir = Path(base_dir)

    @classmethod
    def open_device(cls, device, mode=SPI_MODE_0, speed=50000, bits_per_word=8, base_dir=DEFAULT_BASE_DIR):
        """Open and configure a spidev device node."""
        fd = os.open(device, os.O_RDWR)
        try:
            fcntl.ioctl(fd, SPI_IOC_WR_MODE, struct.pack("=B", mode))
            fcntl.ioctl(fd, SPI_IOC_WR_BITS_PER_WORD, struct.pack("=B", bits_per_word))
            fcntl.ioctl(fd, SPI_IOC_WR_MAX_SPEED_HZ, struct.pack("=I", speed))
        except OSError:
            os.close(fd)
            raise
        return cls(_SpiDevice(fd, speed, bits_per_word), base_dir)

    def _exchange(self, data, cs_pin):
        try:
            received = bytes(self._transfer(data, cs_pin))
        except OSError as exc:
            log.error("SPI transfer failed: %s", exc)
            return bytes(len(data))
        log.debug("SPI transfer succeeded: %r", received)
        return received

    def spi_loop(self):
        """Send queued radio and motor data once; append the radio's reply."""
        send_esp = read_data_from_file(self.base_dir / TO_ESP_FILE)
        send_stm = read_data_from_file(self.base_dir / TO_STM_FILE)

        receive_esp = self._exchange(send_esp, ESP_CS_PIN)
        append_data_to_file(self.base_dir / FROM_ESP_FILE, receive_esp)

        self._exchange(send_stm, STM_CS_PIN)

    def close(self):
        closer = getattr(self._transfer, "close", None)
        if closer is not None:
            closer()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()