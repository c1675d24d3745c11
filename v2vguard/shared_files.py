"""Locked file exchange between processes, and clock-time arithmetic."""

import fcntl
import logging
import re
from contextlib import contextmanager

log = logging.getLogger(__name__)

_TIME_RE = re.compile(r"\s*(\d{1,2}):(\d{1,2}):(\d{1,2})")


@contextmanager
def file_lock(fd):
    """Hold an exclusive advisory lock on the open file descriptor for the block."""
    fcntl.flock(fd, fcntl.LOCK_EX)
    try:
        yield fd
    finally:
        fcntl.flock(fd, fcntl.LOCK_UN)


def read_data_from_file(filename):
    """Return the whole file content and empty the file; empty bytes if it cannot be opened."""
    try:
        handle = open(filename, "r+b")
    except OSError:
        log.warning("file cannot be opened: %s", filename)
        return b""
    with handle, file_lock(handle.fileno()):
        data = handle.read()
        handle.seek(0)
        handle.truncate()
        handle.flush()
    return data


def append_data_to_file(filename, data):
    """Append bytes to the file under an exclusive lock, creating it if needed."""
    with open(filename, "ab") as handle, file_lock(handle.fileno()):
        handle.write(bytes(data))
        handle.flush()


def _seconds_of_day(text):
    match = _TIME_RE.match(text)
    if not match:
        return 0
    hours, minutes, seconds = (int(part) for part in match.groups())
    if hours > 23 or minutes > 59 or seconds > 60:
        return 0
    return hours * 3600 + minutes * 60 + seconds


def time_difference_in_seconds(time1, time2):
    """Seconds from time1 to time2, both "HH:MM:SS" on the same day.

    A string that does not parse counts as midnight.
    """
    return _seconds_of_day(time2) - _seconds_of_day(time1)