"""IO methods, timestamp helpers and discovery of video capture devices."""

from __future__ import annotations

import enum
import errno
import fcntl
import logging
import os
import struct
import time
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

log = logging.getLogger(__name__)

V4L2_SYMLINKS_DIR = "/sys/class/video4linux/"

_CAPABILITY_STRUCT = struct.Struct("16s32s32sIII12x")


def _ior(type_char: str, number: int, size: int) -> int:
    read_direction = 2
    return (read_direction << 30) | (size << 16) | (ord(type_char) << 8) | number


VIDIOC_QUERYCAP = _ior("V", 0, _CAPABILITY_STRUCT.size)


class IoMethod(enum.Enum):
    """How frames are moved between the driver and user space."""

    READ = "read"
    MMAP = "mmap"
    USERPTR = "userptr"
    UNKNOWN = "unknown"


class Timestamp(NamedTuple):
    """A point in time split into seconds and nanoseconds."""

    sec: int
    nsec: int


@dataclass(frozen=True)
class DeviceCapability:
    """Capabilities reported by a video capture device."""

    driver: str
    card: str
    bus_info: str
    version: int
    capabilities: int
    device_caps: int

    @classmethod
    def from_bytes(cls, raw: bytes) -> DeviceCapability:
        driver, card, bus_info, version, caps, device_caps = _CAPABILITY_STRUCT.unpack(raw)

        def text(field: bytes) -> str:
            return field.split(b"\0", 1)[0].decode("utf-8", errors="replace")

        return cls(text(driver), text(card), text(bus_info), version, caps, device_caps)


def io_method_from_string(name: str) -> IoMethod:
    """Map an IO method name to its IoMethod; unknown names give IoMethod.UNKNOWN."""
    if name == IoMethod.UNKNOWN.value:
        return IoMethod.UNKNOWN
    try:
        return IoMethod(name)
    except ValueError:
        return IoMethod.UNKNOWN


def get_epoch_time_shift_us() -> int:
    """Return the offset in microseconds from monotonic time to wall-clock time."""
    epoch_us = time.time_ns() // 1000
    monotonic_ns = time.monotonic_ns()
    uptime_us = round(monotonic_ns / 1000.0)
    return epoch_us - uptime_us


def _trunc_divmod(value: int, divisor: int) -> tuple[int, int]:
    quotient = abs(value) // divisor
    if value < 0:
        quotient = -quotient
    return quotient, value - quotient * divisor


def calc_img_timestamp(buffer_sec: int, buffer_usec: int, epoch_time_shift_us: int) -> Timestamp:
    """Shift a driver buffer time into wall-clock time."""
    buffer_time_us = buffer_sec * 1_000_000 + buffer_usec + epoch_time_shift_us
    sec, rem_us = _trunc_divmod(buffer_time_us, 1_000_000)
    return Timestamp(sec, rem_us * 1000)


def read_device_name(uevent_path: str | os.PathLike[str]) -> str | None:
    """Return the /dev path named by DEVNAME= in a uevent file, or None."""
    try:
        with open(uevent_path, encoding="utf-8", errors="replace") as uevent:
            for line in uevent:
                index = line.find("DEVNAME=")
                if index != -1:
                    return "/dev/" + line[index + len("DEVNAME="):].rstrip("\r\n")
    except OSError:
        return None
    return None


def _query_capabilities(fd: int) -> DeviceCapability:
    buffer = bytearray(_CAPABILITY_STRUCT.size)
    while True:
        try:
            fcntl.ioctl(fd, VIDIOC_QUERYCAP, buffer, True)
            break
        except InterruptedError:
            continue
    return DeviceCapability.from_bytes(bytes(buffer))


def available_devices(
    sysfs_dir: str | os.PathLike[str] = V4L2_SYMLINKS_DIR,
) -> dict[str, DeviceCapability]:
    """List the video capture devices that can be opened and queried, keyed by /dev path."""
    devices: dict[str, DeviceCapability] = {}
    base = Path(sysfs_dir)
    with os.scandir(base) as entries:
        for entry in entries:
            if not entry.is_symlink():
                continue
            device_dir = os.path.realpath(base / os.readlink(entry.path), strict=True)
            device_name = read_device_name(os.path.join(device_dir, "uevent"))
            if not device_name:
                log.warning("No device name found for `%s`", entry.path)
                continue
            try:
                fd = os.open(device_name, os.O_RDONLY)
            except OSError:
                log.warning(
                    "Cannot open device: `%s`, double-check read / write permissions for device",
                    device_name,
                )
                continue
            try:
                devices[device_name] = _query_capabilities(fd)
            except OSError as exc:
                if exc.errno not in (errno.ENOTTY, errno.EINVAL, None):
                    log.debug("ioctl failed on `%s`: %s", device_name, exc)
                log.warning("Could not retrieve device capabilities: `%s`", device_name)
            finally:
                os.close(fd)
    return dict(sorted(devices.items()))