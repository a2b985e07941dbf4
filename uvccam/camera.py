"""Capture parameters, image layout and the formats this driver can deliver."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from uvccam.formats.base import FormatArguments, PixelFormat, default_pixel_format
from uvccam.formats.mjpeg import Mjpeg2Rgb
from uvccam.formats.mono import Mono8, Mono16, Y10ToMono8
from uvccam.formats.rgb import Rgb8
from uvccam.formats.yuv import M4202Rgb, Uyvy, Uyvy2Rgb, Yuyv, Yuyv2Rgb

log = logging.getLogger(__name__)

_DRIVER_FORMAT_TYPES: tuple[type[PixelFormat], ...] = (
    Rgb8,
    Yuyv,
    Yuyv2Rgb,
    Uyvy,
    Uyvy2Rgb,
    Mono8,
    Mono16,
    Y10ToMono8,
    Mjpeg2Rgb,
    M4202Rgb,
)


class UnsupportedFormatError(ValueError):
    """Raised when a requested pixel format is not supported."""


@dataclass
class Parameters:
    """Settings that configure a camera and its controls."""

    camera_name: str = "usb_cam"
    device_name: str = "/dev/video0"
    frame_id: str = "camera"
    io_method_name: str = "mmap"
    camera_info_url: str = "package://uvccam/config/camera_info.yaml"
    pixel_format_name: str = "yuyv2rgb"
    av_device_format: str = "YUV422P"
    image_width: int = 600
    image_height: int = 480
    framerate: int = 30
    brightness: int = -1
    contrast: int = -1
    saturation: int = -1
    sharpness: int = -1
    gain: int = -1
    white_balance: int = -1
    exposure: int = -1
    focus: int = -1
    auto_white_balance: bool = True
    autoexposure: bool = True
    autofocus: bool = False


@dataclass
class ImageLayout:
    """Size of an image of a given pixel format, and where it sits in time."""

    width: int = 0
    height: int = 0
    pixel_format: PixelFormat = field(default_factory=default_pixel_format)
    stamp_sec: int = 0
    stamp_nsec: int = 0

    def number_of_pixels(self) -> int:
        """Total pixels in the image."""
        return self.width * self.height

    def bytes_per_line(self) -> int:
        """Bytes in one row of the output image."""
        return self.width * self.pixel_format.byte_depth() * self.pixel_format.channels

    def size_in_bytes(self) -> int:
        """Bytes in the whole output image."""
        return self.height * self.bytes_per_line()

    def fourcc(self) -> int:
        """The capture format's fourcc value."""
        return self.pixel_format.v4l2


def driver_supported_formats(args: FormatArguments | None = None) -> list[PixelFormat]:
    """Return one instance of every pixel format this driver can deliver."""
    arguments = args or FormatArguments()
    return [format_type(arguments) for format_type in _DRIVER_FORMAT_TYPES]


def find_driver_format(args: FormatArguments) -> PixelFormat:
    """Return the driver format named by args.name, or raise UnsupportedFormatError."""
    found: PixelFormat | None = None
    formats = driver_supported_formats(args)
    for driver_format in formats:
        if driver_format.name == args.name:
            found = driver_format
    if found is None:
        log.error(
            "This driver supports the following formats:\n%s",
            "\n".join(f"\t{driver_format.name}" for driver_format in formats),
        )
        raise UnsupportedFormatError(
            f"Specified format `{args.name}` is unsupported by this driver"
        )
    return found


def format_arguments_from_parameters(
    parameters: Parameters, number_of_pixels: int
) -> FormatArguments:
    """Build the format constructor arguments from camera parameters."""
    return FormatArguments(
        name=parameters.pixel_format_name,
        width=parameters.image_width,
        height=parameters.image_height,
        pixels=number_of_pixels,
        av_device_format=parameters.av_device_format,
    )