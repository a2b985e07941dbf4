"""Pixel format description, fourcc helpers and YUV to RGB conversion."""

from __future__ import annotations

from dataclasses import dataclass

from uvccam import constants


def fourcc(code: str) -> int:
    """Pack a four-character code into its little-endian integer value."""
    raw = code.encode("ascii")
    if len(raw) != 4:
        raise ValueError(f"fourcc code must be exactly 4 characters, got {code!r}")
    return int.from_bytes(raw, "little")


def fourcc_to_string(value: int) -> str:
    """Unpack a 32-bit fourcc integer into its four characters."""
    if not 0 <= value <= 0xFFFFFFFF:
        raise ValueError(f"fourcc value out of range: {value}")
    return value.to_bytes(4, "little").decode("latin-1")


V4L2_PIX_FMT_RGB332 = fourcc("RGB1")
V4L2_PIX_FMT_GREY = fourcc("GREY")
V4L2_PIX_FMT_Y10 = fourcc("Y10 ")
V4L2_PIX_FMT_Y16 = fourcc("Y16 ")
V4L2_PIX_FMT_YUYV = fourcc("YUYV")
V4L2_PIX_FMT_UYVY = fourcc("UYVY")
V4L2_PIX_FMT_M420 = fourcc("M420")
V4L2_PIX_FMT_MJPEG = fourcc("MJPG")


def clip_value(value: int) -> int:
    """Clip an integer into the range 0..255."""
    index = value + constants.CLIPPING_TABLE_OFFSET
    if 0 <= index < len(constants.UCHAR_CLIPPING_TABLE):
        return constants.UCHAR_CLIPPING_TABLE[index]
    return 0 if value < 0 else 255


def yuv_to_rgb(y: int, u: int, v: int) -> tuple[int, int, int]:
    """Convert one Y, U, V sample triple to an (r, g, b) tuple."""
    u2 = u - 128
    v2 = v - 128
    r = y + ((v2 * 37221) >> 15)
    g = y - (((u2 * 12975) + (v2 * 18949)) >> 15)
    b = y + ((u2 * 66883) >> 15)
    return clip_value(r), clip_value(g), clip_value(b)


@dataclass
class FormatArguments:
    """Arguments shared by every pixel format constructor."""

    name: str = ""
    width: int = 0
    height: int = 0
    pixels: int = 0
    av_device_format: str = ""


@dataclass
class PixelFormat:
    """Describes a capture format and the encoding it is delivered as."""

    name: str
    v4l2: int
    ros: str
    channels: int
    bit_depth: int
    requires_conversion: bool

    def v4l2_str(self) -> str:
        """The capture format as its four-character code."""
        return fourcc_to_string(self.v4l2)

    def byte_depth(self) -> int:
        """Number of bytes per channel."""
        return self.bit_depth // 8

    def convert(self, src: bytes, bytes_used: int) -> bytes:
        """Return the image converted to the output encoding; unchanged by default."""
        del bytes_used
        return bytes(src)

    def is_color(self) -> bool:
        return constants.is_color_encoding(self.ros)

    def is_mono(self) -> bool:
        return constants.is_mono_encoding(self.ros)

    def is_bayer(self) -> bool:
        return constants.is_bayer_encoding(self.ros)

    def has_alpha(self) -> bool:
        return constants.has_alpha_encoding(self.ros)


def default_pixel_format() -> PixelFormat:
    """The format used when none is chosen: YUYV passed through unconverted."""
    return PixelFormat(
        name="yuyv",
        v4l2=V4L2_PIX_FMT_YUYV,
        ros=constants.YUV422_YUY2,
        channels=2,
        bit_depth=8,
        requires_conversion=False,
    )