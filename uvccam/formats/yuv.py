"""YUV pixel formats: packed 4:2:2 (YUYV, UYVY) and planar 4:2:0 (M420)."""

from __future__ import annotations

import numpy as np

from uvccam import constants
from uvccam.formats.base import (
    V4L2_PIX_FMT_M420,
    V4L2_PIX_FMT_UYVY,
    V4L2_PIX_FMT_YUYV,
    FormatArguments,
    PixelFormat,
)

# Byte positions of (y0, u, y1, v) inside one four-byte group.
_YUYV_ORDER = (0, 1, 2, 3)
_UYVY_ORDER = (1, 0, 3, 2)

# Fixed-point BT.601 coefficients (video range) with a 20-bit shift.
_SHIFT = 20
_HALF = 1 << (_SHIFT - 1)
_CY = 1220542
_CUB = 2116026
_CUG = -409993
_CVG = -852492
_CVR = 1673527


def _yuv_to_rgb_array(y: np.ndarray, u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Vectorised form of the per-sample YUV to RGB conversion; returns shape (n, 3)."""
    u2 = u - 128
    v2 = v - 128
    r = y + ((v2 * 37221) >> 15)
    g = y - (((u2 * 12975) + (v2 * 18949)) >> 15)
    b = y + ((u2 * 66883) >> 15)
    return np.clip(np.stack([r, g, b], axis=-1), 0, 255)


def _convert_packed_422(
    src: bytes, number_of_pixels: int, order: tuple[int, int, int, int]
) -> bytes:
    pairs = (number_of_pixels + 1) // 2
    needed = pairs * 4
    if len(src) < needed:
        raise ValueError(f"YUV 4:2:2 image needs {needed} bytes, got {len(src)}")
    quads = np.frombuffer(src, dtype=np.uint8, count=needed).reshape(-1, 4).astype(np.int32)
    y0_index, u_index, y1_index, v_index = order
    y0 = quads[:, y0_index]
    u = quads[:, u_index]
    y1 = quads[:, y1_index]
    v = quads[:, v_index]
    first = _yuv_to_rgb_array(y0, u, v)
    second = _yuv_to_rgb_array(y1, u, v)
    rgb = np.stack([first, second], axis=1).reshape(-1)
    return rgb[: number_of_pixels * 3].astype(np.uint8).tobytes()


class Yuyv(PixelFormat):
    """YUYV 4:2:2, delivered unchanged."""

    def __init__(self, args: FormatArguments | None = None) -> None:
        del args
        super().__init__("yuyv", V4L2_PIX_FMT_YUYV, constants.YUV422_YUY2, 2, 8, False)


class Yuyv2Rgb(PixelFormat):
    """YUYV 4:2:2 converted to 8-bit RGB."""

    def __init__(self, args: FormatArguments | None = None) -> None:
        super().__init__("yuyv2rgb", V4L2_PIX_FMT_YUYV, constants.RGB8, 3, 8, True)
        self.number_of_pixels = (args or FormatArguments()).pixels

    def convert(self, src: bytes, bytes_used: int) -> bytes:
        """Each four bytes Y0 U Y1 V give two RGB pixels sharing U and V."""
        del bytes_used
        return _convert_packed_422(src, self.number_of_pixels, _YUYV_ORDER)


class Uyvy(PixelFormat):
    """UYVY 4:2:2, delivered unchanged."""

    def __init__(self, args: FormatArguments | None = None) -> None:
        del args
        super().__init__("uyvy", V4L2_PIX_FMT_UYVY, constants.YUV422, 2, 8, False)


class Uyvy2Rgb(PixelFormat):
    """UYVY 4:2:2 converted to 8-bit RGB."""

    def __init__(self, args: FormatArguments | None = None) -> None:
        super().__init__("uyvy2rgb", V4L2_PIX_FMT_UYVY, constants.RGB8, 3, 8, True)
        self.number_of_pixels = (args or FormatArguments()).pixels

    def convert(self, src: bytes, bytes_used: int) -> bytes:
        """Each four bytes U Y0 V Y1 give two RGB pixels sharing U and V."""
        del bytes_used
        return _convert_packed_422(src, self.number_of_pixels, _UYVY_ORDER)


class M4202Rgb(PixelFormat):
    """Planar YUV 4:2:0 (Y plane, then U, then V) converted to 8-bit RGB."""

    def __init__(self, args: FormatArguments | None = None) -> None:
        super().__init__("m4202rgb", V4L2_PIX_FMT_M420, constants.RGB8, 3, 8, True)
        arguments = args or FormatArguments()
        self.width = arguments.width
        self.height = arguments.height

    def convert(self, src: bytes, bytes_used: int) -> bytes:
        """Convert with BT.601 video-range coefficients and 2x2 chroma sharing."""
        del bytes_used
        width, height = self.width, self.height
        if width < 0 or height < 0 or width % 2 or height % 2:
            raise ValueError(f"YUV 4:2:0 needs even, non-negative dimensions, got {width}x{height}")
        luma_size = width * height
        chroma_size = luma_size // 4
        needed = luma_size + 2 * chroma_size
        if len(src) < needed:
            raise ValueError(f"YUV 4:2:0 image needs {needed} bytes, got {len(src)}")
        data = np.frombuffer(src, dtype=np.uint8, count=needed).astype(np.int64)
        luma = data[:luma_size].reshape(height, width)

        def upsample(plane: np.ndarray) -> np.ndarray:
            return plane.reshape(height // 2, width // 2).repeat(2, axis=0).repeat(2, axis=1)

        u = upsample(data[luma_size:luma_size + chroma_size]) - 128
        v = upsample(data[luma_size + chroma_size:needed]) - 128

        y = np.maximum(luma - 16, 0) * _CY
        r = (y + _HALF + _CVR * v) >> _SHIFT
        g = (y + _HALF + _CVG * v + _CUG * u) >> _SHIFT
        b = (y + _HALF + _CUB * u) >> _SHIFT
        rgb = np.clip(np.stack([r, g, b], axis=-1), 0, 255)
        return rgb.astype(np.uint8).tobytes()