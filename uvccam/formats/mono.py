"""Single-channel gray pixel formats."""

from __future__ import annotations

import numpy as np

from uvccam import constants
from uvccam.formats.base import (
    V4L2_PIX_FMT_GREY,
    V4L2_PIX_FMT_Y10,
    V4L2_PIX_FMT_Y16,
    FormatArguments,
    PixelFormat,
)


class Mono8(PixelFormat):
    """8-bit gray, delivered unchanged."""

    def __init__(self, args: FormatArguments | None = None) -> None:
        del args
        super().__init__("mono8", V4L2_PIX_FMT_GREY, constants.MONO8, 1, 8, False)


class Mono16(PixelFormat):
    """16-bit gray, delivered unchanged."""

    def __init__(self, args: FormatArguments | None = None) -> None:
        del args
        super().__init__("mono16", V4L2_PIX_FMT_Y16, constants.MONO16, 1, 16, False)


class Y10ToMono8(PixelFormat):
    """10-bit gray (two bytes per pixel) reduced to 8-bit gray."""

    def __init__(self, args: FormatArguments | None = None) -> None:
        super().__init__("y102mono8", V4L2_PIX_FMT_Y10, constants.MONO8, 1, 8, True)
        self.number_of_pixels = (args or FormatArguments()).pixels

    def convert(self, src: bytes, bytes_used: int) -> bytes:
        """Drop the two low bits of each little-endian 10-bit sample."""
        del bytes_used
        needed = self.number_of_pixels * 2
        if len(src) < needed:
            raise ValueError(f"Y10 image needs {needed} bytes, got {len(src)}")
        pairs = np.frombuffer(src, dtype=np.uint8, count=needed).reshape(-1, 2)
        low = pairs[:, 0]
        high = pairs[:, 1]
        out = ((low >> 2) & 0x3F) | ((high << 6) & 0xC0)
        return out.astype(np.uint8).tobytes()