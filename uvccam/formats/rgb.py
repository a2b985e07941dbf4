"""RGB pixel format."""

from __future__ import annotations

from uvccam import constants
from uvccam.formats.base import V4L2_PIX_FMT_RGB332, FormatArguments, PixelFormat


class Rgb8(PixelFormat):
    """8-bit RGB, delivered unchanged."""

    def __init__(self, args: FormatArguments | None = None) -> None:
        del args
        super().__init__("rgb8", V4L2_PIX_FMT_RGB332, constants.RGB8, 3, 8, False)