"""Motion-JPEG frames decoded to 8-bit RGB."""

from __future__ import annotations

import io
import logging

from PIL import Image

from uvccam import constants
from uvccam.formats.base import V4L2_PIX_FMT_MJPEG, FormatArguments, PixelFormat

log = logging.getLogger(__name__)


class Mjpeg2Rgb(PixelFormat):
    """MJPEG capture decoded to packed RGB of the configured size."""

    def __init__(self, args: FormatArguments | None = None) -> None:
        super().__init__("mjpeg2rgb", V4L2_PIX_FMT_MJPEG, constants.RGB8, 3, 8, True)
        arguments = args or FormatArguments()
        self.width = arguments.width
        self.height = arguments.height
        self.av_device_format = arguments.av_device_format

    def _blank(self) -> bytes:
        return bytes(max(self.width, 0) * max(self.height, 0) * 3)

    def convert(self, src: bytes, bytes_used: int) -> bytes:
        """Decode the first bytes_used bytes; a frame that fails to decode comes back black."""
        if self.width <= 0 or self.height <= 0:
            return b""
        packet = bytes(src[:bytes_used])
        try:
            with Image.open(io.BytesIO(packet)) as image:
                if image.format != "JPEG":
                    raise OSError(f"not a JPEG frame: {image.format}")
                rgb = image.convert("RGB")
        except (OSError, ValueError, SyntaxError) as exc:
            log.error("Failed to decode MJPEG frame: %s", exc)
            return self._blank()
        if rgb.size != (self.width, self.height):
            rgb = rgb.resize((self.width, self.height), Image.Resampling.BILINEAR)
        return rgb.tobytes()