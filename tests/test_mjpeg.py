import io

from PIL import Image

from uvccam import constants
from uvccam.formats.base import FormatArguments
from uvccam.formats.mjpeg import Mjpeg2Rgb


def _jpeg(width, height, color):
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="JPEG", quality=95)
    return buffer.getvalue()


def test_metadata():
    fmt = Mjpeg2Rgb(FormatArguments(width=8, height=8))
    assert fmt.name == "mjpeg2rgb"
    assert fmt.v4l2_str() == "MJPG"
    assert fmt.ros == constants.RGB8
    assert fmt.channels == 3
    assert fmt.requires_conversion is True


def test_decodes_solid_color():
    data = _jpeg(16, 8, (255, 0, 0))
    out = Mjpeg2Rgb(FormatArguments(width=16, height=8)).convert(data, len(data))
    assert len(out) == 16 * 8 * 3
    reds = out[0::3]
    greens = out[1::3]
    blues = out[2::3]
    assert min(reds) > 200
    assert max(greens) < 60
    assert max(blues) < 60


def test_bytes_used_limits_input():
    data = _jpeg(8, 8, (0, 0, 255))
    padded = data + b"\x00garbage trailing bytes"
    fmt = Mjpeg2Rgb(FormatArguments(width=8, height=8))
    assert fmt.convert(padded, len(data)) == fmt.convert(data, len(data))


def test_invalid_frame_gives_black_image():
    fmt = Mjpeg2Rgb(FormatArguments(width=4, height=2))
    out = fmt.convert(b"not a jpeg at all", 17)
    assert out == bytes(4 * 2 * 3)


def test_truncated_bytes_used_gives_black_image():
    data = _jpeg(8, 8, (10, 200, 10))
    fmt = Mjpeg2Rgb(FormatArguments(width=8, height=8))
    assert fmt.convert(data, 10) == bytes(8 * 8 * 3)


def test_mismatched_size_is_scaled_to_configured_size():
    data = _jpeg(32, 16, (0, 255, 0))
    out = Mjpeg2Rgb(FormatArguments(width=8, height=4)).convert(data, len(data))
    assert len(out) == 8 * 4 * 3
    assert min(out[1::3]) > 200


def test_zero_size_gives_empty_output():
    data = _jpeg(8, 8, (0, 0, 0))
    assert Mjpeg2Rgb().convert(data, len(data)) == b""