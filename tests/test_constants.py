import pytest

from uvccam import constants
from uvccam.constants import (
    has_alpha_encoding,
    is_bayer_encoding,
    is_color_encoding,
    is_mono_encoding,
)


@pytest.mark.parametrize(
    "encoding",
    [
        constants.RGB8,
        constants.BGR8,
        constants.RGBA8,
        constants.BGRA8,
        constants.RGB16,
        constants.BGR16,
        constants.RGBA16,
        constants.BGRA16,
        constants.NV21,
        constants.NV24,
    ],
)
def test_color_encodings(encoding):
    assert is_color_encoding(encoding) is True
    assert is_mono_encoding(encoding) is False
    assert is_bayer_encoding(encoding) is False


def test_yuyv_encoding_is_neither_color_mono_nor_bayer():
    assert is_color_encoding(constants.YUV422_YUY2) is False
    assert is_mono_encoding(constants.YUV422_YUY2) is False
    assert is_bayer_encoding(constants.YUV422_YUY2) is False


@pytest.mark.parametrize("encoding", [constants.MONO8, constants.MONO16])
def test_mono_encodings(encoding):
    assert is_mono_encoding(encoding) is True
    assert is_color_encoding(encoding) is False


@pytest.mark.parametrize(
    "encoding",
    [
        constants.BAYER_RGGB8,
        constants.BAYER_BGGR8,
        constants.BAYER_GBRG8,
        constants.BAYER_GRBG8,
        constants.BAYER_RGGB16,
        constants.BAYER_BGGR16,
        constants.BAYER_GBRG16,
        constants.BAYER_GRBG16,
    ],
)
def test_bayer_encodings(encoding):
    assert is_bayer_encoding(encoding) is True
    assert is_color_encoding(encoding) is False


@pytest.mark.parametrize(
    "encoding",
    [constants.RGBA8, constants.BGRA8, constants.RGBA16, constants.BGRA16],
)
def test_alpha_encodings(encoding):
    assert has_alpha_encoding(encoding) is True
    assert is_color_encoding(encoding) is True


@pytest.mark.parametrize(
    "encoding", [constants.RGB8, constants.MONO8, constants.UNKNOWN, constants.YUV422]
)
def test_encodings_without_alpha(encoding):
    assert has_alpha_encoding(encoding) is False


def test_unknown_encoding_matches_nothing():
    assert is_color_encoding(constants.UNKNOWN) is False
    assert is_mono_encoding(constants.UNKNOWN) is False
    assert is_bayer_encoding(constants.UNKNOWN) is False
    assert has_alpha_encoding(constants.UNKNOWN) is False