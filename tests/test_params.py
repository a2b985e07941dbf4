import os

import pytest

from uvccam.camera import Parameters
from uvccam.params import assign_params, declared_defaults, resolve_device_path


def test_declared_defaults_names():
    assert set(declared_defaults()) == {
        "camera_name", "camera_info_url", "frame_id", "framerate", "image_height",
        "image_width", "io_method", "pixel_format", "av_device_format", "video_device",
        "brightness", "contrast", "saturation", "sharpness", "gain", "auto_white_balance",
        "white_balance", "autoexposure", "exposure", "autofocus", "focus",
    }


def test_declared_defaults_is_a_copy():
    first = declared_defaults()
    first["camera_name"] = "changed"
    assert declared_defaults()["camera_name"] == "default_cam"


def test_assign_declared_defaults():
    params = assign_params(Parameters(), declared_defaults())
    assert params.camera_name == "default_cam"
    assert params.frame_id == "default_cam"
    assert params.image_width == 640
    assert params.image_height == 480
    assert params.pixel_format_name == "yuyv"
    assert params.io_method_name == "mmap"
    assert params.brightness == 50
    assert params.white_balance == 4000
    assert params.exposure == 100
    assert params.autofocus is False


def test_assign_does_not_mutate_input():
    original = Parameters()
    assign_params(original, {"image_width": 1280})
    assert original == Parameters()


def test_assign_accepts_pairs():
    params = assign_params(Parameters(), [("gain", 10), ("autoexposure", False)])
    assert params.gain == 10
    assert params.autoexposure is False


def test_unknown_name_is_ignored():
    assert assign_params(Parameters(), {"bananas": 3}) == Parameters()


def test_framerate_stored_as_whole_number():
    params = assign_params(Parameters(), {"framerate": 15.0})
    assert params.framerate == 15
    assert isinstance(params.framerate, int)


@pytest.mark.parametrize(
    "name, value",
    [("image_width", "wide"), ("brightness", True), ("autofocus", 1), ("framerate", "fast")],
)
def test_wrong_type_raises(name, value):
    with pytest.raises(TypeError):
        assign_params(Parameters(), {name: value})


def test_resolve_plain_path_unchanged(tmp_path):
    device = tmp_path / "video0"
    device.write_bytes(b"")
    assert resolve_device_path(str(device)) == str(device)


def test_resolve_relative_symlink(tmp_path):
    device = tmp_path / "video3"
    device.write_bytes(b"")
    by_id = tmp_path / "by-id"
    by_id.mkdir()
    link = by_id / "camera"
    os.symlink(os.path.join("..", "video3"), link)
    assert resolve_device_path(str(link)) == os.path.realpath(device)


def test_resolve_absolute_symlink(tmp_path):
    device = tmp_path / "video1"
    device.write_bytes(b"")
    link = tmp_path / "cam"
    os.symlink(str(device), link)
    assert resolve_device_path(str(link)) == str(device)


def test_video_device_is_resolved(tmp_path):
    device = tmp_path / "video2"
    device.write_bytes(b"")
    link = tmp_path / "cam"
    os.symlink("video2", link)
    params = assign_params(Parameters(), {"video_device": str(link)})
    assert params.device_name == os.path.realpath(device)