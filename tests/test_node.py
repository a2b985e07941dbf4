import dataclasses

import pytest

from uvccam.camera import Parameters
from uvccam.node import ControlSetting, image_step, timer_period_ms, v4l2_controls


def _as_dict(controls):
    return {control.name: control.value for control in controls}


def test_default_parameters_controls():
    controls = v4l2_controls(Parameters())
    assert controls == [
        ControlSetting("white_balance_temperature_auto", 1),
        ControlSetting("exposure_auto", 3),
        ControlSetting("focus_auto", 0),
    ]


def test_non_negative_image_controls_are_set_in_order():
    params = dataclasses.replace(
        Parameters(), brightness=50, contrast=20, saturation=30, sharpness=40, gain=10
    )
    names = [control.name for control in v4l2_controls(params)]
    assert names[:5] == ["brightness", "contrast", "saturation", "sharpness", "gain"]
    values = _as_dict(v4l2_controls(params))
    assert values["brightness"] == 50
    assert values["gain"] == 10


def test_negative_controls_are_left_alone():
    params = dataclasses.replace(Parameters(), brightness=-1, contrast=-5)
    names = {control.name for control in v4l2_controls(params)}
    assert "brightness" not in names
    assert "contrast" not in names


def test_zero_brightness_is_set():
    params = dataclasses.replace(Parameters(), brightness=0)
    assert _as_dict(v4l2_controls(params))["brightness"] == 0


def test_manual_white_balance():
    params = dataclasses.replace(Parameters(), auto_white_balance=False, white_balance=4000)
    controls = v4l2_controls(params)
    names = [control.name for control in controls]
    index = names.index("white_balance_temperature_auto")
    assert controls[index].value == 0
    assert controls[index + 1] == ControlSetting("white_balance_temperature", 4000)


def test_manual_exposure():
    params = dataclasses.replace(Parameters(), autoexposure=False, exposure=100)
    controls = v4l2_controls(params)
    names = [control.name for control in controls]
    index = names.index("exposure_auto")
    assert controls[index].value == 1
    assert controls[index + 1] == ControlSetting("exposure_absolute", 100)


def test_autofocus_skips_focus_absolute():
    params = dataclasses.replace(Parameters(), autofocus=True, focus=120)
    values = _as_dict(v4l2_controls(params))
    assert values["focus_auto"] == 1
    assert "focus_absolute" not in values


def test_manual_focus_sets_focus_absolute():
    params = dataclasses.replace(Parameters(), autofocus=False, focus=120)
    controls = v4l2_controls(params)
    assert controls[-2] == ControlSetting("focus_auto", 0)
    assert controls[-1] == ControlSetting("focus_absolute", 120)


def test_timer_period_default_rate():
    assert timer_period_ms(30.0) == 33


@pytest.mark.parametrize("framerate", [1, 7.5, 15, 30, 60, 144])
def test_timer_period_truncates(framerate):
    period = timer_period_ms(framerate)
    assert period * framerate <= 1000 < (period + 1) * framerate


@pytest.mark.parametrize("framerate", [0, -30])
def test_timer_period_rejects_non_positive(framerate):
    with pytest.raises(ValueError):
        timer_period_ms(framerate)


def test_image_step_given_step_kept():
    assert image_step(921600, 480, 1920) == 1920


@pytest.mark.parametrize("size,height", [(921600, 480), (614400, 480), (12, 3)])
def test_image_step_derived_from_size(size, height):
    step = image_step(size, height, 0)
    assert step * height == size


def test_image_step_zero_height_raises():
    with pytest.raises(ValueError):
        image_step(100, 0, 0)