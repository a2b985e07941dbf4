"""Node-level helpers: camera control settings, timer period and image step."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from uvccam.camera import Parameters

log = logging.getLogger(__name__)

# Value of the exposure_auto control that turns automatic exposure down to manual.
EXPOSURE_AUTO_MANUAL = 1
# Value of the exposure_auto control that enables automatic exposure.
EXPOSURE_AUTO_ON = 3


@dataclass(frozen=True)
class ControlSetting:
    """One named device control and the value it is set to."""

    name: str
    value: int


def v4l2_controls(parameters: Parameters) -> list[ControlSetting]:
    """Return the device controls to send for the given parameters, in the order they are set.

    Controls left at a negative value are left alone on the device.
    """
    controls: list[ControlSetting] = []

    def setting(name: str, value: int) -> None:
        log.info("Setting '%s' to %d", name, value)
        controls.append(ControlSetting(name, value))

    for name in ("brightness", "contrast", "saturation", "sharpness", "gain"):
        value = getattr(parameters, name)
        if value >= 0:
            setting(name, value)

    if parameters.auto_white_balance:
        setting("white_balance_temperature_auto", 1)
    else:
        setting("white_balance_temperature_auto", 0)
        setting("white_balance_temperature", parameters.white_balance)

    if not parameters.autoexposure:
        setting("exposure_auto", EXPOSURE_AUTO_MANUAL)
        setting("exposure_absolute", parameters.exposure)
    else:
        setting("exposure_auto", EXPOSURE_AUTO_ON)

    if parameters.autofocus:
        setting("focus_auto", 1)
    else:
        setting("focus_auto", 0)
        if parameters.focus >= 0:
            setting("focus_absolute", parameters.focus)

    return controls


def timer_period_ms(framerate: float) -> int:
    """Whole milliseconds between frames at the given rate, truncated."""
    if framerate <= 0:
        raise ValueError(f"framerate must be positive, got {framerate}")
    period_ms = int(1000.0 / framerate)
    log.info("Timer triggering every %d ms", period_ms)
    return period_ms


def image_step(size_in_bytes: int, height: int, step: int) -> int:
    """Bytes per image row; a step of 0 is worked out as size divided by height."""
    if step != 0:
        return step
    if height <= 0:
        raise ValueError(f"cannot derive image step from height {height}")
    return size_in_bytes // height