"""Declared node parameters and how they are applied to camera settings."""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Iterable, Mapping
from typing import Any

from uvccam.camera import Parameters

log = logging.getLogger(__name__)

_DECLARED_DEFAULTS: dict[str, Any] = {
    "camera_name": "default_cam",
    "camera_info_url": "",
    "framerate": 30.0,
    "frame_id": "default_cam",
    "image_height": 480,
    "image_width": 640,
    "io_method": "mmap",
    "pixel_format": "yuyv",
    "av_device_format": "YUV422P",
    "video_device": "/dev/video0",
    "brightness": 50,
    "contrast": -1,
    "saturation": -1,
    "sharpness": -1,
    "gain": -1,
    "auto_white_balance": True,
    "white_balance": 4000,
    "autoexposure": True,
    "exposure": 100,
    "autofocus": False,
    "focus": -1,
}

_STRING_FIELDS = {
    "camera_name": "camera_name",
    "camera_info_url": "camera_info_url",
    "frame_id": "frame_id",
    "io_method": "io_method_name",
    "pixel_format": "pixel_format_name",
    "av_device_format": "av_device_format",
}
_INT_FIELDS = {
    "image_height": "image_height",
    "image_width": "image_width",
    "brightness": "brightness",
    "contrast": "contrast",
    "saturation": "saturation",
    "sharpness": "sharpness",
    "gain": "gain",
    "white_balance": "white_balance",
    "exposure": "exposure",
    "focus": "focus",
}
_BOOL_FIELDS = {
    "auto_white_balance": "auto_white_balance",
    "autoexposure": "autoexposure",
    "autofocus": "autofocus",
}


def declared_defaults() -> dict[str, Any]:
    """Return the parameters the node declares, with their default values."""
    return dict(_DECLARED_DEFAULTS)


def resolve_device_path(path: str) -> str:
    """Follow one level of symlink; relative targets are made canonical."""
    if not os.path.islink(path):
        return path
    target = os.readlink(path)
    if not os.path.isabs(target):
        parent = os.path.dirname(os.path.abspath(path))
        target = os.path.realpath(os.path.join(parent, target), strict=True)
    return target


def _as_string(name: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"parameter `{name}` must be an integer, got {value!r}")
    return value


def _as_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"parameter `{name}` must be a boolean, got {value!r}")
    return value


def _as_double(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"parameter `{name}` must be a number, got {value!r}")
    return float(value)


def assign_params(
    parameters: Parameters,
    values: Mapping[str, Any] | Iterable[tuple[str, Any]],
) -> Parameters:
    """Return a copy of parameters with the named values applied."""
    items = values.items() if isinstance(values, Mapping) else values
    changes: dict[str, Any] = {}
    for name, value in items:
        if name in _STRING_FIELDS:
            text = _as_string(name, value)
            if name == "camera_name":
                log.info("camera_name value: %s", text)
            changes[_STRING_FIELDS[name]] = text
        elif name == "framerate":
            rate = _as_double(name, value)
            log.warning("framerate: %f", rate)
            changes["framerate"] = int(rate)
        elif name == "video_device":
            changes["device_name"] = resolve_device_path(_as_string(name, value))
        elif name in _INT_FIELDS:
            changes[_INT_FIELDS[name]] = _as_int(name, value)
        elif name in _BOOL_FIELDS:
            changes[_BOOL_FIELDS[name]] = _as_bool(name, value)
        else:
            log.warning("Invalid parameter name: %s", name)
    return dataclasses.replace(parameters, **changes)