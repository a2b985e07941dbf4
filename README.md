# uvccam

Building blocks for working with V4L2 USB (UVC) cameras on Linux:

- the pixel formats a camera driver understands, what each one produces
  (encoding, channels, bit depth) and, where one is needed, the conversion
  from the camera's raw bytes to the output image;
- YUV to RGB conversion with fixed-point integer arithmetic and clipping
  to 0..255;
- discovery of the V4L2 devices listed under `/sys/class/video4linux`;
- camera parameters, the defaults a driver node declares, and the V4L2
  control settings they turn into.

## Installing

Install from a checkout with pip. The `test` extra adds pytest for running
the test suite in `tests/`.

## Pixel formats

Every format is a `uvccam.formats.base.PixelFormat` with `name` (the value
used in configuration), `v4l2` (the FourCC code as an integer), `ros` (the
output encoding), `channels`, `bit_depth` and `requires_conversion`.
`v4l2_str()` gives the FourCC as text, `byte_depth()` the bytes per channel,
and `is_color()`, `is_mono()`, `is_bayer()` and `has_alpha()` classify the
output encoding. `convert(src, bytes_used)` returns the converted image as
`bytes`; formats that need no conversion return the input unchanged.

```python
from uvccam.formats.base import FormatArguments, default_pixel_format
from uvccam.formats.yuv import Yuyv2Rgb

fmt = default_pixel_format()
print(fmt.name, fmt.v4l2_str())      # yuyv YUYV
print(fmt.is_color(), fmt.is_mono()) # False False

width, height = 4, 2
args = FormatArguments(name="yuyv2rgb", width=width, height=height,
                       pixels=width * height, av_device_format="YUV422P")
raw_frame = bytes([128] * (width * height * 2))
rgb = Yuyv2Rgb(args).convert(raw_frame, len(raw_frame))
print(len(rgb))                      # 24: three bytes per pixel
```

The formats available are:

| name         | class          | module                 | output      |
|--------------|----------------|------------------------|-------------|
| `rgb8`       | `Rgb8`         | `uvccam.formats.rgb`   | rgb8        |
| `yuyv`       | `Yuyv`         | `uvccam.formats.yuv`   | yuv422_yuy2 |
| `yuyv2rgb`   | `Yuyv2Rgb`     | `uvccam.formats.yuv`   | rgb8        |
| `uyvy`       | `Uyvy`         | `uvccam.formats.yuv`   | yuv422      |
| `uyvy2rgb`   | `Uyvy2Rgb`     | `uvccam.formats.yuv`   | rgb8        |
| `m4202rgb`   | `M4202Rgb`     | `uvccam.formats.yuv`   | rgb8        |
| `mono8`      | `Mono8`        | `uvccam.formats.mono`  | mono8       |
| `mono16`     | `Mono16`       | `uvccam.formats.mono`  | mono16      |
| `y102mono8`  | `Y10ToMono8`   | `uvccam.formats.mono`  | mono8       |
| `mjpeg2rgb`  | `Mjpeg2Rgb`    | `uvccam.formats.mjpeg` | rgb8        |

Notes on the conversions:

- `Yuyv2Rgb` and `Uyvy2Rgb` turn every four bytes into two RGB pixels that
  share U and V, using `pixels` from the arguments; too short an input
  raises `ValueError`.
- `M4202Rgb` reads a planar 4:2:0 frame (Y plane, then U, then V) of the
  configured `width` and `height`, which must be even, and converts with
  BT.601 video-range coefficients.
- `Y10ToMono8` keeps the top eight bits of each little-endian 10-bit sample.
- `Mjpeg2Rgb` decodes the first `bytes_used` bytes as JPEG with Pillow,
  resizes to the configured size if the frame differs, and returns an
  all-black frame (logging an error) when decoding fails.

`uvccam.camera.driver_supported_formats(args)` builds all of these for one
set of arguments, and `find_driver_format(args)` returns the one named by
`args.name`, raising `UnsupportedFormatError` (a `ValueError`) when there
is none. `format_arguments_from_parameters(parameters, number_of_pixels)`
builds the `FormatArguments` from a `Parameters`.

FourCC and single-pixel helpers live in `uvccam.formats.base`:

```python
from uvccam.formats.base import clip_value, fourcc, fourcc_to_string, yuv_to_rgb

fourcc("YUYV") == 0x56595559   # True
fourcc_to_string(0x56595559)   # "YUYV"
clip_value(-20)                # 0
clip_value(300)                # 255
r, g, b = yuv_to_rgb(128, 128, 128)
```

`uvccam.constants` holds the encoding names (`RGB8`, `MONO16`,
`BAYER_RGGB8`, `YUV422`, ...) and `is_color_encoding`, `is_mono_encoding`,
`is_bayer_encoding` and `has_alpha_encoding`.

## Devices, I/O methods and timestamps

```python
from uvccam.utils import IoMethod, available_devices, io_method_from_string

io_method_from_string("mmap") is IoMethod.MMAP        # True
io_method_from_string("bananas") is IoMethod.UNKNOWN  # True

for path, caps in available_devices("/sys/class/video4linux").items():
    print(path, caps.card, caps.driver)
```

`available_devices(sysfs_dir)` follows each symlink in the directory, reads
the device's `/dev` name from its `uevent` file (`read_device_name`), opens
it and asks for its capabilities. Devices that cannot be opened or queried
are logged and left out. The result is a dict from `/dev` path to
`DeviceCapability`, sorted by path.

`get_epoch_time_shift_us()` measures the offset between the monotonic clock
that V4L2 buffers are stamped with and wall-clock time;
`calc_img_timestamp(sec, usec, shift)` turns a buffer time into a
`Timestamp(sec, nsec)` on the epoch clock.

## Parameters and controls

`uvccam.camera.Parameters` holds a camera configuration, and `ImageLayout`
works out `number_of_pixels()`, `bytes_per_line()`, `size_in_bytes()` and
`fourcc()` for a chosen format.

`uvccam.params.declared_defaults()` gives the parameters a driver node
declares with their default values. `assign_params(parameters, values)`
takes a mapping or `(name, value)` pairs and returns a new `Parameters`
with them applied; wrongly typed values raise `TypeError`, unknown names are
logged and ignored, and `video_device` is passed through
`resolve_device_path`, which follows one level of symlink.

```python
from uvccam.camera import Parameters
from uvccam.node import image_step, timer_period_ms, v4l2_controls
from uvccam.params import assign_params, declared_defaults

params = assign_params(Parameters(), declared_defaults())
for setting in v4l2_controls(params):
    print(setting.name, setting.value)
print(timer_period_ms(params.framerate))  # 33
print(image_step(640 * 480 * 3, 480, 0))  # 1920
```

`v4l2_controls` returns the `ControlSetting`s to send, in order; controls
left at a negative value are left out.

## What this package does not do

It does not open a camera and stream frames: there is no buffer setup,
capture loop or start/stop of capturing, and nothing publishes images or
camera info. It provides no command-line program or service; it is a
library of the pieces such a program is built from.