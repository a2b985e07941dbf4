"""V4L2 USB camera pixel formats, conversions, device discovery and parameters."""

__version__ = "0.1.0"