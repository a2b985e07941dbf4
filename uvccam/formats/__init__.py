"""Pixel formats a camera can deliver and their conversions to output images."""