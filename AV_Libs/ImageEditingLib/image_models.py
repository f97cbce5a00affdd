"""
Image data models for the avatar maker.

Pixel buffers are Pillow images in "RGBA" mode with straight (not
premultiplied) alpha throughout.

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    Size: A (width, height) tuple in pixels

Constants:
    TRANSPARENT: The fully transparent color written into covered pixels
    BUFFER_MODE: Pillow mode used for every pixel buffer
"""

from typing import Tuple

RgbaColor = Tuple[int, int, int, int]
Size = Tuple[int, int]

TRANSPARENT: RgbaColor = (0, 0, 0, 0)
BUFFER_MODE = "RGBA"
