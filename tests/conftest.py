"""
Pytest configuration and shared fixtures for avatar tests.

Images are built in memory with Image.new so no fixture files are needed.
"""

import io

import pytest
from PIL import Image


@pytest.fixture
def red_source():
    """
    Provide the 400x300 opaque red source used by the avatar scenario.

    Returns:
        RGB PIL Image
    """
    return Image.new("RGB", (400, 300), (255, 0, 0))


@pytest.fixture
def gradient_rgba():
    """
    Provide a 48x32 RGBA image where every pixel differs.

    Alpha varies too, so partially transparent pixels are covered.
    """
    img = Image.new("RGBA", (48, 32))
    pixels = img.load()
    for y in range(img.height):
        for x in range(img.width):
            pixels[x, y] = (x * 5, y * 7, (x + y) * 3, 128 + (x * y) % 128)
    return img


@pytest.fixture
def png_bytes():
    """
    Factory producing encoded PNG bytes for a solid color image.

    Returns:
        Callable (size, color) -> bytes
    """
    def make(size=(40, 30), color=(0, 128, 255, 255)):
        buffer = io.BytesIO()
        Image.new("RGBA", size, color).save(buffer, format="PNG")
        return buffer.getvalue()

    return make
