"""
End-to-end tests for make_avatar.
"""

import numpy as np
import pytest
from PIL import Image

from AV_Libs.errors import InvalidDimension, InvalidRadius
from AV_Libs.ImageEditingLib import make_avatar


class TestMakeAvatar:
    """Tests for the resize + rounded corners pipeline."""

    def test_red_source_scenario(self, red_source):
        avatar = make_avatar(red_source, (300, 300), 15)

        assert avatar.size == (300, 300)
        assert avatar.mode == "RGBA"
        assert avatar.getpixel((0, 0)) == (0, 0, 0, 0)
        assert avatar.getpixel((150, 150)) == (255, 0, 0, 255)
        # First pixel on the straight top edge past the arc
        assert avatar.getpixel((15, 0)) == (255, 0, 0, 255)

    def test_all_four_corners_transparent(self, red_source):
        avatar = make_avatar(red_source, (120, 80), 12)

        for xy in [(0, 0), (119, 0), (0, 79), (119, 79)]:
            assert avatar.getpixel(xy) == (0, 0, 0, 0)

    def test_corner_alpha_is_symmetric(self, red_source):
        """Alpha of the top-left arc mirrors onto the top-right arc."""
        size, radius = 64, 10
        alpha = np.array(make_avatar(red_source, (size, size), radius))[..., 3]

        left = alpha[:radius, :radius]
        right = alpha[:radius, size - radius:][:, ::-1]
        np.testing.assert_array_equal(left, right)

    def test_source_unchanged(self, red_source):
        before = red_source.tobytes()

        make_avatar(red_source, (100, 100), 20)

        assert red_source.mode == "RGB"
        assert red_source.tobytes() == before

    def test_rgba_source_unchanged(self, gradient_rgba):
        before = gradient_rgba.tobytes()

        make_avatar(gradient_rgba, (48, 32), 8, resample="nearest")

        assert gradient_rgba.tobytes() == before

    def test_zero_radius_only_resizes(self, red_source):
        avatar = make_avatar(red_source, (50, 50), 0)

        assert avatar.getpixel((0, 0)) == (255, 0, 0, 255)
        assert avatar.getextrema()[3] == (255, 255)

    def test_defaults(self, red_source):
        avatar = make_avatar(red_source)

        assert avatar.size == (300, 300)
        assert avatar.getpixel((0, 0))[3] == 0

    @pytest.mark.parametrize("size", [(0, 100), (100, -1), (100,), "big", None])
    def test_bad_size(self, red_source, size):
        with pytest.raises(InvalidDimension):
            make_avatar(red_source, size, 10)

    @pytest.mark.parametrize("radius", [-1, float("inf"), "round"])
    def test_bad_radius(self, red_source, radius):
        with pytest.raises(InvalidRadius):
            make_avatar(red_source, (100, 100), radius)

    def test_empty_source(self):
        with pytest.raises(InvalidDimension):
            make_avatar(Image.new("RGB", (0, 0)), (10, 10), 2)

    def test_bad_options(self, red_source):
        with pytest.raises(ValueError):
            make_avatar(red_source, (10, 10), 2, supersample=99)
        with pytest.raises(ValueError):
            make_avatar(red_source, (10, 10), 2, resample="box-blur")

    def test_not_an_image(self):
        with pytest.raises(TypeError):
            make_avatar([[255, 0, 0]], (10, 10), 2)
