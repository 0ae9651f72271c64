"""Tests for image export.

Tests cover:
- Quantisation (ceil, clamping)
- PPM header, pixel data, line wrapping and trailing newline
- Writing PPM and PNG files
"""

import numpy as np
import pytest
from PIL import Image as PILImage


class TestQuantize:
    """Tests for float to 8-bit conversion."""

    def test_clamps_and_scales(self):
        """Test negative values clamp to 0 and values above 1 to 255."""
        from whitted.preview.export import quantize

        image = np.array([[[1.5, 0.0, -0.5], [0.0, 0.5, 1.0]]])
        result = quantize(image)
        assert result.dtype == np.uint8
        np.testing.assert_array_equal(result, [[[255, 0, 0], [0, 128, 255]]])

    def test_rejects_wrong_shape(self):
        """Test images must be (H, W, 3)."""
        from whitted.preview.export import quantize

        with pytest.raises(ValueError, match="Expected an image"):
            quantize(np.zeros((4, 4)))


class TestPPM:
    """Tests for plain PPM serialisation."""

    def test_header(self):
        """Test the P3 header lines."""
        from whitted.preview.export import to_ppm

        lines = to_ppm(np.zeros((3, 5, 3))).splitlines()
        assert lines[0:3] == ["P3", "5 3", "255"]

    def test_pixel_data(self):
        """Test pixel rows after the header."""
        from whitted.preview.export import to_ppm

        image = np.zeros((3, 5, 3))
        image[0, 0] = (1.5, 0.0, 0.0)
        image[1, 2] = (0.0, 0.5, 0.0)
        image[2, 4] = (-0.5, 0.0, 1.0)
        lines = to_ppm(image).splitlines()
        assert lines[3] == "255 0 0 0 0 0 0 0 0 0 0 0 0 0 0"
        assert lines[4] == "0 0 0 0 0 0 0 128 0 0 0 0 0 0 0"
        assert lines[5] == "0 0 0 0 0 0 0 0 0 0 0 0 0 0 255"

    def test_long_lines_are_split(self):
        """Test no line exceeds 70 characters."""
        from whitted.preview.export import to_ppm

        image = np.zeros((2, 10, 3))
        image[:, :] = (1.0, 0.5, 0.25)
        lines = to_ppm(image).splitlines()
        assert all(len(line) <= 70 for line in lines)
        assert lines[3] == " ".join(["255 128 64"] * 6 + ["255"])
        assert lines[4] == " ".join(["128 64"] + ["255 128 64"] * 3)
        assert lines[5] == lines[3]
        assert lines[6] == lines[4]

    def test_ends_with_newline(self):
        """Test the document is newline terminated."""
        from whitted.preview.export import to_ppm

        assert to_ppm(np.zeros((1, 1, 3))).endswith("\n")


class TestSave:
    """Tests for writing image files."""

    def test_save_ppm(self, tmp_path):
        """Test PPM files contain the serialised document."""
        from whitted.preview.export import save_ppm, to_ppm

        image = np.full((2, 3, 3), 0.25)
        path = tmp_path / "out.ppm"
        save_ppm(image, path)
        assert path.read_text(encoding="ascii") == to_ppm(image)

    def test_save_png(self, tmp_path):
        """Test PNG files hold the quantised pixels."""
        from whitted.preview.export import quantize, save_png

        image = np.zeros((4, 6, 3))
        image[1, 2] = (1.0, 0.5, 0.0)
        path = tmp_path / "out.png"
        save_png(image, path)

        loaded = np.array(PILImage.open(path))
        assert loaded.shape == (4, 6, 3)
        np.testing.assert_array_equal(loaded, quantize(image))
