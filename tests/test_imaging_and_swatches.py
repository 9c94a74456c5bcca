"""
Unit tests for imaging helpers and palette swatch rendering.
"""

import base64
import io

import numpy as np
import pytest
from PIL import Image

from dominant_colors.services.colors.swatches import hex_to_rgb, render_palette_strip, rgb_to_hex
from dominant_colors.services.imaging import (
    decode_image_bytes,
    downscale_to_width,
    encode_png,
    encode_png_b64,
    load_image,
    validate_magic_bytes,
    write_png,
)


def _png_bytes(rgb: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(rgb).save(buffer, format="PNG")
    return buffer.getvalue()


class TestHexConversion:
    """Test RGB <-> hex helpers"""

    def test_rgb_to_hex_basic_colors(self):
        assert rgb_to_hex([255, 0, 0]) == "#FF0000"
        assert rgb_to_hex(np.array([0, 255, 0], dtype=np.uint8)) == "#00FF00"
        assert rgb_to_hex((31, 78, 121)) == "#1F4E79"

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#D3B58F") == (211, 181, 143)
        assert hex_to_rgb("0A2A43") == (10, 42, 67)


class TestPaletteStrip:
    """Test palette tile rendering"""

    def test_tiles_side_by_side(self):
        colors = [(255, 0, 0), (0, 255, 0), (0, 0, 255)]
        strip = render_palette_strip(colors, tile_size=8)

        assert strip.shape == (8, 24, 3)
        assert strip.dtype == np.uint8
        for i, color in enumerate(colors):
            assert np.all(strip[:, i * 8:(i + 1) * 8] == np.array(color, dtype=np.uint8))

    def test_accepts_numpy_palette(self):
        strip = render_palette_strip(np.array([[1, 2, 3]], dtype=np.uint8))
        assert strip.shape == (64, 64, 3)

    def test_empty_palette(self):
        with pytest.raises(ValueError):
            render_palette_strip([])

    def test_bad_tile_size(self):
        with pytest.raises(ValueError):
            render_palette_strip([(0, 0, 0)], tile_size=0)


class TestDecoding:
    """Test image decoding and validation"""

    def test_magic_bytes(self):
        assert validate_magic_bytes(b'\x89PNG\r\n\x1a\n0000') == "image/png"
        assert validate_magic_bytes(b'\xff\xd8\xff\xe0000000') == "image/jpeg"
        with pytest.raises(ValueError):
            validate_magic_bytes(b"GIF89a0000")
        with pytest.raises(ValueError):
            validate_magic_bytes(b"\x89PNG")

    def test_decode_png_keeps_rgb_order(self):
        rgb = np.zeros((4, 5, 3), dtype=np.uint8)
        rgb[:, :] = (200, 100, 50)
        decoded = decode_image_bytes(_png_bytes(rgb))
        assert decoded.shape == (4, 5, 3)
        np.testing.assert_array_equal(decoded, rgb)

    def test_decode_converts_rgba(self):
        rgba = np.full((3, 3, 4), (10, 20, 30, 255), dtype=np.uint8)
        buffer = io.BytesIO()
        Image.fromarray(rgba).save(buffer, format="PNG")
        decoded = decode_image_bytes(buffer.getvalue())
        assert decoded.shape == (3, 3, 3)

    def test_decode_corrupt_png(self):
        with pytest.raises(ValueError):
            decode_image_bytes(b'\x89PNG\r\n\x1a\n' + b"garbage" * 4)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ValueError):
            load_image(tmp_path / "missing.png")


class TestEncoding:
    """Test PNG encoding round trips through OpenCV"""

    def test_encode_png_preserves_channel_order(self):
        rgb = np.zeros((2, 2, 3), dtype=np.uint8)
        rgb[0, 0] = (255, 0, 0)
        decoded = decode_image_bytes(encode_png(rgb))
        np.testing.assert_array_equal(decoded, rgb)

    def test_encode_png_b64(self):
        rgb = np.full((2, 3, 3), 7, dtype=np.uint8)
        raw = base64.b64decode(encode_png_b64(rgb))
        assert raw.startswith(b'\x89PNG')

    def test_write_and_load(self, tmp_path):
        rgb = np.full((3, 4, 3), (1, 2, 3), dtype=np.uint8)
        path = write_png(tmp_path / "out.png", rgb)
        np.testing.assert_array_equal(load_image(path), rgb)


class TestDownscale:
    """Test working-width scaling"""

    def test_shrinks_and_keeps_aspect(self):
        img = np.zeros((300, 480, 3), dtype=np.uint8)
        scaled = downscale_to_width(img, 240)
        assert scaled.shape == (150, 240, 3)

    def test_never_upscales(self):
        img = np.zeros((10, 20, 3), dtype=np.uint8)
        assert downscale_to_width(img, 240) is img

    def test_zero_disables(self):
        img = np.zeros((300, 480, 3), dtype=np.uint8)
        assert downscale_to_width(img, 0) is img

    def test_thin_image_keeps_one_row(self):
        img = np.zeros((1, 1000, 3), dtype=np.uint8)
        assert downscale_to_width(img, 100).shape == (1, 100, 3)
