"""Tests for pixel buffers, luminance and the resampler."""

from __future__ import annotations

import numpy as np
import pytest

from conftest import WHITE, png_bytes, solid
from image_transcoder.errors import DecodeError
from image_transcoder.pixels import (
    PixelBuffer,
    decode_image,
    luminance,
    luminance_map,
    resample,
    resample_to,
    round_half_up,
    target_height,
)


class TestPixelBuffer:
    def test_length_must_match_dimensions(self):
        with pytest.raises(ValueError):
            PixelBuffer(2, 2, bytes(15))

    def test_dimensions_must_be_positive(self):
        with pytest.raises(ValueError):
            PixelBuffer(0, 1, b'')

    def test_array_view_shape(self):
        buf = solid(3, 2, (1, 2, 3))
        arr = buf.to_array()
        assert arr.shape == (2, 3, 4)
        assert tuple(arr[1, 2]) == (1, 2, 3, 255)

    def test_from_array_adds_opaque_alpha(self):
        buf = PixelBuffer.from_array(np.zeros((2, 2, 3), dtype=np.uint8))
        assert buf.pixel(1, 1) == (0, 0, 0, 255)

    def test_image_round_trip_keeps_pixels(self, checker):
        assert PixelBuffer.from_image(checker.to_image()) == checker


class TestLuminance:
    def test_unweighted_floor_average(self):
        assert luminance(10, 20, 31) == 20

    def test_pure_red_is_not_perceptually_weighted(self):
        # Characterization: plain average, not ITU-R luma
        assert luminance(255, 0, 0) == 85

    def test_map_ignores_alpha(self):
        buf = PixelBuffer.from_pixels(2, 1, [(90, 90, 90, 0), (90, 90, 90, 255)])
        assert luminance_map(buf).tolist() == [[90, 90]]

    def test_map_matches_scalar(self, checker):
        assert luminance_map(checker).tolist() == [[0, 255], [0, 255]]


class TestResampler:
    def test_height_uses_aspect_and_correction(self):
        source = solid(100, 50)
        assert target_height(source, 100, 0.5) == 25
        assert target_height(source, 30, 1.0) == 15

    def test_height_rounds_half_up(self):
        assert round_half_up(1.5) == 2
        assert round_half_up(2.5) == 3
        assert target_height(solid(10, 10), 3, 0.5) == 2

    def test_height_is_at_least_one(self):
        assert target_height(solid(100, 1), 10, 0.5) == 1

    def test_resample_output_dimensions(self):
        out = resample(solid(40, 20), 10, 0.5)
        assert out.size == (10, 3)
        assert len(out.data) == 10 * 3 * 4

    def test_resample_allocates_new_buffer(self, checker):
        out = resample_to(checker, 2, 2)
        assert out is not checker
        assert out.data == checker.data

    def test_uniform_color_survives_downsampling(self):
        out = resample(solid(50, 50, WHITE), 7)
        assert set(out.data[i] for i in range(0, len(out.data), 4)) == {255}

    def test_rejects_non_positive_width(self):
        with pytest.raises(ValueError):
            resample(solid(2, 2), 0)


class TestDecode:
    def test_decode_png_bytes(self, checker):
        assert decode_image(png_bytes(checker)) == checker

    def test_decode_garbage_raises(self):
        with pytest.raises(DecodeError):
            decode_image(b'not an image')

    def test_decompression_bomb_raises(self, monkeypatch):
        from PIL import Image
        monkeypatch.setattr(Image, 'MAX_IMAGE_PIXELS', 100)
        with pytest.raises(DecodeError, match='Failed to decode'):
            decode_image(png_bytes(solid(40, 40)))

    def test_decode_missing_file_raises(self, tmp_path):
        with pytest.raises(DecodeError, match='not found'):
            decode_image(str(tmp_path / 'missing.png'))

    def test_decode_grayscale_expands_to_rgba(self, tmp_path):
        from PIL import Image
        path = tmp_path / 'gray.png'
        Image.new('L', (3, 1), 200).save(path)
        buf = decode_image(str(path))
        assert buf.pixel(0, 0) == (200, 200, 200, 255)
