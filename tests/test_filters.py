"""Tests for the filter engine and the Pillow compositor."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from conftest import FakeCompositor, solid
from image_transcoder.constants import ImageFilter
from image_transcoder.errors import FilterError
from image_transcoder.filters import (
    FilterEngine,
    PillowCompositor,
    filter_descriptor,
    parse_descriptor,
)
from image_transcoder.pixels import PixelBuffer


class TestDescriptors:
    @pytest.mark.parametrize('name, descriptor', [
        ('grayscale', 'grayscale(100%)'),
        ('invert', 'invert(100%)'),
        ('sepia', 'sepia(100%)'),
        ('blur', 'blur(5px)'),
        ('brightness', 'brightness(150%)'),
        ('contrast', 'contrast(150%)'),
    ])
    def test_known_names(self, name, descriptor):
        assert filter_descriptor(name) == descriptor

    def test_enum_member(self):
        assert filter_descriptor(ImageFilter.SEPIA) == 'sepia(100%)'

    def test_unknown_name_is_none(self):
        assert filter_descriptor('vignette') == 'none'

    def test_names_are_case_sensitive(self):
        assert filter_descriptor('GRAYSCALE') == 'none'
        assert filter_descriptor('Sepia') == 'none'

    def test_parse_chain(self):
        assert parse_descriptor('grayscale(100%) blur(5px)') == [
            ('grayscale', 100.0, '%'),
            ('blur', 5.0, 'px'),
        ]

    def test_parse_none(self):
        assert parse_descriptor('none') == []

    def test_parse_malformed(self):
        with pytest.raises(FilterError):
            parse_descriptor('grayscale 100%')


class TestPillowCompositor:
    def _apply(self, rgb, descriptor):
        return PillowCompositor().apply(solid(2, 2, rgb), descriptor).pixel(0, 0)

    def test_none_is_passthrough(self):
        assert self._apply((10, 20, 30), 'none') == (10, 20, 30, 255)

    def test_invert(self):
        assert self._apply((10, 20, 30), 'invert(100%)') == (245, 235, 225, 255)

    def test_grayscale_equalizes_channels(self):
        r, g, b, a = self._apply((200, 40, 90), 'grayscale(100%)')
        assert r == g == b
        assert a == 255

    def test_sepia_of_white(self):
        # Row sums of the sepia matrix, clipped at 255
        assert self._apply((255, 255, 255), 'sepia(100%)') == (255, 255, 239, 255)

    def test_brightness_scales_and_clips(self):
        assert self._apply((100, 200, 0), 'brightness(150%)') == (150, 255, 0, 255)

    def test_contrast_pushes_away_from_middle(self):
        r, g, b, _ = self._apply((100, 160, 128), 'contrast(150%)')
        assert r < 100 and g > 160 and b == 128

    def test_alpha_preserved(self):
        source = PixelBuffer.from_pixels(1, 1, [(10, 20, 30, 77)])
        assert PillowCompositor().apply(source, 'invert(100%)').pixel(0, 0)[3] == 77

    def test_blur_keeps_uniform_image(self):
        out = PillowCompositor().apply(solid(8, 8, (50, 60, 70)), 'blur(5px)')
        assert out.size == (8, 8)
        assert out.pixel(4, 4) == (50, 60, 70, 255)

    def test_unknown_function_raises(self):
        with pytest.raises(FilterError):
            PillowCompositor().apply(solid(1, 1), 'hue-rotate(90%)')

    def test_composite_returns_png(self):
        data = PillowCompositor().composite(solid(3, 2), 'grayscale(100%)')
        with Image.open(io.BytesIO(data)) as image:
            assert image.format == 'PNG'
            assert image.size == (3, 2)


class TestFilterEngine:
    def test_passes_descriptor_to_compositor(self):
        compositor = FakeCompositor()
        assert FilterEngine(compositor).apply(solid(1, 1), 'blur') == b'PNG:blur(5px)'
        assert compositor.calls == ['blur(5px)']

    def test_unknown_filter_uses_none(self):
        compositor = FakeCompositor()
        FilterEngine(compositor).apply(solid(1, 1), 'nope')
        assert compositor.calls == ['none']

    def test_compositor_failure_becomes_filter_error(self):
        engine = FilterEngine(FakeCompositor(error=RuntimeError('no canvas')))
        with pytest.raises(FilterError, match='no canvas'):
            engine.apply(solid(1, 1), 'invert')
