"""Shared test fixtures."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from image_transcoder.filters import Compositor
from image_transcoder.ocr import OcrEngine
from image_transcoder.pixels import PixelBuffer
from image_transcoder.source import load_bytes
from image_transcoder.vector import Tracer


BLACK = (0, 0, 0)
WHITE = (255, 255, 255)

TRACED_SVG = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<svg version="1.1" xmlns="http://www.w3.org/2000/svg" width="40" height="20">\n'
    '<path d="M0 0 L10 0 L10 10 Z" fill="#000000" stroke-width="2" width="7"/>\n'
    '</svg>'
)


def solid(width: int, height: int, rgb=BLACK) -> PixelBuffer:
    return PixelBuffer.from_pixels(width, height, [rgb] * (width * height))


def gray_rows(width: int, levels) -> PixelBuffer:
    """One row per gray level, top to bottom."""
    pixels = []
    for level in levels:
        pixels.extend([(level, level, level)] * width)
    return PixelBuffer.from_pixels(width, len(levels), pixels)


def png_bytes(buffer: PixelBuffer) -> bytes:
    buf = io.BytesIO()
    buffer.to_image().save(buf, format='PNG')
    return buf.getvalue()


class FakeTracer(Tracer):
    def __init__(self, svg: str = TRACED_SVG, error: Exception | None = None):
        self.svg = svg
        self.error = error
        self.rasters = []

    def trace(self, raster):
        self.rasters.append(raster)
        if self.error is not None:
            raise self.error
        return self.svg


class FakeCompositor(Compositor):
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []

    def composite(self, source, descriptor):
        self.calls.append(descriptor)
        if self.error is not None:
            raise self.error
        return b'PNG:' + descriptor.encode()


class FakeOcr(OcrEngine):
    def __init__(self, text: str = 'HELLO', error: Exception | None = None):
        self.text = text
        self.error = error

    def recognize(self, image):
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def checker() -> PixelBuffer:
    """2x2 black/white checkerboard, each row black then white."""
    return PixelBuffer.from_pixels(2, 2, [BLACK, WHITE, BLACK, WHITE])


@pytest.fixture
def gradient_image() -> Image.Image:
    img = Image.new('RGB', (64, 32))
    for x in range(64):
        for y in range(32):
            img.putpixel((x, y), (x * 4, x * 4, x * 4))
    return img


@pytest.fixture
def source_image(gradient_image):
    buf = io.BytesIO()
    gradient_image.save(buf, format='PNG')
    return load_bytes(buf.getvalue(), filename='gradient.png')
