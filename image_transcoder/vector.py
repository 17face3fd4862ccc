"""
Image Transcoder - Vector Tracing
=================================
Binarize a full-resolution buffer and trace it into responsive SVG markup.
"""

import io
import logging
import re
from typing import Optional

import numpy as np

from image_transcoder.constants import DARK_THRESHOLD
from image_transcoder.errors import TraceError, VectorConversionError
from image_transcoder.pixels import PixelBuffer, luminance_map

try:
    import vtracer
except ImportError:
    vtracer = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)


# =============================================================================
# BINARIZATION
# =============================================================================

def binarize(source: PixelBuffer, threshold: int = DARK_THRESHOLD) -> PixelBuffer:
    """Pure black/white copy of the buffer with alpha forced opaque."""
    value = np.where(luminance_map(source) < threshold, 0, 255).astype(np.uint8)
    out = np.empty((source.height, source.width, 4), dtype=np.uint8)
    out[:, :, 0] = value
    out[:, :, 1] = value
    out[:, :, 2] = value
    out[:, :, 3] = 255
    return PixelBuffer.from_array(out)


# =============================================================================
# TRACERS
# =============================================================================

class Tracer:
    """Bitmap tracing capability: binary raster in, SVG markup out."""

    def trace(self, raster: PixelBuffer) -> str:
        raise NotImplementedError


class VtracerTracer(Tracer):
    """Tracer backed by the vtracer library in binary color mode."""

    def __init__(self, **options):
        self.options = {
            'colormode': 'binary',
            'filter_speckle': 4,
            'mode': 'spline',
        }
        self.options.update(options)

    def trace(self, raster: PixelBuffer) -> str:
        if vtracer is None:
            raise TraceError("vtracer is not installed")

        buf = io.BytesIO()
        raster.to_image().save(buf, format='PNG')
        try:
            return vtracer.convert_raw_image_to_svg(
                buf.getvalue(), img_format='png', **self.options
            )
        except Exception as e:
            raise TraceError(f"vtracer failed: {e}") from e


# =============================================================================
# SVG POST-PROCESSING
# =============================================================================

_ROOT_TAG = re.compile(r'<svg\b[^>]*>')
_WIDTH_ATTR = re.compile(r'(?<![\w-])width="(\d+(?:\.\d+)?)(?:px)?"')
_HEIGHT_ATTR = re.compile(r'(?<![\w-])height="(\d+(?:\.\d+)?)(?:px)?"')


def make_responsive(svg: str) -> str:
    """
    Let traced markup scale with its container.

    Fixed pixel width/height on the root element become 100% and
    preserveAspectRatio="xMidYMid meet" is added to the root element.
    A root without a viewBox gets one spanning the original pixel size,
    so the paths keep their coordinate system. Nested elements are left
    untouched.
    """
    match = _ROOT_TAG.search(svg)
    if match is None:
        raise TraceError("Tracer output has no <svg> root element")

    tag = match.group(0)
    width = _WIDTH_ATTR.search(tag)
    height = _HEIGHT_ATTR.search(tag)
    if 'viewBox=' not in tag and width and height:
        end = -2 if tag.endswith('/>') else -1
        tag = (tag[:end].rstrip()
               + f' viewBox="0 0 {width.group(1)} {height.group(1)}"' + tag[end:])

    tag = _WIDTH_ATTR.sub('width="100%"', tag, count=1)
    tag = _HEIGHT_ATTR.sub('height="100%"', tag, count=1)
    if 'preserveAspectRatio=' not in tag:
        tag = '<svg preserveAspectRatio="xMidYMid meet"' + tag[len('<svg'):]

    return svg[:match.start()] + tag + svg[match.end():]


class VectorTranscoder:
    """Full-resolution binarization followed by tracing."""

    def __init__(self, tracer: Optional[Tracer] = None,
                 threshold: int = DARK_THRESHOLD):
        self.tracer = tracer or VtracerTracer()
        self.threshold = threshold

    def transcode(self, source: PixelBuffer) -> str:
        """
        Trace a buffer into SVG markup.

        Raises:
            VectorConversionError: If tracing fails for any reason
        """
        raster = binarize(source, self.threshold)
        try:
            svg = make_responsive(self.tracer.trace(raster))
        except TraceError as e:
            logger.error("Tracing failed: %s", e.message)
            raise VectorConversionError(f"Failed to trace image to vector: {e.message}") from e
        except Exception as e:
            logger.error("Tracer raised unexpectedly: %s", e)
            raise VectorConversionError(f"Failed to trace image to vector: {e}") from e
        return svg
