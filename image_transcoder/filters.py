"""
Image Transcoder - Filter Engine
================================
Maps filter names to CSS-style filter descriptors and hands the actual
compositing to a Compositor.
"""

import io
import logging
import re
from typing import Callable, Dict, List, Optional, Tuple, Union

import numpy as np
from PIL import ImageFilter as PilImageFilter

from image_transcoder.constants import FILTER_DESCRIPTORS, NO_FILTER, ImageFilter
from image_transcoder.errors import FilterError
from image_transcoder.pixels import PixelBuffer

logger = logging.getLogger(__name__)


def filter_descriptor(name: Union[str, ImageFilter]) -> str:
    """Descriptor for an exact filter name; anything else maps to 'none'."""
    if isinstance(name, ImageFilter):
        return FILTER_DESCRIPTORS[name]
    try:
        return FILTER_DESCRIPTORS[ImageFilter(name)]
    except ValueError:
        return NO_FILTER


# =============================================================================
# DESCRIPTOR PARSING
# =============================================================================

_FUNCTION = re.compile(r'([a-z-]+)\(\s*(-?\d+(?:\.\d+)?)\s*(%|px)?\s*\)')


def parse_descriptor(descriptor: str) -> List[Tuple[str, float, str]]:
    """
    Split a descriptor into (function, value, unit) steps.

    Example:
        'grayscale(100%) blur(5px)' -> [('grayscale', 100.0, '%'), ('blur', 5.0, 'px')]

    Raises:
        FilterError: If the descriptor is malformed
    """
    descriptor = descriptor.strip()
    if not descriptor or descriptor == NO_FILTER:
        return []

    steps = []
    pos = 0
    while pos < len(descriptor):
        if descriptor[pos].isspace():
            pos += 1
            continue
        match = _FUNCTION.match(descriptor, pos)
        if match is None:
            raise FilterError(f"Malformed filter descriptor: {descriptor!r}")
        name, value, unit = match.groups()
        steps.append((name, float(value), unit or ''))
        pos = match.end()
    return steps


# =============================================================================
# COMPOSITORS
# =============================================================================

class Compositor:
    """Raster compositing capability: applies a descriptor, returns PNG bytes."""

    def composite(self, source: PixelBuffer, descriptor: str) -> bytes:
        raise NotImplementedError


def _amount(value: float, unit: str, clamp: bool = True) -> float:
    amount = value / 100.0 if unit == '%' else value
    if clamp:
        amount = max(0.0, min(1.0, amount))
    return amount


def _color_matrix(rgb: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    return rgb @ matrix.T


def _grayscale(rgb: np.ndarray, a: float) -> np.ndarray:
    k = 1.0 - a
    matrix = np.array([
        [0.2126 + 0.7874 * k, 0.7152 - 0.7152 * k, 0.0722 - 0.0722 * k],
        [0.2126 - 0.2126 * k, 0.7152 + 0.2848 * k, 0.0722 - 0.0722 * k],
        [0.2126 - 0.2126 * k, 0.7152 - 0.7152 * k, 0.0722 + 0.9278 * k],
    ])
    return _color_matrix(rgb, matrix)


def _sepia(rgb: np.ndarray, a: float) -> np.ndarray:
    k = 1.0 - a
    matrix = np.array([
        [0.393 + 0.607 * k, 0.769 - 0.769 * k, 0.189 - 0.189 * k],
        [0.349 - 0.349 * k, 0.686 + 0.314 * k, 0.168 - 0.168 * k],
        [0.272 - 0.272 * k, 0.534 - 0.534 * k, 0.131 + 0.869 * k],
    ])
    return _color_matrix(rgb, matrix)


def _invert(rgb: np.ndarray, a: float) -> np.ndarray:
    return rgb * (1.0 - a) + (255.0 - rgb) * a


def _brightness(rgb: np.ndarray, a: float) -> np.ndarray:
    return rgb * a


def _contrast(rgb: np.ndarray, a: float) -> np.ndarray:
    return (rgb - 127.5) * a + 127.5


# name -> (function, clamp amount to [0, 1])
_COLOR_FUNCTIONS: Dict[str, Tuple[Callable[[np.ndarray, float], np.ndarray], bool]] = {
    'grayscale': (_grayscale, True),
    'sepia': (_sepia, True),
    'invert': (_invert, True),
    'brightness': (_brightness, False),
    'contrast': (_contrast, False),
}


class PillowCompositor(Compositor):
    """Compositor implemented with numpy color math and Pillow blur."""

    def apply(self, source: PixelBuffer, descriptor: str) -> PixelBuffer:
        """Apply every step of the descriptor and return the new buffer."""
        result = source
        for name, value, unit in parse_descriptor(descriptor):
            if name == 'blur':
                if unit not in ('px', ''):
                    raise FilterError(f"blur() expects a length, got {value}{unit}")
                blurred = result.to_image().filter(PilImageFilter.GaussianBlur(radius=value))
                result = PixelBuffer.from_image(blurred)
                continue

            if name not in _COLOR_FUNCTIONS:
                raise FilterError(f"Unsupported filter function: {name}()")
            if unit == 'px':
                raise FilterError(f"{name}() does not accept a length")

            func, clamp = _COLOR_FUNCTIONS[name]
            arr = result.to_array().astype(np.float64)
            arr[:, :, :3] = func(arr[:, :, :3], _amount(value, unit, clamp))
            result = PixelBuffer.from_array(np.rint(arr))
        return result

    def composite(self, source: PixelBuffer, descriptor: str) -> bytes:
        buf = io.BytesIO()
        self.apply(source, descriptor).to_image().save(buf, format='PNG')
        return buf.getvalue()


# =============================================================================
# FILTER ENGINE
# =============================================================================

class FilterEngine:
    """Resolves a filter name and delegates to the compositor."""

    def __init__(self, compositor: Optional[Compositor] = None):
        self.compositor = compositor or PillowCompositor()

    def apply(self, source: PixelBuffer, name: Union[str, ImageFilter]) -> bytes:
        """
        Apply a named filter.

        Args:
            source: Full-resolution buffer
            name: Filter name, e.g. 'sepia'

        Returns:
            PNG-encoded bytes of the filtered image

        Raises:
            FilterError: If the compositor fails
        """
        descriptor = filter_descriptor(name)
        logger.debug("Applying filter %s as %r", name, descriptor)
        try:
            return self.compositor.composite(source, descriptor)
        except FilterError:
            raise
        except Exception as e:
            raise FilterError(f"Failed to apply filter to image: {e}") from e
