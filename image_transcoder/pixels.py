"""
Image Transcoder - Pixel Buffers
================================
Immutable RGBA pixel buffers, the nearest-neighbor resampler and the
luminance estimator shared by every transcoder.
"""

import io
import logging
import math
from dataclasses import dataclass
from typing import BinaryIO, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from image_transcoder.errors import DecodeError

logger = logging.getLogger(__name__)


# =============================================================================
# PIXEL BUFFER
# =============================================================================

@dataclass(frozen=True)
class PixelBuffer:
    """A width x height grid of RGBA pixels stored as flat bytes."""

    width: int
    height: int
    data: bytes

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid buffer size {self.width}x{self.height}")
        if not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise ValueError(
                f"Buffer length {len(self.data)} does not match "
                f"{self.width}x{self.height}x4 = {expected}"
            )

    @property
    def size(self):
        return self.width, self.height

    def to_array(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the pixels."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(
            (self.height, self.width, 4)
        )

    def to_image(self) -> Image.Image:
        return Image.frombytes('RGBA', (self.width, self.height), self.data)

    def pixel(self, x: int, y: int):
        """RGBA tuple at (x, y)."""
        i = (y * self.width + x) * 4
        return tuple(self.data[i:i + 4])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'PixelBuffer':
        """Build a buffer from an (h, w, 4) or (h, w, 3) array."""
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"Expected an (h, w, 3|4) array, got {arr.shape}")
        arr = np.clip(arr, 0, 255).astype(np.uint8)
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        height, width = arr.shape[:2]
        return cls(width, height, np.ascontiguousarray(arr).tobytes())

    @classmethod
    def from_image(cls, image: Image.Image) -> 'PixelBuffer':
        rgba = image if image.mode == 'RGBA' else image.convert('RGBA')
        width, height = rgba.size
        return cls(width, height, rgba.tobytes())

    @classmethod
    def from_pixels(cls, width: int, height: int, pixels) -> 'PixelBuffer':
        """Build a buffer from row-major RGB or RGBA tuples."""
        data = bytearray()
        for pixel in pixels:
            if len(pixel) == 3:
                data.extend((*pixel, 255))
            else:
                data.extend(pixel)
        return cls(width, height, bytes(data))


# =============================================================================
# PIXEL SOURCE
# =============================================================================

ImageInput = Union[str, bytes, BinaryIO]


def decode_image(source: ImageInput) -> PixelBuffer:
    """
    Decode an image into an RGBA pixel buffer.

    Args:
        source: File path, encoded image bytes or a binary file object

    Returns:
        PixelBuffer with the full-resolution pixels

    Raises:
        DecodeError: If the image cannot be read or decoded
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        with Image.open(source) as image:
            image.load()
            return PixelBuffer.from_image(image)
    except FileNotFoundError as e:
        raise DecodeError(f"Image file not found: {e.filename}") from e
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise DecodeError(f"Failed to decode image: {e}") from e


# =============================================================================
# LUMINANCE
# =============================================================================

def luminance(r: int, g: int, b: int) -> int:
    """Unweighted channel average, floored. Alpha is never considered."""
    return (r + g + b) // 3


def luminance_map(buffer: PixelBuffer) -> np.ndarray:
    """Per-pixel luminance as an (h, w) int array."""
    rgb = buffer.to_array()[:, :, :3].astype(np.uint16)
    return rgb.sum(axis=2) // 3


# =============================================================================
# RESAMPLER
# =============================================================================

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def target_height(source: PixelBuffer, target_width: int,
                  aspect_correction: float = 1.0) -> int:
    """Height that keeps the source aspect ratio, scaled by the correction."""
    height = round_half_up(
        target_width * source.height / source.width * aspect_correction
    )
    return max(1, height)


def resample_to(source: PixelBuffer, width: int, height: int) -> PixelBuffer:
    """Nearest-neighbor resize into a newly allocated buffer."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid target size {width}x{height}")
    resized = source.to_image().resize((width, height), Image.Resampling.NEAREST)
    return PixelBuffer.from_image(resized)


def resample(source: PixelBuffer, target_width: int,
             aspect_correction: float = 1.0) -> PixelBuffer:
    """
    Downsample a buffer to a target width.

    Args:
        source: Full-resolution buffer
        target_width: Output width in cells
        aspect_correction: Vertical factor, 0.5 compensates for glyphs
            being about twice as tall as they are wide

    Returns:
        New PixelBuffer of size target_width x derived height
    """
    if target_width <= 0:
        raise ValueError("Target width must be positive")
    height = target_height(source, target_width, aspect_correction)
    logger.debug("Resampling %dx%d -> %dx%d",
                 source.width, source.height, target_width, height)
    return resample_to(source, target_width, height)
