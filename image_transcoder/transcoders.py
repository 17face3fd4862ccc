"""
Image Transcoder - Text Transcoders
===================================
Re-encode a pixel buffer as ASCII, emoji or Unicode Braille text.

All three share the same pipeline: nearest-neighbor resample, unweighted
luminance, then quantize into a symbol alphabet. Output rows are always
terminated by a newline.
"""

import logging
from typing import List, Optional

import numpy as np

from image_transcoder.config import TranscoderConfig
from image_transcoder.constants import (
    BRAILLE_BASE,
    BRAILLE_CELL_HEIGHT,
    BRAILLE_CELL_WIDTH,
    BRAILLE_DOTS,
    DARK_THRESHOLD,
    GlyphRamp,
)
from image_transcoder.pixels import PixelBuffer, luminance_map, resample

logger = logging.getLogger(__name__)


# =============================================================================
# RAMP MAPPING
# =============================================================================

def ramp_indices(buffer: PixelBuffer, ramp: GlyphRamp) -> np.ndarray:
    """Ramp index per pixel, shape (height, width)."""
    return luminance_map(buffer).astype(np.int64) * (len(ramp) - 1) // 255


def render_ramp(buffer: PixelBuffer, ramp: GlyphRamp) -> str:
    """Map every pixel to a ramp symbol, row-major, newline after each row."""
    symbols = ramp.symbols
    lines = []
    for row in ramp_indices(buffer, ramp):
        lines.append(''.join(symbols[i] for i in row))
        lines.append('\n')
    return ''.join(lines)


class AsciiTranscoder:
    """Brightness to a 10-glyph printable ramp."""

    def __init__(self, config: Optional[TranscoderConfig] = None):
        self.config = config or TranscoderConfig()

    def transcode(self, source: PixelBuffer) -> str:
        resized = resample(source, self.config.ascii_width, self.config.ascii_aspect)
        return render_ramp(resized, self.config.ascii_ramp)


class EmojiTranscoder:
    """Brightness to a 6-symbol emoji ramp.

    No vertical compression is applied here, unlike ASCII and Braille.
    """

    def __init__(self, config: Optional[TranscoderConfig] = None):
        self.config = config or TranscoderConfig()

    def transcode(self, source: PixelBuffer) -> str:
        resized = resample(source, self.config.emoji_width, self.config.emoji_aspect)
        return render_ramp(resized, self.config.emoji_ramp)


# =============================================================================
# BRAILLE
# =============================================================================

# Bit weight of each sub-pixel, indexed [dy, dx]
_BRAILLE_WEIGHTS = np.zeros((BRAILLE_CELL_HEIGHT, BRAILLE_CELL_WIDTH), dtype=np.int64)
for _dx, _dy, _bit in BRAILLE_DOTS:
    _BRAILLE_WEIGHTS[_dy, _dx] = _bit


def braille_masks(dark: np.ndarray) -> np.ndarray:
    """
    Pack a boolean dark map into Braille cell masks.

    Args:
        dark: (height, width) boolean array, True where a dot is drawn

    Returns:
        (ceil(height / 4), ceil(width / 2)) int array of 8-bit masks.
        Sub-positions past the edge of the map count as unset.
    """
    height, width = dark.shape
    rows = -(-height // BRAILLE_CELL_HEIGHT)
    cols = -(-width // BRAILLE_CELL_WIDTH)

    padded = np.zeros((rows * BRAILLE_CELL_HEIGHT, cols * BRAILLE_CELL_WIDTH), dtype=np.int64)
    padded[:height, :width] = dark

    cells = padded.reshape(rows, BRAILLE_CELL_HEIGHT, cols, BRAILLE_CELL_WIDTH)
    return (cells * _BRAILLE_WEIGHTS[None, :, None, :]).sum(axis=(1, 3))


def braille_char(mask: int) -> str:
    return chr(BRAILLE_BASE + mask)


def encode_cell(block: np.ndarray, threshold: int = DARK_THRESHOLD) -> str:
    """Encode a single luminance block (up to 4 rows x 2 columns)."""
    mask = braille_masks(np.asarray(block) < threshold)[0, 0]
    return braille_char(int(mask))


class BrailleTranscoder:
    """2x4 pixel blocks to Unicode Braille dot patterns."""

    def __init__(self, config: Optional[TranscoderConfig] = None):
        self.config = config or TranscoderConfig()

    def cell_rows(self, source: PixelBuffer) -> List[str]:
        resized = resample(source, self.config.braille_width, self.config.braille_aspect)
        dark = luminance_map(resized) < self.config.braille_threshold
        masks = braille_masks(dark)
        logger.debug("Braille grid %dx%d cells", masks.shape[1], masks.shape[0])
        return [''.join(braille_char(int(m)) for m in row) for row in masks]

    def transcode(self, source: PixelBuffer) -> str:
        return ''.join(row + '\n' for row in self.cell_rows(source))
