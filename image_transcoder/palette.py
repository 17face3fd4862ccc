"""
Image Transcoder - Palette Extraction
=====================================
Most frequent exact colors in a full-resolution buffer.
"""

from collections import Counter
from typing import Dict, List

import numpy as np

from image_transcoder.constants import PALETTE_SIZE
from image_transcoder.pixels import PixelBuffer


def color_histogram(source: PixelBuffer) -> Dict[str, int]:
    """Occurrence count per exact #rrggbb color. Alpha is ignored."""
    rgb = source.to_array()[:, :, :3].reshape(-1, 3).astype(np.uint32)
    packed = (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]
    values, counts = np.unique(packed, return_counts=True)

    histogram = Counter()
    for value, count in zip(values.tolist(), counts.tolist()):
        histogram[f"#{value:06x}"] = count
    return histogram


def extract_palette(source: PixelBuffer, size: int = PALETTE_SIZE) -> List[str]:
    """
    Return the most frequent colors, most frequent first.

    Near-duplicate colors are never merged. Ties are broken by the hex
    string in ascending order so results are stable.

    Args:
        source: Full-resolution buffer
        size: Maximum number of colors to return

    Returns:
        Up to `size` lowercase hex strings
    """
    histogram = color_histogram(source)
    ranked = sorted(histogram.items(), key=lambda item: (-item[1], item[0]))
    return [color for color, _ in ranked[:size]]
