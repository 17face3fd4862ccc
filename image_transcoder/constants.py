"""
Image Transcoder - Constants
============================
Conversion kinds, filter names, glyph ramps and Braille layout constants.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


# =============================================================================
# ENUMS
# =============================================================================

class ConversionKind(Enum):
    """Supported output kinds."""
    ASCII = 'ascii'
    EMOJI = 'emoji'
    BRAILLE = 'braille'
    VECTOR = 'vector'
    SVG = 'svg'
    OCR = 'ocr'
    PALETTE = 'palette'
    FILTER = 'filter'
    THUMBNAIL = 'thumbnail'
    BASE64 = 'base64'
    PDF = 'pdf'

    @classmethod
    def parse(cls, value) -> 'ConversionKind':
        """Accept an enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unsupported conversion format: {value}") from None


class ImageFilter(Enum):
    """Named cosmetic filters."""
    GRAYSCALE = 'grayscale'
    INVERT = 'invert'
    SEPIA = 'sepia'
    BLUR = 'blur'
    BRIGHTNESS = 'brightness'
    CONTRAST = 'contrast'


# =============================================================================
# GLYPH RAMPS
# =============================================================================

@dataclass(frozen=True)
class GlyphRamp:
    """Ordered symbols, index 0 darkest and the last index lightest."""

    name: str
    symbols: Tuple[str, ...]

    def __post_init__(self):
        if not self.symbols:
            raise ValueError(f"Glyph ramp '{self.name}' is empty")

    def __len__(self) -> int:
        return len(self.symbols)

    def __getitem__(self, index: int) -> str:
        return self.symbols[index]

    def index_for(self, brightness: int) -> int:
        """Quantize a brightness in [0, 255] to a ramp index.

        Equivalent to ``floor(brightness / 255 * (len - 1))`` in exact
        integer arithmetic.
        """
        brightness = max(0, min(255, int(brightness)))
        return brightness * (len(self.symbols) - 1) // 255

    def glyph_for(self, brightness: int) -> str:
        return self.symbols[self.index_for(brightness)]

    @classmethod
    def from_string(cls, name: str, chars: str) -> 'GlyphRamp':
        """Build a ramp of single characters."""
        return cls(name, tuple(chars))


ASCII_RAMP = GlyphRamp.from_string('ascii', "@%#*+=-:. ")

EMOJI_RAMP = GlyphRamp('emoji', (
    '⚫',        # black circle
    '\U0001f535',    # blue circle
    '\U0001f7e3',    # purple circle
    '\U0001f7e2',    # green circle
    '\U0001f7e1',    # yellow circle
    '⚪',        # white circle
))


# =============================================================================
# BRAILLE
# =============================================================================

BRAILLE_BASE = 0x2800
BRAILLE_CELL_WIDTH = 2
BRAILLE_CELL_HEIGHT = 4

# Bit index for sub-pixel (dx, dy) is dy + dx * 4
BRAILLE_DOTS = [
    (dx, dy, 1 << (dy + dx * BRAILLE_CELL_HEIGHT))
    for dx in range(BRAILLE_CELL_WIDTH)
    for dy in range(BRAILLE_CELL_HEIGHT)
]

# Dark threshold shared by Braille dots and vector binarization
DARK_THRESHOLD = 128


# =============================================================================
# FILTERS
# =============================================================================

FILTER_DESCRIPTORS = {
    ImageFilter.GRAYSCALE: 'grayscale(100%)',
    ImageFilter.INVERT: 'invert(100%)',
    ImageFilter.SEPIA: 'sepia(100%)',
    ImageFilter.BLUR: 'blur(5px)',
    ImageFilter.BRIGHTNESS: 'brightness(150%)',
    ImageFilter.CONTRAST: 'contrast(150%)',
}

NO_FILTER = 'none'


# =============================================================================
# SOURCE FORMATS
# =============================================================================

SUPPORTED_FORMATS = {
    'image/jpeg': ('.jpg', '.jpeg'),
    'image/png': ('.png',),
    'image/gif': ('.gif',),
    'image/webp': ('.webp',),
    'image/svg+xml': ('.svg',),
    'image/heic': ('.heic',),
    'image/heif': ('.heif',),
}

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

THUMBNAIL_SIZE = 48
PALETTE_SIZE = 6
