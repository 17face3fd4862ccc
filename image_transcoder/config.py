"""
Image Transcoder - Configuration
================================
Tunable parameters for the transcoders and exporters.
"""

from dataclasses import dataclass, replace

from image_transcoder.constants import (
    ASCII_RAMP,
    DARK_THRESHOLD,
    EMOJI_RAMP,
    MAX_UPLOAD_BYTES,
    PALETTE_SIZE,
    THUMBNAIL_SIZE,
    GlyphRamp,
)


@dataclass
class TranscoderConfig:
    """Configuration for all conversion kinds."""

    # ASCII
    ascii_width: int = 100
    ascii_aspect: float = 0.5                # Vertical compression for glyph cells
    ascii_ramp: GlyphRamp = ASCII_RAMP

    # Emoji
    emoji_width: int = 30
    emoji_aspect: float = 1.0
    emoji_ramp: GlyphRamp = EMOJI_RAMP

    # Braille
    braille_width: int = 60
    braille_aspect: float = 0.5
    braille_threshold: int = DARK_THRESHOLD

    # Vector
    vector_threshold: int = DARK_THRESHOLD

    # Palette / thumbnail
    palette_size: int = PALETTE_SIZE
    thumbnail_size: int = THUMBNAIL_SIZE

    # Source loading
    max_upload_bytes: int = MAX_UPLOAD_BYTES

    def with_width(self, kind: str, width: int) -> 'TranscoderConfig':
        """Return a copy with the output width of a text kind overridden."""
        field_name = f"{kind}_width"
        if not hasattr(self, field_name):
            raise ValueError(f"'{kind}' has no configurable width")
        if width <= 0:
            raise ValueError("Width must be positive")
        return replace(self, **{field_name: width})


class Presets:
    """Predefined configuration presets."""

    @staticmethod
    def default() -> TranscoderConfig:
        return TranscoderConfig()

    @staticmethod
    def compact() -> TranscoderConfig:
        """Small output suited to chat messages."""
        return TranscoderConfig(ascii_width=60, emoji_width=16, braille_width=30)

    @staticmethod
    def detailed() -> TranscoderConfig:
        """Wide output for large terminals or printing."""
        return TranscoderConfig(ascii_width=160, emoji_width=48, braille_width=120)
