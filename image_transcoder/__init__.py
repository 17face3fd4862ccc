"""
Image Transcoder
================
Converts raster images into alternate representations: ASCII, emoji and
Braille text art, traced SVG vectors, OCR text, color palettes, filtered
copies, thumbnails, Base64 data URLs and PDF pages.
"""

from image_transcoder.artifacts import ConversionArtifact
from image_transcoder.config import Presets, TranscoderConfig
from image_transcoder.constants import (
    ASCII_RAMP,
    EMOJI_RAMP,
    ConversionKind,
    GlyphRamp,
    ImageFilter,
)
from image_transcoder.converter import ImageConverter
from image_transcoder.errors import (
    ConversionError,
    DecodeError,
    FilterError,
    OCRError,
    TraceError,
    VectorConversionError,
)
from image_transcoder.filters import (
    Compositor,
    FilterEngine,
    PillowCompositor,
    filter_descriptor,
)
from image_transcoder.ocr import OcrEngine, TesseractEngine, extract_text
from image_transcoder.palette import extract_palette
from image_transcoder.pixels import (
    PixelBuffer,
    decode_image,
    luminance,
    resample,
)
from image_transcoder.source import SourceImage, format_bytes, load_bytes, load_file
from image_transcoder.transcoders import (
    AsciiTranscoder,
    BrailleTranscoder,
    EmojiTranscoder,
)
from image_transcoder.vector import Tracer, VectorTranscoder, VtracerTracer, binarize

__all__ = [
    # Main classes
    'ImageConverter',
    'TranscoderConfig',
    'Presets',
    'ConversionArtifact',

    # Enums and ramps
    'ConversionKind',
    'ImageFilter',
    'GlyphRamp',
    'ASCII_RAMP',
    'EMOJI_RAMP',

    # Errors
    'ConversionError',
    'DecodeError',
    'TraceError',
    'VectorConversionError',
    'FilterError',
    'OCRError',

    # Pixels
    'PixelBuffer',
    'decode_image',
    'luminance',
    'resample',

    # Sources
    'SourceImage',
    'load_file',
    'load_bytes',
    'format_bytes',

    # Transcoders
    'AsciiTranscoder',
    'EmojiTranscoder',
    'BrailleTranscoder',
    'VectorTranscoder',
    'Tracer',
    'VtracerTracer',
    'binarize',

    # Palette, filters, OCR
    'extract_palette',
    'FilterEngine',
    'Compositor',
    'PillowCompositor',
    'filter_descriptor',
    'OcrEngine',
    'TesseractEngine',
    'extract_text',
]
