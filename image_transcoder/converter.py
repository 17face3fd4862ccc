"""
Image Transcoder - Converter
============================
Single entry point that dispatches a SourceImage to the requested
conversion and packages the result as a ConversionArtifact.
"""

import logging
from typing import List, Optional, Union

from image_transcoder.artifacts import (
    ConversionArtifact,
    binary_artifact,
    text_artifact,
)
from image_transcoder.config import TranscoderConfig
from image_transcoder.constants import ConversionKind, ImageFilter
from image_transcoder.errors import ConversionError
from image_transcoder.exporters import data_url, pdf_document, svg_wrapper, thumbnail
from image_transcoder.filters import Compositor, FilterEngine
from image_transcoder.ocr import OcrEngine, extract_text
from image_transcoder.palette import extract_palette
from image_transcoder.source import SourceImage
from image_transcoder.transcoders import (
    AsciiTranscoder,
    BrailleTranscoder,
    EmojiTranscoder,
)
from image_transcoder.vector import Tracer, VectorTranscoder

logger = logging.getLogger(__name__)


class ImageConverter:
    """
    Converts source images into artifacts.

    The tracer, compositor and OCR engine are injected so that the
    heavyweight defaults (vtracer, Pillow, Tesseract) can be swapped for
    fakes.
    """

    def __init__(self, config: Optional[TranscoderConfig] = None,
                 tracer: Optional[Tracer] = None,
                 compositor: Optional[Compositor] = None,
                 ocr_engine: Optional[OcrEngine] = None):
        self.config = config or TranscoderConfig()
        self.tracer = tracer
        self.compositor = compositor
        self.ocr_engine = ocr_engine

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def convert(self, source: SourceImage,
                kind: Union[str, ConversionKind],
                filter_name: Optional[Union[str, ImageFilter]] = None) -> ConversionArtifact:
        """
        Convert an image.

        Args:
            source: Decoded source image
            kind: Output kind, e.g. 'ascii' or ConversionKind.BRAILLE
            filter_name: Filter to apply, only used by the 'filter' kind

        Returns:
            A fresh ConversionArtifact

        Raises:
            ConversionError: Or one of its subclasses, never a partial result
        """
        try:
            kind = ConversionKind.parse(kind)
        except ValueError as e:
            raise ConversionError(str(e)) from None
        handler = getattr(self, f"_convert_{kind.value}")
        logger.debug("Converting %s (%dx%d) to %s",
                     source.name, source.width, source.height, kind.value)
        try:
            if kind is ConversionKind.FILTER:
                if filter_name is None:
                    raise ConversionError("A filter name is required for filter conversion")
                return handler(source, filter_name)
            return handler(source)
        except ConversionError:
            raise
        except Exception as e:
            logger.exception("Unexpected failure converting %s to %s", source.name, kind.value)
            raise ConversionError(f"Failed to convert to {kind.value}: {e}") from e

    def extract_palette(self, source: SourceImage) -> List[str]:
        return list(self.convert(source, ConversionKind.PALETTE).colors)

    def apply_filter(self, source: SourceImage,
                     filter_name: Union[str, ImageFilter]) -> ConversionArtifact:
        return self.convert(source, ConversionKind.FILTER, filter_name=filter_name)

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def _convert_ascii(self, source: SourceImage) -> ConversionArtifact:
        text = AsciiTranscoder(self.config).transcode(source.pixels)
        return text_artifact(ConversionKind.ASCII, source.name, '-ascii.txt', text)

    def _convert_emoji(self, source: SourceImage) -> ConversionArtifact:
        text = EmojiTranscoder(self.config).transcode(source.pixels)
        return text_artifact(ConversionKind.EMOJI, source.name, '-emoji.txt', text)

    def _convert_braille(self, source: SourceImage) -> ConversionArtifact:
        text = BrailleTranscoder(self.config).transcode(source.pixels)
        return text_artifact(ConversionKind.BRAILLE, source.name, '-braille.txt', text)

    def _convert_vector(self, source: SourceImage) -> ConversionArtifact:
        transcoder = VectorTranscoder(self.tracer, threshold=self.config.vector_threshold)
        svg = transcoder.transcode(source.pixels)
        return text_artifact(ConversionKind.VECTOR, source.name, '-vector.svg', svg,
                             mime_type='image/svg+xml')

    def _convert_svg(self, source: SourceImage) -> ConversionArtifact:
        svg = svg_wrapper(source.data, source.mime_type)
        return text_artifact(ConversionKind.SVG, source.name, '.svg', svg,
                             mime_type='image/svg+xml')

    def _convert_ocr(self, source: SourceImage) -> ConversionArtifact:
        text = extract_text(source.pixels, self.ocr_engine)
        return text_artifact(ConversionKind.OCR, source.name, '-text.txt', text)

    def _convert_palette(self, source: SourceImage) -> ConversionArtifact:
        colors = extract_palette(source.pixels, self.config.palette_size)
        return ConversionArtifact(
            kind=ConversionKind.PALETTE,
            mime_type='text/plain',
            colors=tuple(colors),
        )

    def _convert_filter(self, source: SourceImage,
                        filter_name: Union[str, ImageFilter]) -> ConversionArtifact:
        data = FilterEngine(self.compositor).apply(source.pixels, filter_name)
        label = filter_name.value if isinstance(filter_name, ImageFilter) else str(filter_name)
        return binary_artifact(ConversionKind.FILTER, source.name, f'-{label}.png', data,
                               mime_type='image/png')

    def _convert_thumbnail(self, source: SourceImage) -> ConversionArtifact:
        data = thumbnail(source.pixels, self.config.thumbnail_size)
        return binary_artifact(ConversionKind.THUMBNAIL, source.name, '-thumbnail.png', data,
                               mime_type='image/png')

    def _convert_base64(self, source: SourceImage) -> ConversionArtifact:
        return text_artifact(ConversionKind.BASE64, source.name, '.txt',
                             data_url(source.data, source.mime_type))

    def _convert_pdf(self, source: SourceImage) -> ConversionArtifact:
        return binary_artifact(ConversionKind.PDF, source.name, '.pdf',
                               pdf_document(source.pixels), mime_type='application/pdf')
