"""
Image Transcoder - OCR
======================
Text extraction through an opaque OCR engine.
"""

import logging
from typing import Optional

from image_transcoder.errors import OCRError
from image_transcoder.pixels import PixelBuffer

try:
    import pytesseract
except ImportError:
    pytesseract = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

NO_TEXT_FOUND = 'No text found in image'


class OcrEngine:
    """OCR capability: image in, recognized text out."""

    def recognize(self, image: PixelBuffer) -> str:
        raise NotImplementedError


class TesseractEngine(OcrEngine):
    """OCR engine backed by pytesseract and the Tesseract binary."""

    def __init__(self, lang: str = 'eng', config: str = ''):
        self.lang = lang
        self.config = config

    def recognize(self, image: PixelBuffer) -> str:
        if pytesseract is None:
            raise OCRError("pytesseract is not installed")
        rgb = image.to_image().convert('RGB')
        try:
            return pytesseract.image_to_string(rgb, lang=self.lang, config=self.config)
        except pytesseract.TesseractNotFoundError as e:
            raise OCRError(f"Tesseract engine is not available: {e}") from e
        except Exception as e:
            raise OCRError(str(e)) from e


def extract_text(image: PixelBuffer, engine: Optional[OcrEngine] = None) -> str:
    """
    Recognize the text in an image.

    Returns:
        The recognized text, or a fixed notice when nothing was found

    Raises:
        OCRError: If the engine fails
    """
    engine = engine or TesseractEngine()
    try:
        text = engine.recognize(image)
    except OCRError as e:
        raise OCRError(f"Failed to extract text: {e.message}") from e
    except Exception as e:
        raise OCRError(f"Failed to extract text: {e}") from e

    if not text or not text.strip():
        logger.info("OCR found no text in %dx%d image", image.width, image.height)
        return NO_TEXT_FOUND
    return text
