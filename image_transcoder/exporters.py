"""
Image Transcoder - Exporters
============================
Container-style outputs: thumbnail, Base64 data URL, SVG wrapper and PDF.
"""

import base64
import io
import logging

from PIL import Image

from image_transcoder.constants import THUMBNAIL_SIZE
from image_transcoder.pixels import PixelBuffer, resample_to

logger = logging.getLogger(__name__)

# A4 portrait in PDF points
PDF_PAGE_SIZE = (595, 842)


def thumbnail(source: PixelBuffer, size: int = THUMBNAIL_SIZE) -> bytes:
    """Square PNG thumbnail. The aspect ratio is not preserved."""
    buf = io.BytesIO()
    resample_to(source, size, size).to_image().save(buf, format='PNG')
    return buf.getvalue()


def data_url(data: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(data).decode('ascii')
    return f"data:{mime_type};base64,{encoded}"


def svg_wrapper(data: bytes, mime_type: str) -> str:
    """SVG document embedding the original image so it scales to its container."""
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="100%" height="100%" '
        'viewBox="0 0 100 100" preserveAspectRatio="xMidYMid meet">\n'
        f'  <image href="{data_url(data, mime_type)}" width="100%" height="100%" />\n'
        '</svg>'
    )


def pdf_document(source: PixelBuffer) -> bytes:
    """
    Single A4 page with the image scaled to the page width at the top.

    Transparency is flattened onto white.
    """
    page_width, page_height = PDF_PAGE_SIZE
    scaled_height = max(1, round(source.height * page_width / source.width))

    image = source.to_image()
    flat = Image.new('RGB', image.size, (255, 255, 255))
    flat.paste(image, mask=image.split()[3])
    flat = flat.resize((page_width, scaled_height), Image.Resampling.LANCZOS)

    page = Image.new('RGB', (page_width, max(page_height, scaled_height)), (255, 255, 255))
    page.paste(flat, (0, 0))

    buf = io.BytesIO()
    page.save(buf, format='PDF', resolution=72.0)
    logger.debug("PDF page %dx%d pt", page.width, page.height)
    return buf.getvalue()
