"""
Image Transcoder - Source Images
================================
Loads a user image from disk or memory into a decoded SourceImage.
"""

import io
import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from image_transcoder.constants import MAX_UPLOAD_BYTES, SUPPORTED_FORMATS
from image_transcoder.errors import DecodeError
from image_transcoder.pixels import PixelBuffer, decode_image

logger = logging.getLogger(__name__)


def format_bytes(num_bytes: int) -> str:
    """Human readable size, e.g. 1536 -> '1.5 KB'."""
    if num_bytes == 0:
        return '0 Bytes'

    k = 1024
    sizes = ['Bytes', 'KB', 'MB', 'GB']
    i = min(int(math.floor(math.log(num_bytes) / math.log(k))), len(sizes) - 1)
    value = round(num_bytes / k ** i, 2)
    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return f"{text} {sizes[i]}"


def mime_for_name(name: str) -> Optional[str]:
    ext = os.path.splitext(name)[1].lower()
    for mime, extensions in SUPPORTED_FORMATS.items():
        if ext in extensions:
            return mime
    return None


@dataclass(frozen=True)
class SourceImage:
    """A decoded input image plus the metadata artifacts are named after."""

    name: str
    data: bytes
    mime_type: str
    pixels: PixelBuffer

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def width(self) -> int:
        return self.pixels.width

    @property
    def height(self) -> int:
        return self.pixels.height

    def describe(self) -> str:
        return (
            f"Name: {self.name}\n"
            f"Dimensions: {self.width} x {self.height}px\n"
            f"Size: {format_bytes(self.size)}"
        )


def load_bytes(data: bytes, filename: str = 'image.png',
               max_bytes: int = MAX_UPLOAD_BYTES) -> SourceImage:
    """
    Decode in-memory image bytes.

    Args:
        data: Encoded image
        filename: Original file name; the stem names the artifacts
        max_bytes: Upload size limit

    Raises:
        DecodeError: If the file type is unsupported, too large or unreadable
    """
    if len(data) > max_bytes:
        raise DecodeError(
            f"Image is {format_bytes(len(data))}, the limit is {format_bytes(max_bytes)}"
        )

    declared = mime_for_name(filename)
    pixels = decode_image(data)

    # Trust the decoded format over the extension where Pillow knows it
    with Image.open(io.BytesIO(data)) as image:
        detected = Image.MIME.get(image.format or '')
    mime_type = detected or declared
    if mime_type not in SUPPORTED_FORMATS:
        raise DecodeError(f"This file type is not supported: {mime_type or filename}")

    name = os.path.splitext(os.path.basename(filename))[0] or 'image'
    logger.debug("Loaded %s (%s, %dx%d, %d bytes)",
                 name, mime_type, pixels.width, pixels.height, len(data))
    return SourceImage(name=name, data=bytes(data), mime_type=mime_type, pixels=pixels)


def load_file(path: str, max_bytes: int = MAX_UPLOAD_BYTES) -> SourceImage:
    """Read and decode an image file."""
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise DecodeError(f"Failed to load image: {e}") from e
    return load_bytes(data, filename=os.path.basename(path), max_bytes=max_bytes)
