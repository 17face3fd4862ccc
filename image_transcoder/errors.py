"""Typed failures raised by the conversion core."""


class ConversionError(Exception):
    """Base class; wraps any unexpected failure with a readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DecodeError(ConversionError):
    """The source image could not be read or decoded."""


class TraceError(ConversionError):
    """The bitmap tracer failed."""


class VectorConversionError(ConversionError):
    """Vector conversion failed; raised in place of TraceError."""


class FilterError(ConversionError):
    """The compositor is unavailable or rejected the filter descriptor."""


class OCRError(ConversionError):
    """The OCR engine failed."""
