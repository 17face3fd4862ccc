"""
Image Transcoder - Artifacts
============================
The immutable result of a single conversion.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from image_transcoder.constants import ConversionKind


@dataclass(frozen=True)
class ConversionArtifact:
    """Result of a conversion: textual content, a byte payload or colors."""

    kind: ConversionKind
    mime_type: str
    filename: Optional[str] = None
    text: Optional[str] = None
    data: Optional[bytes] = None
    colors: Optional[Tuple[str, ...]] = None

    @property
    def is_text(self) -> bool:
        return self.text is not None

    @property
    def payload(self) -> bytes:
        """Bytes to write when saving the artifact."""
        if self.data is not None:
            return self.data
        if self.text is not None:
            return self.text.encode('utf-8')
        if self.colors is not None:
            return ('\n'.join(self.colors) + '\n').encode('utf-8')
        return b''

    def save(self, directory: str) -> str:
        """
        Write the payload into a directory.

        Returns:
            Path of the written file

        Raises:
            ValueError: If the artifact kind is not file-backed
        """
        if self.filename is None:
            raise ValueError(f"'{self.kind.value}' artifacts are not file-backed")
        path = os.path.join(directory, self.filename)
        with open(path, 'wb') as f:
            f.write(self.payload)
        return path


def text_artifact(kind: ConversionKind, name: str, suffix: str, text: str,
                  mime_type: str = 'text/plain') -> ConversionArtifact:
    return ConversionArtifact(
        kind=kind,
        mime_type=mime_type,
        filename=f"{name}{suffix}",
        text=text,
    )


def binary_artifact(kind: ConversionKind, name: str, suffix: str, data: bytes,
                    mime_type: str) -> ConversionArtifact:
    return ConversionArtifact(
        kind=kind,
        mime_type=mime_type,
        filename=f"{name}{suffix}",
        data=data,
    )
