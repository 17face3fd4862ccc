"""Tests for OCR text extraction."""

from __future__ import annotations

import pytest

from conftest import FakeOcr, solid
from image_transcoder.errors import OCRError
from image_transcoder.ocr import NO_TEXT_FOUND, extract_text


def test_returns_engine_text():
    assert extract_text(solid(2, 2), FakeOcr('Invoice 42\n')) == 'Invoice 42\n'


@pytest.mark.parametrize('text', ['', '   \n\t'])
def test_blank_result_becomes_notice(text):
    assert extract_text(solid(2, 2), FakeOcr(text)) == NO_TEXT_FOUND


def test_engine_failure_is_ocr_error():
    with pytest.raises(OCRError, match='Failed to extract text: model missing'):
        extract_text(solid(2, 2), FakeOcr(error=RuntimeError('model missing')))


def test_typed_engine_failure_keeps_message():
    with pytest.raises(OCRError, match='Failed to extract text: no tesseract'):
        extract_text(solid(2, 2), FakeOcr(error=OCRError('no tesseract')))
