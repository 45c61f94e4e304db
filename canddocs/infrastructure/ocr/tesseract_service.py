"""OCR for candidate pages: render, preprocess, recognize with Tesseract, clean."""
from __future__ import annotations

import logging
import re
from typing import Optional

import cv2
import numpy as np
import pytesseract

from canddocs import constants
from canddocs.infrastructure.imaging.image_processor import ImagePreprocessor
from canddocs.infrastructure.pdf.pdf_renderer import PdfRenderer

logger = logging.getLogger(__name__)

_SPACE_RUNS = re.compile(r"[ \t]{2,}")
_LINE_BREAKS = re.compile(r"\r\n|\r")


def clean_ocr_text(text: Optional[str]) -> str:
    """Trim, collapse runs of spaces/tabs and normalize newlines.

    Letter/digit substitutions are deliberately not applied here; they belong
    to numeric fields only (see ``candidate_parser.normalize_numeric``).
    """
    if text is None or not text.strip():
        return ""
    cleaned = text.strip()
    cleaned = _SPACE_RUNS.sub(" ", cleaned)
    return _LINE_BREAKS.sub("\n", cleaned)


def build_tesseract_config(tessdata_dir: Optional[str] = None) -> str:
    # Restricted whitelist and no dictionaries: short structured fields, not prose.
    options = [
        f"--oem {constants.OCR_ENGINE_MODE}",
        f"--psm {constants.OCR_PAGE_SEG_MODE}",
        f'-c "tessedit_char_whitelist={constants.OCR_CHAR_WHITELIST}"',
        "-c load_system_dawg=0",
        "-c load_freq_dawg=0",
    ]
    if tessdata_dir:
        options.insert(0, f'--tessdata-dir "{tessdata_dir}"')
    return " ".join(options)


class TesseractOcrService:
    """Recognizes text on a candidate page. Never returns ``None``."""

    def __init__(
        self,
        *,
        renderer: Optional[PdfRenderer] = None,
        preprocessor: Optional[ImagePreprocessor] = None,
        language: str = "eng",
        tesseract_cmd: Optional[str] = None,
        tessdata_dir: Optional[str] = None,
    ) -> None:
        self._renderer = renderer or PdfRenderer()
        self._preprocessor = preprocessor or ImagePreprocessor()
        self._language = language
        self._config = build_tesseract_config(tessdata_dir)
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def extract_text_from_pdf(self, pdf_bytes: bytes, page_number: int = 1) -> str:
        """OCR the 1-based ``page_number``; a page that does not exist yields empty text."""
        if pdf_bytes is None:
            raise ValueError("pdf_bytes is required")
        if page_number < 1:
            raise ValueError("page_number must be >= 1")

        png = self._renderer.render_page(pdf_bytes, page_number - 1)
        if png is None:
            return ""
        return self.extract_text_from_image(png)

    def extract_text_from_image(self, image_bytes: bytes) -> str:
        if not image_bytes:
            return ""
        processed = self._preprocessor.preprocess(image_bytes)
        return clean_ocr_text(self._recognize(processed))

    def _recognize(self, png_bytes: bytes) -> str:
        image = cv2.imdecode(np.frombuffer(png_bytes, dtype=np.uint8), cv2.IMREAD_GRAYSCALE)
        if image is None:
            logger.warning("OCR input could not be decoded; treating as empty")
            return ""
        text = pytesseract.image_to_string(image, lang=self._language, config=self._config)
        return text or ""
