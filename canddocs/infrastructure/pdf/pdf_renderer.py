"""PDF rendering utilities for the infrastructure layer."""
from __future__ import annotations

import logging
from typing import Optional

import fitz  # type: ignore

from canddocs.constants import OCR_RENDER_DPI
from canddocs.domain.exceptions import MalformedDocumentError

logger = logging.getLogger(__name__)


class PdfRenderer:
    """Rasterizes single PDF pages to PNG bytes for OCR."""

    def __init__(self, *, dpi: int = OCR_RENDER_DPI) -> None:
        self._dpi = dpi

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render_page(self, pdf_bytes: bytes, page_index: int) -> Optional[bytes]:
        """Render the zero-based ``page_index`` to PNG; ``None`` when the page does not exist."""

        if page_index < 0:
            return None

        try:
            document = fitz.open(stream=pdf_bytes, filetype="pdf")
        except (RuntimeError, ValueError) as exc:
            raise MalformedDocumentError(f"Cannot render unreadable PDF: {exc}", exc) from exc

        with document:
            if page_index >= document.page_count:
                logger.debug("Page %s requested from a %s-page document", page_index, document.page_count)
                return None
            page = document.load_page(page_index)
            pixmap = page.get_pixmap(dpi=self._dpi, alpha=False)
            return pixmap.tobytes("png")
