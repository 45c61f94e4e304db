"""Split and merge PDF pages without re-rendering them."""
from __future__ import annotations

import logging
from typing import List, Optional

import fitz  # type: ignore

from canddocs.domain.exceptions import MalformedDocumentError, MergeFailureError

logger = logging.getLogger(__name__)

# Drop unreferenced objects; compress only streams that were stored uncompressed.
_SAVE_OPTIONS = {"garbage": 3, "deflate": True}


def _open_pdf(data: bytes) -> "fitz.Document":
    return fitz.open(stream=data, filetype="pdf")


class PdfPageOps:
    """Page-level PDF operations backed by PyMuPDF."""

    def split(self, pdf_bytes: bytes) -> List[bytes]:
        """Return one independent single-page PDF per source page, in source order."""

        try:
            source = _open_pdf(pdf_bytes)
        except (RuntimeError, ValueError) as exc:
            raise MalformedDocumentError(f"Input is not a readable PDF: {exc}", exc) from exc

        pages: List[bytes] = []
        with source:
            if source.needs_pass:
                raise MalformedDocumentError("Input PDF is encrypted")
            for index in range(source.page_count):
                with fitz.open() as single:
                    single.insert_pdf(source, from_page=index, to_page=index)
                    pages.append(single.tobytes(**_SAVE_OPTIONS))

        logger.debug("Split PDF into %s pages", len(pages))
        return pages

    def merge(self, page1: bytes, page2: Optional[bytes] = None) -> bytes:
        """Append one or two single-page PDFs into a new document, page order preserved."""

        sources = [page1] if page2 is None else [page1, page2]
        with fitz.open() as combined:
            for position, data in enumerate(sources, start=1):
                # Each source gets its own document so object numbers never collide.
                try:
                    source = _open_pdf(data)
                except (RuntimeError, ValueError) as exc:
                    raise MergeFailureError(f"Page {position} is not a readable PDF: {exc}", exc) from exc
                with source:
                    if source.page_count != 1:
                        raise MergeFailureError(
                            f"Page {position} must be a single-page PDF, got {source.page_count} pages"
                        )
                    combined.insert_pdf(source)
            return combined.tobytes(**_SAVE_OPTIONS)

    @staticmethod
    def page_count(pdf_bytes: bytes) -> int:
        try:
            with _open_pdf(pdf_bytes) as document:
                return document.page_count
        except (RuntimeError, ValueError) as exc:
            raise MalformedDocumentError(f"Input is not a readable PDF: {exc}", exc) from exc
