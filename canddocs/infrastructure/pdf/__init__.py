"""PDF infrastructure utilities."""

from .pdf_page_ops import PdfPageOps
from .pdf_renderer import PdfRenderer

__all__ = ["PdfPageOps", "PdfRenderer"]
