"""OCR engine and candidate field parsing."""

from .candidate_parser import RegexCandidateParser, normalize_numeric
from .tesseract_service import TesseractOcrService, build_tesseract_config, clean_ocr_text

__all__ = [
    "RegexCandidateParser",
    "TesseractOcrService",
    "build_tesseract_config",
    "clean_ocr_text",
    "normalize_numeric",
]
