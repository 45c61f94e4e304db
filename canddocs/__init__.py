"""Candidate document batch ingestion: split, OCR, validate and file scanned certificates."""

__version__ = "0.1.0"
