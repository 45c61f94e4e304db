"""Pytest configuration for canddocs tests.

Ensures the project root is on sys.path so ``canddocs.*`` imports resolve
without an installed distribution, and provides builders for real PDF and
image fixtures.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Sequence

import cv2
import fitz  # type: ignore
import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def build_pdf(page_texts: Sequence[str]) -> bytes:
    """A PDF with one page per entry, each carrying its text at the top left."""
    document = fitz.open()
    try:
        for text in page_texts:
            page = document.new_page()
            page.insert_text((72, 72), text, fontsize=12)
        return document.tobytes()
    finally:
        document.close()


def page_text(pdf_bytes: bytes, index: int = 0) -> str:
    with fitz.open(stream=pdf_bytes, filetype="pdf") as document:
        return document.load_page(index).get_text().strip()


def encode_png(image: np.ndarray) -> bytes:
    ok, encoded = cv2.imencode(".png", image)
    assert ok
    return encoded.tobytes()


@pytest.fixture
def make_pdf() -> Callable[[Sequence[str]], bytes]:
    return build_pdf


@pytest.fixture
def sleeps() -> list:
    """Records every delay a component asks for instead of sleeping."""
    return []


@pytest.fixture
def text_page_png() -> bytes:
    """White page with a dark block of 'text'."""
    image = np.full((120, 200, 3), 235, dtype=np.uint8)
    cv2.putText(image, "CAND 0012", (10, 70), cv2.FONT_HERSHEY_SIMPLEX, 1.0, (20, 20, 20), 2)
    return encode_png(image)


@pytest.fixture
def read_page_text() -> Callable[..., str]:
    return page_text
