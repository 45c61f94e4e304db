"""Heuristic extraction of candidate fields from cleaned OCR text.

The OCR whitelist is ``A-Z0-9-/.`` plus space, so labels arrive without
colons: ``CANDIDATE NAME JOHN DOE``, ``CANDIDATE NUMBER 0012``,
``CENTRE NUMBER 12345``, ``JUNE 2024``.
"""
from __future__ import annotations

import re
from typing import Optional

from canddocs.domain.value_objects.candidate_info import CandidateInfo

_NAME = re.compile(r"^\s*(?:CANDIDATE\s+)?NAME\s+(?:OF\s+CANDIDATE\s+)?([A-Z][A-Z .'\-]*?)\s*$", re.MULTILINE)
_NUMBER = re.compile(r"\bCAND(?:IDATE)?\.?\s+(?:NUMBER|NO\.?)\s*([0-9A-Z]+)")
_CENTRE = re.compile(r"\bCENT(?:RE|ER)\s+(?:NUMBER|NO\.?)\s*([0-9A-Z]+)")
_SESSION = re.compile(
    r"\b(?:SESSION|YEAR|JANUARY|MARCH|MAY|JUNE|JULY|NOVEMBER|DECEMBER)\s+([0-9OI]{4})\b"
)

# Letters OCR commonly returns in place of digits.
_DIGIT_LOOKALIKES = str.maketrans({"O": "0", "I": "1"})


def normalize_numeric(value: str) -> str:
    """Apply O->0 and I->1 to a field that should only hold digits."""
    return value.translate(_DIGIT_LOOKALIKES)


class RegexCandidateParser:
    """Best-effort ``CandidateInfo`` from OCR text; missing fields stay empty."""

    def parse(self, ocr_text: str) -> CandidateInfo:
        text = (ocr_text or "").upper()
        return CandidateInfo(
            candidate_name=self._first(_NAME, text) or "",
            candidate_number=normalize_numeric(self._first(_NUMBER, text) or ""),
            session_year=self._session(text),
            centre_number=normalize_numeric(self._first(_CENTRE, text) or "") or None,
        )

    @staticmethod
    def _first(pattern: re.Pattern, text: str) -> Optional[str]:
        match = pattern.search(text)
        return match.group(1).strip() if match else None

    def _session(self, text: str) -> Optional[int]:
        raw = self._first(_SESSION, text)
        if raw is None:
            return None
        digits = normalize_numeric(raw)
        return int(digits) if digits.isdigit() else None
