"""Structured fields recovered from the OCR text of a candidate's first page."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CandidateInfo:
    """Best-effort parse result; every field may be empty or absent."""

    candidate_name: str = ""
    candidate_number: str = ""
    session_year: Optional[int] = None
    centre_number: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "candidate_name", (self.candidate_name or "").strip())
        object.__setattr__(self, "candidate_number", (self.candidate_number or "").strip())
        centre = (self.centre_number or "").strip()
        object.__setattr__(self, "centre_number", centre or None)
