"""
CandidateDocument Entity

A persisted candidate: the fields recovered from OCR, where the merged PDF
currently lives on disk and whether the record passed validation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CandidateDocument:
    """
    Domain entity for one imported candidate document.

    ``form_centre_code`` is the centre the batch was uploaded for and never
    changes; ``centre_code`` is what OCR found (or the batch centre as a
    fallback) and may be corrected later.
    """

    # Identity (assigned by the repository)
    id: Optional[int] = None

    # Candidate fields
    candidate_name: str = ""
    candidate_number: str = ""
    session: int = 0
    centre_code: str = ""
    form_centre_code: str = ""

    # Artifact
    file_path: str = ""
    ocr_text: str = ""

    # Metadata
    created_at: datetime = field(default_factory=_utcnow)
    user_id: Optional[int] = None
    is_valid: bool = False

    def __post_init__(self):
        self.candidate_name = (self.candidate_name or "").strip()
        self.candidate_number = (self.candidate_number or "").strip()
        self.centre_code = str(self.centre_code or "").strip()
        self.form_centre_code = str(self.form_centre_code or "").strip()
        self.ocr_text = self.ocr_text or ""
        try:
            self.session = int(self.session)
        except (TypeError, ValueError):
            self.session = 0

    def apply_correction(
        self,
        *,
        candidate_name: str,
        candidate_number: str,
        session: int,
        centre_code: str,
    ) -> None:
        """Overwrite the OCR-derived fields with operator-corrected values and mark valid."""
        self.candidate_name = (candidate_name or "").strip()
        self.candidate_number = (candidate_number or "").strip()
        self.session = int(session)
        self.centre_code = str(centre_code or "").strip()
        self.is_valid = True

    def relocate(self, new_path: str) -> None:
        self.file_path = new_path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "candidate_name": self.candidate_name,
            "candidate_number": self.candidate_number,
            "session": self.session,
            "centre_code": self.centre_code,
            "form_centre_code": self.form_centre_code,
            "file_path": self.file_path,
            "ocr_text": self.ocr_text,
            "created_at": self.created_at.isoformat(),
            "user_id": self.user_id,
            "is_valid": self.is_valid,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CandidateDocument":
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            id=data.get("id"),
            candidate_name=data.get("candidate_name", ""),
            candidate_number=data.get("candidate_number", ""),
            session=data.get("session", 0),
            centre_code=data.get("centre_code", ""),
            form_centre_code=data.get("form_centre_code", ""),
            file_path=data.get("file_path", ""),
            ocr_text=data.get("ocr_text", ""),
            created_at=created_at or _utcnow(),
            user_id=data.get("user_id"),
            is_valid=bool(data.get("is_valid", False)),
        )
