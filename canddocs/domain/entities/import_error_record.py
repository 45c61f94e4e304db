"""
ImportErrorRecord Entity

A field-level or pipeline-level failure observed while importing a batch.
Several records may point at the same candidate document.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..value_objects.error_kind import ErrorKind


@dataclass
class ImportErrorRecord:
    """Queryable record of one import failure."""

    field_name: str
    error_type: ErrorKind
    error_message: str
    id: Optional[int] = None
    file_path: Optional[str] = None
    candidate_number: Optional[str] = None
    candidate_name: Optional[str] = None
    session: Optional[int] = None
    uploaded_by: Optional[str] = None
    import_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    candidate_document_id: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.error_type, ErrorKind):
            self.error_type = ErrorKind.from_string(self.error_type)

    def attach_to(self, candidate_document_id: int) -> None:
        self.candidate_document_id = candidate_document_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "file_path": self.file_path,
            "candidate_number": self.candidate_number,
            "candidate_name": self.candidate_name,
            "field_name": self.field_name,
            "error_type": self.error_type.value,
            "error_message": self.error_message,
            "session": self.session,
            "import_date": self.import_date.isoformat(),
            "uploaded_by": self.uploaded_by,
            "candidate_document_id": self.candidate_document_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImportErrorRecord":
        import_date = data.get("import_date")
        if isinstance(import_date, str):
            import_date = datetime.fromisoformat(import_date)
        return cls(
            id=data.get("id"),
            file_path=data.get("file_path"),
            candidate_number=data.get("candidate_number"),
            candidate_name=data.get("candidate_name"),
            field_name=data.get("field_name", ""),
            error_type=data.get("error_type", ErrorKind.UNHANDLED_EXCEPTION),
            error_message=data.get("error_message", ""),
            session=data.get("session"),
            uploaded_by=data.get("uploaded_by"),
            import_date=import_date or datetime.now(timezone.utc),
            candidate_document_id=data.get("candidate_document_id"),
        )
