"""
Data Transfer Objects for candidate documents and their import errors.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from canddocs.domain.entities.candidate_document import CandidateDocument
from canddocs.domain.entities.import_error_record import ImportErrorRecord


@dataclass(frozen=True)
class ImportErrorDTO:
    id: Optional[int]
    field_name: str
    error_type: str
    error_message: str
    file_path: Optional[str]
    candidate_number: Optional[str]
    candidate_name: Optional[str]
    session: Optional[int]
    uploaded_by: Optional[str]
    import_date: datetime
    candidate_document_id: Optional[int]

    @classmethod
    def from_entity(cls, record: ImportErrorRecord) -> "ImportErrorDTO":
        return cls(
            id=record.id,
            field_name=record.field_name,
            error_type=record.error_type.value,
            error_message=record.error_message,
            file_path=record.file_path,
            candidate_number=record.candidate_number,
            candidate_name=record.candidate_name,
            session=record.session,
            uploaded_by=record.uploaded_by,
            import_date=record.import_date,
            candidate_document_id=record.candidate_document_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "field_name": self.field_name,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "file_path": self.file_path,
            "candidate_number": self.candidate_number,
            "candidate_name": self.candidate_name,
            "session": self.session,
            "uploaded_by": self.uploaded_by,
            "import_date": self.import_date.isoformat(),
            "candidate_document_id": self.candidate_document_id,
        }


@dataclass(frozen=True)
class CandidateDTO:
    """Candidate document as seen by callers, with its outstanding import errors."""

    id: Optional[int]
    candidate_name: str
    candidate_number: str
    session: int
    centre_code: str
    form_centre_code: str
    file_path: str
    created_at: datetime
    user_id: Optional[int]
    is_valid: bool
    errors: List[ImportErrorDTO] = field(default_factory=list)

    @classmethod
    def from_entity(
        cls,
        document: CandidateDocument,
        errors: Optional[List[ImportErrorRecord]] = None,
    ) -> "CandidateDTO":
        return cls(
            id=document.id,
            candidate_name=document.candidate_name,
            candidate_number=document.candidate_number,
            session=document.session,
            centre_code=document.centre_code,
            form_centre_code=document.form_centre_code,
            file_path=document.file_path,
            created_at=document.created_at,
            user_id=document.user_id,
            is_valid=document.is_valid,
            errors=[ImportErrorDTO.from_entity(error) for error in errors or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "candidate_name": self.candidate_name,
            "candidate_number": self.candidate_number,
            "session": self.session,
            "centre_code": self.centre_code,
            "form_centre_code": self.form_centre_code,
            "file_path": self.file_path,
            "created_at": self.created_at.isoformat(),
            "user_id": self.user_id,
            "is_valid": self.is_valid,
            "errors": [error.to_dict() for error in self.errors],
        }


@dataclass
class SimpleResult:
    """Outcome of an operator action; ``error`` is set instead of raising."""

    success: bool = False
    message: Optional[str] = None
    error: Optional[str] = None
    new_file_path: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "SimpleResult":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "error": self.error,
            "new_file_path": self.new_file_path,
        }
