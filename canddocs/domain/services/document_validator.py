"""
Document Validator

Field-level checks on the data recovered from a candidate's first page.
Every applicable check runs; each failure becomes one ImportErrorRecord.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from canddocs.constants import NAME_BOILERPLATE_MARKER, SESSION_YEAR_MAX, SESSION_YEAR_MIN
from canddocs.domain.entities.import_error_record import ImportErrorRecord
from canddocs.domain.value_objects.batch_context import BatchContext
from canddocs.domain.value_objects.candidate_info import CandidateInfo
from canddocs.domain.value_objects.error_kind import ErrorKind

_DECIMAL_DIGITS = frozenset("0123456789")


@dataclass
class DocumentValidationResult:
    errors: List[ImportErrorRecord] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class DocumentValidator:
    """Validates parsed candidate fields against the batch they came from."""

    def __init__(self, *, session_min: int = SESSION_YEAR_MIN, session_max: int = SESSION_YEAR_MAX):
        self._session_min = session_min
        self._session_max = session_max

    def validate(
        self,
        page_pdf: bytes,
        ocr_text: str,
        info: CandidateInfo,
        saved_path: Optional[str],
        context: BatchContext,
    ) -> DocumentValidationResult:
        result = DocumentValidationResult()

        def record(field_name: str, kind: ErrorKind, message: str, session: Optional[int] = None) -> None:
            result.errors.append(
                ImportErrorRecord(
                    file_path=saved_path,
                    candidate_number=info.candidate_number,
                    candidate_name=info.candidate_name,
                    field_name=field_name,
                    error_type=kind,
                    error_message=message,
                    session=context.exam_year if session is None else session,
                    uploaded_by=context.uploaded_by,
                )
            )

        number = info.candidate_number
        if not number.strip():
            record("CandidateNumber", ErrorKind.MISSING_FIELD, "Candidate number is missing.")
        elif not set(number) <= _DECIMAL_DIGITS:
            record("CandidateNumber", ErrorKind.INVALID_FORMAT, "Candidate number must be numeric.")

        # A boilerplate heading in the name means OCR picked the wrong line.
        name = info.candidate_name
        if not name.strip() or NAME_BOILERPLATE_MARKER in name.upper():
            record("CandidateName", ErrorKind.OCR_ISSUE, "Candidate name probably not detected by OCR.")

        if not saved_path or not os.path.isfile(saved_path):
            record("FilePath", ErrorKind.FILE_NOT_FOUND, "Saved file not found on disk.")

        session = info.session_year if info.session_year is not None else context.exam_year
        if session < self._session_min or session > self._session_max:
            record(
                "Session",
                ErrorKind.INVALID_FORMAT,
                f"Session year {session} out of expected range.",
                session=session,
            )

        return result
