"""UploadBatch Command - imports one scanned multi-candidate PDF.

Splits the source into pages, pairs them two by two and walks each candidate
through merge, save, OCR, parse and validate. Failures inside one candidate
are folded into the batch result; failures in the batch-wide steps (split,
archival) propagate to the caller.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Protocol

from canddocs.application.dto.batch_dto import (
    CandidateOutcome,
    CandidateResult,
    CandidateStatus,
    UploadBatchResult,
)
from canddocs.constants import IMPORTED_SUFFIX
from canddocs.domain.entities.candidate_document import CandidateDocument
from canddocs.domain.entities.import_error_record import ImportErrorRecord
from canddocs.domain.exceptions import InvalidSourceFileError
from canddocs.domain.repositories.candidate_repository import CandidateRepository
from canddocs.domain.repositories.import_error_repository import ImportErrorRepository
from canddocs.domain.services.document_validator import DocumentValidator
from canddocs.domain.services.page_pairing import pair_pages
from canddocs.domain.value_objects.batch_context import BatchContext
from canddocs.domain.value_objects.candidate_info import CandidateInfo
from canddocs.domain.value_objects.candidate_pair import CandidatePair
from canddocs.domain.value_objects.error_kind import ErrorKind
from canddocs.domain.value_objects.storage_scope import StorageScope
from canddocs.schemas.candidate_schemas import UploadBatchRequest

logger = logging.getLogger(__name__)


class PdfPageOps(Protocol):
    def split(self, pdf_bytes: bytes) -> List[bytes]: ...

    def merge(self, page1: bytes, page2: Optional[bytes] = None) -> bytes: ...


class OcrService(Protocol):
    def extract_text_from_pdf(self, pdf_bytes: bytes, page_number: int = 1) -> str: ...


class CandidateParser(Protocol):
    def parse(self, ocr_text: str) -> CandidateInfo: ...


class FileStore(Protocol):
    def save_success_file(self, data: bytes, scope: StorageScope, file_name: str) -> str: ...

    def move_to_error_folder(self, current_path: str) -> str: ...

    def move_original_imported_pdf(self, data: bytes, scope: StorageScope, file_name: str) -> str: ...

    def get_imported_folder(self, scope: StorageScope) -> str: ...

    def delete_file(self, path: str) -> None: ...


@dataclass(frozen=True)
class UploadBatchCommand:
    """A staged upload and the session/exam/centre it was declared for."""

    request: UploadBatchRequest
    source_file_path: str
    uploaded_by: str = "system"


class UploadBatchHandler:
    """Handles UploadBatch commands, one candidate at a time in page order."""

    def __init__(
        self,
        pdf_ops: PdfPageOps,
        ocr: OcrService,
        file_store: FileStore,
        candidates: CandidateRepository,
        errors: ImportErrorRepository,
        parser: CandidateParser,
        validator: Optional[DocumentValidator] = None,
        current_user_id: Callable[[], Optional[int]] = lambda: None,
        fallback_user_id: int = 2,
    ):
        self._pdf = pdf_ops
        self._ocr = ocr
        self._files = file_store
        self._candidates = candidates
        self._errors = errors
        self._parser = parser
        self._validator = validator or DocumentValidator()
        self._current_user_id = current_user_id
        self._fallback_user_id = fallback_user_id

    def handle(
        self,
        command: UploadBatchCommand,
        cancel_event: Optional[threading.Event] = None,
    ) -> UploadBatchResult:
        source = Path(command.source_file_path)
        if not source.is_file():
            raise FileNotFoundError(f"Uploaded file not found at {source}")
        if source.suffix.lower() != ".pdf":
            raise InvalidSourceFileError(str(source), "Only PDF files are accepted")

        request = command.request
        context = BatchContext(
            scope=StorageScope.of(request.exam_year, request.exam_code, request.centre_number),
            exam_year=request.exam_year,
            uploaded_by=command.uploaded_by,
        )
        pdf_bytes = request.pdf_file if request.pdf_file else source.read_bytes()

        # Batch-fatal: a source that cannot be split aborts the run.
        pairs = pair_pages(self._pdf.split(pdf_bytes))
        logger.info(
            "Importing batch",
            extra={"scope": str(context.scope), "source": str(source), "candidates": len(pairs)},
        )

        result = UploadBatchResult()
        for pair in pairs:
            if cancel_event is not None and cancel_event.is_set():
                result.cancelled = True
                logger.warning(
                    "Batch cancelled before candidate %s", pair.index, extra={"scope": str(context.scope)}
                )
                break
            result.record(self._run_candidate(pair, context))

        if not result.cancelled:
            result.imported_file_path = self._archive_source(source, context.scope)

        logger.info(
            "Batch finished",
            extra={
                "scope": str(context.scope),
                "saved": result.total_candidates,
                "errors": len(result.errors),
                "cancelled": result.cancelled,
            },
        )
        return result

    def _run_candidate(self, pair: CandidatePair, context: BatchContext) -> CandidateResult:
        try:
            return self._process_candidate(pair, context)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unhandled error for candidate %s", pair.index)
            self._errors.add_errors(
                [
                    ImportErrorRecord(
                        field_name="Unhandled",
                        error_type=ErrorKind.UNHANDLED_EXCEPTION,
                        error_message=str(exc),
                        session=context.exam_year,
                        uploaded_by=context.uploaded_by,
                    )
                ]
            )
            return CandidateResult.err(pair.index, ErrorKind.UNHANDLED_EXCEPTION, f"UNHANDLED ERROR: {exc}")

    def _process_candidate(self, pair: CandidatePair, context: BatchContext) -> CandidateResult:
        merged = self._pdf.merge(pair.page1, pair.page2)
        saved_path = self._files.save_success_file(
            merged, context.scope, context.scope.candidate_file_name(pair.index)
        )

        try:
            ocr_text = self._ocr.extract_text_from_pdf(merged, 1) or ""
        except Exception as exc:  # noqa: BLE001
            # The saved file stays in success for manual review.
            logger.warning("OCR failed for candidate %s: %s", pair.index, exc)
            self._errors.add_errors(
                [
                    ImportErrorRecord(
                        file_path=saved_path,
                        field_name="OcrText",
                        error_type=ErrorKind.OCR_ISSUE,
                        error_message=f"OCR failed: {exc}",
                        session=context.exam_year,
                        uploaded_by=context.uploaded_by,
                    )
                ]
            )
            return CandidateResult.err(pair.index, ErrorKind.OCR_ISSUE, f"OCR ERROR: {exc}")

        info = self._parser.parse(ocr_text)
        validation = self._validator.validate(pair.page1, ocr_text, info, saved_path, context)

        document = CandidateDocument(
            candidate_name=info.candidate_name,
            candidate_number=info.candidate_number,
            session=info.session_year if info.session_year is not None else context.exam_year,
            centre_code=info.centre_number or context.centre,
            form_centre_code=context.centre,
            file_path=saved_path,
            ocr_text=ocr_text,
            user_id=self._current_user_id() or self._fallback_user_id,
            is_valid=validation.is_valid,
        )

        if validation.is_valid:
            self._candidates.add(document)
            logger.info("Candidate %s imported", pair.index, extra={"path": saved_path})
            return CandidateResult.ok(
                CandidateOutcome(
                    index=pair.index,
                    status=CandidateStatus.PERSISTED,
                    file_path=saved_path,
                    candidate_id=document.id,
                )
            )

        error_path = self._files.move_to_error_folder(saved_path)
        document.relocate(error_path)
        for error in validation.errors:
            error.file_path = error_path
        self._candidates.add(document)
        for error in validation.errors:
            error.attach_to(document.id)
        self._errors.add_errors(validation.errors)

        logger.warning(
            "Candidate %s failed validation",
            pair.index,
            extra={"path": error_path, "error_count": len(validation.errors)},
        )
        return CandidateResult.ok(
            CandidateOutcome(
                index=pair.index,
                status=CandidateStatus.PERSISTED_WITH_ERRORS,
                file_path=error_path,
                candidate_id=document.id,
                error_count=len(validation.errors),
            )
        )

    def _archive_source(self, source: Path, scope: StorageScope) -> str:
        """Copy the upload into ``imported`` under a free ``_Tr[N]`` name, then drop the staged file."""
        folder = Path(self._files.get_imported_folder(scope))
        target_name = f"{source.stem}{IMPORTED_SUFFIX}{source.suffix}"
        counter = 1
        while (folder / target_name).exists():
            target_name = f"{source.stem}{IMPORTED_SUFFIX}{counter}{source.suffix}"
            counter += 1

        archived = self._files.move_original_imported_pdf(source.read_bytes(), scope, target_name)
        self._files.delete_file(str(source))
        logger.info("Archived source %s -> %s", source, archived)
        return archived
