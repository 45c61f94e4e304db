"""Shared factories for repositories, infrastructure services and handlers.

Object construction is centralized here so the CLI (and any other entry
point) can depend on simple callables. Each factory is cached so one process
shares a single repository and file store instance.
"""
from __future__ import annotations

from functools import lru_cache

from canddocs.application.batch_dispatcher import BatchDispatcher
from canddocs.application.commands.update_candidate import UpdateCandidateHandler
from canddocs.application.commands.upload_batch import UploadBatchHandler
from canddocs.application.commands.validate_corrected_document import ValidateCorrectedDocumentHandler
from canddocs.application.queries.get_candidate import GetCandidateHandler
from canddocs.application.queries.list_candidates import ListCandidatesHandler
from canddocs.application.queries.list_import_errors import ListImportErrorsHandler
from canddocs.application.queries.search_candidates import SearchCandidatesHandler
from canddocs.config import get_settings
from canddocs.domain.repositories.candidate_repository import CandidateRepository
from canddocs.domain.repositories.import_error_repository import ImportErrorRepository
from canddocs.domain.services.document_validator import DocumentValidator
from canddocs.infrastructure.imaging.image_processor import ImagePreprocessor
from canddocs.infrastructure.ocr.candidate_parser import RegexCandidateParser
from canddocs.infrastructure.ocr.tesseract_service import TesseractOcrService
from canddocs.infrastructure.pdf.pdf_page_ops import PdfPageOps
from canddocs.infrastructure.pdf.pdf_renderer import PdfRenderer
from canddocs.infrastructure.persistence.file_candidate_repository import FileCandidateRepository
from canddocs.infrastructure.persistence.file_import_error_repository import FileImportErrorRepository
from canddocs.infrastructure.storage.file_store import FileStore


@lru_cache()
def _candidate_repository() -> CandidateRepository:
    return FileCandidateRepository(get_settings().data_dir)


def get_candidate_repository() -> CandidateRepository:
    """Provide a singleton candidate repository instance."""
    return _candidate_repository()


@lru_cache()
def _import_error_repository() -> ImportErrorRepository:
    return FileImportErrorRepository(get_settings().data_dir)


def get_import_error_repository() -> ImportErrorRepository:
    """Provide a singleton import error repository instance."""
    return _import_error_repository()


@lru_cache()
def get_file_store() -> FileStore:
    settings = get_settings()
    return FileStore(
        settings.storage_root,
        retry_attempts=settings.file_retry_attempts,
        retry_delay=settings.retry_delay_seconds(),
    )


@lru_cache()
def get_ocr_service() -> TesseractOcrService:
    settings = get_settings()
    return TesseractOcrService(
        renderer=PdfRenderer(dpi=settings.ocr_render_dpi),
        preprocessor=ImagePreprocessor(max_dimension=settings.ocr_max_image_dimension),
        language=settings.ocr_language,
        tesseract_cmd=settings.tesseract_cmd,
        tessdata_dir=settings.tessdata_prefix,
    )


@lru_cache()
def get_upload_batch_handler() -> UploadBatchHandler:
    return UploadBatchHandler(
        pdf_ops=PdfPageOps(),
        ocr=get_ocr_service(),
        file_store=get_file_store(),
        candidates=_candidate_repository(),
        errors=_import_error_repository(),
        parser=RegexCandidateParser(),
        validator=DocumentValidator(),
        fallback_user_id=get_settings().fallback_user_id,
    )


@lru_cache()
def get_batch_dispatcher() -> BatchDispatcher:
    return BatchDispatcher(get_upload_batch_handler(), max_workers=get_settings().batch_workers)


@lru_cache()
def get_update_candidate_handler() -> UpdateCandidateHandler:
    return UpdateCandidateHandler(_candidate_repository())


@lru_cache()
def get_validate_corrected_document_handler() -> ValidateCorrectedDocumentHandler:
    return ValidateCorrectedDocumentHandler(
        _candidate_repository(), _import_error_repository(), get_file_store()
    )


@lru_cache()
def get_candidate_handler() -> GetCandidateHandler:
    return GetCandidateHandler(_candidate_repository(), _import_error_repository())


@lru_cache()
def get_search_candidates_handler() -> SearchCandidatesHandler:
    return SearchCandidatesHandler(_candidate_repository())


@lru_cache()
def get_list_candidates_handler() -> ListCandidatesHandler:
    return ListCandidatesHandler(_candidate_repository(), _import_error_repository())


@lru_cache()
def get_list_import_errors_handler() -> ListImportErrorsHandler:
    return ListImportErrorsHandler(_import_error_repository())
