"""ValidateCorrectedDocument Command - files a corrected record back into success.

Only a record that has been corrected (``is_valid``) and whose file still
sits in the ``errors`` role can be moved; any other state is reported back to
the caller instead of being silently accepted.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from canddocs.application.dto.candidate_dto import SimpleResult
from canddocs.domain.repositories.candidate_repository import CandidateRepository
from canddocs.domain.repositories.import_error_repository import ImportErrorRepository
from canddocs.domain.value_objects.storage_scope import FolderRole

logger = logging.getLogger(__name__)


class SuccessMover(Protocol):
    def move_to_success_folder(self, current_path: str) -> str: ...


@dataclass(frozen=True)
class ValidateCorrectedDocumentCommand:
    document_id: int


class ValidateCorrectedDocumentHandler:
    """Handles ValidateCorrectedDocument commands."""

    def __init__(
        self,
        candidate_repository: CandidateRepository,
        error_repository: ImportErrorRepository,
        file_store: SuccessMover,
    ):
        self._candidates = candidate_repository
        self._errors = error_repository
        self._files = file_store

    def handle(self, command: ValidateCorrectedDocumentCommand) -> SimpleResult:
        document = self._candidates.find_by_id(command.document_id)
        if document is None:
            return SimpleResult.failed("Document not found.")
        if not document.is_valid:
            return SimpleResult.failed("Document still invalid. Fix data first.")
        if FolderRole.of_path(document.file_path) is not FolderRole.ERRORS:
            return SimpleResult.failed("Document already in success folder.")

        new_path = self._files.move_to_success_folder(document.file_path)
        document.relocate(new_path)
        self._candidates.update(document)
        cleared = self._errors.clear_for_document(document.id)

        logger.info(
            "Document %s moved back to success",
            document.id,
            extra={"path": new_path, "cleared_errors": cleared},
        )
        return SimpleResult(success=True, message="Document validated.", new_file_path=new_path)
