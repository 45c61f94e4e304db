"""Command handler for operator corrections to an imported candidate."""
from __future__ import annotations

import logging

from canddocs.application.dto.candidate_dto import SimpleResult
from canddocs.domain.repositories.candidate_repository import CandidateRepository
from canddocs.schemas.candidate_schemas import UpdateCandidateRequest

logger = logging.getLogger(__name__)


class UpdateCandidateHandler:
    """Overwrites OCR-derived fields and marks the record valid; the file is not moved."""

    def __init__(self, candidate_repository: CandidateRepository):
        self._candidates = candidate_repository

    def handle(self, request: UpdateCandidateRequest) -> SimpleResult:
        document = self._candidates.find_by_id(request.id)
        if document is None:
            return SimpleResult.failed("Candidate not found.")

        document.apply_correction(
            candidate_name=request.candidate_name,
            candidate_number=request.candidate_number,
            session=request.session,
            centre_code=request.centre_code,
        )
        self._candidates.update(document)
        logger.info("Candidate %s corrected", document.id)
        return SimpleResult(
            success=True,
            message="Candidate updated successfully. Now call validate-document.",
        )
