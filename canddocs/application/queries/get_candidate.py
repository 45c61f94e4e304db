"""
GetCandidate Query - Retrieves one candidate document with its import errors.
"""
from dataclasses import dataclass

from canddocs.application.dto.candidate_dto import CandidateDTO
from canddocs.domain.exceptions import EntityNotFoundError
from canddocs.domain.repositories.candidate_repository import CandidateRepository
from canddocs.domain.repositories.import_error_repository import ImportErrorRepository


@dataclass(frozen=True)
class GetCandidateQuery:
    document_id: int


class GetCandidateHandler:
    """Handles GetCandidate queries."""

    def __init__(self, candidate_repository: CandidateRepository, error_repository: ImportErrorRepository):
        self._candidates = candidate_repository
        self._errors = error_repository

    def handle(self, query: GetCandidateQuery) -> CandidateDTO:
        """
        Raises:
            EntityNotFoundError: If no document has the requested id
        """
        document = self._candidates.find_by_id(query.document_id)
        if document is None:
            raise EntityNotFoundError(
                "CandidateDocument",
                query.document_id,
                message=f"Candidate document with ID '{query.document_id}' not found",
            )
        return CandidateDTO.from_entity(document, self._errors.find_for_document(document.id))
