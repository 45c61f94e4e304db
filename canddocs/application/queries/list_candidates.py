"""
ListCandidates Query - lists the valid or invalid partition of imported candidates.

The invalid partition can be narrowed to one centre and, for review screens,
carry each document's outstanding import errors.
"""
from dataclasses import dataclass
from typing import List, Optional

from canddocs.application.dto.candidate_dto import CandidateDTO
from canddocs.domain.exceptions import DomainValidationError
from canddocs.domain.repositories.candidate_repository import CandidateRepository
from canddocs.domain.repositories.import_error_repository import ImportErrorRepository


@dataclass(frozen=True)
class ListCandidatesQuery:
    valid: bool = True
    centre_code: Optional[str] = None
    include_errors: bool = False


class ListCandidatesHandler:
    """Handles ListCandidates queries."""

    def __init__(self, candidate_repository: CandidateRepository, error_repository: ImportErrorRepository):
        self._candidates = candidate_repository
        self._errors = error_repository

    def handle(self, query: ListCandidatesQuery) -> List[CandidateDTO]:
        if query.valid:
            if query.centre_code:
                raise DomainValidationError("Centre filter only applies to invalid candidates")
            documents = self._candidates.find_valid()
        else:
            documents = self._candidates.find_invalid(centre_code=query.centre_code or None)

        if not query.include_errors:
            return [CandidateDTO.from_entity(document) for document in documents]
        return [
            CandidateDTO.from_entity(document, self._errors.find_for_document(document.id))
            for document in documents
        ]
