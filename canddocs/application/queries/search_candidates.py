"""
SearchCandidates Query - filters candidate documents by name, number and centre.

Name matches on substring, candidate number and centre code match exactly;
blank filters are ignored. Results are ordered by id.
"""
from dataclasses import dataclass
from typing import List, Optional

from canddocs.application.dto.candidate_dto import CandidateDTO
from canddocs.domain.repositories.candidate_repository import CandidateRepository


@dataclass(frozen=True)
class SearchCandidatesQuery:
    name: Optional[str] = None
    candidate_number: Optional[str] = None
    centre_number: Optional[str] = None


class SearchCandidatesHandler:
    def __init__(self, candidate_repository: CandidateRepository):
        self._candidates = candidate_repository

    def handle(self, query: SearchCandidatesQuery) -> List[CandidateDTO]:
        documents = self._candidates.search(
            name=(query.name or "").strip() or None,
            candidate_number=(query.candidate_number or "").strip() or None,
            centre_number=(query.centre_number or "").strip() or None,
        )
        return [CandidateDTO.from_entity(document) for document in documents]
