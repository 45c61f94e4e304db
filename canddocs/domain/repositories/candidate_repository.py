"""Candidate document repository interface (Abstract Base Class)."""

from abc import ABC, abstractmethod
from typing import List, Optional

from canddocs.domain.entities.candidate_document import CandidateDocument


class CandidateRepository(ABC):
    """Abstract repository for candidate documents."""

    @abstractmethod
    def add(self, document: CandidateDocument) -> CandidateDocument:
        """Persist a new document, assigning its identity; return it."""

    @abstractmethod
    def update(self, document: CandidateDocument) -> None:
        """Persist changes to an existing document."""

    @abstractmethod
    def find_by_id(self, document_id: int) -> Optional[CandidateDocument]:
        """Return the document with the provided identifier, if it exists."""

    @abstractmethod
    def search(
        self,
        name: Optional[str] = None,
        candidate_number: Optional[str] = None,
        centre_number: Optional[str] = None,
    ) -> List[CandidateDocument]:
        """Filter by name substring, exact number and exact centre; empty filters are ignored."""

    @abstractmethod
    def find_valid(self) -> List[CandidateDocument]:
        """Return valid documents ordered by id."""

    @abstractmethod
    def find_invalid(self, centre_code: Optional[str] = None) -> List[CandidateDocument]:
        """Return invalid documents ordered by id, optionally for one centre."""
