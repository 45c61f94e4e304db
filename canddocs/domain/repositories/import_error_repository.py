"""Import error repository interface (Abstract Base Class)."""

from abc import ABC, abstractmethod
from typing import Iterable, List

from canddocs.domain.entities.import_error_record import ImportErrorRecord


class ImportErrorRepository(ABC):
    """Abstract repository for import error records."""

    @abstractmethod
    def add_errors(self, errors: Iterable[ImportErrorRecord]) -> List[ImportErrorRecord]:
        """Persist the errors in one batch, assigning identities."""

    @abstractmethod
    def find_all(self) -> List[ImportErrorRecord]:
        """Return every stored error ordered by id."""

    @abstractmethod
    def find_for_document(self, candidate_document_id: int) -> List[ImportErrorRecord]:
        """Return the errors referencing one candidate document."""

    @abstractmethod
    def clear_for_document(self, candidate_document_id: int) -> int:
        """Remove every error referencing the document; return number removed."""
