"""ListImportErrors Query - every recorded import error, optionally for one document."""
from dataclasses import dataclass
from typing import List, Optional

from canddocs.application.dto.candidate_dto import ImportErrorDTO
from canddocs.domain.repositories.import_error_repository import ImportErrorRepository


@dataclass(frozen=True)
class ListImportErrorsQuery:
    candidate_document_id: Optional[int] = None


class ListImportErrorsHandler:
    def __init__(self, error_repository: ImportErrorRepository):
        self._errors = error_repository

    def handle(self, query: ListImportErrorsQuery) -> List[ImportErrorDTO]:
        if query.candidate_document_id is None:
            records = self._errors.find_all()
        else:
            records = self._errors.find_for_document(query.candidate_document_id)
        return [ImportErrorDTO.from_entity(record) for record in records]
