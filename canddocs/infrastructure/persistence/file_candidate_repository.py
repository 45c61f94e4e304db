"""File-based implementation of CandidateRepository."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from typing import Callable, List, Optional

from canddocs.domain.entities.candidate_document import CandidateDocument
from canddocs.domain.exceptions import EntityNotFoundError, RepositoryError
from canddocs.domain.repositories.candidate_repository import CandidateRepository

from .json_snapshot import JsonSnapshotFile

logger = logging.getLogger(__name__)


class FileCandidateRepository(CandidateRepository):
    """Persist candidate documents in a single JSON snapshot."""

    def __init__(self, base_dir: str = "canddocs_data") -> None:
        self.base_dir = Path(base_dir)
        self._snapshot = JsonSnapshotFile(self.base_dir / "candidate_documents.json")
        self._lock = Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def add(self, document: CandidateDocument) -> CandidateDocument:
        with self._lock:
            data = self._snapshot.load()
            document.id = int(data["next_id"])
            data["next_id"] = document.id + 1
            data["items"].append(document.to_dict())
            self._snapshot.save(data)
        logger.debug("Added candidate document %s", document.id)
        return document

    def update(self, document: CandidateDocument) -> None:
        if document.id is None:
            raise RepositoryError("Cannot update a candidate document without an id")
        with self._lock:
            data = self._snapshot.load()
            for position, item in enumerate(data["items"]):
                if item.get("id") == document.id:
                    data["items"][position] = document.to_dict()
                    break
            else:
                raise EntityNotFoundError("CandidateDocument", document.id)
            self._snapshot.save(data)
        logger.debug("Updated candidate document %s", document.id)

    def find_by_id(self, document_id: int) -> Optional[CandidateDocument]:
        for document in self._load_all():
            if document.id == document_id:
                return document
        return None

    def search(
        self,
        name: Optional[str] = None,
        candidate_number: Optional[str] = None,
        centre_number: Optional[str] = None,
    ) -> List[CandidateDocument]:
        return self._filter(
            lambda doc: (not name or name in doc.candidate_name)
            and (not centre_number or doc.centre_code == centre_number)
            and (not candidate_number or doc.candidate_number == candidate_number)
        )

    def find_valid(self) -> List[CandidateDocument]:
        return self._filter(lambda doc: doc.is_valid)

    def find_invalid(self, centre_code: Optional[str] = None) -> List[CandidateDocument]:
        return self._filter(
            lambda doc: not doc.is_valid and (not centre_code or doc.centre_code == centre_code)
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load_all(self) -> List[CandidateDocument]:
        with self._lock:
            data = self._snapshot.load()
        documents: List[CandidateDocument] = []
        for item in data["items"]:
            try:
                documents.append(CandidateDocument.from_dict(item))
            except (TypeError, ValueError) as exc:
                logger.warning("Skipping candidate document %s due to snapshot error: %s", item.get("id"), exc)
        return documents

    def _filter(self, predicate: Callable[[CandidateDocument], bool]) -> List[CandidateDocument]:
        matches = [doc for doc in self._load_all() if predicate(doc)]
        matches.sort(key=lambda doc: doc.id or 0)
        return matches
