"""File-based implementation of ImportErrorRepository."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from typing import Iterable, List

from canddocs.domain.entities.import_error_record import ImportErrorRecord
from canddocs.domain.repositories.import_error_repository import ImportErrorRepository

from .json_snapshot import JsonSnapshotFile

logger = logging.getLogger(__name__)


class FileImportErrorRepository(ImportErrorRepository):
    """Persist import errors in a single JSON snapshot; adds and clears are one write each."""

    def __init__(self, base_dir: str = "canddocs_data") -> None:
        self.base_dir = Path(base_dir)
        self._snapshot = JsonSnapshotFile(self.base_dir / "import_errors.json")
        self._lock = Lock()

    def add_errors(self, errors: Iterable[ImportErrorRecord]) -> List[ImportErrorRecord]:
        records = list(errors)
        if not records:
            return records
        with self._lock:
            data = self._snapshot.load()
            next_id = int(data["next_id"])
            for record in records:
                record.id = next_id
                next_id += 1
                data["items"].append(record.to_dict())
            data["next_id"] = next_id
            self._snapshot.save(data)
        logger.debug("Stored %s import errors", len(records))
        return records

    def find_all(self) -> List[ImportErrorRecord]:
        with self._lock:
            data = self._snapshot.load()
        records = [ImportErrorRecord.from_dict(item) for item in data["items"]]
        records.sort(key=lambda record: record.id or 0)
        return records

    def find_for_document(self, candidate_document_id: int) -> List[ImportErrorRecord]:
        return [record for record in self.find_all() if record.candidate_document_id == candidate_document_id]

    def clear_for_document(self, candidate_document_id: int) -> int:
        with self._lock:
            data = self._snapshot.load()
            kept = [item for item in data["items"] if item.get("candidate_document_id") != candidate_document_id]
            removed = len(data["items"]) - len(kept)
            if removed:
                data["items"] = kept
                self._snapshot.save(data)
        if removed:
            logger.info("Cleared %s import errors for candidate document %s", removed, candidate_document_id)
        return removed
