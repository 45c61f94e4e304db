"""Atomic JSON snapshot files shared by the file-backed repositories."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from canddocs.constants import SNAPSHOT_VERSION
from canddocs.domain.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class JsonSnapshotFile:
    """A ``{"version", "next_id", "items"}`` document written via temp file + replace."""

    def __init__(self, path: Path) -> None:
        self.path = path
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:  # pragma: no cover - disk failure
            raise RepositoryError(f"Failed to create directory {self.path.parent}", exc)

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {"version": SNAPSHOT_VERSION, "next_id": 1, "items": []}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RepositoryError(f"Corrupted snapshot {self.path}", exc)
        except OSError as exc:  # pragma: no cover - disk failure
            raise RepositoryError(f"Failed to read snapshot {self.path}", exc)
        data.setdefault("next_id", 1)
        data.setdefault("items", [])
        return data

    def save(self, data: Dict[str, Any]) -> None:
        data["version"] = SNAPSHOT_VERSION
        tmp_path = self.path.with_suffix(".tmp")
        try:
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
            logger.debug("Saved snapshot %s (%s items)", self.path, len(data.get("items", [])))
        except (OSError, TypeError, ValueError) as exc:
            raise RepositoryError(f"Failed to save snapshot {self.path}", exc)
        finally:
            if tmp_path.exists():
                tmp_path.unlink(missing_ok=True)
