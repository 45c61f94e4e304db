"""
Data Transfer Objects for batch import results.

Each candidate produces a ``CandidateResult`` (ok with an outcome, or err with
a kind and detail); the handler folds them into one ``UploadBatchResult``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from canddocs.domain.value_objects.error_kind import ErrorKind


class CandidateStatus(str, Enum):
    """Where a candidate ended up."""
    PERSISTED = "persisted"
    PERSISTED_WITH_ERRORS = "persisted_with_errors"


@dataclass(frozen=True)
class CandidateOutcome:
    index: int
    status: CandidateStatus
    file_path: str
    candidate_id: Optional[int]
    error_count: int = 0


@dataclass(frozen=True)
class CandidateResult:
    """Per-candidate result: exactly one of ``outcome`` or ``error_kind`` is set."""

    index: int
    outcome: Optional[CandidateOutcome] = None
    error_kind: Optional[ErrorKind] = None
    detail: Optional[str] = None

    @classmethod
    def ok(cls, outcome: CandidateOutcome) -> "CandidateResult":
        return cls(index=outcome.index, outcome=outcome)

    @classmethod
    def err(cls, index: int, kind: ErrorKind, detail: str) -> "CandidateResult":
        return cls(index=index, error_kind=kind, detail=detail)

    @property
    def is_ok(self) -> bool:
        return self.outcome is not None

    def summary(self) -> Optional[str]:
        """Human-readable batch message, ``None`` for a valid candidate."""
        if self.outcome is None:
            return f"[{self.index}] {self.detail}"
        if self.outcome.status is CandidateStatus.PERSISTED_WITH_ERRORS:
            return f"[{self.index}] Validation failed."
        return None


@dataclass
class UploadBatchResult:
    """Aggregate returned by one batch import; never persisted."""

    saved_file_paths: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    results: List[CandidateResult] = field(default_factory=list)
    imported_file_path: Optional[str] = None
    cancelled: bool = False

    @property
    def total_candidates(self) -> int:
        return len(self.saved_file_paths)

    def record(self, result: CandidateResult) -> None:
        self.results.append(result)
        message = result.summary()
        if message is not None:
            self.errors.append(message)
        elif result.outcome is not None:
            self.saved_file_paths.append(result.outcome.file_path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "saved_file_paths": list(self.saved_file_paths),
            "errors": list(self.errors),
            "total_candidates": self.total_candidates,
            "processed_candidates": len(self.results),
            "imported_file_path": self.imported_file_path,
            "cancelled": self.cancelled,
        }
