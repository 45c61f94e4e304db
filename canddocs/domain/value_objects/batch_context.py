"""Batch-scoped metadata shared by every candidate of one upload."""
from __future__ import annotations

from dataclasses import dataclass

from .storage_scope import StorageScope


@dataclass(frozen=True)
class BatchContext:
    """Who uploaded the batch and which session/exam/centre it was declared for."""

    scope: StorageScope
    exam_year: int
    uploaded_by: str = "system"

    @property
    def centre(self) -> str:
        return self.scope.centre
