"""Two consecutive scanned pages belonging to one candidate."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CandidatePair:
    """Single-page PDF buffers for one candidate.

    ``page2`` is only absent for a dangling final odd page.
    """

    index: int
    page1: bytes
    page2: Optional[bytes] = None

    def __post_init__(self):
        if self.index < 1:
            raise ValueError("index must be >= 1")
        if not self.page1:
            raise ValueError("page1 is required")

    @property
    def has_second_page(self) -> bool:
        return self.page2 is not None
