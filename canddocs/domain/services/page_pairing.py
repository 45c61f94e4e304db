"""Group an ordered sequence of single-page PDFs into per-candidate pairs."""
from __future__ import annotations

from typing import List, Sequence

from canddocs.constants import PAGES_PER_CANDIDATE
from canddocs.domain.value_objects.candidate_pair import CandidatePair


def pair_pages(pages: Sequence[bytes]) -> List[CandidatePair]:
    """Return consecutive non-overlapping pairs in source order.

    Candidate ``index`` is 1-based; a dangling final odd page yields a pair
    without ``page2``. Defined for any length, including 0 and 1.
    """
    pairs: List[CandidatePair] = []
    for position in range(0, len(pages), PAGES_PER_CANDIDATE):
        page2 = pages[position + 1] if position + 1 < len(pages) else None
        pairs.append(
            CandidatePair(
                index=position // PAGES_PER_CANDIDATE + 1,
                page1=pages[position],
                page2=page2,
            )
        )
    return pairs
