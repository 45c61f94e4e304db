"""Application DTOs."""

from .batch_dto import CandidateOutcome, CandidateResult, CandidateStatus, UploadBatchResult
from .candidate_dto import CandidateDTO, ImportErrorDTO, SimpleResult

__all__ = [
    "CandidateDTO",
    "CandidateOutcome",
    "CandidateResult",
    "CandidateStatus",
    "ImportErrorDTO",
    "SimpleResult",
    "UploadBatchResult",
]
