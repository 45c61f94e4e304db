"""Domain repository interfaces."""

from .candidate_repository import CandidateRepository
from .import_error_repository import ImportErrorRepository

__all__ = ["CandidateRepository", "ImportErrorRepository"]
