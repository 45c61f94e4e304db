"""
Domain Value Objects

Immutable value objects that encapsulate domain concepts with validation.
"""
from .batch_context import BatchContext
from .candidate_info import CandidateInfo
from .candidate_pair import CandidatePair
from .error_kind import ErrorKind
from .storage_scope import FolderRole, StorageScope

__all__ = [
    'BatchContext',
    'CandidateInfo',
    'CandidatePair',
    'ErrorKind',
    'FolderRole',
    'StorageScope',
]
