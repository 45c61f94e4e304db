"""File-backed repositories."""

from .file_candidate_repository import FileCandidateRepository
from .file_import_error_repository import FileImportErrorRepository

__all__ = ["FileCandidateRepository", "FileImportErrorRepository"]
