"""Persisted error kinds for import error records."""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure recorded against a candidate or a batch."""

    MISSING_FIELD = "MissingField"
    INVALID_FORMAT = "InvalidFormat"
    OCR_ISSUE = "OCRIssue"
    FILE_NOT_FOUND = "FileNotFound"
    UNHANDLED_EXCEPTION = "UnhandledException"
    MALFORMED_DOCUMENT = "MalformedDocument"
    MERGE_FAILURE = "MergeFailure"

    @classmethod
    def from_string(cls, value: str) -> "ErrorKind":
        """Parse a stored error type, falling back to ``UnhandledException``."""
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        return cls.UNHANDLED_EXCEPTION

    def __str__(self) -> str:
        return self.value
