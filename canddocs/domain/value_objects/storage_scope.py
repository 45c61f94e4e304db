"""
Storage scope and folder roles

A batch is filed under ``{session}/{exam}/{centre}`` with one subfolder per
role describing the disposition of the artifacts inside it.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Optional, Tuple

from canddocs.constants import CANDIDATE_FILE_TEMPLATE


class FolderRole(str, Enum):
    """Role subfolders of the file state store."""
    SUCCESS = "success"
    ERRORS = "errors"
    IMPORTED = "imported"
    MISC = "misc"

    @classmethod
    def of_path(cls, path: str) -> Optional["FolderRole"]:
        """Role of the folder a stored artifact currently sits in, if any."""
        parent = PurePath(path).parent.name
        for role in cls:
            if role.value == parent:
                return role
        return None


@dataclass(frozen=True)
class StorageScope:
    """Three-level key a batch and all of its artifacts are stored under."""

    session: str
    exam: str
    centre: str

    def __post_init__(self):
        for name in ("session", "exam", "centre"):
            value = str(getattr(self, name)).strip()
            if not value:
                raise ValueError(f"{name} must not be empty")
            if any(sep in value for sep in ("/", "\\")) or value in {".", ".."}:
                raise ValueError(f"{name} must be a single path segment: {value!r}")
            object.__setattr__(self, name, value)

    @classmethod
    def of(cls, session, exam, centre) -> "StorageScope":
        return cls(session=str(session), exam=str(exam), centre=str(centre))

    def parts(self) -> Tuple[str, str, str]:
        return (self.session, self.exam, self.centre)

    def candidate_file_name(self, index: int) -> str:
        """Name of the merged artifact for the 1-based candidate ``index``."""
        if index < 1:
            raise ValueError("candidate index must be >= 1")
        return CANDIDATE_FILE_TEMPLATE.format(
            session=self.session, exam=self.exam, centre=self.centre, index=index
        )

    def __str__(self) -> str:
        return "/".join(self.parts())
