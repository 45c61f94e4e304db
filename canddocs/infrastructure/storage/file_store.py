"""Retrying file state store for candidate artifacts.

Artifacts are filed under ``<root>/<session>/<exam>/<centre>/<role>/`` where
role is ``success``, ``errors`` or ``imported``; ``<root>/misc/`` holds files
written without a scope. Every write, delete and move is retried to ride out
transient locks held by virus scanners and search indexers.
"""
from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Callable

from canddocs import constants
from canddocs.domain.exceptions import StorageError
from canddocs.domain.value_objects.storage_scope import FolderRole, StorageScope
from canddocs.utils.retry import with_retry

logger = logging.getLogger(__name__)


class FileStore:
    """Durable write-once-then-move storage scoped by session, exam and centre."""

    def __init__(
        self,
        root: Path | str,
        *,
        retry_attempts: int = constants.FILE_RETRY_ATTEMPTS,
        retry_delay: float = constants.FILE_RETRY_DELAY,
        write_settle_delay: float = constants.WRITE_SETTLE_DELAY,
        import_settle_delay: float = constants.IMPORT_SETTLE_DELAY,
        move_settle_delay: float = constants.MOVE_SETTLE_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.root = Path(root)
        self._retry_attempts = retry_attempts
        self._retry_delay = retry_delay
        self._write_settle = write_settle_delay
        self._import_settle = import_settle_delay
        self._move_settle = move_settle_delay
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def save_success_file(self, data: bytes, scope: StorageScope, file_name: str) -> str:
        return self._save(data, self._role_dir(scope, FolderRole.SUCCESS), file_name, self._write_settle)

    def save_error_file(self, data: bytes, scope: StorageScope, file_name: str) -> str:
        return self._save(data, self._role_dir(scope, FolderRole.ERRORS), file_name, self._write_settle)

    def move_original_imported_pdf(self, data: bytes, scope: StorageScope, file_name: str) -> str:
        """Write the original uploaded PDF into the scope's ``imported`` folder."""
        return self._save(data, self._role_dir(scope, FolderRole.IMPORTED), file_name, self._import_settle)

    def save_file(self, data: bytes, file_name: str) -> str:
        """Legacy flat storage under ``<root>/misc``."""
        return self._save(data, self.root / FolderRole.MISC.value, file_name, self._write_settle)

    def move_to_error_folder(self, current_path: str) -> str:
        return self._move_between_roles(current_path, FolderRole.SUCCESS, FolderRole.ERRORS)

    def move_to_success_folder(self, current_path: str) -> str:
        return self._move_between_roles(current_path, FolderRole.ERRORS, FolderRole.SUCCESS)

    def get_imported_folder(self, scope: StorageScope) -> str:
        folder = self._role_dir(scope, FolderRole.IMPORTED)
        self._ensure_dir(folder)
        return str(folder)

    def delete_file(self, path: str) -> None:
        """Remove ``path`` if present, retrying while the OS holds it locked."""
        target = Path(path)

        def _delete() -> None:
            if target.exists():
                target.unlink()

        self._retry(_delete, f"delete {target}")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _role_dir(self, scope: StorageScope, role: FolderRole) -> Path:
        return self.root.joinpath(*scope.parts(), role.value)

    @staticmethod
    def _ensure_dir(folder: Path) -> Path:
        folder.mkdir(parents=True, exist_ok=True)
        return folder

    def _retry(self, operation: Callable[[], object], description: str):
        return with_retry(
            operation,
            attempts=self._retry_attempts,
            delay=self._retry_delay,
            sleep=self._sleep,
            description=description,
        )

    def _save(self, data: bytes, folder: Path, file_name: str, settle: float) -> str:
        if Path(file_name).name != file_name:
            raise StorageError(f"file name must not contain directories: {file_name}")
        self._ensure_dir(folder)
        path = folder / file_name
        self._retry(lambda: path.write_bytes(data), f"write {path}")
        logger.debug("Saved %s bytes to %s", len(data), path)

        # Give the OS time to release the handle before callers re-open it.
        self._sleep(settle)
        return str(path)

    def _move_between_roles(self, current_path: str, source: FolderRole, target: FolderRole) -> str:
        new_path = self._swap_role(current_path, source, target)
        self._ensure_dir(Path(new_path).parent)

        if Path(new_path).exists():
            self.delete_file(new_path)

        self._retry(lambda: os.replace(current_path, new_path), f"move {current_path}")
        logger.info("Moved %s -> %s", current_path, new_path)

        self._sleep(self._move_settle)
        return new_path

    @staticmethod
    def _swap_role(path: str, source: FolderRole, target: FolderRole) -> str:
        # Only the last role segment is swapped so a root path containing the
        # same word is left untouched.
        for sep in dict.fromkeys((os.sep, "/")):
            needle = f"{sep}{source.value}{sep}"
            head, found, tail = path.rpartition(needle)
            if found:
                return f"{head}{sep}{target.value}{sep}{tail}"
        raise StorageError(f"Path is not inside a '{source.value}' folder", path)
