"""Runs independent batch imports on a small worker pool.

Batches for different (session, exam, centre) scopes run concurrently;
batches that target the same scope are serialized so they never race on
folder creation or candidate file names.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, Optional, Tuple

from canddocs.application.commands.upload_batch import UploadBatchCommand, UploadBatchHandler
from canddocs.application.dto.batch_dto import UploadBatchResult

logger = logging.getLogger(__name__)

ScopeKey = Tuple[str, str, str]


class BatchDispatcher:
    def __init__(self, handler: UploadBatchHandler, max_workers: int = 2):
        self._handler = handler
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="batch")
        self._scope_locks: Dict[ScopeKey, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def submit(
        self,
        command: UploadBatchCommand,
        cancel_event: Optional[threading.Event] = None,
    ) -> "Future[UploadBatchResult]":
        key = self._scope_key(command)
        logger.info("Queued batch for %s", "/".join(key), extra={"source": command.source_file_path})
        return self._executor.submit(self._run, key, command, cancel_event)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "BatchDispatcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown(wait=True)

    def _run(
        self,
        key: ScopeKey,
        command: UploadBatchCommand,
        cancel_event: Optional[threading.Event],
    ) -> UploadBatchResult:
        with self._lock_for(key):
            return self._handler.handle(command, cancel_event=cancel_event)

    def _lock_for(self, key: ScopeKey) -> threading.Lock:
        with self._registry_lock:
            lock = self._scope_locks.get(key)
            if lock is None:
                lock = self._scope_locks[key] = threading.Lock()
            return lock

    @staticmethod
    def _scope_key(command: UploadBatchCommand) -> ScopeKey:
        request = command.request
        return (str(request.exam_year), request.exam_code, request.centre_number)
