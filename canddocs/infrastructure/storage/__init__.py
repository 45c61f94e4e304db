"""Filesystem persistence for candidate artifacts."""

from .file_store import FileStore

__all__ = ["FileStore"]
