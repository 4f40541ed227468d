"""Filesystem access used by the resolver and tracker.

Kept behind a small interface so tests can count or fake every call.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path


class FileSystem(ABC):
    """Blocking filesystem operations needed to build the import graph."""

    @abstractmethod
    def realpath(self, path: str) -> str:
        """Absolute path with symlinks resolved."""
        ...

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        ...

    @abstractmethod
    def exists(self, path: str) -> bool:
        ...

    @abstractmethod
    def read_text(self, path: str) -> str:
        ...


class LocalFileSystem(FileSystem):
    """The real disk."""

    def realpath(self, path: str) -> str:
        return os.path.realpath(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")
