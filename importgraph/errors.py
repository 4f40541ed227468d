"""Exceptions raised by the import graph builder.

Only hard failures are exceptions.  Unresolved imports and directory
imports are reported through the diagnostics sink instead.
"""

from __future__ import annotations

from typing import Optional


class ImportGraphError(Exception):
    """Base class for all importgraph errors."""


class ScanError(ImportGraphError):
    """A source file could not be tokenized at all."""

    def __init__(self, message: str, file_path: Optional[str] = None) -> None:
        self.file_path = file_path
        if file_path:
            message = f"{file_path}: {message}"
        super().__init__(message)


class ConfigError(ImportGraphError):
    """Resolver configuration is malformed."""
