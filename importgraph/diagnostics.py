"""Soft diagnostics emitted while resolving imports.

Resolution never raises for an unresolved specifier or a directory import.
It reports a :class:`Diagnostic` to a sink instead, and the caller decides
whether to log, collect or ignore it.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class DiagnosticKind(str, enum.Enum):
    UNRESOLVED_IMPORT = "unresolved_import"
    UNINDEXED_DIRECTORY = "unindexed_directory"
    BARREL_IMPORT = "barrel_import"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    file: str
    specifier: Optional[str] = None

    def __str__(self) -> str:
        return f"Warning: {self.message}"


DiagnosticSink = Callable[[Diagnostic], None]


def log_sink(diagnostic: Diagnostic) -> None:
    """Default sink: emit through :mod:`logging` at WARNING level."""
    logger.warning("%s", diagnostic)


def null_sink(diagnostic: Diagnostic) -> None:
    """Sink that drops everything."""


class DiagnosticCollector:
    """Sink that keeps every diagnostic it receives."""

    def __init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self):
        return iter(self.diagnostics)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]

    def clear(self) -> None:
        self.diagnostics.clear()
