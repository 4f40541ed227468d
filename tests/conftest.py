"""Pytest configuration and fixtures for importgraph tests."""

import os
import shutil
import tempfile
from collections import Counter
from pathlib import Path
from typing import Dict, Generator, List

import pytest

from importgraph.diagnostics import DiagnosticCollector
from importgraph.extractor import ImportScanner
from importgraph.filesystem import FileSystem


class FakeFileSystem(FileSystem):
    """In-memory filesystem that counts every call.

    Directories are implied by the files they contain.
    """

    def __init__(self, files: Dict[str, str]) -> None:
        self.files = {os.path.normpath(p): text for p, text in files.items()}
        self.dirs = set()
        for path in self.files:
            parent = os.path.dirname(path)
            while parent and parent not in self.dirs:
                self.dirs.add(parent)
                parent = os.path.dirname(parent) if parent != "/" else ""
        self.calls: Counter = Counter()

    def realpath(self, path: str) -> str:
        self.calls["realpath"] += 1
        return os.path.normpath(path)

    def is_dir(self, path: str) -> bool:
        self.calls["is_dir"] += 1
        return path in self.dirs

    def exists(self, path: str) -> bool:
        self.calls["exists"] += 1
        return path in self.files or path in self.dirs

    def read_text(self, path: str) -> str:
        self.calls["read_text"] += 1
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


class LineScanner(ImportScanner):
    """Treats every whitespace-separated token of a file as a specifier."""

    def __init__(self) -> None:
        self.scanned: List[str] = []

    def scan(self, text: str, dialect: str = "typescript") -> List[str]:
        self.scanned.append(text)
        return text.split()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp()).resolve()
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_project_path() -> Path:
    """Get path to the sample TypeScript project."""
    return (Path(__file__).parent / "fixtures" / "sample_project").resolve()


@pytest.fixture
def collector() -> DiagnosticCollector:
    return DiagnosticCollector()


@pytest.fixture
def fake_fs_factory():
    """Build a FakeFileSystem from a {path: text} mapping."""
    return FakeFileSystem


@pytest.fixture
def line_scanner() -> LineScanner:
    return LineScanner()
