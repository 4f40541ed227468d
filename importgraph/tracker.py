"""Memoized per-file import lists."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .config import DEFAULT_CONFIG, ResolverConfig
from .diagnostics import DiagnosticSink
from .errors import ScanError
from .extractor import ImportScanner, TreeSitterImportScanner, dialect_for, extract_raw_imports
from .filesystem import FileSystem
from .resolver import ImportResolver

logger = logging.getLogger(__name__)


def _imports_for_file(file: str, resolver: ImportResolver, scanner: ImportScanner) -> List[str]:
    path = resolver.normalize_importing_file(file)
    if path is None:
        return []

    try:
        text = resolver.fs.read_text(path)
    except UnicodeDecodeError as exc:
        raise ScanError(f"not valid UTF-8 ({exc.reason})", path) from exc

    try:
        raw_imports = extract_raw_imports(text, dialect_for(path), scanner=scanner)
    except ScanError as exc:
        if exc.file_path is None:
            raise ScanError(str(exc), path) from exc
        raise
    return resolver.resolve_all(raw_imports, path)


def get_imports_for_file(
    file: str,
    project_root: str,
    config: Optional[ResolverConfig] = None,
    fs: Optional[FileSystem] = None,
    sink: Optional[DiagnosticSink] = None,
    scanner: Optional[ImportScanner] = None,
) -> List[str]:
    """Absolute paths of the project files *file* imports. Not cached."""
    config = config or DEFAULT_CONFIG
    resolver = ImportResolver(project_root, config=config, fs=fs, sink=sink)
    scanner = scanner or TreeSitterImportScanner(config.detect_require_calls)
    return _imports_for_file(file, resolver, scanner)


class ImportTracker:
    """Memoizes the list of imports for each file.

    Entries are keyed by the path exactly as the caller passed it and are
    never invalidated: the source tree is assumed not to change while the
    tracker is alive.  A lookup that raises is not cached.

    Not thread-safe.  Sharing one tracker between threads would need a lock
    per path so each file is still extracted and resolved only once.
    """

    def __init__(
        self,
        project_root: str,
        config: Optional[ResolverConfig] = None,
        fs: Optional[FileSystem] = None,
        sink: Optional[DiagnosticSink] = None,
        scanner: Optional[ImportScanner] = None,
    ) -> None:
        config = config or DEFAULT_CONFIG
        self.resolver = ImportResolver(project_root, config=config, fs=fs, sink=sink)
        self.scanner = scanner or TreeSitterImportScanner(config.detect_require_calls)
        self._imports: Dict[str, List[str]] = {}

    @property
    def project_root(self) -> str:
        return self.resolver.project_root

    def get_imports(self, file: str) -> List[str]:
        """Imported paths for *file*; the caller gets its own copy of the list."""
        cached = self._imports.get(file)
        if cached is not None:
            return list(cached)

        logger.debug("Resolving imports for %s", file)
        imports = _imports_for_file(file, self.resolver, self.scanner)
        self._imports[file] = imports
        return list(imports)

    def cached_files(self) -> List[str]:
        return list(self._imports)

    def __contains__(self, file: object) -> bool:
        return file in self._imports

    def __len__(self) -> int:
        return len(self._imports)
