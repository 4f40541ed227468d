"""Map raw module specifiers to files on disk.

Resolution is a fixed pipeline applied to each specifier on its own:

1. the importing file is symlink-resolved, and a directory is redirected to
   its index file (barrel import) or dropped when it has none;
2. style sheets, images, data files, loader suffixes and compiled ``.js`` /
   ``.jsx`` imports are filtered out;
3. bare package names (no path separator) and known external prefixes are
   filtered out;
4. the path is built relative to the importing file, the root alias, or the
   project root;
5. a root alias left in the middle of the path is stripped;
6. candidates are probed in extension precedence order.

Nothing here raises for an unresolvable import.  It becomes a diagnostic.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional

from .config import DEFAULT_CONFIG, ResolverConfig
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, log_sink
from .filesystem import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)


class ImportResolver:
    """Resolves specifiers for one project root."""

    def __init__(
        self,
        project_root: str,
        config: Optional[ResolverConfig] = None,
        fs: Optional[FileSystem] = None,
        sink: Optional[DiagnosticSink] = None,
    ) -> None:
        self.project_root = os.path.normpath(str(project_root))
        self.config = config or DEFAULT_CONFIG
        self.fs = fs or LocalFileSystem()
        self.sink = sink or log_sink

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _relative(self, path: str) -> str:
        return os.path.relpath(path, self.project_root)

    def _emit(self, kind: DiagnosticKind, message: str, file: str, specifier: Optional[str] = None) -> None:
        self.sink(Diagnostic(kind=kind, message=message, file=file, specifier=specifier))

    # ------------------------------------------------------------------
    # Step 1: directories
    # ------------------------------------------------------------------

    def _index_of(self, directory: str) -> Optional[str]:
        """Index file of *directory*, with a diagnostic either way."""
        rel_dir = self._relative(directory)
        for name in self.config.index_files:
            index = os.path.join(directory, name)
            if self.fs.exists(index):
                self._emit(DiagnosticKind.BARREL_IMPORT, f"Barrel import: {rel_dir}", rel_dir)
                return index

        self._emit(
            DiagnosticKind.UNINDEXED_DIRECTORY,
            f"Importing a directory without an index file: {rel_dir}",
            rel_dir,
        )
        return None

    def normalize_importing_file(self, file: str) -> Optional[str]:
        """Return the file to read for *file*, or None if it has no index.

        Symlinks are followed first so the directory check sees the target.
        """
        path = self.fs.realpath(file)
        if self.fs.is_dir(path):
            return self._index_of(path)
        return path

    # ------------------------------------------------------------------
    # Steps 2-3: filtering
    # ------------------------------------------------------------------

    def is_excluded(self, raw_import: str) -> bool:
        """True if *raw_import* is never a source dependency in this tree."""
        cfg = self.config
        if raw_import.endswith(cfg.non_source_suffixes):
            return True
        # Assumes a .d.ts sibling exists; not verified.
        if raw_import.endswith(cfg.compiled_suffixes):
            return True
        if cfg.path_separator not in raw_import:
            return True
        return raw_import.startswith(cfg.external_prefixes)

    # ------------------------------------------------------------------
    # Steps 4-5: path construction
    # ------------------------------------------------------------------

    def candidate_path(self, raw_import: str, importing_file: str) -> str:
        """Absolute, normalized path the specifier points at, before probing."""
        cfg = self.config
        if raw_import.startswith(cfg.relative_markers):
            path = os.path.join(os.path.dirname(importing_file), raw_import)
        elif cfg.root_alias and raw_import.startswith(cfg.alias_prefix):
            path = os.path.join(self.project_root, raw_import[len(cfg.alias_prefix):])
        else:
            path = os.path.join(self.project_root, raw_import)

        if cfg.root_alias and cfg.alias_infix in path:
            path = path.replace(cfg.alias_infix, cfg.path_separator)
        return os.path.normpath(path)

    # ------------------------------------------------------------------
    # Step 6: extension inference
    # ------------------------------------------------------------------

    def _probe(self, path: str) -> Optional[str]:
        for ext in self.config.extension_precedence:
            candidate = f"{path}{ext}"
            if self.fs.exists(candidate):
                return candidate
        return None

    def resolve(self, raw_import: str, importing_file: str) -> Optional[str]:
        """Resolve *raw_import* as written in *importing_file*.

        *importing_file* must already be normalized (see
        :meth:`normalize_importing_file`).  Returns an absolute path or None.
        """
        if self.is_excluded(raw_import):
            logger.debug("Skipping non-project import %r", raw_import)
            return None

        path = self.candidate_path(raw_import, importing_file)
        resolved = self._probe(path)
        if resolved is None:
            self._emit(
                DiagnosticKind.UNRESOLVED_IMPORT,
                f"Unresolved import {self._relative(path)} in {self._relative(importing_file)}",
                self._relative(importing_file),
                specifier=self._relative(path),
            )
            return None

        if self.fs.is_dir(resolved):
            return self._index_of(resolved)
        return resolved

    def resolve_all(self, raw_imports: Iterable[str], importing_file: str) -> List[str]:
        """Resolve each specifier, dropping the ones that do not resolve."""
        resolved: List[str] = []
        for raw_import in raw_imports:
            path = self.resolve(raw_import, importing_file)
            if path is not None:
                resolved.append(path)
        return resolved


def resolve(
    raw_import: str,
    importing_file: str,
    project_root: str,
    config: Optional[ResolverConfig] = None,
    fs: Optional[FileSystem] = None,
    sink: Optional[DiagnosticSink] = None,
) -> Optional[str]:
    """One-shot resolution of a single specifier, including step 1."""
    resolver = ImportResolver(project_root, config=config, fs=fs, sink=sink)
    file = resolver.normalize_importing_file(importing_file)
    if file is None:
        return None
    return resolver.resolve(raw_import, file)
