"""Memoized module dependency graph for TypeScript source trees."""

from .config import DEFAULT_CONFIG, ResolverConfig
from .config_manager import load_resolver_config
from .diagnostics import Diagnostic, DiagnosticCollector, DiagnosticKind, log_sink, null_sink
from .errors import ConfigError, ImportGraphError, ScanError
from .extractor import ImportScanner, TreeSitterImportScanner, extract_raw_imports
from .filesystem import FileSystem, LocalFileSystem
from .graph import dependents, find_cycles, reachable
from .resolver import ImportResolver, resolve
from .tracker import ImportTracker, get_imports_for_file

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigError",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticKind",
    "FileSystem",
    "ImportGraphError",
    "ImportResolver",
    "ImportScanner",
    "ImportTracker",
    "LocalFileSystem",
    "ResolverConfig",
    "ScanError",
    "TreeSitterImportScanner",
    "dependents",
    "extract_raw_imports",
    "find_cycles",
    "get_imports_for_file",
    "load_resolver_config",
    "log_sink",
    "null_sink",
    "reachable",
    "resolve",
]
