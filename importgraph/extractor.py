"""Import extraction for TypeScript sources using Tree-sitter.

Only import tokens matter here, so a single walk over the concrete syntax
tree is enough; nothing is type-checked or resolved.  Tree-sitter is error
tolerant, which means a file with a syntax error still yields every import
the parser could recover.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import Any, Dict, List, Optional

import tree_sitter_typescript
from tree_sitter import Language, Parser

from .errors import ScanError

logger = logging.getLogger(__name__)

# Dialect name -> function returning the Tree-sitter language capsule
_GRAMMARS = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

DIALECT_BY_SUFFIX: Dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".jsx": "tsx",
}


def dialect_for(file_path: str) -> str:
    """Pick the grammar for *file_path*; anything unknown parses as TypeScript."""
    return DIALECT_BY_SUFFIX.get(PurePath(file_path).suffix, "typescript")


class ImportScanner(ABC):
    """Turns source text into the module specifiers it imports."""

    @abstractmethod
    def scan(self, text: str, dialect: str = "typescript") -> List[str]:
        """Return every specifier in source order, duplicates included."""
        ...


class TreeSitterImportScanner(ImportScanner):
    """Collects specifiers from static, ambient and dynamic import sites.

    Handles ``import ... from "x"``, ``import "x"``, ``import x = require("x")``,
    ``export ... from "x"``, ``import("x")`` with a literal argument, and
    imports nested in ``declare module`` blocks.  Plain ``require("x")``
    calls are only collected when *detect_require_calls* is set.
    """

    def __init__(self, detect_require_calls: bool = False) -> None:
        self.detect_require_calls = detect_require_calls
        self._parsers: Dict[str, Parser] = {}

    def _parser_for(self, dialect: str) -> Parser:
        parser = self._parsers.get(dialect)
        if parser is None:
            grammar = _GRAMMARS.get(dialect)
            if grammar is None:
                raise ValueError(f"Unsupported dialect '{dialect}'")
            parser = Parser(Language(grammar()))
            self._parsers[dialect] = parser
            logger.debug("Loaded tree-sitter parser for %s", dialect)
        return parser

    def scan(self, text: str, dialect: str = "typescript") -> List[str]:
        if "\x00" in text:
            raise ScanError("contains NUL bytes, not a text source file")

        tree = self._parser_for(dialect).parse(text.encode("utf-8"))
        if tree is None or tree.root_node is None:
            raise ScanError("tree-sitter produced no syntax tree")
        if tree.root_node.has_error:
            logger.debug("Recovered from syntax errors while scanning imports")

        specifiers: List[str] = []
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            specifier = self._specifier_of(node)
            if specifier is not None:
                specifiers.append(specifier)
            if node.type in ("string", "comment"):
                continue
            # Reverse so children pop in source order
            stack.extend(reversed(node.children))
        return specifiers

    # ------------------------------------------------------------------
    # Node handlers
    # ------------------------------------------------------------------

    def _specifier_of(self, node: Any) -> Optional[str]:
        if node.type == "import_statement":
            source = node.child_by_field_name("source")
            if source is None:
                for child in node.named_children:
                    if child.type == "import_require_clause":
                        source = child.child_by_field_name("source")
                        break
            return _string_value(source)

        if node.type == "export_statement":
            return _string_value(node.child_by_field_name("source"))

        if node.type == "call_expression":
            function = node.child_by_field_name("function")
            if function is None:
                return None
            is_dynamic_import = function.type == "import"
            is_require = (
                self.detect_require_calls
                and function.type == "identifier"
                and function.text == b"require"
            )
            if not (is_dynamic_import or is_require):
                return None
            arguments = node.child_by_field_name("arguments")
            if arguments is None or arguments.named_child_count != 1:
                return None
            return _string_value(arguments.named_children[0])

        return None


_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)", re.DOTALL)

_SINGLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\n": "",
    "\r\n": "",
    "\u2028": "",
    "\u2029": "",
}


def _unescape(match: "re.Match[str]") -> str:
    escape = match.group(1)
    if escape.startswith("u{"):
        return chr(int(escape[2:-1], 16))
    if escape[0] in "ux" and len(escape) > 1:
        return chr(int(escape[1:], 16))
    return _SINGLE_ESCAPES.get(escape, escape)


def _string_value(node: Any) -> Optional[str]:
    """Value of a string literal node, quotes removed and escapes decoded."""
    if node is None or node.type != "string":
        return None
    raw = node.text.decode("utf-8")
    if len(raw) < 2:
        return None
    return _ESCAPE.sub(_unescape, raw[1:-1])


_default_scanner: Optional[TreeSitterImportScanner] = None


def extract_raw_imports(
    text: str,
    dialect: str = "typescript",
    scanner: Optional[ImportScanner] = None,
) -> List[str]:
    """Return the raw module specifiers imported by *text*.

    Raises :class:`ScanError` when the text cannot be tokenized at all.
    """
    global _default_scanner
    if scanner is None:
        if _default_scanner is None:
            _default_scanner = TreeSitterImportScanner()
        scanner = _default_scanner
    return scanner.scan(text, dialect)
