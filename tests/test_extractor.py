"""Tests for the Tree-sitter import extractor."""

import pytest

from importgraph.errors import ScanError
from importgraph.extractor import (
    ImportScanner,
    TreeSitterImportScanner,
    dialect_for,
    extract_raw_imports,
)


def test_static_imports_in_source_order():
    code = '''
import { a } from "./a";
import b from './b';
import * as c from "@/c";
import "./side-effect";
import type { D } from "../types/d";
'''
    assert extract_raw_imports(code) == ["./a", "./b", "@/c", "./side-effect", "../types/d"]


def test_export_from_statements():
    code = '''
export { x } from "./x";
export * from "./all";
export * as ns from "./ns";
export const local = 1;
'''
    assert extract_raw_imports(code) == ["./x", "./all", "./ns"]


def test_import_equals_require():
    code = 'import legacy = require("./legacy");\n'
    assert extract_raw_imports(code) == ["./legacy"]


def test_dynamic_import_with_literal_only():
    code = '''
async function load(name: string) {
  const lazy = await import("./lazy");
  const other = await import(name);
  return [lazy, other];
}
'''
    assert extract_raw_imports(code) == ["./lazy"]


def test_require_calls_ignored_by_default():
    code = 'const fs = require("./helpers");\n'
    assert extract_raw_imports(code) == []


def test_require_calls_collected_when_enabled():
    code = 'const helpers = require("./helpers");\n'
    scanner = TreeSitterImportScanner(detect_require_calls=True)
    assert extract_raw_imports(code, scanner=scanner) == ["./helpers"]


def test_ambient_module_imports():
    code = '''
declare module "widget" {
  import { Base } from "./base";
  export class Widget extends Base {}
}
'''
    assert extract_raw_imports(code) == ["./base"]


def test_strings_and_comments_are_not_imports():
    code = '''
// import nope from "./commented";
/* import alsoNope from "./block"; */
const text = 'import fake from "./in-string"';
import real from "./real";
'''
    assert extract_raw_imports(code) == ["./real"]


def test_duplicates_are_kept():
    code = '''
import { a } from "./shared";
import { b } from "./shared";
'''
    assert extract_raw_imports(code) == ["./shared", "./shared"]


def test_no_imports():
    assert extract_raw_imports("export const answer = 42;\n") == []
    assert extract_raw_imports("") == []


def test_tsx_dialect():
    code = '''
import { Button } from "./Button";

export const App = () => <Button label="hi" />;
'''
    assert extract_raw_imports(code, dialect="tsx") == ["./Button"]


def test_recovers_imports_before_syntax_error():
    code = '''
import first from "./first";
const = ;;; {{
'''
    assert "./first" in extract_raw_imports(code)


def test_binary_content_raises_scan_error():
    with pytest.raises(ScanError):
        extract_raw_imports("import a from './a';\x00\x01\x02")


def test_unknown_dialect():
    with pytest.raises(ValueError):
        TreeSitterImportScanner().scan("import a from './a';", dialect="cobol")


def test_custom_scanner_is_used():
    class Canned(ImportScanner):
        def scan(self, text, dialect="typescript"):
            return ["./canned"]

    assert extract_raw_imports("whatever", scanner=Canned()) == ["./canned"]


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/proj/a.ts", "typescript"),
        ("/proj/types.d.ts", "typescript"),
        ("/proj/App.tsx", "tsx"),
        ("/proj/README", "typescript"),
    ],
)
def test_dialect_for(path, expected):
    assert dialect_for(path) == expected


def test_dynamic_import_inside_template_substitution():
    code = 'const s = `${await import("./inner")}`;\n'
    assert extract_raw_imports(code) == ["./inner"]


def test_template_text_is_not_an_import():
    code = 'const s = `import("./not-real")`;\n'
    assert extract_raw_imports(code) == []


@pytest.mark.parametrize(
    "literal,expected",
    [
        (r'"./ab"', "./ab"),
        (r'"./\u{63}"', "./c"),
        (r'"./\x64"', "./d"),
        (r"'./it\'s'", "./it's"),
        (r'"./back\\slash"', "./back\\slash"),
    ],
)
def test_string_escapes_are_decoded(literal, expected):
    assert extract_raw_imports(f"import x from {literal};\n") == [expected]
