"""Module-system conventions used when resolving import specifiers.

Every table here is plain data so projects can extend it (see
``config_manager``) without touching the resolution code.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Iterable, Mapping, Tuple

from .errors import ConfigError

# ---------------------------------------------------------------------------
# Default tables
# ---------------------------------------------------------------------------

# Style sheets, images, data files and build-pipeline loader suffixes.
NON_SOURCE_SUFFIXES: Tuple[str, ...] = (
    ".css",
    ".svg",
    ".json",
    ".scss",
    ".yaml",
    ".png",
    "loadAsComponent",
    "loadAsUrl",
    "loadAsText",
)

# Assumed to have a .d.ts sibling which is the real dependency.
COMPILED_SUFFIXES: Tuple[str, ...] = (".js", ".jsx")

# Packages that contain a "/" but still live in node_modules.
EXTERNAL_PREFIXES: Tuple[str, ...] = (
    "@reduxjs/",
    "@testing-library/",
    "@fortawesome/",
    "@rjsf/",
    "immer",
    "react-",
    "css-selector",
    "@/vendors",
    "@cfworker",
    "idb/",
    "@apidevtools/",
    "redux-",
    "primereact/",
    "@atlaskit/",
    "type-fest",
    "formik/",
    "intro.js",
    "use-sync-external-store",
    "@xobotyi/",
    "@mozilla",
    "@popperjs",
    "@floating-ui",
    "regenerator-runtime",
    "@uipath",
    "@datadog",
    "cooky-cutter/",
    "fake-indexeddb",
    "iframe-resizer",
    "webextension-polyfill",
    "ace-builds",
    "@vespaiach/",
    "@pixiebrix/",
    "@storybook/",
    "@sinonjs/",
    "@shopify/",
)

# "" is the literal specifier as written.
EXTENSION_PRECEDENCE: Tuple[str, ...] = (".ts", ".tsx", ".d.ts", "")

INDEX_FILES: Tuple[str, ...] = ("index.ts",)


@dataclass(frozen=True)
class ResolverConfig:
    non_source_suffixes: Tuple[str, ...] = NON_SOURCE_SUFFIXES
    compiled_suffixes: Tuple[str, ...] = COMPILED_SUFFIXES
    external_prefixes: Tuple[str, ...] = EXTERNAL_PREFIXES
    extension_precedence: Tuple[str, ...] = EXTENSION_PRECEDENCE
    index_files: Tuple[str, ...] = INDEX_FILES
    path_separator: str = "/"
    relative_markers: Tuple[str, ...] = ("./", "../")
    root_alias: str = "@"
    detect_require_calls: bool = False

    @property
    def alias_prefix(self) -> str:
        """``@/`` for the default alias."""
        return f"{self.root_alias}{self.path_separator}"

    @property
    def alias_infix(self) -> str:
        """``/@/`` for the default alias."""
        return f"{self.path_separator}{self.root_alias}{self.path_separator}"

    def extended(
        self,
        external_prefixes: Iterable[str] = (),
        non_source_suffixes: Iterable[str] = (),
    ) -> "ResolverConfig":
        """Return a copy with extra denylist entries appended."""
        return replace(
            self,
            external_prefixes=self.external_prefixes + tuple(external_prefixes),
            non_source_suffixes=self.non_source_suffixes + tuple(non_source_suffixes),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResolverConfig":
        """Build a config from a plain mapping, e.g. a parsed TOML section.

        Table values must be lists of strings; a single string is taken as
        a one-entry table.  ``extra_external_prefixes`` and
        ``extra_non_source_suffixes`` extend the defaults instead of
        replacing them.
        """
        known = {f.name for f in fields(cls)}

        unknown = sorted(set(data) - known - set(EXTEND_KEYS))
        if unknown:
            raise ConfigError(f"Unknown resolver option(s): {', '.join(unknown)}")

        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key in EXTEND_KEYS:
                continue
            if key in TABLE_FIELDS:
                value = _as_table(key, value)
            elif key in ("root_alias", "path_separator") and not isinstance(value, str):
                raise ConfigError(f"{key} must be a string")
            elif key == "detect_require_calls" and not isinstance(value, bool):
                raise ConfigError("detect_require_calls must be a boolean")
            kwargs[key] = value

        config = cls(**kwargs)
        return config.extended(
            external_prefixes=_as_table("extra_external_prefixes", data.get("extra_external_prefixes", [])),
            non_source_suffixes=_as_table("extra_non_source_suffixes", data.get("extra_non_source_suffixes", [])),
        )


TABLE_FIELDS = frozenset({
    "non_source_suffixes",
    "compiled_suffixes",
    "external_prefixes",
    "extension_precedence",
    "index_files",
    "relative_markers",
})

EXTEND_KEYS = ("extra_external_prefixes", "extra_non_source_suffixes")


def _as_table(key: str, value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ConfigError(f"{key} must be a list of strings")


DEFAULT_CONFIG = ResolverConfig()
