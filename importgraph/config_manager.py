"""Load resolver configuration from TOML files in the project root."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml

from .config import DEFAULT_CONFIG, ResolverConfig
from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "importgraph.toml"
PYPROJECT_FILENAME = "pyproject.toml"


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return toml.load(f)
    except toml.TomlDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def load_config_section(
    project_root: Union[str, Path],
    config_file: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """Return the raw resolver section for *project_root*.

    An explicit *config_file* is read as a standalone ``importgraph.toml``.
    Otherwise ``importgraph.toml`` (``[resolver]``) wins over
    ``pyproject.toml`` (``[tool.importgraph]``).  Returns an empty dict when
    neither file provides a section.
    """
    root = Path(project_root)

    if config_file is not None:
        path = Path(config_file)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        return _read_toml(path).get("resolver", {})

    own = root / CONFIG_FILENAME
    if own.exists():
        logger.debug("Loading resolver config from %s", own)
        return _read_toml(own).get("resolver", {})

    pyproject = root / PYPROJECT_FILENAME
    if pyproject.exists():
        section = _read_toml(pyproject).get("tool", {}).get("importgraph", {})
        if section:
            logger.debug("Loading resolver config from %s", pyproject)
        return section

    return {}


def load_resolver_config(
    project_root: Union[str, Path],
    config_file: Optional[Union[str, Path]] = None,
) -> ResolverConfig:
    """Load a :class:`ResolverConfig`, falling back to the defaults."""
    section = load_config_section(project_root, config_file)
    if not section:
        return DEFAULT_CONFIG
    if not isinstance(section, dict):
        raise ConfigError("Resolver config section must be a table")
    return ResolverConfig.from_dict(section)


def save_resolver_config(project_root: Union[str, Path], section: Dict[str, Any]) -> Path:
    """Write *section* as the ``[resolver]`` table of ``importgraph.toml``.

    Other tables already present in the file are preserved.
    """
    path = Path(project_root) / CONFIG_FILENAME
    config = _read_toml(path) if path.exists() else {}
    config["resolver"] = section
    with open(path, "w", encoding="utf-8") as f:
        toml.dump(config, f)
    return path
