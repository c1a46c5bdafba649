"""Helpers for loading generation options from TOML/JSON sources.

This module provides a single entry point `load_generation_options`
that accepts various configuration sources:

* None -> default GenerationOptions
* dict -> GenerationOptions.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

Keyword overrides (typically CLI flags) are applied on top of the loaded
values before validation.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from slngen.config.schema import GenerationOptions
from slngen.errors import ConfigError

logger = logging.getLogger("slngen.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]

# Options may be nested under this table in a shared TOML file.
CONFIG_SECTION = "slngen"


def _read_source(source: Union[str, Path]) -> Dict[str, Any]:
    path = Path(source)
    text: Optional[str] = None
    fmt: Optional[str] = None

    if path.exists():
        text = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()
        if suffix in {".toml", ".tml"}:
            fmt = "toml"
        elif suffix == ".json":
            fmt = "json"
        else:
            stripped = text.lstrip()
            fmt = "json" if stripped.startswith("{") else "toml"
        logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
    else:
        text = str(source)
        stripped = text.lstrip()
        fmt = "json" if stripped.startswith("{") else "toml"
        logger.info("Loading configuration from inline %s string", fmt)

    try:
        if fmt == "json":
            data = json.loads(text)
        else:
            data = tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot parse {fmt.upper()} configuration: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Top-level configuration must be a mapping/dict")
    return data


def load_generation_options(
    source: ConfigSource = None, **overrides: Any
) -> GenerationOptions:
    """Load GenerationOptions from various configuration sources.

    Args:
        source: One of:
            * None: default options
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)
        **overrides: Values replacing loaded ones; None values are ignored.

    Returns:
        GenerationOptions instance.

    Raises:
        ConfigError: If the source cannot be parsed or fails validation.
    """
    if source is None:
        logger.debug("No config source provided; using default GenerationOptions")
        data: Dict[str, Any] = {}
    elif isinstance(source, dict):
        logger.debug("Loading GenerationOptions from provided dict")
        data = dict(source)
    elif isinstance(source, (str, Path)):
        data = _read_source(source)
    else:
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    section = data.get(CONFIG_SECTION)
    if isinstance(section, dict):
        data = dict(section)

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return GenerationOptions.from_dict(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid generation options: {e}") from e


__all__ = ["load_generation_options"]
