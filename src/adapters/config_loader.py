"""Pattern config file adapter.

Loads a flat TOML (or JSON) file and hands the raw mapping to the core so the
same normalization applies as for command-line flags.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
import tomllib
from typing import Any, Union

from core.errors import PatternConfigError
from core.patterns import PatternConfig

LOGGER = logging.getLogger(__name__)


def _parse(path: Path, raw: str) -> Any:
    suffix = path.suffix.lower()
    if suffix == ".toml":
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as err:
            raise PatternConfigError(f"invalid TOML in {path}: {err}") from err
    if suffix == ".json":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as err:
            raise PatternConfigError(f"invalid JSON in {path}: {err}") from err
    raise PatternConfigError(f"unsupported config format '{suffix}' (expected .toml or .json)")


def load_pattern_config(path: Union[str, Path]) -> PatternConfig:
    """Load and compile a pattern config from disk.

    Missing or unreadable files raise the underlying OSError.
    """

    path = Path(path)
    with open(path, "r", encoding="utf-8") as handle:
        try:
            raw = handle.read()
        except UnicodeDecodeError as err:
            raise PatternConfigError(f"{path} is not valid UTF-8: {err}") from err

    data = _parse(path, raw)
    if not isinstance(data, dict):
        raise PatternConfigError(f"config in {path} must be a table/object at the top level")

    config = PatternConfig.from_mapping(data)
    LOGGER.debug("Loaded pattern config from %s", path)
    return config
