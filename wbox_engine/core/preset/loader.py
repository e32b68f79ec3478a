# ========================
# file: wbox_engine/core/preset/loader.py
# ========================
from __future__ import annotations
import copy
import json
import logging
import os
from typing import Any, Dict, Mapping, Union

from ..errors import ConfigError, ConfigNotFoundError
from .defaults import DEFAULT_CONFIG, KEY_ALIASES
from .model import ConverterConfig
from .validators import validate_dict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "conf.json"


def deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge. Lists/tuples are replaced, not merged element-wise."""
    out = copy.deepcopy(base)
    for k, v in overrides.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Map conf.json CamelCase keys to snake_case; unknown keys are kept as-is."""
    return {KEY_ALIASES.get(k, k): v for k, v in data.items()}


def _load_json_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def load_config(
    source: Union[str, Dict[str, Any], None] = None,
    overrides: Mapping[str, Any] | None = None,
) -> ConverterConfig:
    """Load converter config from a JSON path or raw dict, merge with defaults.

    Args:
        source: path to conf.json, raw dict, or None for the default file.
            A missing *default* file falls back to built-in defaults with a
            warning; a missing explicit path raises ConfigNotFoundError.
        overrides: mapping of ad-hoc overrides (last layer)
    Returns:
        ConverterConfig (immutable dataclass) ready for use
    """
    if source is None:
        if os.path.isfile(DEFAULT_CONFIG_FILE):
            data = _load_json_file(DEFAULT_CONFIG_FILE)
        else:
            logger.warning("%s not found, using default settings", DEFAULT_CONFIG_FILE)
            data = {}
    elif isinstance(source, str):
        if not os.path.isfile(source):
            raise ConfigNotFoundError(f"Config file '{source}' not found")
        data = _load_json_file(source)
    elif isinstance(source, dict):
        data = source
    else:
        raise TypeError("source must be str path, dict or None")

    merged = deep_merge(DEFAULT_CONFIG, normalize_keys(data))
    if overrides:
        merged = deep_merge(merged, normalize_keys(overrides))

    validate_dict(merged)

    unknown = sorted(set(merged) - set(DEFAULT_CONFIG))
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

    return ConverterConfig(
        algorithm=merged["algorithm"],
        strength=float(merged["strength"]),
        included=tuple(merged["included"]),
        name=merged["name"],
        description=merged["description"],
        output_dir=merged["output_dir"],
        preview_name=merged["preview_name"],
        archive_name=merged["archive_name"],
    )
