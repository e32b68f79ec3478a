# ========================
# file: wbox_engine/core/preset/validators.py
# ========================
from __future__ import annotations
import math
from typing import Any, Dict

from ..errors import ConfigValidationError


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigValidationError(msg)


def validate_dict(cfg: Dict[str, Any]) -> None:
    """Validate a normalized (snake_case) converter config dict.

    Raises ConfigValidationError on the first failing check. Unknown algorithm
    names are NOT an error here: the ditherer falls back to its default.
    """
    _require(
        isinstance(cfg.get("algorithm"), str) and cfg["algorithm"].strip() != "",
        "algorithm must be non-empty string",
    )

    strength = cfg.get("strength")
    _require(
        isinstance(strength, (int, float)) and not isinstance(strength, bool),
        "strength must be a number",
    )
    _require(math.isfinite(float(strength)), "strength must be finite")
    _require(float(strength) >= 0.0, "strength must be >= 0")

    included = cfg.get("included")
    _require(isinstance(included, (list, tuple)), "included must be a list of tile names")
    for i, name in enumerate(included):
        _require(isinstance(name, str), f"included[{i}] must be a string")

    for key in ("name", "description", "output_dir", "preview_name", "archive_name"):
        _require(isinstance(cfg.get(key), str), f"{key} must be a string")
    for key in ("preview_name", "archive_name"):
        _require(cfg[key].strip() != "", f"{key} must be non-empty")
