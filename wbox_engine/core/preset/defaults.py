# ========================
# file: wbox_engine/core/preset/defaults.py
# ========================
from __future__ import annotations
from typing import Any, Dict

from ..constants import DEFAULT_MAP_NAME

# Python-dict mirror of conf.json defaults (snake_case keys)
DEFAULT_CONFIG: Dict[str, Any] = {
    "algorithm": "SierraLite",
    "strength": 1.0,
    "included": [],
    "name": DEFAULT_MAP_NAME,
    "description": "",
    "output_dir": ".",
    "preview_name": "preview.png",
    "archive_name": "map.wbox",
}

# conf.json historically uses CamelCase keys
KEY_ALIASES: Dict[str, str] = {
    "Algorithm": "algorithm",
    "Strength": "strength",
    "Included": "included",
    "Name": "name",
    "Description": "description",
    "OutputDir": "output_dir",
    "PreviewName": "preview_name",
    "ArchiveName": "archive_name",
}
