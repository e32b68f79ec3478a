# ========================
# file: wbox_engine/core/preset/__init__.py
# ========================
from .defaults import DEFAULT_CONFIG
from .loader import DEFAULT_CONFIG_FILE, deep_merge, load_config
from .model import ConverterConfig

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "ConverterConfig",
    "load_config",
    "deep_merge",
]
