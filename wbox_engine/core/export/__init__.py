# ==============================================================================
# Файл: wbox_engine/core/export/__init__.py
# Назначение: Точка входа в пакет для экспорта данных.
# ==============================================================================
from __future__ import annotations

from .image_exporters import write_preview_png
from .wbox_exporters import (
    compress_map_bytes,
    decompress_map_bytes,
    read_wbox,
    serialize_map_record,
    write_wbox,
)

__all__ = [
    "write_preview_png",
    "serialize_map_record",
    "compress_map_bytes",
    "decompress_map_bytes",
    "write_wbox",
    "read_wbox",
]
