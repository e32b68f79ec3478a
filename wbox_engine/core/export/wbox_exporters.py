# ==============================================================================
# Файл: wbox_engine/core/export/wbox_exporters.py
# Назначение: Сериализация записи карты в JSON и упаковка в сжатый map.wbox.
# ==============================================================================
from __future__ import annotations
import json
import logging
import os
import zlib
from pathlib import Path
from typing import Any

from ..constants import INT32_MAX, INT32_MIN
from ..errors import MapSerializationError
from ...world.serialization import MapRecord

logger = logging.getLogger(__name__)

# zlib.Z_BEST_COMPRESSION
WBOX_COMPRESSION_LEVEL = 9


def _ensure_path_exists(path: str) -> None:
    """Убеждается, что директория для файла существует."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def _check_value(value: Any, where: str) -> None:
    """Проверяет, что значение представимо в формате сохранения."""
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return
    if isinstance(value, int):
        if not INT32_MIN <= value <= INT32_MAX:
            raise MapSerializationError(f"{where}: integer {value} is out of int32 range")
        return
    if isinstance(value, float):
        # NaN/inf отсечёт json.dumps(allow_nan=False)
        return
    if isinstance(value, dict):
        for k, v in value.items():
            _check_value(v, f"{where}.{k}")
        return
    if isinstance(value, list):
        for i, v in enumerate(value):
            _check_value(v, f"{where}[{i}]")
        return
    raise MapSerializationError(f"{where}: unsupported type {type(value).__name__}")


def serialize_map_record(record: MapRecord) -> bytes:
    """
    Детерминированно сериализует запись карты в компактный UTF-8 JSON.
    Порядок ключей задаётся MapRecord.to_dict(), а не порядком словарей.
    """
    data = record.to_dict()
    _check_value(data, "map")
    try:
        text = json.dumps(data, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise MapSerializationError(f"Map record is not serializable: {e}") from e
    return text.encode("utf-8")


def compress_map_bytes(data: bytes, level: int = WBOX_COMPRESSION_LEVEL) -> bytes:
    return zlib.compress(data, level)


def decompress_map_bytes(data: bytes) -> bytes:
    return zlib.decompress(data)


def write_wbox(path: str, record: MapRecord) -> bytes:
    """
    Сохраняет map.wbox. Сериализация и сжатие делаются целиком в памяти,
    файл пишется атомарно, поэтому ошибка не оставит обрезанный архив.
    Возвращает записанные (сжатые) байты.
    """
    raw = serialize_map_record(record)
    packed = compress_map_bytes(raw)

    _ensure_path_exists(path)
    tmp_path = path + ".tmp"
    with open(tmp_path, "wb") as f:
        f.write(packed)
    os.replace(tmp_path, path)

    logger.info(
        "--- EXPORT: map saved: %s (%dx%d cells, %d bytes JSON -> %d bytes)",
        path, record.width, record.height, len(raw), len(packed),
    )
    return packed


def read_wbox(path: str) -> MapRecord:
    """Читает map.wbox обратно в MapRecord."""
    with open(path, "rb") as f:
        packed = f.read()
    try:
        data = json.loads(decompress_map_bytes(packed).decode("utf-8"))
    except (zlib.error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MapSerializationError(f"Cannot decode map archive {path}: {e}") from e
    return MapRecord.from_dict(data)
