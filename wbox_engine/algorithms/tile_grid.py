# ==============================================================================
# Файл: wbox_engine/algorithms/tile_grid.py
# Назначение: Кодирование квантованного изображения в сетку тайлов (RLE).
# ВЕРСИЯ 2.0: Векторизованный проход на numpy вместо попиксельного цикла.
# ==============================================================================
from __future__ import annotations
import logging
from collections import Counter
from typing import Dict, List, Mapping

import numpy as np

from ..core.constants import COLOR_TO_TILE_NAME, UNKNOWN_TILE
from ..core.types import EncodedTileGrid, RGBA
from ..core.utils.rle import decode_rle_rows, join_rle_pairs

logger = logging.getLogger(__name__)


def _pack_rgba(pixels: np.ndarray) -> np.ndarray:
    """Упаковывает HxWx4 uint8 в HxW uint32 (R в старших битах)."""
    p = pixels.astype(np.uint32)
    return (p[..., 0] << 24) | (p[..., 1] << 16) | (p[..., 2] << 8) | p[..., 3]


def _unpack_rgba(key: int) -> RGBA:
    key = int(key)
    return (key >> 24) & 0xFF, (key >> 16) & 0xFF, (key >> 8) & 0xFF, key & 0xFF


def _as_rgba_array(pixels: np.ndarray) -> np.ndarray:
    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError(f"Expected HxWx4 RGBA array, got shape {arr.shape}")
    return np.ascontiguousarray(arr, dtype=np.uint8)


def encode_tile_grid(
        pixels: np.ndarray,
        color_to_name: Mapping[RGBA, str] = COLOR_TO_TILE_NAME,
) -> EncodedTileGrid:
    """
    Превращает RGBA-изображение (HxWx4) в таблицу тайлов и RLE-строки.

    - Индексы тайлов выдаются по порядку первого появления (сверху вниз,
      слева направо), начиная с 0.
    - Строка изображения y пишется в строку сетки height - 1 - y
      (формат хранит строки снизу вверх).
    - Неизвестный цвет превращается в тайл "" и не прерывает кодирование.
    """
    arr = _as_rgba_array(pixels)
    h, w = arr.shape[:2]
    result = EncodedTileGrid(
        width=w,
        height=h,
        tile_array=[[] for _ in range(h)],
        tile_amounts=[[] for _ in range(h)],
    )
    if h == 0 or w == 0:
        return result

    flat = _pack_rgba(arr).ravel()
    colors, first_pos, inverse = np.unique(flat, return_index=True, return_inverse=True)
    inverse = inverse.ravel()

    # Несколько цветов могут давать одно имя (например, все неизвестные -> ""),
    # поэтому порядок считается по первой позиции ИМЕНИ, а не цвета.
    color_names = [color_to_name.get(_unpack_rgba(c), UNKNOWN_TILE) for c in colors]
    name_first: Dict[str, int] = {}
    for name, pos in zip(color_names, first_pos.tolist()):
        if name not in name_first or pos < name_first[name]:
            name_first[name] = pos

    result.tile_map = sorted(name_first, key=name_first.__getitem__)
    name_to_index = result.tile_index()

    lut = np.array([name_to_index[n] for n in color_names], dtype=np.int32)
    index_grid = lut[inverse].reshape(h, w)

    if UNKNOWN_TILE in name_to_index:
        result.unknown_pixels = int(np.count_nonzero(index_grid == name_to_index[UNKNOWN_TILE]))

    for y in range(h):
        row = index_grid[y]
        # Границы максимальных серий: 0, позиции смены индекса, w.
        starts = np.flatnonzero(row[1:] != row[:-1]) + 1
        bounds = np.concatenate(([0], starts, [w]))
        dst = h - 1 - y
        result.tile_array[dst] = row[bounds[:-1]].tolist()
        result.tile_amounts[dst] = np.diff(bounds).tolist()

    logger.debug(
        "Encoded %dx%d image: %d distinct tiles, %d runs",
        w, h, len(result.tile_map), sum(len(r) for r in result.tile_array),
    )
    return result


def decode_tile_grid(encoded: EncodedTileGrid) -> List[List[str]]:
    """
    Разворачивает RLE-строки обратно в сетку имён тайлов в порядке изображения
    (строка 0 = верхняя строка).
    """
    rows = [
        join_rle_pairs(indices, amounts)
        for indices, amounts in zip(encoded.tile_array, encoded.tile_amounts)
    ]
    index_rows = decode_rle_rows(rows)
    index_rows.reverse()
    return [[encoded.tile_map[i] for i in row] for row in index_rows]


def tile_pixel_counts(encoded: EncodedTileGrid) -> Counter:
    """Сколько пикселей занимает каждый тайл (для статистики в логах)."""
    counts: Counter = Counter()
    for indices, amounts in zip(encoded.tile_array, encoded.tile_amounts):
        for i, n in zip(indices, amounts):
            counts[encoded.tile_map[i]] += n
    return counts
