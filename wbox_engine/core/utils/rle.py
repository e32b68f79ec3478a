# Файл: wbox_engine/core/utils/rle.py

from __future__ import annotations
from typing import Any, List, Sequence


def decode_rle_rows(rows: List[List[List[Any]]]) -> List[List[Any]]:
    """Декодирует RLE-строки обратно в 2D-сетку."""
    grid: List[List[Any]] = []
    for r in rows:
        line: List[Any] = []
        for val, run in r:
            line.extend([val] * int(run))
        grid.append(line)
    return grid


def join_rle_pairs(values: Sequence[Any], amounts: Sequence[int]) -> List[List[Any]]:
    """Склеивает параллельные списки значений и длин в [[значение, длина], ...]."""
    if len(values) != len(amounts):
        raise ValueError(
            f"RLE row is malformed: {len(values)} values vs {len(amounts)} amounts"
        )
    return [[v, int(n)] for v, n in zip(values, amounts)]
