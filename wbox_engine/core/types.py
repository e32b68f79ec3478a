# wbox_engine/core/types.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

RGBA = Tuple[int, int, int, int]


@dataclass
class EncodedTileGrid:
    """Результат кодирования изображения в сетку тайлов (RLE по строкам)."""

    width: int
    height: int
    tile_map: List[str] = field(default_factory=list)
    # Обе структуры хранятся снизу вверх: строка 0 = нижняя строка изображения.
    tile_array: List[List[int]] = field(default_factory=list)
    tile_amounts: List[List[int]] = field(default_factory=list)
    unknown_pixels: int = 0

    def tile_index(self) -> dict[str, int]:
        return {name: i for i, name in enumerate(self.tile_map)}


@runtime_checkable
class IDitherer(Protocol):
    """Интерфейс, который должен реализовывать любой алгоритм квантования."""

    name: str

    def quantize(
        self, pixels: np.ndarray, palette: Sequence[RGBA], strength: float
    ) -> np.ndarray: ...
