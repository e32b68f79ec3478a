# ==============================================================================
# Файл: wbox_engine/algorithms/dithering.py
# Назначение: Квантование изображения в палитру тайлов с диффузией ошибки.
# ==============================================================================
from __future__ import annotations
import logging
from typing import Dict, Sequence

import numpy as np
from numba import njit

from ..core.constants import CATALOG_PALETTE
from ..core.types import IDitherer, RGBA

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "SierraLite"


def _matrix(rows, divisor: float) -> np.ndarray:
    return np.asarray(rows, dtype=np.float32) / np.float32(divisor)


# Матрицы диффузии ошибки. Текущий пиксель стоит в первой строке,
# на колонку левее первого ненулевого веса.
ERROR_DIFFUSION_MATRICES: Dict[str, np.ndarray] = {
    "FloydSteinberg": _matrix([[0, 0, 7], [3, 5, 1]], 16),
    "FalseFloydSteinberg": _matrix([[0, 3], [3, 2]], 8),
    "Atkinson": _matrix([[0, 0, 1, 1], [1, 1, 1, 0], [0, 1, 0, 0]], 8),
    "Stucki": _matrix([[0, 0, 0, 8, 4], [2, 4, 8, 4, 2], [1, 2, 4, 2, 1]], 42),
    "Burkes": _matrix([[0, 0, 0, 8, 4], [2, 4, 8, 4, 2]], 32),
    "JarvisJudiceNinke": _matrix([[0, 0, 0, 7, 5], [3, 5, 7, 5, 3], [1, 3, 5, 3, 1]], 48),
    "Simple2D": _matrix([[0, 1], [1, 0]], 2),
    "StevenPigeon": _matrix([[0, 0, 0, 2, 1], [1, 2, 2, 2, 1], [0, 1, 1, 1, 0]], 14),
    "Sierra": _matrix([[0, 0, 0, 5, 3], [2, 4, 5, 4, 2], [0, 2, 3, 2, 0]], 32),
    "Sierra2": _matrix([[0, 0, 0, 4, 3], [1, 2, 3, 2, 1]], 16),
    "SierraLite": _matrix([[0, 0, 2], [1, 1, 0]], 4),
}


def _current_pixel_column(matrix: np.ndarray) -> int:
    nonzero = np.flatnonzero(matrix[0])
    if nonzero.size == 0:
        raise ValueError("Error diffusion matrix has no weights in its first row")
    return int(nonzero[0]) - 1


@njit(cache=True)
def _diffuse_error(buf: np.ndarray, palette: np.ndarray, matrix: np.ndarray, cur: int) -> np.ndarray:
    """
    Проход сверху вниз, слева направо. buf (HxWx3 float32) изменяется на месте.
    Возвращает HxW индексы цветов палитры.
    """
    H, W, _ = buf.shape
    K = palette.shape[0]
    MH, MW = matrix.shape
    out = np.zeros((H, W), dtype=np.int32)

    for y in range(H):
        for x in range(W):
            r = buf[y, x, 0]
            g = buf[y, x, 1]
            b = buf[y, x, 2]

            best = 0
            best_d = np.inf
            for k in range(K):
                dr = r - palette[k, 0]
                dg = g - palette[k, 1]
                db = b - palette[k, 2]
                d = dr * dr + dg * dg + db * db
                if d < best_d:
                    best_d = d
                    best = k
            out[y, x] = best

            er = r - palette[best, 0]
            eg = g - palette[best, 1]
            eb = b - palette[best, 2]
            for my in range(MH):
                ny = y + my
                if ny >= H:
                    break
                for mx in range(MW):
                    wgt = matrix[my, mx]
                    if wgt == 0.0:
                        continue
                    nx = x + mx - cur
                    if nx < 0 or nx >= W:
                        continue
                    buf[ny, nx, 0] += er * wgt
                    buf[ny, nx, 1] += eg * wgt
                    buf[ny, nx, 2] += eb * wgt
    return out


class ErrorDiffusionDitherer:
    """Квантование с диффузией ошибки по заданной матрице."""

    def __init__(self, name: str, matrix: np.ndarray):
        self.name = name
        self.matrix = np.ascontiguousarray(matrix, dtype=np.float32)
        self.current_column = _current_pixel_column(self.matrix)

    def quantize(
            self, pixels: np.ndarray, palette: Sequence[RGBA], strength: float
    ) -> np.ndarray:
        if len(palette) == 0:
            raise ValueError("Palette must contain at least one color")
        arr = np.asarray(pixels)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"Expected HxWx3 or HxWx4 image, got shape {arr.shape}")

        pal_rgba = np.asarray(palette, dtype=np.uint8).reshape(-1, 4)
        buf = np.ascontiguousarray(arr[..., :3], dtype=np.float32)
        weights = self.matrix * np.float32(strength)

        idx = _diffuse_error(
            buf, pal_rgba[:, :3].astype(np.float32), weights, self.current_column
        )
        out = pal_rgba[idx]
        # Палитра тайлов всегда непрозрачна.
        out[..., 3] = 255
        return out

    def __repr__(self) -> str:
        return f"ErrorDiffusionDitherer({self.name!r})"


DITHERERS: Dict[str, IDitherer] = {
    name: ErrorDiffusionDitherer(name, matrix)
    for name, matrix in ERROR_DIFFUSION_MATRICES.items()
}


def get_ditherer(algorithm: str) -> IDitherer:
    """Возвращает алгоритм по имени; неизвестное имя -> SierraLite с предупреждением."""
    ditherer = DITHERERS.get(algorithm)
    if ditherer is None:
        logger.warning(
            "Unknown dithering algorithm %r, switching to default %s",
            algorithm, DEFAULT_ALGORITHM,
        )
        ditherer = DITHERERS[DEFAULT_ALGORITHM]
    return ditherer


def quantize(
        pixels: np.ndarray, palette: Sequence[RGBA], algorithm: str, strength: float
) -> np.ndarray:
    """
    Квантует изображение в палитру. Пустая палитра = без ограничений:
    используются все цвета каталога, чтобы каждый пиксель стал известным тайлом.
    """
    if not palette:
        palette = CATALOG_PALETTE
    ditherer = get_ditherer(algorithm)
    logger.info(
        "Quantizing %dx%d image: %s, strength=%.2f, %d colors",
        pixels.shape[1], pixels.shape[0], ditherer.name, strength, len(palette),
    )
    return ditherer.quantize(pixels, palette, strength)
