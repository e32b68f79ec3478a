# Файл: wbox_engine/io/image_io.py
from __future__ import annotations
import logging
from pathlib import Path

import imageio.v2 as imageio
import numpy as np
from PIL import Image

from ..core.constants import TILE_PX
from ..core.errors import ImageLoadError, ImageSizeError

logger = logging.getLogger(__name__)


def _to_rgba_u8(arr: np.ndarray) -> np.ndarray:
    """Приводит любое декодированное изображение к HxWx4 uint8."""
    if arr.dtype == np.uint16:
        arr = (arr >> 8).astype(np.uint8)
    elif arr.dtype != np.uint8:
        arr = np.clip(arr, 0, 255).astype(np.uint8)

    if arr.ndim == 2:
        arr = np.stack([arr, arr, arr], axis=-1)
    if arr.ndim != 3:
        raise ImageLoadError(f"Unsupported image shape {arr.shape}")

    channels = arr.shape[2]
    if channels == 2:  # серый + альфа
        gray, alpha = arr[..., 0], arr[..., 1]
        arr = np.stack([gray, gray, gray, alpha], axis=-1)
    elif channels == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr, alpha], axis=-1)
    elif channels != 4:
        raise ImageLoadError(f"Unsupported channel count: {channels}")
    return np.ascontiguousarray(arr)


def load_image_rgba(path: str | Path) -> np.ndarray:
    """Читает изображение (png/jpg/...) в массив HxWx4 uint8."""
    path = Path(path)
    if not path.is_file():
        raise ImageLoadError(f"Image file not found: {path}")
    try:
        arr = np.asarray(imageio.imread(path.as_posix()))
    except (OSError, ValueError) as e:
        raise ImageLoadError(f"Cannot decode image {path}: {e}") from e

    rgba = _to_rgba_u8(arr)
    logger.info("Loaded image %s: %dx%d", path, rgba.shape[1], rgba.shape[0])
    return rgba


def tile_aligned_size(width: int, height: int, tile_px: int = TILE_PX) -> tuple[int, int]:
    """Размер, округлённый вниз до кратного tile_px по каждой оси."""
    return (width // tile_px) * tile_px, (height // tile_px) * tile_px


def normalize_to_tiles(pixels: np.ndarray, tile_px: int = TILE_PX) -> np.ndarray:
    """
    Масштабирует изображение (Lanczos) до размера, кратного tile_px.
    Изображение меньше одной клетки по любой оси -> ImageSizeError.
    """
    h, w = pixels.shape[:2]
    new_w, new_h = tile_aligned_size(w, h, tile_px)
    if new_w == 0 or new_h == 0:
        raise ImageSizeError(
            f"Image {w}x{h} is smaller than one map cell ({tile_px}x{tile_px} px)"
        )
    if (new_w, new_h) == (w, h):
        return pixels

    img = Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
    img = img.resize((new_w, new_h), Image.Resampling.LANCZOS)
    logger.info("Resized image %dx%d -> %dx%d", w, h, new_w, new_h)
    return np.asarray(img, dtype=np.uint8).copy()
