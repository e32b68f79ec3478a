# ==============================================================================
# Файл: wbox_engine/core/export/image_exporters.py
# Назначение: Сохранение превью квантованного изображения (preview.png).
# ==============================================================================
from __future__ import annotations
import logging
import os
from pathlib import Path

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def _ensure_path_exists(path: str) -> None:
    """Убеждается, что директория для файла существует."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def write_preview_png(path: str, pixels: np.ndarray) -> None:
    """Сохраняет RGBA-изображение (HxWx4 uint8) как PNG без потерь."""
    arr = np.ascontiguousarray(pixels, dtype=np.uint8)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError(f"Expected HxWx4 RGBA array, got shape {arr.shape}")

    img = Image.fromarray(arr)

    _ensure_path_exists(path)
    tmp_path = path + ".tmp"
    img.save(tmp_path, format="PNG")
    os.replace(tmp_path, path)

    logger.info("--- EXPORT: Preview image saved: %s", path)
