# ==============================================================================
# Файл: wbox_engine/pipeline.py
# Назначение: Полный проход конвертера: изображение -> preview.png + map.wbox.
# ==============================================================================
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .algorithms.dithering import quantize
from .algorithms.palette import resolve_palette, split_known_tiles
from .algorithms.tile_grid import encode_tile_grid, tile_pixel_counts
from .core.export import write_preview_png, write_wbox
from .core.preset import ConverterConfig
from .core.types import EncodedTileGrid
from .io.image_io import load_image_rgba, normalize_to_tiles
from .world.serialization import MapRecord, build_map_record

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    preview_path: str
    archive_path: str
    encoded: EncodedTileGrid
    record: MapRecord


def convert_pixels(pixels: np.ndarray, config: ConverterConfig) -> tuple[np.ndarray, EncodedTileGrid]:
    """Нормализация, квантование и кодирование уже декодированного изображения."""
    known, unknown = split_known_tiles(config.included)
    for name in unknown:
        logger.warning("Unknown tile in 'included': %r (skipped)", name)
    palette = resolve_palette(known)

    pixels = normalize_to_tiles(pixels)
    quantized = quantize(pixels, palette, config.algorithm, config.strength)
    encoded = encode_tile_grid(quantized)

    if encoded.unknown_pixels:
        logger.warning(
            "%d pixels have colors outside the tile catalog and were saved as empty tiles",
            encoded.unknown_pixels,
        )
    if logger.isEnabledFor(logging.DEBUG):
        for tile_name, count in tile_pixel_counts(encoded).most_common():
            logger.debug("     - %s: %d pixels", tile_name or "<unknown>", count)
    return quantized, encoded


def convert_image(
        image_path: str | Path,
        config: ConverterConfig,
        output_dir: str | Path | None = None,
) -> ConversionResult:
    """Конвертирует файл изображения, пишет preview.png и map.wbox в output_dir."""
    out_dir = Path(output_dir if output_dir is not None else config.output_dir)
    preview_path = os.fspath(out_dir / config.preview_name)
    archive_path = os.fspath(out_dir / config.archive_name)

    logger.info("--- Converting %s ---", image_path)
    pixels = load_image_rgba(image_path)
    quantized, encoded = convert_pixels(pixels, config)

    write_preview_png(preview_path, quantized)

    record = build_map_record(encoded, name=config.name, description=config.description)
    write_wbox(archive_path, record)

    logger.info(
        "Done: %d tile types, %dx%d cells", len(record.tileMap), record.width, record.height
    )
    return ConversionResult(preview_path, archive_path, encoded, record)
