# ==============================================================================
# Файл: tests/test_dithering.py
# Назначение: Тесты квантования изображения в палитру тайлов.
# ==============================================================================
import unittest

import numpy as np

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from wbox_engine.algorithms.dithering import (
    DEFAULT_ALGORITHM,
    DITHERERS,
    ERROR_DIFFUSION_MATRICES,
    _current_pixel_column,
    get_ditherer,
    quantize,
)
from wbox_engine.core.constants import CATALOG_PALETTE, TILE_NAME_TO_COLOR
from wbox_engine.core.types import IDitherer

PALETTE = (
    TILE_NAME_TO_COLOR["sand"],
    TILE_NAME_TO_COLOR["deep_ocean"],
    TILE_NAME_TO_COLOR["mountains"],
)


def _colors(img):
    return {tuple(int(c) for c in px) for px in img.reshape(-1, 4)}


class TestDitherers(unittest.TestCase):

    def test_all_algorithms_registered(self):
        expected = {
            "FloydSteinberg", "FalseFloydSteinberg", "Atkinson", "Stucki", "Burkes",
            "JarvisJudiceNinke", "Simple2D", "StevenPigeon", "Sierra", "Sierra2",
            "SierraLite",
        }
        self.assertEqual(set(DITHERERS), expected)
        self.assertEqual(set(ERROR_DIFFUSION_MATRICES), expected)

    def test_ditherers_implement_interface(self):
        for name, ditherer in DITHERERS.items():
            self.assertIsInstance(ditherer, IDitherer, name)
            self.assertEqual(ditherer.name, name)

    def test_current_pixel_column(self):
        self.assertEqual(_current_pixel_column(ERROR_DIFFUSION_MATRICES["FloydSteinberg"]), 1)
        self.assertEqual(_current_pixel_column(ERROR_DIFFUSION_MATRICES["FalseFloydSteinberg"]), 0)
        self.assertEqual(_current_pixel_column(ERROR_DIFFUSION_MATRICES["Atkinson"]), 1)
        self.assertEqual(_current_pixel_column(ERROR_DIFFUSION_MATRICES["Stucki"]), 2)

    def test_unknown_algorithm_falls_back(self):
        with self.assertLogs("wbox_engine.algorithms.dithering", level="WARNING") as logs:
            ditherer = get_ditherer("NoSuchAlgorithm")
        self.assertEqual(ditherer.name, DEFAULT_ALGORITHM)
        self.assertTrue(any("NoSuchAlgorithm" in line for line in logs.output))

    def test_output_is_limited_to_palette(self):
        rng = np.random.default_rng(7)
        img = rng.integers(0, 256, size=(16, 24, 4), dtype=np.uint8)
        for name in ("FloydSteinberg", "Atkinson", "SierraLite"):
            out = quantize(img, PALETTE, name, 1.0)
            self.assertEqual(out.shape, img.shape)
            self.assertEqual(out.dtype, np.uint8)
            self.assertTrue(_colors(out) <= set(PALETTE), name)
            self.assertTrue(np.all(out[..., 3] == 255))

    def test_exact_palette_image_is_unchanged(self):
        img = np.array([[PALETTE[(x + y) % 3] for x in range(6)] for y in range(4)], dtype=np.uint8)
        out = quantize(img, PALETTE, "FloydSteinberg", 1.0)
        np.testing.assert_array_equal(out, img)

    def test_zero_strength_is_nearest_color(self):
        img = np.full((3, 3, 4), 255, dtype=np.uint8)
        img[..., :3] = (250, 230, 150)
        out = quantize(img, PALETTE, "Stucki", 0.0)
        self.assertEqual(_colors(out), {TILE_NAME_TO_COLOR["sand"]})

    def test_empty_palette_uses_whole_catalog(self):
        rng = np.random.default_rng(3)
        img = rng.integers(0, 256, size=(8, 8, 4), dtype=np.uint8)
        out = quantize(img, (), "SierraLite", 1.0)
        self.assertTrue(_colors(out) <= set(CATALOG_PALETTE))

    def test_rgb_input_is_accepted(self):
        img = np.zeros((2, 2, 3), dtype=np.uint8)
        out = quantize(img, PALETTE, "Burkes", 1.0)
        self.assertEqual(out.shape, (2, 2, 4))


if __name__ == '__main__':
    unittest.main()
