# ==============================================================================
# Файл: tests/test_cli.py
# Назначение: Тесты точки входа командной строки.
# ==============================================================================
import json
import logging
import os
import tempfile
import unittest

import numpy as np
from PIL import Image

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from wbox_engine.cli import main
from wbox_engine.core.constants import TILE_NAME_TO_COLOR


class TestCli(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        old_cwd = os.getcwd()
        os.chdir(self.tmp)  # logs/ пишутся в текущую папку
        self.addCleanup(self._tmp.cleanup)
        self.addCleanup(os.chdir, old_cwd)
        self.addCleanup(self._close_log_handlers)

    @staticmethod
    def _close_log_handlers():
        root = logging.getLogger()
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)

    def test_converts_image(self):
        img = np.zeros((64, 64, 4), dtype=np.uint8)
        img[:] = TILE_NAME_TO_COLOR["hills"]
        Image.fromarray(img).save("src.png")
        with open("conf.json", "w", encoding="utf-8") as f:
            json.dump({"Algorithm": "FloydSteinberg", "Included": ["hills", "sand"]}, f)

        code = main(["src.png", "--config", "conf.json", "--out", "out"])

        self.assertEqual(code, 0)
        self.assertTrue(os.path.isfile(os.path.join("out", "map.wbox")))
        self.assertTrue(os.path.isfile(os.path.join("out", "preview.png")))
        self.assertTrue(os.path.isfile(os.path.join("logs", "converter.log")))

    def test_missing_image_is_fatal(self):
        code = main(["missing.png", "--out", "out"])
        self.assertEqual(code, 1)
        self.assertFalse(os.path.exists(os.path.join("out", "map.wbox")))

    def test_missing_config_is_fatal(self):
        code = main(["missing.png", "--config", "nope.json"])
        self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main()
