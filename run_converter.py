"""
Конвертер изображения в карту WorldBox.
Запуск: python run_converter.py [путь/к/картинке.png] [--config conf.json] [--out DIR]
Без пути к картинке откроется окно выбора файла.
"""
from __future__ import annotations
import sys, pathlib

# Убедимся, что корень проекта в sys.path (для импорта wbox_engine/*)
ROOT = pathlib.Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wbox_engine.cli import main

if __name__ == "__main__":
    sys.exit(main())
