# Файл: wbox_engine/cli.py
from __future__ import annotations
import argparse
import logging
import sys

from .core.errors import ConverterError
from .core.preset import load_config
from .pipeline import convert_image
from .setup_logging import setup_logging

logger = logging.getLogger(__name__)


def _ask_image_path() -> str:
    """Окно выбора файла (tkinter)."""
    try:
        import tkinter as tk
        from tkinter import filedialog
    except ImportError as e:
        raise ConverterError(f"No image given and tkinter is not installed: {e}") from e

    try:
        root = tk.Tk()
    except tk.TclError as e:
        raise ConverterError(f"No image given and file dialog is unavailable: {e}") from e
    root.withdraw()
    try:
        return filedialog.askopenfilename(
            title="Выберите изображение",
            filetypes=[("Images", "*.jpg *.jpeg *.png")],
        )
    finally:
        root.destroy()


def _parse_args(argv):
    parser = argparse.ArgumentParser(description="Convert an image into a WorldBox map (map.wbox).")
    parser.add_argument("image", nargs="?", help="source image (jpg/png); file dialog if omitted")
    parser.add_argument("--config", default=None, help="path to conf.json")
    parser.add_argument("--out", default=None, help="output directory (default: from config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = load_config(args.config)
        image_path = args.image or _ask_image_path()
        if not image_path:
            logger.error("No image selected")
            return 1
        convert_image(image_path, config, output_dir=args.out)
    except ConverterError as e:
        logger.critical("%s", e)
        return 1
    except OSError as e:
        logger.critical("I/O error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
