# ==============================================================================
# Файл: wbox_engine/__init__.py
# Назначение: Конвертер изображений в карты WorldBox (map.wbox).
# ==============================================================================
from __future__ import annotations

__version__ = "1.0.0"
