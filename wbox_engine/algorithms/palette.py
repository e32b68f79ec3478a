# ==============================================================================
# Файл: wbox_engine/algorithms/palette.py
# Назначение: Сборка палитры квантования из списка тайлов конфигурации.
# ==============================================================================
from __future__ import annotations
from typing import List, Mapping, Sequence, Tuple

from ..core.constants import TILE_NAME_TO_COLOR
from ..core.types import RGBA


def resolve_palette(
        names: Sequence[str], catalog: Mapping[str, RGBA] = TILE_NAME_TO_COLOR
) -> Tuple[RGBA, ...]:
    """
    Превращает упорядоченный список имён тайлов в палитру без дублей.

    Порядок сохраняется, при совпадении цветов побеждает первое вхождение.
    Неизвестные имена пропускаются: проверять их должен вызывающий код
    (см. split_known_tiles). Пустой список -> пустая палитра, что означает
    "не ограничивать квантование".
    """
    palette: List[RGBA] = []
    for name in names:
        color = catalog.get(name)
        if color is None:
            continue
        color = tuple(color)
        if color not in palette:
            palette.append(color)
    return tuple(palette)


def split_known_tiles(
        names: Sequence[str], catalog: Mapping[str, RGBA] = TILE_NAME_TO_COLOR
) -> Tuple[List[str], List[str]]:
    """Делит список имён на (известные, неизвестные), сохраняя порядок."""
    known = [n for n in names if n in catalog]
    unknown = [n for n in names if n not in catalog]
    return known, unknown
