# ==============================================================================
# Файл: wbox_engine/core/constants.py
# Назначение: Глобальные константы конвертера (каталог тайлов, формат карты).
# ВЕРСИЯ 1.1: Явная политика для тайлов с одинаковым цветом.
# ==============================================================================
from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

from .errors import CatalogError

RGBA = Tuple[int, int, int, int]

# Размер одной клетки карты в пикселях исходного изображения.
TILE_PX = 64

# Версия формата сохранения, которую ожидает игра.
SAVE_VERSION = 13

# Тайл для цветов, которых нет в каталоге.
UNKNOWN_TILE = ""

# =======================================================================
# КАТАЛОГ ТАЙЛОВ
# =======================================================================

# --- Шаг 1: "Короткие" имена тайлов (как в conf.json) и их цвета ---
TILE_NAME_TO_COLOR: Mapping[str, RGBA] = MappingProxyType({
    # --- Вода, песок, почва ---
    "deep_ocean": (51, 112, 204, 255),
    "close_ocean": (64, 132, 226, 255),
    "shallow_waters": (85, 174, 240, 255),
    "sand": (247, 232, 152, 255),
    "soil_low": (226, 147, 75, 255),
    "soil_high": (182, 111, 58, 255),
    "lava0": (246, 45, 20, 255),
    "lava1": (255, 103, 0, 255),
    "lava2": (255, 172, 0, 255),
    "lava3": (255, 222, 0, 255),
    "hills": (91, 94, 92, 255),
    "mountains": (65, 69, 69, 255),

    # --- Биомы (верхний слой) ---
    "grass_low": (126, 175, 70, 255),
    "grass_high": (95, 131, 60, 255),
    "savanna_low": (240, 177, 33, 255),
    "savanna_high": (207, 147, 27, 255),
    "enchanted_low": (140, 220, 106, 255),
    "enchanted_high": (118, 177, 83, 255),
    "mushroom_low": (103, 118, 66, 255),
    "mushroom_high": (85, 99, 56, 255),
    "corruption_low": (111, 85, 108, 255),
    "corruption_high": (83, 63, 81, 255),
    "infernal_low": (156, 54, 38, 255),
    "infernal_high": (104, 55, 45, 255),
    "jungle_low": (70, 160, 82, 255),
    "jungle_high": (31, 112, 32, 255),
    "swamp_low": (77, 72, 62, 255),
    "swamp_high": (69, 62, 52, 255),
    "wasteland_low": (132, 147, 113, 255),
    "wasteland_high": (108, 119, 89, 255),
    "desert_low": (232, 199, 110, 255),
    "desert_high": (225, 186, 90, 255),
    "candy_low": (255, 150, 176, 255),
    "candy_high": (95, 214, 203, 255),
    "crystal_low": (255, 150, 176, 255),
    "crystal_high": (251, 135, 164, 255),
    "lemon_low": (209, 231, 113, 255),
    "lemon_high": (138, 207, 85, 255),
    "permafrost_low": (153, 188, 219, 255),
    "permafrost_high": (180, 207, 229, 255),
    "water_bomb": (109, 0, 205, 255),
    "tumor_low": (238, 81, 131, 255),
    "tumor_high": (254, 24, 100, 255),
    "biomass_low": (69, 200, 66, 255),
    "biomass_high": (65, 168, 64, 255),
    "pumpkin_low": (143, 147, 57, 255),
    "pumpkin_high": (105, 108, 2, 255),
    "cybertile_low": (158, 166, 163, 255),
    "cybertile_high": (133, 136, 134, 255),

    # --- Постройки и спецтайлы ---
    "road": (193, 153, 124, 255),
    "fuse": (131, 76, 76, 255),
    "field": (168, 102, 58, 255),
    "tnt": (163, 0, 0, 255),
    "fireworks": (180, 61, 204, 255),
    "tnt_timed": (127, 0, 0, 255),
    "landmine": (153, 0, 0, 255),
    "frozen_low": (186, 213, 211, 255),
    "frozen_high": (211, 228, 227, 255),
    "snow_sand": (175, 245, 241, 255),
    "ice": (167, 214, 244, 255),
    "snow_hills": (226, 237, 236, 255),
    "snow_block": (252, 253, 253, 255),
})

# --- Шаг 2: Тайлы, которые лежат в сохранении "как есть" (без базового слоя) ---
BASE_TILE_NAMES: Tuple[str, ...] = (
    "deep_ocean", "close_ocean", "shallow_waters", "sand",
    "soil_low", "soil_high", "lava0", "lava1", "lava2", "lava3",
    "hills", "mountains",
)

# Остальные тайлы в сохранении пишутся как "<базовый слой>:<тайл>".
# Если базовый слой не указан здесь, используется "soil_low".
TOP_TILE_BASE_LAYER: Mapping[str, str] = MappingProxyType({
    "grass_high": "soil_high",
    "savanna_high": "soil_high",
    "enchanted_high": "soil_high",
    "mushroom_high": "soil_high",
    "corruption_high": "soil_high",
    "infernal_high": "soil_high",
    "jungle_high": "soil_high",
    "swamp_high": "soil_high",
    "wasteland_high": "soil_high",
    "desert_high": "soil_high",
    "candy_high": "soil_high",
    "crystal_high": "soil_high",
    "lemon_high": "soil_high",
    "permafrost_high": "soil_high",
    "tumor_high": "soil_high",
    "biomass_high": "soil_high",
    "pumpkin_high": "soil_high",
    "cybertile_high": "soil_high",
    "frozen_high": "soil_high",
})

# --- Шаг 3: Явные победители для цветов, которые делят несколько тайлов ---
TILE_COLOR_PRIORITY: Mapping[RGBA, str] = MappingProxyType({
    (255, 150, 176, 255): "crystal_low",
})


def save_tile_name(name: str) -> str:
    """Имя тайла в формате сохранения (с префиксом базового слоя)."""
    if name in BASE_TILE_NAMES:
        return name
    return f"{TOP_TILE_BASE_LAYER.get(name, 'soil_low')}:{name}"


def build_color_index(
        entries: Iterable[Tuple[str, RGBA]],
        priority: Mapping[RGBA, str] | None = None,
) -> Dict[RGBA, str]:
    """
    Строит обратный словарь цвет -> имя тайла в формате сохранения.

    Порядок входных записей не влияет на результат: если два тайла делят
    один цвет, победитель обязан быть указан в `priority`, иначе CatalogError.
    """
    priority = priority or {}
    owners: Dict[RGBA, list[str]] = {}
    for name, color in entries:
        owners.setdefault(tuple(color), []).append(name)

    index: Dict[RGBA, str] = {}
    for color, names in owners.items():
        if len(names) == 1:
            winner = names[0]
        else:
            winner = priority.get(color)
            if winner not in names:
                raise CatalogError(
                    f"Color {color} is shared by tiles {names} and has no priority entry"
                )
        index[color] = save_tile_name(winner)
    return index


# --- Шаг 4: Обратный словарь (цвет пикселя -> тайл в сохранении) ---
COLOR_TO_TILE_NAME: Mapping[RGBA, str] = MappingProxyType(
    build_color_index(TILE_NAME_TO_COLOR.items(), TILE_COLOR_PRIORITY)
)

# --- Шаг 5: Все различные цвета каталога (палитра "без ограничений") ---
CATALOG_PALETTE: Tuple[RGBA, ...] = tuple(dict.fromkeys(TILE_NAME_TO_COLOR.values()))

# =======================================================================
# МЕТАДАННЫЕ КАРТЫ ПО УМОЛЧАНИЮ
# =======================================================================
DEFAULT_MAP_NAME = "BigBot's Inauspicious Kingdom"
DEFAULT_ERA_ID = "age_hope"
DEFAULT_ERA_MONTH_NEXT = 3000

# (имя закона, boolVal). None -> поле boolVal не пишется.
DEFAULT_WORLD_LAWS: Tuple[Tuple[str, bool | None], ...] = (
    ("world_law_diplomacy", None),
    ("world_law_peaceful_monsters", False),
    ("world_law_hunger", None),
    ("world_law_vegetation_random_seeds", None),
    ("world_law_vegetation_seeds", None),
    ("world_law_grow_minerals", None),
    ("world_law_grow_grass", None),
    ("world_law_biome_overgrowth", None),
    ("world_law_kingdom_expansion", None),
    ("world_law_old_age", None),
    ("world_law_animals_spawn", None),
    ("world_law_animals_babies", None),
    ("world_law_rebellions", None),
    ("world_law_border_stealing", None),
    ("world_law_erosion", None),
    ("world_law_forever_lava", False),
    ("world_law_disasters_nature", None),
    ("world_law_disasters_other", None),
    ("world_law_angry_civilians", False),
    ("world_law_civ_babies", None),
    ("world_law_forever_tumor_creep", False),
    ("world_law_civ_army", None),
    ("world_law_civ_limit_population_100", False),
    ("age_hope", None),
    ("age_sun", None),
    ("age_dark", None),
    ("age_tears", None),
    ("age_moon", None),
    ("age_chaos", None),
    ("age_wonders", None),
    ("age_ice", None),
    ("age_ash", None),
    ("age_despair", None),
)

# Пустые списки сущностей, которые конвертер никогда не заполняет (порядок важен).
EMPTY_ENTITY_FIELDS: Tuple[str, ...] = (
    "fire",
    "conwayEater",
    "conwayCreator",
    "frozen_tiles",
    "tiles",
    "cities",
    "actors_data",
    "buildings",
    "kingdoms",
    "clans",
    "alliances",
    "wars",
    "plots",
    "relations",
    "cultures",
)

# Диапазон int в формате сохранения (знаковое 32-битное).
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
