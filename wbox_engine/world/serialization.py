# Файл: wbox_engine/world/serialization.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.constants import (
    DEFAULT_ERA_ID,
    DEFAULT_ERA_MONTH_NEXT,
    DEFAULT_MAP_NAME,
    DEFAULT_WORLD_LAWS,
    EMPTY_ENTITY_FIELDS,
    SAVE_VERSION,
    TILE_PX,
)
from ..core.types import EncodedTileGrid


# --- Контракт 1: Статистика карты ---
@dataclass
class MapStats:
    """Блок mapStats сохранения. Порядок полей = порядок ключей в JSON."""

    name: str = DEFAULT_MAP_NAME
    description: str = ""
    worldTime: int = 0
    era_id: str = DEFAULT_ERA_ID
    era_next_id: str = ""
    era_month_next: int = DEFAULT_ERA_MONTH_NEXT
    deaths: int = 0
    deaths_other: int = 0
    id_unit: int = 0
    id_building: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "worldTime": self.worldTime,
            "era_id": self.era_id,
            "era_next_id": self.era_next_id,
            "era_month_next": self.era_month_next,
            "deaths": self.deaths,
            "deaths_other": self.deaths_other,
            "id_unit": self.id_unit,
            "id_building": self.id_building,
        }


# --- Контракт 2: Законы мира ---
@dataclass
class WorldLaw:
    name: str
    boolVal: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        # Незаданный boolVal не пишется вовсе (игра берёт своё значение).
        data: Dict[str, Any] = {"name": self.name}
        if self.boolVal is not None:
            data["boolVal"] = self.boolVal
        return data


def default_world_laws() -> List[WorldLaw]:
    return [WorldLaw(name, value) for name, value in DEFAULT_WORLD_LAWS]


# --- Контракт 3: Полная запись карты (.wbox) ---
@dataclass
class MapRecord:
    """
    Структура файла map.wbox (до сжатия).
    Ширина/высота в клетках карты (пиксели / TILE_PX).
    """

    width: int
    height: int
    saveVersion: int = SAVE_VERSION
    mapStats: MapStats = field(default_factory=MapStats)
    worldLaws: List[WorldLaw] = field(default_factory=default_world_laws)
    tileMap: List[str] = field(default_factory=list)
    tileArray: List[List[int]] = field(default_factory=list)
    tileAmounts: List[List[int]] = field(default_factory=list)
    # Пустые списки сущностей; заполняются только при чтении чужих сохранений.
    entities: Dict[str, List[Any]] = field(
        default_factory=lambda: {name: [] for name in EMPTY_ENTITY_FIELDS}
    )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "saveVersion": self.saveVersion,
            "width": self.width,
            "height": self.height,
            "mapStats": self.mapStats.to_dict(),
            "worldLaws": {"list": [law.to_dict() for law in self.worldLaws]},
            "tileMap": list(self.tileMap),
            "tileArray": [list(row) for row in self.tileArray],
            "tileAmounts": [list(row) for row in self.tileAmounts],
        }
        for name in EMPTY_ENTITY_FIELDS:
            data[name] = list(self.entities.get(name, []))
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MapRecord":
        stats_fields = MapStats().to_dict().keys()
        stats = MapStats(**{k: v for k, v in data.get("mapStats", {}).items() if k in stats_fields})
        laws = [
            WorldLaw(item["name"], item.get("boolVal"))
            for item in data.get("worldLaws", {}).get("list", [])
        ]
        return cls(
            width=int(data["width"]),
            height=int(data["height"]),
            saveVersion=int(data.get("saveVersion", SAVE_VERSION)),
            mapStats=stats,
            worldLaws=laws,
            tileMap=list(data.get("tileMap", [])),
            tileArray=[list(r) for r in data.get("tileArray") or []],
            tileAmounts=[list(r) for r in data.get("tileAmounts") or []],
            entities={name: list(data.get(name) or []) for name in EMPTY_ENTITY_FIELDS},
        )


def build_map_record(
        encoded: EncodedTileGrid,
        name: str = DEFAULT_MAP_NAME,
        description: str = "",
) -> MapRecord:
    """Собирает запись карты из закодированной сетки и метаданных по умолчанию."""
    return MapRecord(
        width=encoded.width // TILE_PX,
        height=encoded.height // TILE_PX,
        mapStats=MapStats(name=name, description=description),
        tileMap=list(encoded.tile_map),
        tileArray=encoded.tile_array,
        tileAmounts=encoded.tile_amounts,
    )
