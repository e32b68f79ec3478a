# ==============================================================================
# Файл: tests/test_wbox_exporters.py
# Назначение: Тесты записи карты: порядок полей, детерминизм, сжатие, файл.
# ==============================================================================
import json
import os
import tempfile
import unittest
import zlib

import numpy as np

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from wbox_engine.algorithms.tile_grid import encode_tile_grid
from wbox_engine.core.constants import EMPTY_ENTITY_FIELDS, TILE_NAME_TO_COLOR
from wbox_engine.core.errors import MapSerializationError
from wbox_engine.core.export import (
    compress_map_bytes,
    decompress_map_bytes,
    read_wbox,
    serialize_map_record,
    write_wbox,
)
from wbox_engine.world.serialization import MapRecord, build_map_record


def _record(width_px=128, height_px=64):
    img = np.zeros((height_px, width_px, 4), dtype=np.uint8)
    img[:] = TILE_NAME_TO_COLOR["deep_ocean"]
    img[: height_px // 2, : width_px // 2] = TILE_NAME_TO_COLOR["sand"]
    return build_map_record(encode_tile_grid(img))


class TestMapSerialization(unittest.TestCase):

    def test_field_order(self):
        data = json.loads(serialize_map_record(_record()))
        expected = [
            "saveVersion", "width", "height", "mapStats", "worldLaws",
            "tileMap", "tileArray", "tileAmounts",
        ] + list(EMPTY_ENTITY_FIELDS)
        self.assertEqual(list(data.keys()), expected)
        self.assertEqual(
            list(data["mapStats"].keys()),
            [
                "name", "description", "worldTime", "era_id", "era_next_id",
                "era_month_next", "deaths", "deaths_other", "id_unit", "id_building",
            ],
        )

    def test_default_metadata(self):
        data = json.loads(serialize_map_record(_record()))
        self.assertEqual(data["saveVersion"], 13)
        self.assertEqual((data["width"], data["height"]), (2, 1))
        self.assertEqual(data["mapStats"]["name"], "BigBot's Inauspicious Kingdom")
        self.assertEqual(data["mapStats"]["era_id"], "age_hope")
        self.assertEqual(data["mapStats"]["era_month_next"], 3000)
        for name in EMPTY_ENTITY_FIELDS:
            self.assertEqual(data[name], [])

    def test_unset_bool_is_omitted(self):
        raw = serialize_map_record(_record())
        laws = json.loads(raw)["worldLaws"]["list"]
        self.assertEqual(len(laws), 33)
        self.assertEqual(laws[0], {"name": "world_law_diplomacy"})
        self.assertEqual(laws[1], {"name": "world_law_peaceful_monsters", "boolVal": False})
        self.assertEqual(raw.count(b'"boolVal":false'), 5)

    def test_serialization_is_deterministic(self):
        self.assertEqual(serialize_map_record(_record()), serialize_map_record(_record()))
        record = _record()
        self.assertEqual(serialize_map_record(record), serialize_map_record(record))

    def test_compact_utf8(self):
        record = _record()
        record.mapStats.description = "Карта"
        raw = serialize_map_record(record)
        self.assertNotIn(b" ", raw.replace(b"BigBot's Inauspicious Kingdom", b""))
        self.assertIn("Карта".encode("utf-8"), raw)

    def test_out_of_range_int_fails(self):
        record = _record()
        record.mapStats.deaths = 2 ** 31
        with self.assertRaises(MapSerializationError):
            serialize_map_record(record)

    def test_nan_fails(self):
        record = _record()
        record.mapStats.worldTime = float("nan")
        with self.assertRaises(MapSerializationError):
            serialize_map_record(record)

    def test_from_dict_round_trip(self):
        record = _record()
        data = json.loads(serialize_map_record(record))
        self.assertEqual(MapRecord.from_dict(data), record)


class TestWboxArchive(unittest.TestCase):

    def test_compression_round_trip(self):
        raw = serialize_map_record(_record())
        packed = compress_map_bytes(raw)
        self.assertEqual(packed[:2], b"\x78\xda")  # zlib, best compression
        self.assertEqual(decompress_map_bytes(packed), raw)
        self.assertEqual(zlib.decompress(packed), raw)

    def test_write_and_read(self):
        record = _record()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out", "map.wbox")
            packed = write_wbox(path, record)

            with open(path, "rb") as f:
                self.assertEqual(f.read(), packed)
            self.assertFalse(os.path.exists(path + ".tmp"))
            self.assertEqual(read_wbox(path), record)

    def test_failed_serialization_writes_nothing(self):
        record = _record()
        record.mapStats.id_unit = -(2 ** 40)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "map.wbox")
            with self.assertRaises(MapSerializationError):
                write_wbox(path, record)
            self.assertEqual(os.listdir(tmp), [])

    def test_corrupt_archive(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "map.wbox")
            with open(path, "wb") as f:
                f.write(b"not a zlib stream")
            with self.assertRaises(MapSerializationError):
                read_wbox(path)


if __name__ == '__main__':
    unittest.main()
