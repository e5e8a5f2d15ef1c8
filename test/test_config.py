"""Tests for option defaults, validation and the JSON option file."""

import json
import os
import tempfile
import unittest

from blockstack.block import BlockKey
from blockstack.color_def import Color, DEFAULT_COLORS
from blockstack.config import (
    Instruction,
    Option,
    TuningCfg,
    default_option,
    option_from_dict,
    option_to_dict,
    read_option,
    write_option,
)
from blockstack.errors import ConfigError, EmptyPaletteError


class TestTuning(unittest.TestCase):
    def test_defaults(self) -> None:
        tuning = TuningCfg()
        self.assertEqual((tuning.stud_threshold, tuning.size_threshold, tuning.bin_threshold),
                         (40, 245, 80))
        self.assertEqual(tuning.block_height_px, 51)
        self.assertEqual(tuning.block_width_px, 75)
        tuning.validate()

    def test_invalid_threshold(self) -> None:
        with self.assertRaises(ConfigError):
            TuningCfg(bin_threshold=300).validate()

    def test_block_too_small_after_ratio(self) -> None:
        with self.assertRaises(ConfigError):
            TuningCfg(block_height=1, camera_ratio=0.5).validate()

    def test_invalid_ratio(self) -> None:
        with self.assertRaises(ConfigError):
            TuningCfg(camera_ratio=0).validate()


class TestOption(unittest.TestCase):
    def test_default_option(self) -> None:
        opt = default_option()
        opt.validate()
        self.assertEqual(opt.colors, DEFAULT_COLORS)
        self.assertEqual(opt.instruction_for(BlockKey("red", 2)),
                         Instruction("forward", {"count": 2}))
        self.assertIsNone(opt.instruction_for(BlockKey("purple", 1)))

    def test_option_is_immutable(self) -> None:
        block2inst = {BlockKey("red", 1): Instruction("forward")}
        opt = Option(colors=[Color("red", (0, 0, 255))], block2inst=block2inst)
        block2inst[BlockKey("red", 2)] = Instruction("back")
        self.assertIsInstance(opt.colors, tuple)
        self.assertEqual(len(opt.block2inst), 1)
        with self.assertRaises(TypeError):
            opt.block2inst[BlockKey("red", 3)] = Instruction("jump")  # type: ignore[index]

    def test_empty_palette(self) -> None:
        with self.assertRaises(EmptyPaletteError):
            Option(colors=()).validate()

    def test_block_key_identity(self) -> None:
        self.assertEqual(BlockKey("red", 2), BlockKey("red", 2))
        self.assertEqual(len({BlockKey("red", 2), BlockKey("red", 2), BlockKey("red", 1)}), 2)
        self.assertLess(BlockKey("blue", 3), BlockKey("red", 1))
        self.assertLess(BlockKey("red", 1), BlockKey("red", 2))


class TestOptionFile(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "option.json")

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def test_round_trip(self) -> None:
        opt = default_option()
        write_option(self.path, opt)
        loaded = read_option(self.path)
        self.assertEqual(loaded.colors, opt.colors)
        self.assertEqual(dict(loaded.block2inst), dict(opt.block2inst))
        self.assertEqual(loaded.tuning, opt.tuning)

    def test_document_layout(self) -> None:
        write_option(self.path, default_option())
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(set(data), {"color", "block-instruction-map", "tuning"})
        self.assertEqual(data["color"][0], {"name": "red", "bgr": {"b": 13, "g": 24, "r": 135}})
        self.assertEqual(data["tuning"]["stud_threshold"], 40)

    def test_partial_tuning_uses_defaults(self) -> None:
        opt = option_from_dict({
            "color": [{"name": "red", "bgr": {"b": 0, "g": 0, "r": 255}}],
            "tuning": {"bin_threshold": 90},
        })
        self.assertEqual(opt.tuning.bin_threshold, 90)
        self.assertEqual(opt.tuning.stud_threshold, 40)
        self.assertEqual(dict(opt.block2inst), {})

    def test_palette_order_kept(self) -> None:
        data = option_to_dict(default_option())
        data["color"].reverse()
        opt = option_from_dict(data)
        self.assertEqual([c.name for c in opt.colors], [c.name for c in reversed(DEFAULT_COLORS)])

    def test_malformed_documents(self) -> None:
        bad_docs = [
            {"color": [{"name": "red"}]},
            {"color": [{"name": "red", "bgr": {"b": 0, "g": 0, "r": 256}}]},
            {"color": [{"name": "red", "bgr": {"b": 0, "g": 0, "r": 255}}],
             "tuning": {"unknown": 1}},
            {"color": [{"name": "red", "bgr": {"b": 0, "g": 0, "r": 255}}],
             "block-instruction-map": [{"block": {"color": "red"}, "instruction": {"name": "x"}}]},
        ]
        for doc in bad_docs:
            with self.assertRaises(ConfigError):
                option_from_dict(doc)

    def test_missing_palette(self) -> None:
        with self.assertRaises(EmptyPaletteError):
            option_from_dict({"tuning": {}})

    def test_document_must_be_object(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([1, 2], f)
        with self.assertRaises(ConfigError):
            read_option(self.path)

    def test_wrong_section_types(self) -> None:
        red = [{"name": "red", "bgr": {"b": 0, "g": 0, "r": 255}}]
        for doc in ({"color": red, "tuning": []},
                    {"color": red, "block-instruction-map": [{"block": {"color": "red", "width": 1},
                                                              "instruction": ["x"]}]}):
            with self.assertRaises(ConfigError):
                option_from_dict(doc)

    def test_invalid_json(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertRaises(ConfigError):
            read_option(self.path)


if __name__ == "__main__":
    unittest.main()
