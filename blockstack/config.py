"""
Option file handling.

The option file is a JSON document holding the palette, the
block -> instruction map and the tuning values:

    {
      "color": [{"name": "red", "bgr": {"b": 13, "g": 24, "r": 135}}, ...],
      "block-instruction-map": [
        {"block": {"color": "red", "width": 1},
         "instruction": {"name": "forward", "param": {"count": 1}}}, ...
      ],
      "tuning": {"stud_threshold": 40, ...}
    }
"""
import json
import logging
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from blockstack.block import BlockKey
from blockstack.color_def import Color, DEFAULT_COLORS
from blockstack.errors import ConfigError, EmptyPaletteError

logger = logging.getLogger(__name__)

# ------------------- Tuning -------------------


@dataclass(frozen=True)
class TuningCfg:
    """Thresholds and camera geometry used by the identifier."""
    # row mean (0-255) the silhouette must reach to count as block body, not studs
    stud_threshold: int = 40
    # column mean (0-255) a band must reach to count as block, not background
    size_threshold: int = 245
    # blended lightness/saturation value at which a pixel becomes foreground
    bin_threshold: int = 80

    # Camera
    camera_width: int = 1280
    camera_height: int = 720
    camera_ratio: float = 0.5

    # Block size in full-resolution camera pixels
    block_height: int = 102
    block_width: int = 150

    @property
    def block_height_px(self) -> int:
        """Nominal block height in the processed (scaled) frame."""
        return int(self.block_height * self.camera_ratio)

    @property
    def block_width_px(self) -> int:
        """Nominal width of one unit in the processed (scaled) frame."""
        return int(self.block_width * self.camera_ratio)

    def validate(self) -> None:
        for name in ('stud_threshold', 'size_threshold', 'bin_threshold'):
            value = getattr(self, name)
            if not (0 <= value <= 255):
                raise ConfigError(f"{name} must be in [0, 255], got {value}")
        if self.camera_width <= 0 or self.camera_height <= 0:
            raise ConfigError("camera_width and camera_height must be > 0")
        if self.camera_ratio <= 0:
            raise ConfigError("camera_ratio must be > 0")
        if self.block_height_px < 1 or self.block_width_px < 1:
            raise ConfigError(
                "block_height and block_width must be at least 1px after camera_ratio")


# ------------------- Instructions -------------------


@dataclass(frozen=True)
class Instruction:
    """Robot instruction a block maps to."""
    name: str
    param: Mapping[str, Any] = field(default_factory=dict)


# ------------------- Option -------------------


@dataclass(frozen=True)
class Option:
    """Everything one identification pass needs, plus the instruction map used downstream."""
    colors: Tuple[Color, ...] = DEFAULT_COLORS
    block2inst: Mapping[BlockKey, Instruction] = field(
        default_factory=lambda: MappingProxyType({}))
    tuning: TuningCfg = field(default_factory=TuningCfg)

    def __post_init__(self):
        # freeze whatever containers the caller handed in
        object.__setattr__(self, 'colors', tuple(self.colors))
        if not isinstance(self.block2inst, MappingProxyType):
            object.__setattr__(self, 'block2inst',
                               MappingProxyType(dict(self.block2inst)))

    def instruction_for(self, key: BlockKey) -> Optional[Instruction]:
        return self.block2inst.get(key)

    def validate(self) -> None:
        if not self.colors:
            raise EmptyPaletteError("option has no colors")
        self.tuning.validate()
        names = [c.name for c in self.colors]
        duplicated = {n for n in names if names.count(n) > 1}
        if duplicated:
            logger.warning("Duplicated color names in palette: %s",
                           ", ".join(sorted(duplicated)))


# Instruction each color stands for; the width is the repeat count.
_DEFAULT_COLOR_INSTRUCTIONS = {
    'red': 'forward',
    'green': 'turn_left',
    'blue': 'turn_right',
    'yellow': 'jump',
    'aqua': 'back',
    'white': 'wait',
}
_DEFAULT_MAX_WIDTH = 4


def default_option() -> Option:
    block2inst = {
        BlockKey(color, width): Instruction(name, {'count': width})
        for color, name in _DEFAULT_COLOR_INSTRUCTIONS.items()
        for width in range(1, _DEFAULT_MAX_WIDTH + 1)
    }
    return Option(colors=DEFAULT_COLORS, block2inst=block2inst, tuning=TuningCfg())


# ------------------- JSON (de)serialization -------------------

def _color_to_dict(color: Color) -> Dict[str, Any]:
    b, g, r = color.bgr
    return {'name': color.name, 'bgr': {'b': int(b), 'g': int(g), 'r': int(r)}}


def _color_from_dict(data: Mapping[str, Any]) -> Color:
    bgr = data['bgr']
    channels = tuple(int(bgr[ch]) for ch in ('b', 'g', 'r'))
    if any(not (0 <= v <= 255) for v in channels):
        raise ConfigError(f"color '{data['name']}' has a channel outside [0, 255]")
    return Color(name=str(data['name']), bgr=channels)  # type: ignore[arg-type]


def _tuning_from_dict(data: Mapping[str, Any]) -> TuningCfg:
    known = {f.name for f in fields(TuningCfg)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"unknown tuning keys: {', '.join(sorted(unknown))}")
    kwargs = {
        k: float(v) if k == 'camera_ratio' else int(v)
        for k, v in data.items()
    }
    return TuningCfg(**kwargs)


def option_to_dict(option: Option) -> Dict[str, Any]:
    return {
        'color': [_color_to_dict(c) for c in option.colors],
        'block-instruction-map': [
            {
                'block': {'color': key.color, 'width': key.width},
                'instruction': {'name': inst.name, 'param': dict(inst.param)},
            }
            for key, inst in sorted(option.block2inst.items())
        ],
        'tuning': asdict(option.tuning),
    }


def option_from_dict(data: Mapping[str, Any]) -> Option:
    if not isinstance(data, Mapping):
        raise ConfigError(f"option document must be a JSON object, got {type(data).__name__}")
    try:
        colors: Sequence[Color] = [_color_from_dict(c) for c in data.get('color', [])]
        block2inst = {}
        for item in data.get('block-instruction-map', []):
            key = BlockKey(str(item['block']['color']), int(item['block']['width']))
            inst = item['instruction']
            block2inst[key] = Instruction(str(inst['name']), dict(inst.get('param', {})))
        tuning = _tuning_from_dict(data.get('tuning', {}))
    except ConfigError:
        raise
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ConfigError(f"malformed option document: {e!r}") from e
    option = Option(colors=tuple(colors), block2inst=block2inst, tuning=tuning)
    option.validate()
    return option


def write_option(path: str | Path, option: Option) -> None:
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(option_to_dict(option), f, indent=2)
    logger.info("Wrote option file %s", path)


def read_option(path: str | Path) -> Option:
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON ({e})") from e
    option = option_from_dict(data)
    logger.info("Loaded option file %s (%d colors, %d instructions)",
                path, len(option.colors), len(option.block2inst))
    return option
