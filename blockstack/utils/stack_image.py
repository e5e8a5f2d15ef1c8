"""Synthetic stack images for working without the camera."""
from typing import List, Optional, Sequence, Tuple

import numpy as np

from blockstack.color_def import Color, DEFAULT_COLORS
from blockstack.config import TuningCfg
from blockstack.type_defs import img_bgr_t

MAX_WIDTH_UNITS = 3


def frame_size(tuning: TuningCfg) -> Tuple[int, int]:
    """(rows, cols) of a processed frame: the camera is on its side, so width becomes rows."""
    return (int(tuning.camera_width * tuning.camera_ratio),
            int(tuning.camera_height * tuning.camera_ratio))


def max_stack_rows(rows: int, tuning: TuningCfg) -> int:
    """Most blocks draw_stack fits in an image `rows` pixels tall."""
    return max(0, rows - tuning.block_height_px) // tuning.block_height_px


def draw_stack(image: img_bgr_t, blocks: Sequence[Tuple[Color, int]], tuning: TuningCfg,
               x_offsets: Optional[Sequence[int]] = None) -> None:
    """
    Paint `blocks` (top to bottom) as a stack resting one block height above
    the bottom edge, each centred on the image plus its x offset.
    """
    rows, cols = image.shape[:2]
    height = tuning.block_height_px
    bottom = rows - height
    if len(blocks) * height > bottom:
        raise ValueError(f"{len(blocks)} blocks do not fit in {rows} rows, "
                         f"at most {max_stack_rows(rows, tuning)}")
    for i, (color, units) in enumerate(reversed(blocks)):
        width = units * tuning.block_width_px
        offset = x_offsets[len(blocks) - 1 - i] if x_offsets is not None else 0
        x = cols // 2 - width // 2 + offset
        y = bottom - height * (i + 1)
        image[y:y + height, max(0, x):x + width] = color.bgr


def create_test_image(
    rows: int,
    tuning: TuningCfg = TuningCfg(),
    colors: Sequence[Color] = DEFAULT_COLORS,
    rng: Optional[np.random.Generator] = None,
    noise: bool = True,
) -> Tuple[img_bgr_t, List[Tuple[Color, int]]]:
    """
    Random stack of `rows` blocks on a black background.

    Returns the image and the (color, width units) of each block, top to bottom.
    """
    if rng is None:
        rng = np.random.default_rng()
    size = frame_size(tuning)
    image = np.zeros((*size, 3), dtype=np.uint8)

    blocks = [
        (colors[int(rng.integers(len(colors)))], int(rng.integers(1, MAX_WIDTH_UNITS + 1)))
        for _ in range(rows)
    ]
    jitter = tuning.block_width_px // 4
    x_offsets = [int(rng.integers(-jitter, jitter + 1)) for _ in range(rows)]
    draw_stack(image, blocks, tuning, x_offsets)

    if noise:
        count = image.shape[0] * image.shape[1] // 100
        ys = rng.integers(0, image.shape[0], count)
        xs = rng.integers(0, image.shape[1], count)
        image[ys, xs] = rng.integers(0, 256, (count, 3), dtype=np.uint8)
    return image, blocks
