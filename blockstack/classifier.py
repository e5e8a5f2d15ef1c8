from typing import Sequence

import cv2

from blockstack.block import BlockInfo
from blockstack.color_def import Color, nearest_color
from blockstack.config import TuningCfg
from blockstack.segmenter import round_half_up
from blockstack.type_defs import Rect, bgr_f_t, img_bgr_t

# Only the middle of a band is sampled so edges and background don't leak in
COLOR_AREA_RATIO = 0.2


def average_color(frame: img_bgr_t, rect: Rect) -> bgr_f_t:
    """Per-channel mean of `frame` over `rect`."""
    b, g, r, _ = cv2.mean(rect.roi(frame))
    return (b, g, r)


def width_units(pixel_width: int, unit_px: int) -> int:
    """Block width in units, never less than one."""
    return max(1, round_half_up(pixel_width, unit_px))


def classify(frame: img_bgr_t, band: Rect, palette: Sequence[Color],
             tuning: TuningCfg) -> BlockInfo:
    color_area = band.scaled(COLOR_AREA_RATIO)
    ave = average_color(frame, color_area)
    return BlockInfo(
        rc=band,
        color_area=color_area,
        ave=ave,
        color=nearest_color(ave, palette),
        width=width_units(band.width, tuning.block_width_px),
    )
