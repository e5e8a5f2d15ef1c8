import logging
from typing import List, Optional, Tuple

import cv2
import numpy as np

from blockstack.config import TuningCfg
from blockstack.type_defs import Rect, contour_t, img_bgr_t, img_gray_t

logger = logging.getLogger(__name__)


def round_half_up(num: int, den: int) -> int:
    """`num / den` rounded to the nearest integer, halves going up."""
    return (2 * num + den) // (2 * den)


def rasterize(contour: contour_t, shape: Tuple[int, ...]) -> img_gray_t:
    """Filled mask of `contour`: 255 inside, 0 on the background."""
    mask = np.zeros(shape[:2], dtype=np.uint8)
    cv2.drawContours(mask, [contour], 0, (255,), cv2.FILLED)
    return mask


def first_crossing(profile: np.ndarray, threshold: float) -> Optional[int]:
    """Index of the first value >= threshold, or None."""
    hits = np.flatnonzero(profile >= threshold)
    return int(hits[0]) if hits.size else None


def last_crossing(profile: np.ndarray, threshold: float) -> Optional[int]:
    """Index of the last value >= threshold, or None."""
    hits = np.flatnonzero(profile >= threshold)
    return int(hits[-1]) if hits.size else None


def row_profile(mask: img_gray_t) -> np.ndarray:
    return mask.mean(axis=1)


def column_profile(mask: img_gray_t) -> np.ndarray:
    return mask.mean(axis=0)


def find_top_bottom(mask: img_gray_t, stud_threshold: float) -> Optional[Tuple[int, int]]:
    """
    Top and bottom rows of the solid part of the stack.

    The studs on the topmost block only fill a fraction of their rows, so
    rows are skipped until their mean reaches `stud_threshold`.
    """
    profile = row_profile(mask)
    top = first_crossing(profile, stud_threshold)
    bottom = last_crossing(profile, stud_threshold)
    if top is None or bottom is None:
        return None
    return top, bottom


def find_left_right(band: img_gray_t, size_threshold: float) -> Optional[Tuple[int, int]]:
    """Left and right columns of the block occupying `band`."""
    profile = column_profile(band)
    left = first_crossing(profile, size_threshold)
    right = last_crossing(profile, size_threshold)
    if left is None or right is None:
        return None
    return left, right


def bands_from_mask(mask: img_gray_t, tuning: TuningCfg) -> List[Rect]:
    """Split a filled silhouette mask into one rect per block, top to bottom."""
    block_height = tuning.block_height_px
    tb = find_top_bottom(mask, tuning.stud_threshold)
    if tb is None:
        logger.debug("No row reaches stud threshold %d", tuning.stud_threshold)
        return []
    top, bottom = tb
    if bottom <= top:
        return []

    block_count = round_half_up(bottom - top, block_height)
    logger.debug("top=%d bottom=%d block_count=%d", top, bottom, block_count)

    bands = []
    for i in range(block_count):
        y = (top * (block_count - i) + bottom * i) // block_count
        if mask.shape[0] - block_height < y:
            logger.debug("Band %d at y=%d runs off the frame, skipped", i, y)
            continue
        lr = find_left_right(mask[y:y + block_height, :], tuning.size_threshold)
        if lr is None or lr[1] <= lr[0]:
            # nothing usable in this band, drop it
            logger.debug("Band %d at y=%d has no horizontal extent, dropped", i, y)
            continue
        left, right = lr
        bands.append(Rect(left, y, right - left, block_height))
    return bands


def segment_bands(frame: img_bgr_t, contour: contour_t, tuning: TuningCfg) -> List[Rect]:
    """Band rects for the stack outlined by `contour` in `frame`."""
    return bands_from_mask(rasterize(contour, frame.shape), tuning)
