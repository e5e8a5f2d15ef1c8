import logging
from typing import Optional

import cv2
import numpy as np

from blockstack.type_defs import contour_t, img_bgr_t, img_gray_t

logger = logging.getLogger(__name__)

# weight of lightness against saturation in the blended channel
SL_RATIO = 0.5
# regions covering this much of the frame are lighting, not blocks
MAX_AREA_RATIO = 0.9


def blend_channel(frame: img_bgr_t) -> img_gray_t:
    """Blend HLS lightness and saturation into one 8-bit channel.

    Blocks are either bright (white) or saturated (everything else), while the
    dark backdrop is neither.
    """
    hls = cv2.cvtColor(frame, cv2.COLOR_BGR2HLS)
    _, l_ch, s_ch = cv2.split(hls)
    return cv2.addWeighted(l_ch, SL_RATIO, s_ch, 1 - SL_RATIO, 0)


def binarize(frame: img_bgr_t, bin_threshold: int) -> img_gray_t:
    """Foreground (255) wherever the blended channel is >= `bin_threshold`."""
    mixed = blend_channel(frame)
    return np.where(mixed >= bin_threshold, 255, 0).astype(np.uint8)


def extract_silhouette(frame: img_bgr_t, bin_threshold: int) -> Optional[contour_t]:
    """Outer contour of the block stack, or None when nothing qualifies.

    The stack is taken to be the largest external region, ignoring regions
    that cover nearly the whole frame.
    """
    block = binarize(frame, bin_threshold)
    contours, _ = cv2.findContours(block, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)

    frame_area = frame.shape[0] * frame.shape[1]
    best = None
    max_area = -1.0
    for cnt in contours:
        area = cv2.contourArea(cnt)
        if max_area < area < frame_area * MAX_AREA_RATIO:
            max_area = area
            best = cnt

    if best is None:
        logger.debug("No silhouette among %d contours", len(contours))
    else:
        logger.debug("Silhouette area %.0f of %d contours", max_area, len(contours))
    return best
