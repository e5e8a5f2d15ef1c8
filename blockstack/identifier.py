import logging
from enum import Enum
from typing import List, Sequence

import cv2
import numpy as np

from blockstack.block import BlockInfo
from blockstack.classifier import classify
from blockstack.config import Option, TuningCfg
from blockstack.errors import EmptyPaletteError, InvalidFrameError
from blockstack.segmenter import bands_from_mask, rasterize
from blockstack.silhouette import binarize, blend_channel, extract_silhouette
from blockstack.type_defs import VizResults, img_bgr_t

logger = logging.getLogger(__name__)


def _check_inputs(frame: img_bgr_t, option: Option) -> None:
    if not isinstance(frame, np.ndarray) or frame.ndim != 3 or frame.shape[2] != 3:
        shape = getattr(frame, 'shape', None)
        raise InvalidFrameError(f"expected an HxWx3 image, got shape {shape}")
    if frame.dtype != np.uint8:
        raise InvalidFrameError(f"expected 8 bits per channel, got {frame.dtype}")
    if not option.colors:
        raise EmptyPaletteError("option has no colors to classify blocks with")
    option.tuning.validate()


def identify_stack(frame: img_bgr_t, option: Option) -> List[BlockInfo]:
    """Identify every block in the stack shown in `frame`.

    Returns one BlockInfo per block in frame order (top to bottom). An empty
    list means no stack was found, which is not an error.
    """
    _check_inputs(frame, option)
    if frame.size == 0:
        return []
    contour = extract_silhouette(frame, option.tuning.bin_threshold)
    if contour is None:
        return []
    bands = bands_from_mask(rasterize(contour, frame.shape), option.tuning)
    return [classify(frame, band, option.colors, option.tuning) for band in bands]


def prepare_frame(frame: img_bgr_t, tuning: TuningCfg) -> img_bgr_t:
    """Scale a raw camera frame by camera_ratio and turn it upright.

    The camera is mounted on its side, so the raw image is rotated 90 degrees
    counter-clockwise.
    """
    if tuning.camera_ratio != 1.0:
        frame = cv2.resize(frame, None, fx=tuning.camera_ratio, fy=tuning.camera_ratio)
    return cv2.rotate(frame, cv2.ROTATE_90_COUNTERCLOCKWISE)


class DebugType(Enum):
    BLEND = "blend"
    SILHOUETTE = "silhouette"
    CONTOUR_MASK = "contour_mask"
    BANDS = "bands"


class BlockIdentifier:
    """
    Stateful wrapper around identify_stack for the live runner.

    Keeps the option and the intermediate images of the last frame for
    the visualizer. Results are the same as calling identify_stack directly.
    """

    DebugType = DebugType

    def __init__(self, option: Option, debug_option: Sequence[DebugType] | bool = False):
        option.validate()
        self.option = option
        self.debug_images: VizResults = {}
        if isinstance(debug_option, bool):
            debug_option = list(DebugType) if debug_option else []
        self.debug_option = list(debug_option)

    def process_frame(self, frame: img_bgr_t) -> List[BlockInfo]:
        self.debug_images = {}
        blocks = identify_stack(frame, self.option)
        if self.debug_option and frame.size:
            self._gen_debug_images(frame, blocks)
        return blocks

    def _gen_debug_images(self, frame: img_bgr_t, blocks: List[BlockInfo]) -> None:
        tuning = self.option.tuning
        if DebugType.BLEND in self.debug_option:
            self.debug_images[DebugType.BLEND.value] = cv2.cvtColor(
                blend_channel(frame), cv2.COLOR_GRAY2BGR)
        if DebugType.SILHOUETTE in self.debug_option:
            self.debug_images[DebugType.SILHOUETTE.value] = cv2.cvtColor(
                binarize(frame, tuning.bin_threshold), cv2.COLOR_GRAY2BGR)

        want_mask = DebugType.CONTOUR_MASK in self.debug_option
        want_bands = DebugType.BANDS in self.debug_option
        if not (want_mask or want_bands):
            return
        contour = extract_silhouette(frame, tuning.bin_threshold)
        mask = np.zeros(frame.shape[:2], dtype=np.uint8) if contour is None \
            else rasterize(contour, frame.shape)
        mask_bgr = cv2.cvtColor(mask, cv2.COLOR_GRAY2BGR)
        if want_mask:
            self.debug_images[DebugType.CONTOUR_MASK.value] = mask_bgr
        if want_bands:
            # candidate bands before classification, identified ones on top
            bands_img = mask_bgr.copy()
            for band in bands_from_mask(mask, tuning):
                cv2.rectangle(bands_img, band.tl, band.br, (0, 0, 255), 1)
            for block in blocks:
                cv2.rectangle(bands_img, block.rc.tl, block.rc.br, (0, 255, 0), 2)
            self.debug_images[DebugType.BANDS.value] = bands_img
