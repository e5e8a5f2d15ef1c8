# -------------------- visualizer.py --------------------
import logging
import cv2
import numpy as np
from typing import List, Dict, Optional
from blockstack.block import BlockInfo
from blockstack.config import Option
from blockstack.type_defs import *
from blockstack.identifier import BlockIdentifier

try:
    from PySide6.QtWidgets import QApplication
    from blockstack.debug_controls import DebugControlWidget
    PYQT_AVAILABLE = True
except ImportError:
    PYQT_AVAILABLE = False

NOT_HEADLESS = hasattr(cv2, 'imshow')

logger = logging.getLogger(__name__)

BAND_COLOR = (0, 255, 0)
COLOR_AREA_COLOR = (255, 0, 255)
UNKNOWN_INSTRUCTION = "unknown"


class BlockVisualizer:
    """
    Shows identified blocks, with PySide6 debug controls when available
    """

    def __init__(self, identifier: BlockIdentifier, show: bool = True):
        self.mode = 0
        self.main_window = "blocks"
        self.show = show and NOT_HEADLESS
        self.identifier = identifier
        self.active_windows = set()
        self.overlay_alpha = 0.5

        if PYQT_AVAILABLE and self.show:
            self.qt_app = QApplication.instance() or QApplication([])
            self.debug_controls = DebugControlWidget(identifier.DebugType)
            self.debug_controls.options_changed.connect(
                self._update_debug_options)
            self.debug_controls.set_states({
                opt: opt in self.identifier.debug_option
                for opt in self.identifier.DebugType
            })
        else:
            self.qt_app = None
            self.debug_controls = None

    def toggle_mode(self):
        """Switch between plain result (0) and debug images (1)."""
        self.mode = (self.mode + 1) % 2
        if self.debug_controls is not None:
            if self.mode == 1:
                self.debug_controls.show()
            else:
                self.debug_controls.hide()

        if self.show:
            cv2.destroyAllWindows()
        self.active_windows.clear()

    def visualize(self, frame: np.ndarray, blocks: List[BlockInfo]) -> VizResults:
        """Render the result canvas (and debug images in mode 1), showing windows if enabled."""
        if self.qt_app is not None:
            self.qt_app.processEvents()

        results: VizResults = {}
        final_result = self.gen_final_result(frame, blocks, self.identifier.option)
        if self._valid_image(final_result):
            results[self.main_window] = final_result

        if self.mode == 1:
            results.update(self.gen_debug_imgs(self.identifier.debug_images, frame))

        if self.show:
            current_windows = set(results.keys())
            for win in self.active_windows - current_windows:
                try:
                    cv2.destroyWindow(win)
                except cv2.error:
                    pass
            for name, img in results.items():
                cv2.imshow(name, img)
            self.active_windows = current_windows

        return results

    def _update_debug_options(self):
        """Update identifier with current GUI states"""
        assert self.debug_controls is not None
        states = self.debug_controls.get_states()
        self.identifier.debug_option = [
            opt for opt, enabled in states.items() if enabled
        ]
        logger.info("Debug images: %s",
                    [opt.value for opt in self.identifier.debug_option])

    @staticmethod
    def _valid_image(img: Optional[np.ndarray]) -> bool:
        """Validate image dimensions"""
        return (
            isinstance(img, np.ndarray) and
            img.size > 0 and
            img.shape[0] > 0 and
            img.shape[1] > 0
        )

    @staticmethod
    def gen_final_result(frame: np.ndarray, blocks: List[BlockInfo],
                         option: Option) -> np.ndarray:
        """
        Frame on the left with band and color-sample rects, one text entry per
        block on the right: "<width>:<color> RR GG BB" and the instruction name.
        """
        rows, cols = frame.shape[:2]
        canvas = np.zeros((rows, cols * 2, 3), dtype=np.uint8)
        canvas[:, :cols] = frame
        for block in blocks:
            cv2.rectangle(canvas, block.rc.tl, block.rc.br, BAND_COLOR, 1)
            cv2.rectangle(canvas, block.color_area.tl, block.color_area.br,
                          COLOR_AREA_COLOR, 1)

            inst = option.instruction_for(block.to_key())
            inst_name = inst.name if inst is not None else UNKNOWN_INSTRUCTION
            b, g, r = (int(round(v)) for v in block.ave)
            text_color = tuple(int(v) for v in block.color.bgr)
            lines = [
                f"{block.width}:{block.color.name} {r:02X} {g:02X} {b:02X}",
                inst_name,
            ]
            x0 = int(cols * 1.1)
            for line, frac in zip(lines, (0.4, 0.9)):
                cv2.putText(
                    canvas,
                    line,
                    (x0, int(block.rc.y + block.rc.height * frac)),
                    cv2.FONT_HERSHEY_DUPLEX,
                    0.7,
                    text_color,
                    1
                )
        return canvas

    def gen_debug_imgs(self, debug_images: VizResults, frame: img_t) -> Dict[str, np.ndarray]:
        """Label each selected debug image and blend it over the frame."""
        results = {}
        selected = {opt.value for opt in self.identifier.debug_option}
        for name, img in debug_images.items():
            if name not in selected or not self._valid_image(img):
                continue
            display = cv2.addWeighted(frame, self.overlay_alpha, img, 1 - self.overlay_alpha, 0)
            cv2.putText(display, name, (10, 30),
                        cv2.FONT_HERSHEY_SIMPLEX, 1.0, (0, 255, 0), 2)
            results[name] = display
        return results
