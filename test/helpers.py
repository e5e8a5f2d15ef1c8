import numpy as np

from blockstack.color_def import Color
from blockstack.config import Option, TuningCfg
from blockstack.utils.stack_image import draw_stack, frame_size

RED = Color("red", (0, 0, 255))
GREEN = Color("green", (0, 255, 0))
BLUE = Color("blue", (255, 0, 0))
YELLOW = Color("yellow", (0, 255, 255))
PALETTE = (RED, GREEN, BLUE, YELLOW)

TUNING = TuningCfg()


def blank_frame(tuning=TUNING):
    return np.zeros((*frame_size(tuning), 3), dtype=np.uint8)


def stack_frame(blocks, tuning=TUNING):
    frame = blank_frame(tuning)
    draw_stack(frame, blocks, tuning)
    return frame


def option(colors=PALETTE, tuning=TUNING, block2inst=None):
    return Option(colors=colors, block2inst=block2inst or {}, tuning=tuning)
