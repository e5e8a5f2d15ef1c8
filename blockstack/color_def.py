from dataclasses import dataclass
from typing import Sequence

from blockstack.errors import EmptyPaletteError
from blockstack.type_defs import bgr_t, bgr_f_t

# ---------- Data Classes ----------


@dataclass(frozen=True)
class Color:
    """Stores a palette color name and the reference BGR value blocks are matched against."""
    name: str
    bgr: bgr_t


# ---------- Default Palette ----------
# Reference samples of the toy blocks under the booth lighting.

RED = Color(name='red', bgr=(13, 24, 135))
GREEN = Color(name='green', bgr=(71, 136, 73))
WHITE = Color(name='white', bgr=(170, 183, 185))
BLUE = Color(name='blue', bgr=(152, 75, 48))
AQUA = Color(name='aqua', bgr=(159, 119, 90))
YELLOW = Color(name='yellow', bgr=(1, 149, 173))

DEFAULT_COLORS = (RED, GREEN, WHITE, BLUE, AQUA, YELLOW)


# ---------- Palette Matcher ----------

def color_distance2(v0: bgr_t | bgr_f_t, v1: bgr_t | bgr_f_t) -> float:
    """Squared euclidean distance between two BGR samples."""
    return float(sum((float(a) - float(b)) ** 2 for a, b in zip(v0, v1)))


def nearest_color(bgr: bgr_t | bgr_f_t, palette: Sequence[Color]) -> Color:
    """Return the palette entry closest to `bgr`.

    On a tie the entry that comes first in `palette` wins.
    """
    if not palette:
        raise EmptyPaletteError("palette has no colors to match against")
    best = palette[0]
    best_len2 = color_distance2(bgr, best.bgr)
    for color in palette[1:]:
        len2 = color_distance2(bgr, color.bgr)
        if len2 < best_len2:
            best_len2 = len2
            best = color
    return best
