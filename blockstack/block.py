from dataclasses import dataclass

from blockstack.color_def import Color
from blockstack.type_defs import Rect, bgr_f_t


@dataclass(frozen=True, order=True)
class BlockKey:
    """Color name plus width-in-units; the identity used to look up an instruction."""
    color: str
    width: int

    def __str__(self) -> str:
        return f"{self.color}x{self.width}"


@dataclass(frozen=True)
class BlockInfo:
    """One block identified in the stack."""
    rc: Rect
    # centred shrink of `rc` the average color was taken from
    color_area: Rect
    ave: bgr_f_t
    color: Color
    width: int

    def to_key(self) -> BlockKey:
        return BlockKey(self.color.name, self.width)
