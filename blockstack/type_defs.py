from typing import NamedTuple, Tuple
import numpy as np
import numpy.typing as npt
from typing import TypeVar, Annotated, Literal, Dict

bgr_t = Tuple[int, int, int]
# averaged samples keep their fractional part
bgr_f_t = Tuple[float, float, float]


Dtype = TypeVar('Dtype', bound=np.generic)


array_NxNx3_t = Annotated[npt.NDArray[Dtype], Literal['N', 'N', 3]]
array_NxNx1_t = Annotated[npt.NDArray[Dtype], Literal['N', 'N', 1]]

img_t = array_NxNx3_t

img_bgr_t = array_NxNx3_t

img_gray_t = array_NxNx1_t

# cv2.findContours point array, shape (N, 1, 2)
contour_t = npt.NDArray[np.int32]

VizResults = Dict[str, img_t | img_gray_t]


class Rect(NamedTuple):
    """Pixel rectangle in (x, y, width, height) form, same as cv2.boundingRect."""
    x: int
    y: int
    width: int
    height: int

    def scaled(self, ratio: float) -> 'Rect':
        """Scale about the centre, never collapsing below 1x1."""
        return Rect(
            int(self.x + self.width * (1 - ratio) / 2),
            int(self.y + self.height * (1 - ratio) / 2),
            max(1, int(self.width * ratio)),
            max(1, int(self.height * ratio)),
        )

    def contains(self, other: 'Rect') -> bool:
        return (self.x <= other.x and self.y <= other.y and
                other.x + other.width <= self.x + self.width and
                other.y + other.height <= self.y + self.height)

    def roi(self, image: np.ndarray) -> np.ndarray:
        """View of `image` covered by this rect."""
        return image[self.y:self.y + self.height, self.x:self.x + self.width]

    @property
    def tl(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def br(self) -> Tuple[int, int]:
        return (self.x + self.width, self.y + self.height)
