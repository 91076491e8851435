"""Drawing surface — a Pillow RGBA image with the handful of canvas operations the painter needs."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw, ImageFilter


class Surface:
    """Off-screen or visible canvas.

    Pixel data is exchanged as H×W×4 uint8 arrays (RGBA).
    """

    def __init__(self, width: int, height: int, fill: str | tuple[int, int, int, int] = (0, 0, 0, 0)) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self._set_image(Image.new("RGBA", (int(width), int(height)), fill))

    def _set_image(self, image: Image.Image) -> None:
        self.image = image
        self._draw = ImageDraw.Draw(self.image)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def fill_rect(self, x: int, y: int, w: int, h: int, color: str) -> None:
        self._draw.rectangle((x, y, x + w - 1, y + h - 1), fill=color)

    def fill_polygon(
        self,
        polygon: Sequence[Sequence[float]] | NDArray[np.float64],
        fill: str,
        stroke: str | None = None,
        stroke_width: int = 1,
    ) -> None:
        """Fill a closed path; with ``stroke`` also outline it. Vertices are rounded to whole pixels."""
        xy = [(int(round(x)), int(round(y))) for x, y in polygon]
        if len(xy) < 3:
            return
        self._draw.polygon(xy, fill=fill, outline=stroke, width=stroke_width if stroke else 1)

    def get_image_data(self) -> NDArray[np.uint8]:
        return np.array(self.image, dtype=np.uint8)

    def put_image_data(self, data: NDArray[np.uint8]) -> None:
        arr = np.asarray(data, dtype=np.uint8)
        if arr.shape != (self.height, self.width, 4):
            raise ValueError(f"Expected {(self.height, self.width, 4)} pixel data, got {arr.shape}")
        self._set_image(Image.fromarray(arr, "RGBA"))

    def draw_image(self, other: Surface, x: int = 0, y: int = 0) -> None:
        """Blit ``other`` over this surface honouring its alpha."""
        self.image.alpha_composite(other.image, dest=(x, y))

    def blur(self, radius: float) -> None:
        """Gaussian blur in place."""
        if radius > 0:
            self._set_image(self.image.filter(ImageFilter.GaussianBlur(radius)))

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self.image.convert("RGB").save(out)
        return out
