# renderer/canvas.py
import logging
from pathlib import Path
from typing import Iterable, Sequence, Union

import numpy as np
from PIL import Image

from whitted.core.color import Color

logger = logging.getLogger(__name__)

PPM_MAX_VALUE = 255
PPM_LINE_LENGTH = 70


class Canvas:
    """
    A width x height grid of linear RGB pixels, initially black.

    Pixel values are stored unclamped; they are clamped to [0, 1] and
    quantized only when the canvas is serialized.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.float64)

    def _check(self, x: int, y: int):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")

    def write_pixel(self, x: int, y: int, color: Color):
        self._check(x, y)
        self.pixels[y, x] = (color.red, color.green, color.blue)

    def write_row(self, y: int, colors: Sequence[Color]):
        if len(colors) != self.width:
            raise ValueError(f"Row has {len(colors)} pixels, canvas is {self.width} wide")
        self._check(0, y)
        self.pixels[y] = [(c.red, c.green, c.blue) for c in colors]

    def pixel_at(self, x: int, y: int) -> Color:
        self._check(x, y)
        r, g, b = self.pixels[y, x]
        return Color(r, g, b)

    def to_bytes_array(self) -> np.ndarray:
        """Clamped, 8-bit quantized copy of the pixels."""
        scaled = np.clip(self.pixels, 0.0, 1.0) * PPM_MAX_VALUE
        # Round half up, as the PPM writer does.
        return np.floor(scaled + 0.5).astype(np.uint8)

    def to_ppm(self) -> str:
        """
        Serializes to plain (P3) PPM. Lines are wrapped so none exceeds 70
        characters, and the text ends with a newline.
        """
        lines = ["P3", f"{self.width} {self.height}", str(PPM_MAX_VALUE)]
        quantized = self.to_bytes_array()
        for row in quantized:
            lines.extend(_wrap((str(int(v)) for v in row.reshape(-1)), PPM_LINE_LENGTH))
        return "\n".join(lines) + "\n"

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.to_bytes_array())

    def save(self, path: Union[str, Path]) -> Path:
        """
        Writes the canvas to path. ".ppm" files are written as plain-text
        PPM; any other extension is handed to Pillow.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() == ".ppm":
            path.write_text(self.to_ppm(), encoding="ascii")
        else:
            self.to_image().save(path)
        logger.info("Saved %dx%d image to %s", self.width, self.height, path)
        return path

    @classmethod
    def average(cls, canvases: Sequence["Canvas"]) -> "Canvas":
        """Per-pixel mean of equally sized canvases."""
        if not canvases:
            raise ValueError("need at least one canvas to average")
        first = canvases[0]
        for canvas in canvases[1:]:
            if (canvas.width, canvas.height) != (first.width, first.height):
                raise ValueError("canvases to average must share the same size")
        result = cls(first.width, first.height)
        result.pixels = np.mean([c.pixels for c in canvases], axis=0)
        return result


def _wrap(values: Iterable[str], limit: int) -> Iterable[str]:
    line = ""
    for value in values:
        if not line:
            line = value
        elif len(line) + 1 + len(value) > limit:
            yield line
            line = value
        else:
            line = f"{line} {value}"
    if line:
        yield line
