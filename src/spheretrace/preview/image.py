"""RGB byte image and plain-text PPM serialization.

The Image is the sink the renderer writes into: a width x height grid of
RGB byte triples, stored as a NumPy array of shape (height, width, 3).

``save`` writes the plain-text PPM ("P3") format:

    P3
    <width> <height>
    255
    <r> <g> <b>        (one line per pixel, row-major from the top-left)

Example:
    >>> from spheretrace.preview.image import Image
    >>> image = Image(2, 1)
    >>> image.set(0, 0, (255, 0, 0))
    >>> image.save("out.ppm")
    >>> Image.load("out.ppm").get(0, 0)
    (255, 0, 0)
"""

from __future__ import annotations

import os
from pathlib import Path

import numpy as np
import numpy.typing as npt

PPM_MAGIC = "P3"
PPM_MAX_VALUE = 255


class Image:
    """An RGB image of bytes.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create a black image.

        Raises:
            ValueError: If width or height is negative.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self._data = np.zeros((height, width, 3), dtype=np.uint8)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} image"
            )

    def get(self, x: int, y: int) -> tuple[int, int, int]:
        """Get the (r, g, b) bytes of the pixel at column x, row y."""
        self._check_bounds(x, y)
        r, g, b = self._data[y, x]
        return int(r), int(g), int(b)

    def set(self, x: int, y: int, color: tuple[int, int, int]) -> None:
        """Set the pixel at column x, row y (row 0 is the top).

        Raises:
            IndexError: If (x, y) is outside the image.
            ValueError: If a channel is outside [0, 255].
        """
        self._check_bounds(x, y)
        for channel in color:
            if not 0 <= channel <= PPM_MAX_VALUE:
                raise ValueError(f"Channel value {channel} is outside [0, {PPM_MAX_VALUE}]")
        self._data[y, x] = color

    def to_array(self) -> npt.NDArray[np.uint8]:
        """Get a copy of the pixels as an array of shape (height, width, 3)."""
        return self._data.copy()

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the image as plain-text PPM, replacing any existing file.

        Raises:
            OSError: If the file cannot be removed, created or written.
        """
        path = Path(path)
        if path.exists():
            path.unlink()

        with path.open("w", encoding="ascii") as output:
            output.write(f"{PPM_MAGIC}\n")
            output.write(f"{self.width} {self.height}\n")
            output.write(f"{PPM_MAX_VALUE}\n")
            for r, g, b in self._data.reshape(-1, 3).tolist():
                output.write(f"{r} {g} {b}\n")

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> Image:
        """Read a plain-text PPM file.

        Tokens may be separated by any whitespace; ``#`` starts a comment that
        runs to the end of the line.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file is not a well-formed P3 image with max
                value 255.
        """
        text = Path(path).read_text(encoding="ascii")
        tokens = []
        for line in text.splitlines():
            tokens.extend(line.split("#", 1)[0].split())

        if len(tokens) < 4 or tokens[0] != PPM_MAGIC:
            raise ValueError(f"{path} is not a plain-text PPM ({PPM_MAGIC}) file")

        try:
            width, height, max_value = (int(token) for token in tokens[1:4])
            values = [int(token) for token in tokens[4:]]
        except ValueError as e:
            raise ValueError(f"{path} contains a non-integer token: {e}") from e

        if max_value != PPM_MAX_VALUE:
            raise ValueError(f"Unsupported max value {max_value}, expected {PPM_MAX_VALUE}")
        if len(values) != 3 * width * height:
            raise ValueError(
                f"Expected {3 * width * height} channel values for a {width}x{height} "
                f"image, found {len(values)}"
            )

        image = cls(width, height)
        data = np.array(values, dtype=np.int64).reshape(height, width, 3)
        if data.min(initial=0) < 0 or data.max(initial=0) > PPM_MAX_VALUE:
            raise ValueError(f"Channel values must be in [0, {PPM_MAX_VALUE}]")
        image._data = data.astype(np.uint8)
        return image

    @classmethod
    def from_array(cls, data: npt.NDArray[np.uint8]) -> Image:
        """Create an image from an array of shape (height, width, 3).

        Raises:
            ValueError: If the array does not have shape (height, width, 3).
        """
        if data.ndim != 3 or data.shape[2] != 3:
            raise ValueError(f"Expected an array of shape (H, W, 3), got {data.shape}")
        image = cls(data.shape[1], data.shape[0])
        image._data = data.astype(np.uint8).copy()
        return image
