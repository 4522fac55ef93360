"""Image export utilities for rendered images.

The renderer's own output format is plain-text PPM (``Image.save``). This
module adds PNG export through Pillow, which most image viewers open
directly, and an error metric for comparing renders.

Example:
    >>> from spheretrace.preview.export import save_png
    >>> save_png(image, "hello_world.png")
"""

from __future__ import annotations

import os

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from spheretrace.preview.image import Image


def save_png(image: Image, filepath: str | os.PathLike[str]) -> None:
    """Save an image as an 8-bit RGB PNG file.

    The bytes are written unchanged; the renderer has already applied gamma
    correction and quantization.

    Args:
        image: The image to save.
        filepath: Output file path (should end in .png).

    Raises:
        OSError: If the file cannot be written.
    """
    pil_image = PILImage.fromarray(image.to_array())
    pil_image.save(filepath, format="PNG")


def load_png(filepath: str | os.PathLike[str]) -> Image:
    """Load an RGB image from a PNG (or any format Pillow reads)."""
    with PILImage.open(filepath) as pil_image:
        data = np.asarray(pil_image.convert("RGB"), dtype=np.uint8)
    return Image.from_array(data)


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
