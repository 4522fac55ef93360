"""Preview module for image output.

This module handles the rendered image and its files:

Components:
    image: RGB byte image sink with plain-text PPM save/load
    export: PNG export via Pillow and image comparison

Example:
    >>> from spheretrace.preview import Image, save_png
    >>> image = Image(200, 100)
    >>> image.save("hello_world.ppm")
    >>> save_png(image, "hello_world.png")
"""

from spheretrace.preview.export import compute_rmse, load_png, save_png
from spheretrace.preview.image import Image

__all__ = [
    "Image",
    "save_png",
    "load_png",
    "compute_rmse",
]
