"""Renderer driving the render kernel into an image sink.

This module wraps the integrator's row-band kernel with:
- Validated render settings (size, samples per pixel, seed)
- Rendering in row bands with a progress callback
- Writing every pixel into an image sink via ``set(x, y, rgb)``

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.renderer import Renderer, RenderSettings
    >>> from spheretrace.scene.default import create_default_scene
    >>> from spheretrace.camera.thin_lens import setup_camera
    >>>
    >>> world, camera, settings = create_default_scene()
    >>> setup_camera(camera)
    >>> image = Renderer(settings).render()
    >>> image.save("hello_world.ppm")
"""

from collections.abc import Callable
from dataclasses import dataclass

from spheretrace.camera.thin_lens import is_camera_ready
from spheretrace.core.integrator import (
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    get_pixels_numpy,
    render_rows,
    setup_render_target,
)
from spheretrace.preview.image import Image

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class RenderSettings:
    """Parameters of a render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of jittered samples averaged per pixel.
        seed: Global seed of the per-pixel random streams (32-bit).
        rows_per_batch: Rows rendered per kernel launch (progress granularity).

    Raises:
        ValueError: If any parameter is out of range.
    """

    width: int = 200
    height: int = 100
    samples_per_pixel: int = 100
    seed: int = 0
    rows_per_batch: int = 16

    def __post_init__(self) -> None:
        if not 0 < self.width <= MAX_IMAGE_WIDTH:
            raise ValueError(f"width must be in [1, {MAX_IMAGE_WIDTH}], got {self.width}")
        if not 0 < self.height <= MAX_IMAGE_HEIGHT:
            raise ValueError(f"height must be in [1, {MAX_IMAGE_HEIGHT}], got {self.height}")
        if self.samples_per_pixel <= 0:
            raise ValueError(
                f"samples_per_pixel must be positive, got {self.samples_per_pixel}"
            )
        if not 0 <= self.seed < 2**32:
            raise ValueError(f"seed must fit in 32 bits, got {self.seed}")
        if self.rows_per_batch <= 0:
            raise ValueError(f"rows_per_batch must be positive, got {self.rows_per_batch}")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height


class Renderer:
    """Renders the current scene and camera into an image sink.

    The scene (``World``) and camera (``setup_camera``) are global Taichi
    state; the renderer only owns the render settings.

    Attributes:
        settings: The render settings.
    """

    def __init__(self, settings: RenderSettings) -> None:
        self.settings = settings

    def render(
        self,
        image: Image | None = None,
        callback: ProgressCallback | None = None,
    ) -> Image:
        """Render every pixel and write it into the image.

        Args:
            image: Sink to write into. A new Image of the configured size is
                created if omitted.
            callback: Optional function called after each row band as
                callback(rows_done, total_rows).

        Returns:
            The image that was written.

        Raises:
            RuntimeError: If the camera has not been set up.
            ValueError: If the image size differs from the settings.
        """
        settings = self.settings
        if not is_camera_ready():
            raise RuntimeError("Camera not set up. Call setup_camera() first.")

        if image is None:
            image = Image(settings.width, settings.height)
        elif (image.width, image.height) != (settings.width, settings.height):
            raise ValueError(
                f"Image size {image.width}x{image.height} does not match render size "
                f"{settings.width}x{settings.height}"
            )

        setup_render_target(settings.width, settings.height)

        for y_start in range(0, settings.height, settings.rows_per_batch):
            y_end = min(y_start + settings.rows_per_batch, settings.height)
            render_rows(y_start, y_end, settings.samples_per_pixel, settings.seed)
            if callback is not None:
                callback(y_end, settings.height)

        pixels = get_pixels_numpy()
        for y in range(settings.height):
            for x in range(settings.width):
                r, g, b = pixels[y, x]
                image.set(x, y, (int(r), int(g), int(b)))

        return image
