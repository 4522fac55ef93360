"""Thin-lens camera model with depth of field.

This module implements a look-at camera whose rays start on a lens disk
instead of a single point. Objects at the focus distance stay sharp; others
blur in proportion to the aperture. An aperture of zero gives a pinhole.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The viewport is placed at the focus distance along -w, so every ray through a
given viewport point converges there regardless of where on the lens it
starts.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.camera.thin_lens import ThinLensCamera, setup_camera, get_ray
    >>>
    >>> camera = ThinLensCamera.focus_on_target(
    ...     lookfrom=(3.0, 3.0, 2.0),
    ...     lookat=(0.0, 0.0, -1.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=20.0,
    ...     aspect_ratio=2.0,
    ...     aperture=2.0,
    ... )
    >>> setup_camera(camera)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     origin, direction, state = get_ray(0.5, 0.5, ti.u32(1))
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import random_in_unit_disk
from spheretrace.core.rng import next_float

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class ThinLensCamera:
    """Configuration for a thin-lens camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction hint for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 disables depth of field.
        focus_dist: Distance from the lens to the plane in perfect focus.

    Raises:
        ValueError: If any parameter is out of range.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
    aperture: float = 0.0
    focus_dist: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if not self.aspect_ratio > 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.aperture < 0.0:
            raise ValueError(f"aperture must be non-negative, got {self.aperture}")
        if not self.focus_dist > 0.0:
            raise ValueError(f"focus_dist must be positive, got {self.focus_dist}")
        if tuple(self.lookfrom) == tuple(self.lookat):
            raise ValueError("lookfrom and lookat must be different points")

    @classmethod
    def focus_on_target(
        cls,
        lookfrom: tuple[float, float, float],
        lookat: tuple[float, float, float],
        vup: tuple[float, float, float],
        vfov: float,
        aspect_ratio: float,
        aperture: float = 0.0,
    ) -> "ThinLensCamera":
        """Create a camera focused on the lookat point."""
        focus_dist = math.dist(lookfrom, lookat)
        return cls(
            lookfrom=lookfrom,
            lookat=lookat,
            vup=vup,
            vfov=vfov,
            aspect_ratio=aspect_ratio,
            aperture=aperture,
            focus_dist=focus_dist,
        )

    @property
    def lens_radius(self) -> float:
        """Radius of the lens disk (half the aperture)."""
        return self.aperture / 2.0


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

# Camera origin (position)
_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())

# Orthonormal basis vectors
_camera_u = ti.Vector.field(3, dtype=ti.f32, shape=())  # Right
_camera_v = ti.Vector.field(3, dtype=ti.f32, shape=())  # Up
_camera_w = ti.Vector.field(3, dtype=ti.f32, shape=())  # Backward (opposite view)

# Viewport vectors for ray computation (viewport lies on the focus plane)
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())  # Full width
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())  # Full height
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())  # Lower-left of viewport

_lens_radius = ti.field(dtype=ti.f32, shape=())

# Flag to track if the camera has been set up
_camera_initialized = ti.field(dtype=ti.i32, shape=())


# =============================================================================
# Camera Setup (Python-side, called once per camera configuration)
# =============================================================================


def setup_camera(camera: ThinLensCamera) -> None:
    """Initialize camera state from configuration.

    Computes the camera's orthonormal basis (u, v, w) and the viewport on the
    focus plane. This must be called before rendering.

    Args:
        camera: Camera configuration with position, orientation, FOV and lens.

    Note:
        This function writes to Taichi fields and should be called from
        Python (not from within a Taichi kernel).
    """
    theta = math.radians(camera.vfov)
    half_height = math.tan(theta / 2.0)
    half_width = camera.aspect_ratio * half_height
    focus_dist = camera.focus_dist

    lookfrom = np.array(camera.lookfrom, dtype=np.float32)
    lookat = np.array(camera.lookat, dtype=np.float32)
    vup = np.array(camera.vup, dtype=np.float32)

    # w points from lookat toward lookfrom (backward)
    w = lookfrom - lookat
    w = w / np.linalg.norm(w)

    # u points right (perpendicular to w and vup)
    u = np.cross(vup, w)
    u = u / np.linalg.norm(u)

    # v points up in the camera's frame
    v = np.cross(w, u)

    horizontal = 2.0 * half_width * focus_dist * u
    vertical = 2.0 * half_height * focus_dist * v
    lower_left = (
        lookfrom
        - half_width * focus_dist * u
        - half_height * focus_dist * v
        - focus_dist * w
    )

    _camera_origin[None] = lookfrom.tolist()
    _camera_u[None] = u.tolist()
    _camera_v[None] = v.tolist()
    _camera_w[None] = w.tolist()
    _viewport_horizontal[None] = horizontal.tolist()
    _viewport_vertical[None] = vertical.tolist()
    _lower_left_corner[None] = lower_left.tolist()
    _lens_radius[None] = camera.lens_radius
    _camera_initialized[None] = 1


def reset_camera() -> None:
    """Mark the camera as not set up (rendering will refuse to run)."""
    _camera_initialized[None] = 0


def is_camera_ready() -> bool:
    """Check whether setup_camera has been called."""
    return bool(_camera_initialized[None])


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_ray(s: ti.f32, t: ti.f32, state: ti.u32):
    """Generate a ray through normalized viewport coordinates (s, t).

    Samples a point on the lens disk, offsets the ray origin by it in camera
    space and aims the ray at the viewport point on the focus plane:
    - s = 0: left edge, s = 1: right edge
    - t = 0: bottom edge, t = 1: top edge

    The direction is not normalized.

    Args:
        s: Horizontal coordinate in [0, 1] (left to right).
        t: Vertical coordinate in [0, 1] (bottom to top).
        state: Generator state.

    Returns:
        A tuple (origin, direction, state).
    """
    disk, rng = random_in_unit_disk(state)
    rd = _lens_radius[None] * disk
    offset = _camera_u[None] * rd.x + _camera_v[None] * rd.y

    origin = _camera_origin[None] + offset
    direction = (
        _lower_left_corner[None]
        + s * _viewport_horizontal[None]
        + t * _viewport_vertical[None]
        - _camera_origin[None]
        - offset
    )
    return origin, direction, rng


@ti.func
def get_ray_jittered(
    pixel_x: ti.i32, pixel_y: ti.i32, width: ti.i32, height: ti.i32, state: ti.u32
):
    """Generate a ray through a uniformly jittered point inside a pixel.

    Pixel rows count from the top of the image, so the vertical coordinate is
    flipped: t = (height - y - 1 + dv) / height.

    Args:
        pixel_x: Pixel column (0 = left).
        pixel_y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        state: Generator state.

    Returns:
        A tuple (origin, direction, state).
    """
    du, rng = next_float(state)
    dv, rng = next_float(rng)

    s = (ti.cast(pixel_x, ti.f32) + du) / ti.cast(width, ti.f32)
    t = (ti.cast(height - pixel_y - 1, ti.f32) + dv) / ti.cast(height, ti.f32)

    return get_ray(s, t, rng)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin, u, v, w, horizontal, vertical, lower_left.
    """
    fields = {
        "origin": _camera_origin,
        "u": _camera_u,
        "v": _camera_v,
        "w": _camera_w,
        "horizontal": _viewport_horizontal,
        "vertical": _viewport_vertical,
        "lower_left": _lower_left_corner,
    }
    info = {}
    for name, field in fields.items():
        vec = field[None]
        info[name] = (float(vec[0]), float(vec[1]), float(vec[2]))
    return info


def get_lens_radius() -> float:
    """Get the lens radius of the current camera."""
    return float(_lens_radius[None])
