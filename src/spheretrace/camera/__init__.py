"""Camera module for view and ray generation.

This module provides the camera model for generating primary rays:

Components:
    thin_lens: Look-at camera with a lens disk for depth of field

Camera responsibilities:
    - Transform (s, t) viewport coordinates to world-space rays
    - Apply anti-aliasing jitter for sub-pixel sampling
    - Offset ray origins over the lens for defocus blur
    - Support look-at positioning with up vector

Ray generation uses normalized viewport coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .thin_lens import (
    ThinLensCamera,
    get_camera_info,
    get_lens_radius,
    get_ray,
    get_ray_jittered,
    is_camera_ready,
    reset_camera,
    setup_camera,
)

__all__ = [
    "ThinLensCamera",
    "setup_camera",
    "is_camera_ready",
    "reset_camera",
    "get_ray",
    "get_ray_jittered",
    "get_camera_info",
    "get_lens_radius",
]
