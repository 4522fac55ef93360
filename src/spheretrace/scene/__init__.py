"""Scene module for sphere storage and ray-scene queries.

This module handles scene representation:

Components:
    intersection: Sphere/material storage in Taichi fields, nearest-hit search
    manager: World, the ordered Python-side collection of spheres
    default: The fixed demonstration scene, camera and render settings

Scene data is organized for kernel access:
    - Structure-of-Arrays layout for sphere data
    - One material row per sphere, addressed by the sphere index
"""

from .intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_material,
    get_sphere,
    get_sphere_count,
    hit_world,
)
from .manager import SphereInfo, World

__all__ = [
    # Intersection module
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "get_sphere",
    "get_material",
    "hit_world",
    "MAX_SPHERES",
    # Manager module
    "World",
    "SphereInfo",
]

# Note: default is NOT imported here to avoid circular imports (it depends on
# core.renderer, which depends on scene.intersection).
# Import directly from spheretrace.scene.default when needed.
