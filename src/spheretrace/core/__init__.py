"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    rng: Explicit-state random number generation (one stream per pixel)
    ray: Ray data structure, vector algebra and rejection samplers
    integrator: Shading loop (ray color), background gradient, render kernel
    renderer: Render settings and the driver that fills an image sink

Randomness is never drawn from a hidden global source: the generator state is
passed through the call chain (render -> color -> scatter -> sampling) and
returned advanced, which keeps every pixel reproducible for a given seed.
"""

from .ray import (
    MAX_REJECTION_ATTEMPTS,
    Ray,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    random_in_unit_disk,
    random_in_unit_sphere,
    ray_at,
    reflect,
    unit_vector,
    vec3,
)
from .rng import next_float, next_u32, pcg_hash, seed_stream

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from spheretrace.core.integrator or spheretrace.core.renderer.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "unit_vector",
    "dot",
    "cross",
    "reflect",
    "random_in_unit_sphere",
    "random_in_unit_disk",
    "MAX_REJECTION_ATTEMPTS",
    "pcg_hash",
    "seed_stream",
    "next_u32",
    "next_float",
]
