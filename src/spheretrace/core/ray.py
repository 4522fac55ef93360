"""Ray data structure, vector algebra and sampling utilities.

This module provides the Ray dataclass and the vector operations the rest of
the renderer is written against. The vector type itself is Taichi's
``vec3``, used interchangeably as point, direction and RGB color; its
arithmetic operators (including the in-place ``+=`` and ``/=`` used by the
render loop's sample accumulator) are Taichi's own.

The samplers draw from an explicit generator state (see ``core.rng``) and
return the advanced state alongside the sample.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

from spheretrace.core.rng import next_float

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Upper bound on rejection-sampling draws (Taichi functions need bounded loops).
# The chance of 100 consecutive rejections is below 1e-30 for both samplers.
MAX_REJECTION_ATTEMPTS = 100


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Need not be unit
            length; intersection code carries an explicit ``a`` coefficient.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared Euclidean length of a vector."""
    return v.x * v.x + v.y * v.y + v.z * v.z


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(length_squared(v))


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Computed as ``v / length(v)``. A zero vector is not special-cased: the
    division yields non-finite components.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    return v / length(v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product a . b."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Computes ``v - 2 * dot(v, n) * n``. The normal should be unit length;
    then ``dot(reflect(v, n), n) == -dot(v, n)``.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * dot(incident, normal) * normal


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


@ti.func
def random_in_unit_sphere(state: ti.u32):
    """Generate a random point inside the unit sphere.

    Rejection sampling: draws points uniformly in [-1, 1]^3 until one has
    squared length <= 1.

    Args:
        state: Generator state.

    Returns:
        A tuple (point, state).
    """
    rng = state
    p = vec3(0.0, 0.0, 0.0)
    found = 0
    for _ in range(MAX_REJECTION_ATTEMPTS):
        if found == 0:
            rx, rng = next_float(rng)
            ry, rng = next_float(rng)
            rz, rng = next_float(rng)
            p = vec3(2.0 * rx - 1.0, 2.0 * ry - 1.0, 2.0 * rz - 1.0)
            if length_squared(p) <= 1.0:
                found = 1
    return p, rng


@ti.func
def random_in_unit_disk(state: ti.u32):
    """Generate a random point inside the unit disk in the xy-plane.

    Rejection sampling: draws points uniformly in [-1, 1]^2 until one has
    squared length < 1. Used for thin-lens depth of field.

    Args:
        state: Generator state.

    Returns:
        A tuple (point, state) where point is (x, y, 0).
    """
    rng = state
    p = vec3(0.0, 0.0, 0.0)
    found = 0
    for _ in range(MAX_REJECTION_ATTEMPTS):
        if found == 0:
            rx, rng = next_float(rng)
            ry, rng = next_float(rng)
            p = vec3(2.0 * rx - 1.0, 2.0 * ry - 1.0, 0.0)
            if p.x * p.x + p.y * p.y < 1.0:
                found = 1
    return p, rng
