"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |ray_origin + t * ray_direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*b*t + c = 0

where:
    a = dot(direction, direction)
    b = dot(oc, direction)  (half of the traditional linear coefficient)
    c = dot(oc, oc) - radius^2
    oc = origin - center

The explicit ``a`` coefficient makes the test independent of the direction's
length, so camera and scattered rays are never normalized for it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.geometry.sphere import Sphere, HitRecord, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5, material_id=0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import Ray, dot, ray_at

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
        material_id: Handle of the material owned by this sphere.
    """

    center: vec3
    radius: ti.f32
    material_id: ti.i32


@ti.dataclass
class HitRecord:
    """Record of a ray-object intersection.

    Attributes:
        hit: Whether the ray intersected the object (1 if hit, 0 if miss).
        t: The ray parameter at the intersection. Only compared against other
            hits to find the nearest one. Only valid if hit == 1.
        point: The world-space intersection point. Only valid if hit == 1.
        normal: The unit outward surface normal. Only valid if hit == 1.
        material_id: Handle of the intersected object's material, borrowed
            for one scatter computation. -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    material_id: ti.i32


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        material_id=-1,
    )


@ti.func
def hit_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    sphere: Sphere,
    t_min: ti.f32,
    t_max: ti.f32,
) -> HitRecord:
    """Test for ray-sphere intersection.

    A negative discriminant means no intersection. Otherwise the smaller root
    is returned if it lies strictly inside (t_min, t_max); failing that the
    larger root under the same bound; failing that, a miss.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray (any nonzero length).
        sphere: The sphere to test intersection against.
        t_min: Exclusive lower bound on t (avoids self-intersection).
        t_max: Exclusive upper bound on t (the closest hit found so far).

    Returns:
        A HitRecord. Check the hit field to determine if intersection occurred.
    """
    oc = ray_origin - sphere.center
    a = dot(ray_direction, ray_direction)
    b = dot(oc, ray_direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = b * b - a * c

    # Initialize result fields (Taichi requires outer-scope declaration)
    did_hit = 0
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)
    material_id = -1

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)

        t = (-b - sqrt_d) / a
        valid = (t > t_min) and (t < t_max)

        if not valid:
            t = (-b + sqrt_d) / a
            valid = (t > t_min) and (t < t_max)

        if valid:
            did_hit = 1
            hit_t = t
            hit_point = ray_at(Ray(origin=ray_origin, direction=ray_direction), t)
            # Outward and unit length because radius > 0
            hit_normal = (hit_point - sphere.center) / sphere.radius
            material_id = sphere.material_id

    return HitRecord(
        hit=did_hit,
        t=hit_t,
        point=hit_point,
        normal=hit_normal,
        material_id=material_id,
    )


@ti.func
def make_sphere(center: vec3, radius: ti.f32, material_id: ti.i32) -> Sphere:
    """Create a sphere from center, radius and material handle."""
    return Sphere(center=center, radius=radius, material_id=material_id)
