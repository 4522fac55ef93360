"""Scene-level sphere storage and nearest-hit search.

The scene stores spheres in Taichi fields for kernel access. Each sphere row
also holds the sphere's own material (type tag and albedo); the material
handle carried by a HitRecord is the row index, so a hit borrows the material
of the sphere it struck without copying it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.materials import MaterialType
    >>> from spheretrace.scene.intersection import add_sphere, clear_scene, hit_world
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, -1.0), 0.5, MaterialType.LAMBERTIAN, (0.8, 0.3, 0.3))
    >>> # Use hit_world within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from spheretrace.geometry.sphere import HitRecord, Sphere, hit_sphere, make_miss_record
from spheretrace.materials.material import MaterialType, validate_albedo

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Material storage, one row per sphere (indexed by material_id == sphere index)
material_types = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
material_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)


def clear_scene() -> None:
    """Clear all spheres from the scene.

    Resets the sphere count to zero. The field data is overwritten when new
    spheres are added.
    """
    num_spheres[None] = 0


def add_sphere(
    center: tuple[float, float, float],
    radius: float,
    material_type: MaterialType,
    albedo: tuple[float, float, float],
) -> int:
    """Add a sphere and the material it owns to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (must be positive).
        material_type: The variant of the sphere's material.
        albedo: The material's albedo as (R, G, B), each in [0, 1].

    Returns:
        The index of the added sphere, which is also its material handle.

    Raises:
        ValueError: If radius is not positive or albedo is out of range.
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    if not radius > 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")
    validate_albedo(albedo)

    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")

    sphere_centers[idx] = vec3(center[0], center[1], center[2])
    sphere_radii[idx] = radius
    material_types[idx] = int(material_type)
    material_albedos[idx] = vec3(albedo[0], albedo[1], albedo[2])
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def get_sphere(index: ti.i32) -> Sphere:
    """Assemble the Sphere stored at index."""
    return Sphere(
        center=sphere_centers[index],
        radius=sphere_radii[index],
        material_id=index,
    )


@ti.func
def get_material(material_id: ti.i32):
    """Look up the material a HitRecord refers to.

    Args:
        material_id: The material handle from a HitRecord.

    Returns:
        A tuple (material_type, albedo).
    """
    return material_types[material_id], material_albedos[material_id]


@ti.func
def hit_world(
    ray_origin: vec3,
    ray_direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
) -> HitRecord:
    """Find the nearest intersection of a ray with the scene.

    Scans every sphere in insertion order. The upper bound starts at t_max
    and shrinks to each closer hit, so the final record is the globally
    nearest one. On an exactly equal t the earlier sphere is kept, since the
    bound is exclusive.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        t_min: Minimum t value to consider a valid hit.
        t_max: Maximum t value to consider a valid hit.

    Returns:
        A HitRecord for the closest intersection, or a miss record.
    """
    closest_t = t_max
    result = make_miss_record()

    n_spheres = num_spheres[None]
    for i in range(n_spheres):
        rec = hit_sphere(ray_origin, ray_direction, get_sphere(i), t_min, closest_t)
        if rec.hit == 1:
            closest_t = rec.t
            result = rec

    return result
