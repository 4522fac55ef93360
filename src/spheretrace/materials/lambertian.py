"""Lambertian (ideal diffuse) material implementation.

A Lambertian surface scatters an incoming ray in a random direction around the
surface normal, obtained by offsetting the normal with a point drawn uniformly
inside the unit sphere. The scattered ray always exists; the surface tints it
with its albedo.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.materials.lambertian import LambertianMaterial, scatter_lambertian
    >>> matte = LambertianMaterial(albedo=(0.8, 0.3, 0.3))
    >>> # Use within a Taichi kernel:
    >>> # direction, attenuation, state = scatter_lambertian(albedo, normal, state)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import random_in_unit_sphere
from spheretrace.materials.material import MaterialType, validate_albedo

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass(frozen=True)
class LambertianMaterial:
    """Lambertian (ideal diffuse) material properties.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
            Represents the fraction of light reflected for each color channel.

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """

    albedo: tuple[float, float, float]

    material_type = MaterialType.LAMBERTIAN

    def __post_init__(self) -> None:
        validate_albedo(self.albedo)


@ti.func
def scatter_lambertian(albedo: vec3, normal: vec3, state: ti.u32):
    """Sample a scattered ray direction for a Lambertian material.

    The direction is ``normal + random_in_unit_sphere()``; the scattered ray
    starts at the hit point (the caller supplies it). The attenuation is the
    albedo and the scatter always succeeds.

    Args:
        albedo: The diffuse reflectance color (RGB).
        normal: The unit surface normal at the hit point.
        state: Generator state.

    Returns:
        A tuple of (scattered_direction, attenuation, state).
    """
    offset, rng = random_in_unit_sphere(state)
    scattered_direction = normal + offset
    attenuation = albedo
    return scattered_direction, attenuation, rng
