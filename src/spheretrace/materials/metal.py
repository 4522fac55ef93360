"""Metal (specular reflective) material implementation.

A metal surface mirrors the incoming direction about the surface normal:
    R = I - 2(I . N)N

where I is the unit incident direction and N is the surface normal. A
reflected direction that does not point away from the surface (R . N <= 0)
means the ray is absorbed; this is reported as ``did_scatter == 0``, a valid
end of the path rather than an error.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.materials.metal import MetalMaterial, scatter_metal
    >>> gold = MetalMaterial(albedo=(0.8, 0.6, 0.2))
    >>> # Use within a Taichi kernel:
    >>> # direction, attenuation, did_scatter = scatter_metal(
    >>> #     albedo, incident_dir, normal
    >>> # )
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from spheretrace.core.ray import dot, reflect, unit_vector
from spheretrace.materials.material import MaterialType, validate_albedo

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass(frozen=True)
class MetalMaterial:
    """Metal (specular reflective) material properties.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
            Represents the color tint of reflected light.

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """

    albedo: tuple[float, float, float]

    material_type = MaterialType.METAL

    def __post_init__(self) -> None:
        validate_albedo(self.albedo)


@ti.func
def scatter_metal(
    albedo: vec3,
    incident_direction: vec3,
    normal: vec3,
):
    """Compute the scattered ray direction for a metal material.

    Args:
        albedo: The reflective color (RGB).
        incident_direction: The incoming ray direction (any length; it is
            normalized before reflection).
        normal: The unit surface normal.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) where:
        - scattered_direction: The reflected direction.
        - attenuation: The color attenuation (equals albedo for metals).
        - did_scatter: 1 if the reflection points away from the surface,
          0 if the ray is absorbed.
    """
    scattered_direction = reflect(unit_vector(incident_direction), normal)

    did_scatter = 0
    if dot(scattered_direction, normal) > 0.0:
        did_scatter = 1

    attenuation = albedo

    return scattered_direction, attenuation, did_scatter
