"""Materials module for scattering models.

This module implements the material models a ray can bounce off:

Components:
    material: Material type tags and albedo validation
    lambertian: Ideal diffuse reflection
    metal: Perfect specular reflection with absorption below the surface

Each material provides a Python-side description (a frozen dataclass that
validates its parameters and is handed to the scene) and a Taichi scatter
function returning the scattered direction, the attenuation and, for metal,
whether the ray survived.
"""

from typing import Union

from .lambertian import LambertianMaterial, scatter_lambertian
from .material import MaterialType, validate_albedo
from .metal import MetalMaterial, scatter_metal

# Any material a sphere can own
Material = Union[LambertianMaterial, MetalMaterial]

__all__ = [
    "Material",
    "MaterialType",
    "validate_albedo",
    # Lambertian
    "LambertianMaterial",
    "scatter_lambertian",
    # Metal
    "MetalMaterial",
    "scatter_metal",
]
