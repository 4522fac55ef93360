"""Material type tags and shared validation.

Materials form a closed set of variants. Kernels dispatch on the integer tag
stored alongside each sphere, so the tag values are part of the scene storage
layout.
"""

from enum import IntEnum


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    Used for material dispatch in the shading loop to determine which
    scattering function to call.
    """

    LAMBERTIAN = 0
    METAL = 1


def validate_albedo(albedo: tuple[float, float, float]) -> None:
    """Check that an albedo is an RGB triple with components in [0, 1].

    Raises:
        ValueError: If albedo does not have three components, or any
            component is outside [0, 1].
    """
    if len(albedo) != 3:
        raise ValueError(f"Albedo must have 3 components, got {len(albedo)}")
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
