"""World: the ordered collection of spheres a render sees.

The World is the Python-side view of the scene storage in
``scene.intersection``. It keeps a SphereInfo per sphere in insertion order,
which is also the order the nearest-hit search scans. Each sphere owns the
material it was added with.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.materials import LambertianMaterial, MetalMaterial
    >>> from spheretrace.scene.manager import World
    >>> world = World()
    >>> world.add_sphere((0, 0, -1), 0.5, LambertianMaterial(albedo=(0.8, 0.3, 0.3)))
    >>> world.add_sphere((1, 0, -1), 0.5, MetalMaterial(albedo=(0.8, 0.6, 0.2)))
"""

from collections.abc import Iterator
from dataclasses import dataclass

from spheretrace.materials import Material
from spheretrace.scene.intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
)


@dataclass(frozen=True)
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material: The material the sphere owns.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material: Material


class World:
    """Ordered collection of spheres backed by the Taichi scene storage.

    Creating a World clears the scene storage; there is a single scene per
    Taichi runtime.

    Attributes:
        spheres: SphereInfo for every sphere, in insertion order.
    """

    def __init__(self) -> None:
        """Initialize an empty world."""
        self.spheres: list[SphereInfo] = []
        self.clear()

    def clear(self) -> None:
        """Remove every sphere from the world and the scene storage."""
        clear_scene()
        self.spheres.clear()

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material: Material,
    ) -> int:
        """Add a sphere that owns the given material.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere (must be positive).
            material: A LambertianMaterial or MetalMaterial.

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If radius is not positive.
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        center = (float(center[0]), float(center[1]), float(center[2]))
        sphere_index = add_sphere(center, radius, material.material_type, material.albedo)

        self.spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                center=center,
                radius=float(radius),
                material=material,
            )
        )
        return sphere_index

    def get_sphere_count(self) -> int:
        """Get the number of spheres held by the scene storage."""
        return get_sphere_count()

    def __len__(self) -> int:
        return len(self.spheres)

    def __iter__(self) -> Iterator[SphereInfo]:
        return iter(self.spheres)

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of spheres supported."""
        return MAX_SPHERES
