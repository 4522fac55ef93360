"""Unit tests for the World scene collection.

Tests cover:
- Adding spheres that own Lambertian and Metal materials
- Insertion order and SphereInfo contents
- Clearing the world and the scene storage
- Validation errors from materials and spheres
"""

import pytest


@pytest.fixture
def world():
    """Create a fresh World for each test."""
    from spheretrace.scene.manager import World

    world = World()
    yield world
    world.clear()


class TestWorld:
    """Tests for World."""

    def test_new_world_is_empty(self, world):
        """Test a new world has no spheres."""
        assert len(world) == 0
        assert world.get_sphere_count() == 0

    def test_add_spheres_in_order(self, world):
        """Test spheres are kept in insertion order with their materials."""
        from spheretrace.materials import LambertianMaterial, MetalMaterial

        matte = LambertianMaterial(albedo=(0.8, 0.3, 0.3))
        gold = MetalMaterial(albedo=(0.8, 0.6, 0.2))

        i0 = world.add_sphere((0, 0, -1), 0.5, matte)
        i1 = world.add_sphere((1, 0, -1), 0.5, gold)

        assert (i0, i1) == (0, 1)
        assert len(world) == 2
        assert world.get_sphere_count() == 2

        infos = list(world)
        assert infos[0].material is matte
        assert infos[1].material is gold
        assert infos[0].center == (0.0, 0.0, -1.0)
        assert infos[1].radius == 0.5

    def test_material_type_stored(self, world):
        """Test the storage row carries the material's type tag."""
        from spheretrace.materials import LambertianMaterial, MaterialType, MetalMaterial
        from spheretrace.scene.intersection import material_types

        world.add_sphere((0, 0, -1), 0.5, MetalMaterial(albedo=(0.8, 0.8, 0.8)))
        world.add_sphere((0, -100.5, -1), 100.0, LambertianMaterial(albedo=(0.8, 0.8, 0.0)))

        assert material_types[0] == int(MaterialType.METAL)
        assert material_types[1] == int(MaterialType.LAMBERTIAN)

    def test_clear(self, world):
        """Test clear empties both the world and the storage."""
        from spheretrace.materials import LambertianMaterial

        world.add_sphere((0, 0, -1), 0.5, LambertianMaterial(albedo=(0.5, 0.5, 0.5)))
        world.clear()
        assert len(world) == 0
        assert world.get_sphere_count() == 0

    def test_creating_world_clears_storage(self):
        """Test a new World starts from an empty scene."""
        from spheretrace.materials import LambertianMaterial
        from spheretrace.scene.manager import World

        first = World()
        first.add_sphere((0, 0, -1), 0.5, LambertianMaterial(albedo=(0.5, 0.5, 0.5)))
        second = World()
        assert second.get_sphere_count() == 0

    def test_invalid_radius_is_not_recorded(self, world):
        """Test a rejected sphere leaves the world unchanged."""
        from spheretrace.materials import LambertianMaterial

        with pytest.raises(ValueError):
            world.add_sphere((0, 0, -1), -0.5, LambertianMaterial(albedo=(0.5, 0.5, 0.5)))
        assert len(world) == 0
        assert world.get_sphere_count() == 0

    def test_max_spheres(self):
        """Test the reported capacity."""
        from spheretrace.scene.manager import World

        assert World.get_max_spheres() == 1024


class TestMaterials:
    """Tests for the material descriptions."""

    def test_lambertian_type(self):
        """Test LambertianMaterial carries its tag."""
        from spheretrace.materials import LambertianMaterial, MaterialType

        assert LambertianMaterial(albedo=(0.1, 0.2, 0.3)).material_type == MaterialType.LAMBERTIAN

    def test_metal_type(self):
        """Test MetalMaterial carries its tag."""
        from spheretrace.materials import MaterialType, MetalMaterial

        assert MetalMaterial(albedo=(0.1, 0.2, 0.3)).material_type == MaterialType.METAL

    @pytest.mark.parametrize("albedo", [(-0.1, 0.5, 0.5), (0.5, 1.5, 0.5), (0.5, 0.5)])
    def test_invalid_albedo(self, albedo):
        """Test albedo validation."""
        from spheretrace.materials import LambertianMaterial, MetalMaterial

        with pytest.raises(ValueError):
            LambertianMaterial(albedo=albedo)
        with pytest.raises(ValueError):
            MetalMaterial(albedo=albedo)

    def test_albedo_bounds_inclusive(self):
        """Test 0 and 1 are valid albedo components."""
        from spheretrace.materials import LambertianMaterial

        LambertianMaterial(albedo=(0.0, 1.0, 0.0))
