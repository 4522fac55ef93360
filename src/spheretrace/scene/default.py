"""Default scene: three small spheres on a large ground sphere.

The scene consists of:
- A matte red sphere at the center
- A huge matte yellow-green sphere acting as the ground
- A gold metal sphere to the right
- A silver metal sphere to the left

The camera looks down on the spheres from above and to the side, with a wide
aperture focused on the center sphere, so the outer spheres blur slightly.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.scene.default import create_default_scene
    >>> from spheretrace.camera.thin_lens import setup_camera
    >>>
    >>> world, camera, settings = create_default_scene()
    >>> setup_camera(camera)
    >>> # Now render with Renderer(settings)
"""

from spheretrace.camera.thin_lens import ThinLensCamera
from spheretrace.core.renderer import RenderSettings
from spheretrace.materials import LambertianMaterial, MetalMaterial
from spheretrace.scene.manager import World

# =============================================================================
# Scene Constants
# =============================================================================

IMAGE_WIDTH = 200
IMAGE_HEIGHT = 100
SAMPLES_PER_PIXEL = 100

OUTPUT_PATH = "hello_world.ppm"

LOOKFROM = (3.0, 3.0, 2.0)
LOOKAT = (0.0, 0.0, -1.0)
VUP = (0.0, 1.0, 0.0)
VFOV = 20.0
APERTURE = 2.0

CENTER_ALBEDO = (0.8, 0.3, 0.3)
GROUND_ALBEDO = (0.8, 0.8, 0.0)
GOLD_ALBEDO = (0.8, 0.6, 0.2)
SILVER_ALBEDO = (0.8, 0.8, 0.8)


def populate_default_world(world: World) -> World:
    """Add the default spheres to a world, in their fixed order.

    Args:
        world: The world to add the spheres to.

    Returns:
        The same world, for chaining.
    """
    world.add_sphere((0.0, 0.0, -1.0), 0.5, LambertianMaterial(albedo=CENTER_ALBEDO))
    world.add_sphere((0.0, -100.5, -1.0), 100.0, LambertianMaterial(albedo=GROUND_ALBEDO))
    world.add_sphere((1.0, 0.0, -1.0), 0.5, MetalMaterial(albedo=GOLD_ALBEDO))
    world.add_sphere((-1.0, 0.0, -1.0), 0.5, MetalMaterial(albedo=SILVER_ALBEDO))
    return world


def create_default_camera(width: int = IMAGE_WIDTH, height: int = IMAGE_HEIGHT) -> ThinLensCamera:
    """Create the default camera, focused on the center sphere."""
    return ThinLensCamera.focus_on_target(
        lookfrom=LOOKFROM,
        lookat=LOOKAT,
        vup=VUP,
        vfov=VFOV,
        aspect_ratio=width / height,
        aperture=APERTURE,
    )


def create_default_scene(
    width: int = IMAGE_WIDTH,
    height: int = IMAGE_HEIGHT,
    samples_per_pixel: int = SAMPLES_PER_PIXEL,
    seed: int = 0,
) -> tuple[World, ThinLensCamera, RenderSettings]:
    """Create the default scene, camera and render settings.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of samples per pixel.
        seed: Seed of the per-pixel random streams.

    Returns:
        A tuple of (World, ThinLensCamera, RenderSettings).

    Example:
        >>> world, camera, settings = create_default_scene()
        >>> len(world)
        4
    """
    settings = RenderSettings(
        width=width,
        height=height,
        samples_per_pixel=samples_per_pixel,
        seed=seed,
    )
    world = populate_default_world(World())
    camera = create_default_camera(width, height)
    return world, camera, settings
