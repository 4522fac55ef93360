"""Shading loop and render kernel.

This module computes the radiance carried by a ray and turns per-pixel
sample averages into bytes.

The radiance of a ray is a random walk through the scene: at every hit the
surface's material scatters the ray and tints it, until the ray escapes to
the sky gradient, is absorbed, or reaches MAX_DEPTH bounces (black). The walk
is written as a loop that multiplies the attenuations into a running
throughput, which yields the same value as the recursive form

    color(ray, depth) = attenuation * color(scattered, depth + 1)

without growing the call stack.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.integrator import render_rows, setup_render_target
    >>> setup_render_target(200, 100)
    >>> render_rows(0, 100, num_samples=100, seed=0)
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from spheretrace.camera.thin_lens import get_ray_jittered
from spheretrace.core.ray import unit_vector
from spheretrace.core.rng import seed_stream
from spheretrace.materials.lambertian import scatter_lambertian
from spheretrace.materials.material import MaterialType
from spheretrace.materials.metal import scatter_metal
from spheretrace.scene.intersection import get_material, hit_world

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Bounce limit; a path still alive at this depth contributes black
MAX_DEPTH = 50

# t range for intersection. T_MIN keeps a freshly scattered ray from hitting
# the surface it leaves ("shadow acne").
T_MIN = 0.001
T_MAX = float("inf")

# Sky gradient endpoints
SKY_WHITE = vec3(1.0, 1.0, 1.0)
SKY_BLUE = vec3(0.5, 0.7, 1.0)

# Quantization scale; .99 keeps channel 1.0 at 255
BYTE_SCALE = 255.99

# =============================================================================
# Render Target (Quantized Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Quantized RGB bytes, indexed [x, y] with y = 0 at the top row
_pixels = ti.Vector.field(3, dtype=ti.i32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target.

    Args:
        width: Image width in pixels (1 to MAX_IMAGE_WIDTH).
        height: Image height in pixels (1 to MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1
    _pixels.fill(0)


def clear_render_target() -> None:
    """Forget the current render target."""
    _render_target_initialized[None] = 0


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Shading
# =============================================================================


@ti.func
def background(direction: vec3) -> vec3:
    """Sky color seen along a direction that hits nothing.

    Linearly blends white and sky blue by t = 0.5 * (y + 1), where y is the
    vertical component of the normalized direction.

    Args:
        direction: The ray direction (any nonzero length).

    Returns:
        (1 - t) * white + t * blue.
    """
    t = 0.5 * (unit_vector(direction).y + 1.0)
    return (1.0 - t) * SKY_WHITE + t * SKY_BLUE


@ti.func
def _scatter_material(
    material_type: ti.i32,
    albedo: vec3,
    incident_direction: vec3,
    normal: vec3,
    state: ti.u32,
):
    """Dispatch to the appropriate material scattering function.

    Args:
        material_type: The MaterialType tag of the hit sphere's material.
        albedo: The material's albedo.
        incident_direction: The incoming ray direction.
        normal: The unit outward surface normal.
        state: Generator state.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter, state).
    """
    rng = state
    scattered_direction = vec3(0.0, 0.0, 0.0)
    attenuation = vec3(0.0, 0.0, 0.0)
    did_scatter = 0

    if material_type == int(MaterialType.LAMBERTIAN):
        scattered_direction, attenuation, rng = scatter_lambertian(albedo, normal, rng)
        did_scatter = 1

    elif material_type == int(MaterialType.METAL):
        scattered_direction, attenuation, did_scatter = scatter_metal(
            albedo, incident_direction, normal
        )

    return scattered_direction, attenuation, did_scatter, rng


@ti.func
def ray_color(ray_origin: vec3, ray_direction: vec3, depth: ti.i32, state: ti.u32):
    """Compute the radiance arriving along a ray.

    1. At depth >= MAX_DEPTH the path contributes black.
    2. The nearest hit in (T_MIN, T_MAX) is looked up.
    3. On a hit the material scatters the ray; the attenuation joins the
       throughput and the walk continues one level deeper from the hit point.
       An absorbed ray contributes black.
    4. On a miss the path ends on the sky gradient, scaled by the throughput.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray.
        depth: The bounce depth of this ray (0 for camera rays).
        state: Generator state.

    Returns:
        A tuple (color, state).
    """
    rng = state
    color = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)
    origin = ray_origin
    direction = ray_direction
    current_depth = depth

    # Active flag for path continuation
    active = 1

    for _ in range(MAX_DEPTH + 1):
        if active == 1:
            if current_depth >= MAX_DEPTH:
                active = 0
            else:
                rec = hit_world(origin, direction, T_MIN, T_MAX)

                if rec.hit == 0:
                    color = throughput * background(direction)
                    active = 0
                else:
                    material_type, albedo = get_material(rec.material_id)
                    scattered_direction, attenuation, did_scatter, rng = _scatter_material(
                        material_type, albedo, direction, rec.normal, rng
                    )

                    if did_scatter == 0:
                        active = 0
                    else:
                        throughput *= attenuation
                        origin = rec.point
                        direction = scattered_direction
                        current_depth += 1

    return color, rng


@ti.func
def to_byte(channel: ti.f32) -> ti.i32:
    """Quantize a gamma-encoded channel to a byte.

    floor(255.99 * channel), saturated to [0, 255]; NaN maps to 0.
    """
    scaled = BYTE_SCALE * channel
    result = 0
    if scaled >= 255.0:
        result = 255
    elif scaled > 0.0:
        result = ti.cast(scaled, ti.i32)
    return result


@ti.func
def render_pixel(
    pixel_x: ti.i32,
    pixel_y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    num_samples: ti.i32,
    seed: ti.u32,
):
    """Average num_samples jittered samples for one pixel and encode them.

    The pixel's random stream is seeded from (seed, pixel index), so the
    result does not depend on the order pixels are evaluated in.

    Returns:
        The gamma-corrected (square-root) averaged color as bytes (vec3 of i32).
    """
    rng = seed_stream(seed, ti.cast(pixel_y * width + pixel_x, ti.u32))

    accumulated = vec3(0.0, 0.0, 0.0)
    for _ in range(num_samples):
        origin, direction, rng = get_ray_jittered(pixel_x, pixel_y, width, height, rng)
        color, rng = ray_color(origin, direction, 0, rng)
        accumulated += color
    accumulated /= ti.cast(num_samples, ti.f32)

    gamma_corrected = ti.sqrt(accumulated)
    return ti.Vector(
        [to_byte(gamma_corrected.x), to_byte(gamma_corrected.y), to_byte(gamma_corrected.z)]
    )


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_rows(
    y_start: ti.i32,
    y_end: ti.i32,
    width: ti.i32,
    height: ti.i32,
    num_samples: ti.i32,
    seed: ti.u32,
):
    """Render image rows [y_start, y_end) into the pixel buffer."""
    for x, y in ti.ndrange(width, (y_start, y_end)):
        _pixels[x, y] = render_pixel(x, y, width, height, num_samples, seed)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_rows(y_start: int, y_end: int, num_samples: int, seed: int = 0) -> None:
    """Render a band of image rows.

    Args:
        y_start: First row to render (0 = top).
        y_end: One past the last row to render.
        num_samples: Number of samples per pixel.
        seed: Global seed of the pixel random streams (0 to 2^32 - 1).

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If the row range or sample count is invalid.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    if not 0 <= y_start <= y_end <= height:
        raise ValueError(f"Invalid row range [{y_start}, {y_end}) for height {height}")
    if num_samples <= 0:
        raise ValueError(f"num_samples must be positive, got {num_samples}")
    if not 0 <= seed < 2**32:
        raise ValueError(f"seed must fit in 32 bits, got {seed}")

    _render_rows(y_start, y_end, width, height, num_samples, seed)


def get_pixels_numpy() -> npt.NDArray[np.uint8]:
    """Get the rendered bytes as a NumPy array.

    Returns:
        Array of shape (height, width, 3), dtype uint8, row 0 at the top.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()

    full_image = _pixels.to_numpy()
    image = full_image[:width, :height, :]

    # Transpose from (width, height, 3) to (height, width, 3)
    image = np.transpose(image, (1, 0, 2))

    return image.astype(np.uint8)
