"""Unit tests for the shading loop and render kernel.

Tests cover:
- Render target setup and validation
- Sky gradient endpoints and midpoint
- Byte quantization, saturation and NaN handling
- Depth limit, absorption and attenuation in ray_color
- Row rendering validation
"""

import math

import numpy as np
import pytest
import taichi as ti


class TestRenderTargetSetup:
    """Tests for render target setup."""

    def test_setup_render_target(self):
        """Test dimensions are stored and pixels start black."""
        from spheretrace.core.integrator import (
            get_image_dimensions,
            get_pixels_numpy,
            setup_render_target,
        )

        setup_render_target(64, 32)
        assert get_image_dimensions() == (64, 32)

        pixels = get_pixels_numpy()
        assert pixels.shape == (32, 64, 3)
        assert pixels.dtype == np.uint8
        assert np.all(pixels == 0)

    @pytest.mark.parametrize("size", [(0, 10), (10, -1), (4096, 10), (10, 4096)])
    def test_invalid_dimensions(self, size):
        """Test non-positive or oversized dimensions raise ValueError."""
        from spheretrace.core.integrator import setup_render_target

        with pytest.raises(ValueError):
            setup_render_target(*size)

    def test_pixels_without_setup_raises(self):
        """Test reading pixels before setup raises RuntimeError."""
        from spheretrace.core.integrator import get_pixels_numpy

        with pytest.raises(RuntimeError, match="Render target not set up"):
            get_pixels_numpy()


class TestBackground:
    """Tests for the sky gradient."""

    def _background(self, direction):
        from spheretrace.core.integrator import background, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = background(vec3(direction[0], direction[1], direction[2]))

        test_kernel()
        return result[None]

    def test_straight_up_is_blue(self):
        """Test t = 1 gives (0.5, 0.7, 1.0)."""
        c = self._background((0.0, 5.0, 0.0))
        assert abs(c[0] - 0.5) < 1e-6
        assert abs(c[1] - 0.7) < 1e-6
        assert abs(c[2] - 1.0) < 1e-6

    def test_straight_down_is_white(self):
        """Test t = 0 gives white."""
        c = self._background((0.0, -1.0, 0.0))
        for i in range(3):
            assert abs(c[i] - 1.0) < 1e-6

    def test_horizontal_is_midpoint(self):
        """Test t = 0.5 gives (0.75, 0.85, 1.0)."""
        c = self._background((0.0, 0.0, -3.0))
        assert abs(c[0] - 0.75) < 1e-6
        assert abs(c[1] - 0.85) < 1e-6
        assert abs(c[2] - 1.0) < 1e-6


class TestToByte:
    """Tests for channel quantization."""

    def _to_bytes(self, values):
        from spheretrace.core.integrator import to_byte

        n = len(values)
        inputs = ti.field(dtype=ti.f32, shape=n)
        outputs = ti.field(dtype=ti.i32, shape=n)
        inputs.from_numpy(np.array(values, dtype=np.float32))

        @ti.kernel
        def test_kernel():
            for i in range(n):
                outputs[i] = to_byte(inputs[i])

        test_kernel()
        return outputs.to_numpy().tolist()

    def test_quantization(self):
        """Test floor(255.99 * c) for in-range values."""
        assert self._to_bytes([0.0, 1.0, 0.5]) == [0, 255, 127]

    def test_saturation(self):
        """Test out-of-range values saturate to [0, 255]."""
        assert self._to_bytes([-0.5, 2.0]) == [0, 255]

    def test_nan_maps_to_zero(self):
        """Test NaN quantizes to 0."""
        assert self._to_bytes([math.nan]) == [0]


class TestRayColor:
    """Tests for ray_color."""

    def _ray_color(self, origin, direction, depth=0, seed=1):
        from spheretrace.core.integrator import ray_color, vec3
        from spheretrace.core.rng import seed_stream

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            # Single outer iteration keeps the bounce loop sequential
            for _ in range(1):
                state = seed_stream(ti.u32(seed), ti.u32(0))
                color, state = ray_color(
                    vec3(origin[0], origin[1], origin[2]),
                    vec3(direction[0], direction[1], direction[2]),
                    depth,
                    state,
                )
                result[None] = color

        test_kernel()
        return result[None]

    def test_miss_returns_background(self):
        """Test an empty scene shows the sky."""
        c = self._ray_color((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert abs(c[0] - 0.5) < 1e-6
        assert abs(c[1] - 0.7) < 1e-6
        assert abs(c[2] - 1.0) < 1e-6

    def test_depth_limit_is_black(self):
        """Test a ray at MAX_DEPTH contributes black even on a miss."""
        from spheretrace.core.integrator import MAX_DEPTH

        c = self._ray_color((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), depth=MAX_DEPTH)
        for i in range(3):
            assert c[i] == 0.0

    def test_metal_mirror_attenuates_sky(self):
        """Test a head-on mirror reflects the sky behind the camera, tinted."""
        from spheretrace.materials import MaterialType
        from spheretrace.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -3.0), 1.0, MaterialType.METAL, (0.8, 0.6, 0.2))

        # Reflects straight back along +z, which sees the horizon color
        c = self._ray_color((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert abs(c[0] - 0.8 * 0.75) < 1e-5
        assert abs(c[1] - 0.6 * 0.85) < 1e-5
        assert abs(c[2] - 0.2 * 1.0) < 1e-5

    def test_metal_absorbs_ray_from_inside(self):
        """Test a ray inside a metal sphere is absorbed (black)."""
        from spheretrace.materials import MaterialType
        from spheretrace.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, 0.0), 1.0, MaterialType.METAL, (1.0, 1.0, 1.0))

        # Leaving along the normal reflects into the surface
        c = self._ray_color((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        for i in range(3):
            assert c[i] == 0.0

    def test_lambertian_attenuates(self):
        """Test a diffuse bounce is bounded by albedo times the brightest sky."""
        from spheretrace.materials import MaterialType
        from spheretrace.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -3.0), 1.0, MaterialType.LAMBERTIAN, (0.5, 0.5, 0.5))

        for seed in range(1, 9):
            c = self._ray_color((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), seed=seed)
            for i in range(3):
                assert 0.0 < c[i] <= 0.5 + 1e-6


class TestRenderRows:
    """Tests for render_rows validation."""

    def test_without_setup_raises(self):
        """Test rendering before setup_render_target raises RuntimeError."""
        from spheretrace.core.integrator import render_rows

        with pytest.raises(RuntimeError, match="Render target not set up"):
            render_rows(0, 1, num_samples=1)

    @pytest.mark.parametrize(
        "y_start,y_end,num_samples,seed",
        [(-1, 2, 1, 0), (2, 1, 1, 0), (0, 11, 1, 0), (0, 1, 0, 0), (0, 1, 1, -1), (0, 1, 1, 2**32)],
    )
    def test_invalid_arguments(self, y_start, y_end, num_samples, seed):
        """Test invalid row ranges, sample counts and seeds raise ValueError."""
        from spheretrace.core.integrator import render_rows, setup_render_target

        setup_render_target(10, 10)
        with pytest.raises(ValueError):
            render_rows(y_start, y_end, num_samples, seed)

    def test_constants(self):
        """Test the shading constants."""
        from spheretrace.core.integrator import MAX_DEPTH, T_MIN

        assert MAX_DEPTH == 50
        assert T_MIN == 0.001
