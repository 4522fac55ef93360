"""Integration tests for the end-to-end rendering pipeline.

This module tests the complete pipeline from scene creation through the PPM
and PNG files. Tests are kept fast (low resolution, few samples) while still
exercising every stage.

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

from __future__ import annotations

import os
import tempfile

import numpy as np


class TestDefaultSceneIntegration:
    """Integration tests for the default scene."""

    def test_end_to_end_ppm(self) -> None:
        """Test scene -> camera -> render -> PPM file -> load."""
        from spheretrace.camera.thin_lens import setup_camera
        from spheretrace.core.renderer import Renderer
        from spheretrace.preview.image import Image
        from spheretrace.scene.default import create_default_scene

        _, camera, settings = create_default_scene(width=32, height=16, samples_per_pixel=4)
        setup_camera(camera)
        image = Renderer(settings).render()

        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "hello_world.ppm")
            image.save(path)

            with open(path, encoding="ascii") as f:
                lines = f.read().splitlines()
            loaded = Image.load(path)

        assert lines[:3] == ["P3", "32 16", "255"]
        assert len(lines) == 3 + 32 * 16
        np.testing.assert_array_equal(loaded.to_array(), image.to_array())

    def test_end_to_end_png_matches_ppm(self) -> None:
        """Test the PNG copy holds the same bytes as the PPM."""
        from spheretrace.camera.thin_lens import setup_camera
        from spheretrace.core.renderer import Renderer
        from spheretrace.preview.export import compute_rmse, load_png, save_png
        from spheretrace.preview.image import Image
        from spheretrace.scene.default import create_default_scene

        _, camera, settings = create_default_scene(width=24, height=12, samples_per_pixel=2)
        setup_camera(camera)
        image = Renderer(settings).render()

        with tempfile.TemporaryDirectory() as tmpdir:
            ppm_path = os.path.join(tmpdir, "out.ppm")
            png_path = os.path.join(tmpdir, "out.png")
            image.save(ppm_path)
            save_png(image, png_path)

            from_ppm = Image.load(ppm_path).to_array()
            from_png = load_png(png_path).to_array()

        assert compute_rmse(from_ppm, from_png) == 0.0

    def test_more_samples_reduce_noise(self) -> None:
        """Test a higher sample count moves the render toward a reference."""
        from spheretrace.camera.thin_lens import setup_camera
        from spheretrace.core.renderer import Renderer, RenderSettings
        from spheretrace.preview.export import compute_rmse
        from spheretrace.scene.default import create_default_scene

        _, camera, _ = create_default_scene(width=24, height=12)
        setup_camera(camera)

        def render(samples: int, seed: int) -> np.ndarray:
            settings = RenderSettings(width=24, height=12, samples_per_pixel=samples, seed=seed)
            return Renderer(settings).render().to_array()

        reference = render(256, seed=100)
        noisy = render(1, seed=1)
        smooth = render(64, seed=2)

        assert compute_rmse(smooth, reference) < compute_rmse(noisy, reference)
