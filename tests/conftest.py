"""Pytest configuration for spheretrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield
    # Note: We don't call ti.reset() here as it can cause issues
    # with subsequent tests if any cleanup happens after


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene, camera and render target before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the Taichi fields are created after ti.init()
    from spheretrace.camera.thin_lens import reset_camera
    from spheretrace.core.integrator import clear_render_target
    from spheretrace.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_render_target()
        reset_camera()

    _clear_all()

    yield

    _clear_all()
