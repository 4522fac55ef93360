"""Taichi-based stochastic ray tracer for scenes of spheres.

This package renders a static scene of spheres into a raster image using
recursive stochastic ray tracing with diffuse (Lambertian) and reflective
(metal) materials, multi-sample anti-aliasing and thin-lens depth of field.

Subpackages:
    core: Random streams, vector/ray algebra, shading loop and render driver
    geometry: Sphere primitive and ray-sphere intersection
    materials: Lambertian and metal scattering models
    scene: Sphere storage, nearest-hit search and the default scene
    camera: Thin-lens camera with depth of field
    preview: PPM image sink and PNG export

Taichi must be initialized (``ti.init``) before importing the subpackages,
since they declare Taichi fields at import time.
"""

__version__ = "0.1.0"
