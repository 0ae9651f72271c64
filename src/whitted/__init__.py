"""Whitted-style CPU ray tracer built on Taichi kernels.

This package renders scenes made of transformed primitives lit by a single
point light, with:
- Phong shading with procedural patterns (stripe, gradient, ring, checker)
- Hard shadows from a shadow ray per shading point
- Recursive mirror reflection bounded by an explicit depth budget
- Data-parallel per-pixel evaluation on the Taichi CPU backend

Subpackages:
    core: Homogeneous tuples, 4x4 matrices, colors and the Taichi ray type
    geometry: Shape variants (sphere, plane) and intersection/normal routines
    materials: Patterns, materials, point light and the Phong lighting model
    scene: Intersections, the World and a showcase scene factory
    camera: Pixel-to-ray mapping and the render loop
    preview: Pixel buffer quantisation and PPM/PNG export

Taichi must be initialised before a World or Camera is created:

    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
"""

__version__ = "0.1.0"
