"""Camera models.

Components:
    camera: Pinhole camera with per-pixel ray generation and rendering
"""

from .camera import Camera

__all__ = ["Camera"]
