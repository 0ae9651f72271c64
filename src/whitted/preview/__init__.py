"""Output utilities for rendered images.

Components:
    export: Quantisation plus PPM and PNG writers
    display: Matplotlib preview window
"""

from .display import show_image
from .export import quantize, save_png, save_ppm, to_ppm

__all__ = ["quantize", "save_png", "save_ppm", "show_image", "to_ppm"]
