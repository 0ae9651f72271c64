"""Pinhole camera that maps a pixel grid to primary rays and renders a World.

The canvas sits one unit in front of the eye (z = -1 in camera space). Its
half extents follow from the field of view and the aspect ratio: the longer
side spans ``tan(fov / 2)`` and the shorter one is scaled down to keep pixels
square.

Pixels are independent, so ``render`` evaluates them in a single parallel
Taichi loop over (row, column); ``parallel=False`` serialises the same loop
and produces an identical image.

Example:
    >>> import math
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from whitted.camera.camera import Camera
    >>> from whitted.core.matrix import view_transform
    >>> from whitted.core.tuples import point, vector
    >>> from whitted.scene.world import default_world
    >>> camera = Camera(
    ...     11, 11, math.pi / 2,
    ...     view_transform(point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0)),
    ... )
    >>> image = camera.render(default_world())
    >>> image.shape
    (11, 11, 3)
"""

import math

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.core.matrix import Matrix
from whitted.core.ray import Ray, normalize, real, vec4
from whitted.core.tuples import Tuple4
from whitted.scene.world import REFLECTION_DEPTH, World

# Rows: origin, direction
_ray_rows = ti.types.matrix(2, 4, real)


@ti.data_oriented
class Camera:
    """A camera with a pixel grid, field of view and view transform.

    Args:
        hsize: Canvas width in pixels.
        vsize: Canvas height in pixels.
        field_of_view: Angle subtended by the longer canvas side, in radians.
        transform: World-to-camera transform (see ``view_transform``).
            Defaults to identity: eye at the origin looking down -z.

    Raises:
        ValueError: If a size is not positive or the field of view is not in
            (0, pi).
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix | None = None,
    ) -> None:
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi), got {field_of_view}")

        self.hsize = int(hsize)
        self.vsize = int(vsize)
        self.field_of_view = float(field_of_view)
        self.transform = transform if transform is not None else Matrix.identity()

        half_view = math.tan(self.field_of_view / 2.0)
        aspect = self.hsize / self.vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = self.half_width * 2.0 / self.hsize

        inverse = self.transform.inverse()
        self.invertible = inverse is not None

        self._inverse = ti.Matrix.field(4, 4, dtype=real, shape=())
        self._pixels = ti.Vector.field(3, dtype=real, shape=(self.vsize, self.hsize))
        self._inverse.from_numpy(np.identity(4) if inverse is None else inverse.to_numpy())

    # =========================================================================
    # Taichi functions
    # =========================================================================

    @ti.func
    def ray_for_pixel_impl(self, px: real, py: real) -> Ray:
        """Primary ray through the centre of pixel (px, py)."""
        # Offsets from the canvas edge to the pixel centre
        xoffset = (px + 0.5) * self.pixel_size
        yoffset = (py + 0.5) * self.pixel_size

        # Camera looks toward -z, so +x is to the left
        world_x = self.half_width - xoffset
        world_y = self.half_height - yoffset

        inverse = self._inverse[None]
        pixel = inverse @ vec4(world_x, world_y, -1.0, 1.0)
        origin = inverse @ vec4(0.0, 0.0, 0.0, 1.0)
        return Ray(origin=origin, direction=normalize(pixel - origin))

    @ti.kernel
    def _ray_kernel(self, px: real, py: real) -> _ray_rows:
        ray = self.ray_for_pixel_impl(px, py)
        result = ti.Matrix.zero(real, 2, 4)
        for col in ti.static(range(4)):
            result[0, col] = ray.origin[col]
            result[1, col] = ray.direction[col]
        return result

    @ti.kernel
    def _render(self, world: ti.template(), remaining: ti.i32, serialize: ti.template()):
        ti.loop_config(serialize=serialize)
        for y, x in ti.ndrange(self.vsize, self.hsize):
            ray = self.ray_for_pixel_impl(ti.cast(x, real), ti.cast(y, real))
            self._pixels[y, x] = world.color_at_impl(ray, remaining)

    # =========================================================================
    # Python API
    # =========================================================================

    def ray_for_pixel(self, px: float, py: float) -> tuple[Tuple4, Tuple4] | None:
        """Return ``(origin, direction)`` of the ray through pixel (px, py).

        Returns:
            The ray in world space, or None if the camera transform is
            singular.
        """
        if not self.invertible:
            return None
        rows = np.asarray(self._ray_kernel(float(px), float(py)).to_numpy(), dtype=np.float64)
        return rows[0], rows[1]

    def render(
        self, world: World, remaining: int = REFLECTION_DEPTH, parallel: bool = True
    ) -> npt.NDArray[np.float64]:
        """Render ``world`` into a (vsize, hsize, 3) array, row 0 at the top.

        Args:
            world: The scene to render.
            remaining: Reflection depth budget per pixel.
            parallel: Evaluate pixels in parallel. The image is identical
                either way.

        Returns:
            Unclamped linear colors. All black if the camera transform is
            singular.
        """
        if not self.invertible:
            return np.zeros((self.vsize, self.hsize, 3), dtype=np.float64)
        self._render(world, max(int(remaining), 0), not parallel)
        return self._pixels.to_numpy()
