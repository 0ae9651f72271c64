"""Tests for the showcase scene and the render script.

Tests cover:
- Scene contents (shapes, light, camera)
- Parameter overrides
- Rendering a small image of the scene
- The example command-line script
- The Matplotlib preview helper
"""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


class TestShowcaseScene:
    """Tests for create_showcase_scene."""

    def test_scene_contents(self):
        """Test the scene holds two planes, three spheres and a light."""
        from whitted.geometry.plane import Plane
        from whitted.geometry.sphere import Sphere
        from whitted.scene.showcase import create_showcase_scene

        world, camera = create_showcase_scene(32, 18)
        kinds = [type(shape) for shape in world]
        assert kinds.count(Plane) == 2
        assert kinds.count(Sphere) == 3
        assert world.light is not None
        assert camera.hsize == 32
        assert camera.vsize == 18

    def test_every_pattern_kind_is_used(self):
        """Test the scene exercises checker, stripe and ring patterns."""
        from whitted.materials.pattern import CheckerPattern, RingPattern, StripePattern
        from whitted.scene.showcase import create_showcase_scene

        world, _ = create_showcase_scene(8, 8)
        patterns = {type(shape.material.pattern) for shape in world}
        assert {CheckerPattern, StripePattern, RingPattern} <= patterns

    def test_params_override_defaults(self):
        """Test custom parameters reach the scene."""
        from whitted.scene.showcase import ShowcaseParams, create_showcase_scene

        params = ShowcaseParams(
            field_of_view=math.pi / 4,
            floor_reflectivity=0.0,
            light_position=(5.0, 5.0, -5.0),
        )
        world, camera = create_showcase_scene(16, 9, params)
        floor = world.shapes[0]
        assert floor.material.reflectivity == 0.0
        assert camera.field_of_view == math.pi / 4
        np.testing.assert_array_equal(world.light.position, [5.0, 5.0, -5.0, 1.0])

    def test_render_small_image(self):
        """Test a tiny render produces finite, non-black output."""
        from whitted.scene.showcase import create_showcase_scene

        world, camera = create_showcase_scene(16, 9)
        image = camera.render(world, remaining=2)
        assert image.shape == (9, 16, 3)
        assert np.all(np.isfinite(image))
        assert image.max() > 0.0


class TestRenderScript:
    """Tests for examples/render_showcase.py."""

    @pytest.fixture
    def script(self):
        sys.path.insert(0, str(EXAMPLES_DIR))
        try:
            import render_showcase

            yield render_showcase
        finally:
            sys.path.remove(str(EXAMPLES_DIR))

    def test_writes_ppm(self, script, tmp_path):
        """Test the script writes a PPM when asked for one."""
        output = tmp_path / "showcase.ppm"
        result = script.render_showcase(
            width=8, height=6, depth=1, output_path=str(output), quiet=True
        )
        assert result == output
        assert output.read_text(encoding="ascii").startswith("P3\n8 6\n255\n")

    def test_writes_png(self, script, tmp_path):
        """Test the script writes a PNG by default suffix."""
        from PIL import Image as PILImage

        output = tmp_path / "showcase.png"
        script.render_showcase(
            width=8, height=6, depth=1, output_path=str(output), serial=True, quiet=True
        )
        assert PILImage.open(output).size == (8, 6)


class TestShowImage:
    """Tests for the Matplotlib preview helper."""

    def test_show_image_draws_quantised_pixels(self, monkeypatch):
        """Test show_image hands the quantised image to Matplotlib."""
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from whitted.preview.display import show_image

        shown = []
        monkeypatch.setattr(plt, "show", lambda block=True: shown.append(block))

        image = np.zeros((4, 5, 3))
        image[0, 0] = (1.0, 0.5, 0.0)
        show_image(image, title="preview", block=False)

        ax = plt.gcf().axes[0]
        drawn = ax.images[0].get_array()
        assert drawn.shape == (4, 5, 3)
        np.testing.assert_array_equal(drawn[0, 0], [255, 128, 0])
        assert ax.get_title() == "preview"
        assert shown == [False]
        plt.close("all")
