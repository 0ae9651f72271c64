"""Matplotlib-based preview display for rendered images.

Matplotlib is an optional dependency (the ``preview`` extra) and is imported
only when a window is actually opened.

Example:
    >>> from whitted.preview.display import show_image
    >>> image = camera.render(world)
    >>> show_image(image, title="Showcase")
"""

import numpy as np
import numpy.typing as npt

from whitted.preview.export import quantize


def show_image(
    image: npt.NDArray[np.floating],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered image in a Matplotlib figure.

    The image is quantised exactly as it would be for export.

    Args:
        image: Float image of shape (H, W, 3).
        title: Optional figure title.
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(quantize(image))
    ax.axis("off")
    if title is not None:
        ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
