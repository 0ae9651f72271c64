"""Image export utilities for rendered images.

Rendered images are (height, width, 3) float arrays of unclamped linear
colors. Export quantises each channel with ``ceil(v * 255)`` clamped to
[0, 255] and writes it out.

Supported formats:
    - PPM (plain P3 text, written directly)
    - PNG (8-bit via Pillow)

Example:
    >>> from whitted.preview.export import save_png, save_ppm
    >>> image = camera.render(world)
    >>> save_ppm(image, "render.ppm")
    >>> save_png(image, "render.png")
"""

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

# Plain PPM readers must accept lines up to this length
PPM_LINE_LIMIT = 70


def _check_image(image: npt.NDArray[np.floating]) -> npt.NDArray[np.float64]:
    array = np.asarray(image, dtype=np.float64)
    if array.ndim != 3 or array.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {array.shape}")
    return array


def quantize(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert unclamped float colors to 8-bit channels.

    Each channel becomes ``ceil(v * 255)`` clamped to [0, 255].

    Raises:
        ValueError: If ``image`` is not of shape (H, W, 3).
    """
    array = _check_image(image)
    return np.clip(np.ceil(array * 255.0), 0.0, 255.0).astype(np.uint8)


def to_ppm(image: npt.NDArray[np.floating]) -> str:
    """Serialise an image as plain PPM (P3) text.

    Pixel rows are wrapped so that no line exceeds 70 characters, and the
    text ends with a newline.

    Args:
        image: Float image of shape (H, W, 3).

    Returns:
        The PPM document.
    """
    pixels = quantize(image)
    height, width, _ = pixels.shape
    lines = ["P3", f"{width} {height}", "255"]

    for row in pixels:
        line = ""
        for value in row.reshape(-1):
            token = str(int(value))
            if not line:
                line = token
            elif len(line) + 1 + len(token) > PPM_LINE_LIMIT:
                lines.append(line)
                line = token
            else:
                line = f"{line} {token}"
        lines.append(line)

    return "\n".join(lines) + "\n"


def save_ppm(image: npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save an image as a plain PPM file."""
    Path(filepath).write_text(to_ppm(image), encoding="ascii")


def save_png(image: npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save an image as an 8-bit PNG file.

    Args:
        image: Float image of shape (H, W, 3).
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(quantize(image), mode="RGB")
    pil_image.save(filepath)
