"""Pure fit-to-box resize / re-encode logic (single file)."""

import os
import tempfile
from pathlib import Path

from PIL import Image

from ...utils.media_types import get_pil_format, supports_alpha

TRANSPARENT_FILL = (255, 255, 255, 0)
FLATTEN_BACKGROUND = (255, 255, 255)

# Modes every alpha-capable encoder here accepts as-is
ENCODABLE_MODES = frozenset({"RGB", "RGBA", "L", "LA", "P"})


def fit_size(
    original: tuple[int, int],
    width: int | None,
    height: int | None,
) -> tuple[int, int]:
    """Size of the scaled image (before padding) that fits the requested box.

    A missing dimension follows the other one proportionally.
    """
    original_width, original_height = original

    if width is not None and height is not None:
        scale = min(width / original_width, height / original_height)
    elif width is not None:
        scale = width / original_width
    elif height is not None:
        scale = height / original_height
    else:
        return original

    return (
        max(1, round(original_width * scale)),
        max(1, round(original_height * scale)),
    )


def contain(img: Image.Image, width: int | None, height: int | None) -> Image.Image:
    """Resize ``img`` to fit inside width x height, never cropping or distorting.

    When both dimensions are given the result is exactly width x height, with
    the uncovered area filled transparent.
    """
    if img.mode not in ("RGB", "RGBA", "L", "LA"):
        img = img.convert("RGBA")

    scaled_size = fit_size(img.size, width, height)
    scaled = img.resize(scaled_size, Image.Resampling.LANCZOS)

    if width is None or height is None or scaled_size == (width, height):
        return scaled

    canvas = Image.new("RGBA", (width, height), TRANSPARENT_FILL)
    offset = ((width - scaled_size[0]) // 2, (height - scaled_size[1]) // 2)
    canvas.paste(scaled.convert("RGBA"), offset)
    return canvas


def flatten(img: Image.Image) -> Image.Image:
    """Drop alpha by compositing onto white."""
    if img.mode in ("RGB", "L", "CMYK"):
        return img
    rgba = img.convert("RGBA")
    background = Image.new("RGB", rgba.size, FLATTEN_BACKGROUND)
    background.paste(rgba, mask=rgba.getchannel("A"))
    return background


def image_fit(
    *,
    input_path: str | Path,
    output_path: str | Path,
    width: int | None = None,
    height: int | None = None,
) -> str:
    """
    Resize and/or re-encode a single image and write it atomically.

    The encoding is taken from ``output_path``'s extension. The image is
    written to a temporary file next to ``output_path`` and renamed into
    place, so ``output_path`` either holds the previous file or the complete
    new one.

    Args:
        input_path: Path to input image
        output_path: Path to output image
        width: Target box width (None = follow height / keep source)
        height: Target box height (None = follow width / keep source)

    Returns:
        Output file path as string

    Raises:
        FileNotFoundError: If input image or output directory does not exist
        ValueError: If the output extension has no known encoder
        OSError: If Pillow fails to read/write the image
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    fmt = get_pil_format(output_path.suffix) if output_path.suffix else None
    if fmt is None:
        raise ValueError(f"Unsupported output format: '{output_path.suffix.lstrip('.')}'")

    if not output_path.parent.exists():
        raise FileNotFoundError(f"Output directory does not exist: {output_path.parent}")

    fd, tmp_name = tempfile.mkstemp(
        dir=output_path.parent,
        prefix=f".{output_path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "wb") as tmp, Image.open(input_path) as img:
            result: Image.Image = img
            if width is not None or height is not None:
                result = contain(img, width, height)

            if not supports_alpha(fmt):
                result = flatten(result)
            elif result.mode not in ENCODABLE_MODES:
                result = result.convert("RGBA")

            result.save(tmp, format=fmt)

        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    return str(output_path)
