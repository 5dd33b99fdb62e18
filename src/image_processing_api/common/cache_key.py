"""Cache key derivation.

The key doubles as the artifact's filename in the output directory, so the
cache store and the transformer must both go through :func:`derive_key`.

    sample.jpg                     -> sample.jpg
    sample.jpg  width=300          -> sample_300xauto.jpg
    sample.jpg  300x200 format=png -> sample_300x200.png
"""

import os
from pathlib import Path

from .schemas import ProcessingRequest

DEFAULT_EXTENSION = "jpg"
AUTO = "auto"


def split_filename(filename: str) -> tuple[str, str]:
    """Split the last path segment into (base, extension-without-dot).

    A trailing slash does not count as a segment: ``red.png/`` is ``red.png``.
    """
    base, ext = os.path.splitext(Path(filename).name)
    return base, ext.lstrip(".")


def derive_key(request: ProcessingRequest, default_extension: str = DEFAULT_EXTENSION) -> str:
    """Map a request to its cache key. Pure and total."""
    base, source_ext = split_filename(request.filename)
    ext = request.format or source_ext or default_extension

    dims = ""
    if request.resizes:
        width = request.width if request.width is not None else AUTO
        height = request.height if request.height is not None else AUTO
        dims = f"_{width}x{height}"

    return f"{base}{dims}.{ext}"
