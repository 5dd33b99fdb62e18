"""Extension <-> codec format <-> MIME type lookups, backed by Pillow's registry."""

from PIL import Image

OCTET_STREAM = "application/octet-stream"

# Encoders that cannot store an alpha channel
ALPHA_LESS_FORMATS = frozenset({"JPEG", "PPM", "PCX", "EPS", "PDF"})


def get_pil_format(extension: str) -> str | None:
    """Resolve an extension (``jpg``, ``.PNG``) to Pillow's format name."""
    ext = extension.lower()
    if not ext.startswith("."):
        ext = "." + ext
    return Image.registered_extensions().get(ext)


def get_mime_type(extension: str) -> str:
    fmt = get_pil_format(extension)
    if fmt is None:
        return OCTET_STREAM
    return Image.MIME.get(fmt, OCTET_STREAM)


def supports_alpha(pil_format: str) -> bool:
    return pil_format.upper() not in ALPHA_LESS_FORMATS
