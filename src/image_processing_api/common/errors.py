"""Error taxonomy for image request handling.

Every error a request can fail with derives from ``ImageApiError`` and
carries the HTTP status the web layer renders it with.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar


class ImageApiError(Exception):
    """Base class for image request errors."""

    status_code: ClassVar[int] = 500


class MissingParameter(ImageApiError):
    status_code: ClassVar[int] = 400

    def __init__(self, name: str):
        self.name: str = name
        super().__init__(f"Missing required parameter: {name}")


class InvalidDimension(ImageApiError):
    status_code: ClassVar[int] = 400

    def __init__(self, value: object | None = None):
        self.value: object | None = value
        super().__init__("Width and height must be positive numbers")


class SourceNotFound(ImageApiError):
    status_code: ClassVar[int] = 404

    def __init__(self, filename: str):
        self.filename: str = filename
        super().__init__(f"Image '{filename}' not found")


class ProcessingFailed(ImageApiError):
    """Codec or I/O failure while producing an artifact."""

    status_code: ClassVar[int] = 500

    def __init__(self, cause: BaseException | str):
        self.cause: BaseException | str = cause
        super().__init__(f"Failed to process image: {cause}")


class StorageProbeFailed(ImageApiError):
    """Cache existence check failed. Never surfaced; callers treat it as a miss."""

    def __init__(self, path: str | Path):
        self.path: str = str(path)
        super().__init__(f"Failed to probe cached artifact '{path}'")


class InvalidFormat(ImageApiError):
    """Format is not a plain extension token (letters and digits)."""

    status_code: ClassVar[int] = 400

    def __init__(self, value: str):
        self.value: str = value
        super().__init__(f"Unsupported output format: {value}")
