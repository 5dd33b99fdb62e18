"""Pydantic schemas for image requests and their results."""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidDimension, InvalidFormat, MissingParameter

FORMAT_PATTERN = r"^[A-Za-z0-9]+$"

# ─────────────────────────────────────────────────────────────
# Request
# ─────────────────────────────────────────────────────────────


class ProcessingRequest(BaseModel):
    """One resize/reformat request.

    Build it from raw query values with :meth:`from_query`; that is the only
    place HTTP input turns into a request, so the route and the cache layer
    can never disagree on what was asked for.
    """

    filename: str = Field(..., min_length=1, description="Source image name in the input directory")
    width: int | None = Field(default=None, gt=0, description="Target width in pixels")
    height: int | None = Field(default=None, gt=0, description="Target height in pixels")
    format: str | None = Field(
        default=None,
        pattern=FORMAT_PATTERN,
        description="Target encoding (png, webp, ...)",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @property
    def resizes(self) -> bool:
        return self.width is not None or self.height is not None

    @classmethod
    def from_query(
        cls,
        filename: str | None,
        width: str | int | None = None,
        height: str | int | None = None,
        format: str | None = None,
    ) -> "ProcessingRequest":
        """Parse and validate raw query values.

        Raises:
            MissingParameter: filename absent or empty
            InvalidDimension: width/height not a positive integer
            InvalidFormat: format is not a plain extension token
        """
        if not filename:
            raise MissingParameter("filename")

        width_value = _parse_dimension(width)
        height_value = _parse_dimension(height)

        format = format or None
        if format is not None and not re.fullmatch(FORMAT_PATTERN, format):
            raise InvalidFormat(format)

        try:
            return cls(
                filename=filename,
                width=width_value,
                height=height_value,
                format=format,
            )
        except ValidationError as exc:
            raise InvalidDimension() from exc


def _parse_dimension(raw: str | int | None) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, int):
        value = raw
    else:
        text = raw.strip()
        if not text:
            return None
        if not (text.isascii() and text.isdigit()):
            raise InvalidDimension(raw)
        value = int(text)

    if value <= 0:
        raise InvalidDimension(raw)
    return value


# ─────────────────────────────────────────────────────────────
# Result
# ─────────────────────────────────────────────────────────────


class ResolvedImage(BaseModel):
    """Artifact a request resolved to, either cached or freshly produced."""

    request: ProcessingRequest
    cache_key: str
    path: Path
    media_type: str
    cache_hit: bool
    resolved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)
