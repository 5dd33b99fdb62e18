"""Configuration objects.

``ImageApiConfig`` is handed to every component explicitly; nothing below
the server bootstrap reads the environment. ``ServerSettings`` is the
env-driven view used only by :mod:`image_processing_api.server`.
"""

from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImageApiConfig(BaseModel):
    """Directories the image components operate on."""

    input_dir: Path = Field(..., description="Directory holding source images (read-only)")
    output_dir: Path = Field(..., description="Flat directory of generated artifacts")
    public_dir: Path | None = Field(
        default=None,
        description="Directory served under /public, if any",
    )
    default_extension: str = Field(
        default="jpg",
        min_length=1,
        description="Extension used when neither format nor source extension is known",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @field_validator("input_dir", "output_dir", "public_dir")
    @classmethod
    def resolve_dir(cls, v: Path | None) -> Path | None:
        if v is None:
            return None
        return Path(v).expanduser().resolve()


class ServerSettings(BaseSettings):
    """Server bootstrap settings, read from ``IMAGE_API_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(env_prefix="IMAGE_API_", env_file=".env", extra="ignore")

    input_dir: Path = Path("images")
    output_dir: Path = Path("public/images/processed")
    public_dir: Path | None = Path("public")
    host: str = "0.0.0.0"
    port: int = Field(default=3000, gt=0, lt=65536)
    log_level: str = "INFO"

    def to_config(self) -> ImageApiConfig:
        return ImageApiConfig(
            input_dir=self.input_dir,
            output_dir=self.output_dir,
            public_dir=self.public_dir,
        )
