"""Image transformer: the only component that runs the codec and writes artifacts."""

import asyncio
import logging
from pathlib import Path

import aiofiles.os

from ..common.cache_key import derive_key
from ..common.errors import ProcessingFailed, SourceNotFound
from ..common.schemas import ProcessingRequest
from ..config import ImageApiConfig
from ..utils.profiling import timed
from .algo.image_fit import image_fit

logger = logging.getLogger(__name__)


class ImageTransformer:
    """Produce the artifact for a request under its cache key."""

    def __init__(self, config: ImageApiConfig) -> None:
        self._config: ImageApiConfig = config

    def source_path(self, request: ProcessingRequest) -> Path:
        return self._config.input_dir / request.filename

    def output_path(self, request: ProcessingRequest) -> Path:
        return self._config.output_dir / derive_key(request, self._config.default_extension)

    async def ensure_output_dir(self) -> None:
        output_dir = self._config.output_dir
        if await aiofiles.os.path.isdir(output_dir):
            return
        try:
            await aiofiles.os.makedirs(output_dir, exist_ok=True)
        except OSError as exc:
            logger.error("Failed to create output directory %s", output_dir, exc_info=exc)
            raise ProcessingFailed(f"Failed to create output directory: {exc}") from exc
        logger.info("Created output directory: %s", output_dir)

    @timed
    async def transform(self, request: ProcessingRequest) -> Path:
        """Resize/re-encode the source image and write it to its cache key.

        Returns:
            Absolute path of the written artifact

        Raises:
            SourceNotFound: the source file does not exist
            ProcessingFailed: any codec or I/O failure
        """
        input_path = self.source_path(request)
        if not await aiofiles.os.path.isfile(input_path):
            raise SourceNotFound(request.filename)

        await self.ensure_output_dir()
        output_path = self.output_path(request)

        try:
            _ = await asyncio.to_thread(
                image_fit,
                input_path=input_path,
                output_path=output_path,
                width=request.width,
                height=request.height,
            )
        except Exception as exc:
            logger.error("Error processing image %s", request.filename, exc_info=exc)
            raise ProcessingFailed(exc) from exc

        logger.info("Image processed successfully: %s", output_path)
        return output_path
