"""Request orchestrator - sequences validation, cache lookup and transform."""

import logging
from pathlib import Path

import aiofiles.os

from ..common.cache_key import derive_key
from ..common.cache_store import CacheStore
from ..common.errors import SourceNotFound
from ..common.schemas import ProcessingRequest, ResolvedImage
from ..config import ImageApiConfig
from ..utils.media_types import get_mime_type
from .transformer import ImageTransformer

logger = logging.getLogger(__name__)


class RequestOrchestrator:
    """Single entry point per inbound image request.

    Stateless between calls. Precedence per call:
        1. parse/validate parameters  (MissingParameter, InvalidDimension)
        2. source file exists         (SourceNotFound)
        3. cache hit                  -> return cached artifact
        4. cache miss                 -> transform, return new artifact

    Example:
        config = ImageApiConfig(input_dir="images", output_dir="public/images/processed")
        orchestrator = RequestOrchestrator(config)
        resolved = await orchestrator.handle("sample.jpg", width="300", height="200")
    """

    def __init__(
        self,
        config: ImageApiConfig,
        cache_store: CacheStore | None = None,
        transformer: ImageTransformer | None = None,
    ):
        self.config: ImageApiConfig = config
        self.cache_store: CacheStore = cache_store if cache_store is not None else CacheStore(config)
        self.transformer: ImageTransformer = (
            transformer if transformer is not None else ImageTransformer(config)
        )

    def parse(
        self,
        filename: str | None,
        width: str | int | None = None,
        height: str | int | None = None,
        format: str | None = None,
    ) -> ProcessingRequest:
        return ProcessingRequest.from_query(filename, width, height, format)

    def _source_path(self, filename: str) -> Path | None:
        """Resolve ``filename`` inside the input directory, None if it escapes it."""
        base = self.config.input_dir
        try:
            resolved = (base / filename).resolve()
        except (OSError, ValueError):
            return None
        if base not in resolved.parents:
            return None
        return resolved

    async def source_exists(self, filename: str) -> bool:
        path = self._source_path(filename)
        if path is None:
            logger.warning("Rejected filename outside input directory: %s", filename)
            return False
        return await aiofiles.os.path.isfile(path)

    async def resolve(self, request: ProcessingRequest) -> ResolvedImage:
        if not await self.source_exists(request.filename):
            raise SourceNotFound(request.filename)

        key = derive_key(request, self.config.default_extension)
        media_type = get_mime_type(key.rsplit(".", 1)[-1])

        cached = await self.cache_store.lookup(key)
        if cached is not None:
            return ResolvedImage(
                request=request,
                cache_key=key,
                path=cached,
                media_type=media_type,
                cache_hit=True,
            )

        output_path = await self.transformer.transform(request)
        return ResolvedImage(
            request=request,
            cache_key=key,
            path=output_path,
            media_type=media_type,
            cache_hit=False,
        )

    async def handle(
        self,
        filename: str | None,
        width: str | int | None = None,
        height: str | int | None = None,
        format: str | None = None,
    ) -> ResolvedImage:
        request = self.parse(filename, width, height, format)
        return await self.resolve(request)
