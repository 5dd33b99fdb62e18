from __future__ import annotations

import logging
import stat
from pathlib import Path

import aiofiles.os

from ..config import ImageApiConfig
from .errors import StorageProbeFailed

logger = logging.getLogger(__name__)


class CacheStore:
    """
    Read-only view of the artifact directory.

    Layout:
        output_dir/
            <cache_key>
    """

    def __init__(self, config: ImageApiConfig):
        self._output_dir: Path = config.output_dir

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def path_for(self, key: str) -> Path:
        return self._output_dir / key

    async def _probe(self, path: Path) -> bool:
        try:
            result = await aiofiles.os.stat(path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageProbeFailed(path) from exc
        return stat.S_ISREG(result.st_mode)

    async def lookup(self, key: str) -> Path | None:
        """Return the artifact path for ``key`` if it exists, else None.

        A failing probe is logged and reported as a miss.
        """
        path = self.path_for(key)
        try:
            found = await self._probe(path)
        except StorageProbeFailed as exc:
            logger.warning("%s, treating as cache miss", exc, exc_info=exc.__cause__)
            return None

        if found:
            logger.info("Cache hit: %s", path)
            return path

        logger.info("Cache miss: %s", key)
        return None
