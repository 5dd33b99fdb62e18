"""Image processing route factory."""

from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import FileResponse

from .orchestrator import RequestOrchestrator


def create_router(orchestrator: RequestOrchestrator) -> APIRouter:
    """Create the /api/images router around an injected orchestrator.

    Query values are taken as raw strings so that parsing and validation
    happen in exactly one place (``ProcessingRequest.from_query``).
    """
    router = APIRouter()

    @router.get("")
    async def get_image(
        filename: Annotated[str | None, Query(description="Source image in the input directory")] = None,
        width: Annotated[str | None, Query(description="Target width in pixels")] = None,
        height: Annotated[str | None, Query(description="Target height in pixels")] = None,
        format: Annotated[
            str | None, Query(description="Target format (e.g. jpg, png, webp)")
        ] = None,
    ) -> FileResponse:
        """Resize and/or convert an image, serving a cached variant when one exists.

        Example:
            GET /api/images?filename=sample.jpg&width=300&height=200&format=png
        """
        resolved = await orchestrator.handle(filename, width, height, format)
        return FileResponse(resolved.path, media_type=resolved.media_type)

    _ = get_image
    return router
