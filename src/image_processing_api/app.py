"""Application factory - wires config, components and routes into FastAPI."""

from collections.abc import Awaitable, Callable
from typing import cast

from fastapi import FastAPI, Request, Response
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .common.errors import ImageApiError
from .config import ImageApiConfig
from .images.orchestrator import RequestOrchestrator
from .images.routes import create_router

WELCOME_PAGE = """
<h1>Image Processing API</h1>
<p>Use the /api/images endpoint with the following query parameters:</p>
<ul>
  <li><strong>filename</strong>: (required) The name of the image file to process</li>
  <li><strong>width</strong>: (optional) The width to resize the image to</li>
  <li><strong>height</strong>: (optional) The height to resize the image to</li>
  <li><strong>format</strong>: (optional) The format to convert the image to (e.g., jpg, png, webp)</li>
</ul>
<p>Example: <a href="/api/images?filename=sample.jpg&width=300&height=200">/api/images?filename=sample.jpg&width=300&height=200</a></p>
"""


async def _image_api_error_handler(request: Request, error: Exception) -> Response:
    exc = cast(ImageApiError, error)
    if exc.status_code >= 500:
        logger.error(f"Error in image processing route: {exc}")
        return PlainTextResponse(f"Internal server error: {exc}", status_code=exc.status_code)
    return PlainTextResponse(str(exc), status_code=exc.status_code)


async def _http_error_handler(request: Request, error: Exception) -> Response:
    exc = cast(StarletteHTTPException, error)
    if exc.status_code == 404:
        return PlainTextResponse("Route not found", status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


async def _unhandled_error_handler(request: Request, exc: Exception) -> Response:
    logger.opt(exception=exc).error("Error occurred")
    return PlainTextResponse(f"Internal server error: {exc}", status_code=500)


def create_app(
    config: ImageApiConfig,
    orchestrator: RequestOrchestrator | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        config: Directories the image components operate on
        orchestrator: Optional pre-built orchestrator (tests inject one
                      with instrumented components)

    Returns:
        Configured FastAPI application

    Example:
        from image_processing_api import ImageApiConfig, create_app

        app = create_app(
            ImageApiConfig(input_dir="images", output_dir="public/images/processed")
        )
    """
    orchestrator = orchestrator if orchestrator is not None else RequestOrchestrator(config)

    app = FastAPI(title="Image Processing API")
    app.state.config = config
    app.state.orchestrator = orchestrator

    @app.middleware("http")
    async def log_requests(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        logger.info(f"{request.method} {request.url.path}?{request.url.query}".rstrip("?"))
        return await call_next(request)

    @app.get("/", response_class=HTMLResponse)
    async def welcome() -> str:
        return WELCOME_PAGE

    app.include_router(create_router(orchestrator), prefix="/api/images", tags=["images"])

    if config.public_dir is not None:
        app.mount(
            "/public",
            StaticFiles(directory=config.public_dir, check_dir=False),
            name="public",
        )

    app.add_exception_handler(ImageApiError, _image_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    _ = (log_requests, welcome)
    return app
