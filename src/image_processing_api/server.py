"""Server bootstrap: settings, logging and uvicorn."""

import inspect
import logging
import sys

import uvicorn
from loguru import logger

from .app import create_app
from .config import ServerSettings


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records (components, uvicorn) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    _ = logger.add(sys.stderr, level=level.upper())
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = [InterceptHandler()]
        uvicorn_logger.propagate = False


def main() -> None:
    settings = ServerSettings()
    configure_logging(settings.log_level)

    config = settings.to_config()
    app = create_app(config)

    logger.info(f"Image Processing API is running on port {settings.port}")
    logger.info(f"Serving sources from {config.input_dir}, artifacts in {config.output_dir}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
