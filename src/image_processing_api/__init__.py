"""image_processing_api - resize/convert images on request, caching every variant on disk."""

from .app import create_app
from .common.cache_key import derive_key
from .common.cache_store import CacheStore
from .common.errors import (
    ImageApiError,
    InvalidDimension,
    InvalidFormat,
    MissingParameter,
    ProcessingFailed,
    SourceNotFound,
    StorageProbeFailed,
)
from .common.schemas import ProcessingRequest, ResolvedImage
from .config import ImageApiConfig, ServerSettings
from .images.orchestrator import RequestOrchestrator
from .images.transformer import ImageTransformer

__version__ = "0.1.0"

__all__ = [
    "ImageApiConfig",
    "ServerSettings",
    "ProcessingRequest",
    "ResolvedImage",
    "derive_key",
    "CacheStore",
    "ImageTransformer",
    "RequestOrchestrator",
    "create_app",
    "ImageApiError",
    "MissingParameter",
    "InvalidDimension",
    "InvalidFormat",
    "SourceNotFound",
    "ProcessingFailed",
    "StorageProbeFailed",
    "__version__",
]
