"""Common module - request schemas, cache key, cache store and errors."""

from .cache_key import derive_key
from .cache_store import CacheStore
from .schemas import ProcessingRequest, ResolvedImage

__all__ = [
    "ProcessingRequest",
    "ResolvedImage",
    "derive_key",
    "CacheStore",
]
