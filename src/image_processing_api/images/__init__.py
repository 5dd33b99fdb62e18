"""Image processing: transformer, orchestrator and routes."""

from .orchestrator import RequestOrchestrator
from .transformer import ImageTransformer

__all__ = ["ImageTransformer", "RequestOrchestrator"]
