"""Request sanitization pipeline.

This package provides a composable pipeline for normalizing mixed-dialect chat
requests into the single dialect the upstream backend accepts. Each transformer
in the pipeline handles a single responsibility, making the sanitization
process more maintainable and testable.
"""

from src.conversion.pipeline.base import (
    RequestPipeline,
    RequestTransformer,
    SanitizeContext,
    SanitizeStats,
)
from src.conversion.pipeline.factory import RequestPipelineFactory

__all__ = [
    "SanitizeContext",
    "SanitizeStats",
    "RequestPipeline",
    "RequestTransformer",
    "RequestPipelineFactory",
]
