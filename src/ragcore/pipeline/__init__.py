"""Query pipeline."""

from .prompt import NO_CONTEXT_MESSAGE, build_context, build_messages, build_system_prompt
from .query import PipelineState, RAGPipeline, build_pipeline, start_pipeline

__all__ = [
    "RAGPipeline",
    "PipelineState",
    "build_pipeline",
    "start_pipeline",
    "build_context",
    "build_messages",
    "build_system_prompt",
    "NO_CONTEXT_MESSAGE",
]
