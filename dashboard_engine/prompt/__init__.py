"""Schema context preparation for model prompts."""

from .lib import (
    PromptContext,
    RequestKind,
    build_prompt_context,
    classify_request,
    is_vague_request,
    optimize_schema_for_prompt,
)

__all__ = [
    "PromptContext",
    "RequestKind",
    "build_prompt_context",
    "classify_request",
    "is_vague_request",
    "optimize_schema_for_prompt",
]
