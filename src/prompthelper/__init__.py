"""PromptHelper: reusable prompt templates with typed ``{{placeholders}}``."""

from .core.placeholders import (
    PlaceholderDefinition,
    PlaceholderType,
    PromptInstance,
    PromptTemplate,
    TemplatePlaceholder,
    distinct_keys,
    extract_keys,
    is_valid_key,
    suggest_key,
    sync_placeholders,
)
from .core.rendering import preview, render

__version__ = "1.0.0"

__all__ = [
    "PlaceholderDefinition",
    "PlaceholderType",
    "PromptInstance",
    "PromptTemplate",
    "TemplatePlaceholder",
    "distinct_keys",
    "extract_keys",
    "is_valid_key",
    "preview",
    "render",
    "suggest_key",
    "sync_placeholders",
]
