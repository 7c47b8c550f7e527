"""Placeholder parsing, data structures and synchronisation."""

from .models import (
    PlaceholderDefinition,
    PlaceholderType,
    PromptInstance,
    PromptTemplate,
    TemplatePlaceholder,
)
from .parser import (
    distinct_keys,
    extract_keys,
    has_unfilled_placeholders,
    is_valid_key,
    placeholder_token,
    replace_placeholders,
    suggest_key,
)
from .sync import (
    SyncResult,
    detect_placeholder_keys,
    find_missing_definitions,
    sync_placeholders,
)

__all__ = [
    "PlaceholderDefinition",
    "PlaceholderType",
    "PromptInstance",
    "PromptTemplate",
    "TemplatePlaceholder",
    "distinct_keys",
    "extract_keys",
    "has_unfilled_placeholders",
    "is_valid_key",
    "placeholder_token",
    "replace_placeholders",
    "suggest_key",
    "SyncResult",
    "detect_placeholder_keys",
    "find_missing_definitions",
    "sync_placeholders",
]
