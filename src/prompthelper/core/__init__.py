"""Prompt template engine and application services."""

from .catalog import PlaceholderCatalog
from .editor import TemplateEditor
from .errors import (
    InvalidPlaceholderValueError,
    MissingRequiredPlaceholderError,
    PersistenceError,
    PlaceholderNotFoundError,
    PromptHelperError,
    RenderError,
    TemplateNotFoundError,
    ValidationError,
)
from .generator import PromptGenerator
from .history import record_instance
from .library import TemplateLibrary
from .rendering import preview, render, validate_required_placeholders, validate_value
from .store import JsonPromptStore, PlaceholderStore

__all__ = [
    "InvalidPlaceholderValueError",
    "JsonPromptStore",
    "MissingRequiredPlaceholderError",
    "PersistenceError",
    "PlaceholderCatalog",
    "PlaceholderNotFoundError",
    "PlaceholderStore",
    "PromptGenerator",
    "PromptHelperError",
    "RenderError",
    "TemplateEditor",
    "TemplateLibrary",
    "TemplateNotFoundError",
    "ValidationError",
    "preview",
    "record_instance",
    "render",
    "validate_required_placeholders",
    "validate_value",
]
