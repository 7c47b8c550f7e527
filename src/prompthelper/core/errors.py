"""Error types raised by the prompt helper core."""

from __future__ import annotations


class PromptHelperError(Exception):
    """Base class for all prompt helper errors."""

    recovery_suggestion = "Please try again."

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PromptHelperError):
    """Raised when a template or placeholder definition fails validation."""

    recovery_suggestion = "Please check your input."


class RenderError(PromptHelperError):
    """Raised when a prompt cannot be generated from a template."""

    recovery_suggestion = "Please check the template and its placeholders."

    def __str__(self) -> str:
        return f"Failed to generate prompt: {self.message}"


class MissingRequiredPlaceholderError(RenderError):
    """Raised when a required placeholder has no value."""

    recovery_suggestion = "Please fill in all required fields."

    def __init__(self, label: str) -> None:
        super().__init__(f"required field '{label}' must be filled in")
        self.label = label

    def __str__(self) -> str:
        return f"Required field '{self.label}' must be filled in."


class InvalidPlaceholderValueError(RenderError):
    """Raised when a value does not satisfy its placeholder type."""

    recovery_suggestion = "Please enter a valid value."

    def __init__(self, label: str, reason: str) -> None:
        super().__init__(f"invalid value for '{label}': {reason}")
        self.label = label
        self.reason = reason

    def __str__(self) -> str:
        return f"Invalid value for '{self.label}': {self.reason}"


class PersistenceError(PromptHelperError):
    """Raised when the backing store cannot be read or written."""

    recovery_suggestion = "Please try again or restart the application."

    def __str__(self) -> str:
        return f"Storage error: {self.message}"


class TemplateNotFoundError(PromptHelperError):
    """Raised when a template id is unknown to the store."""

    recovery_suggestion = "Please select a valid template."

    def __init__(self, template_id: str) -> None:
        super().__init__(f"Template '{template_id}' was not found.")
        self.template_id = template_id


class PlaceholderNotFoundError(PromptHelperError):
    """Raised when a placeholder definition is unknown to the store."""

    recovery_suggestion = "Please create the placeholder definition first."

    def __init__(self, key: str) -> None:
        super().__init__(f"Placeholder '{key}' was not found.")
        self.key = key


__all__ = [
    "InvalidPlaceholderValueError",
    "MissingRequiredPlaceholderError",
    "PersistenceError",
    "PlaceholderNotFoundError",
    "PromptHelperError",
    "RenderError",
    "TemplateNotFoundError",
    "ValidationError",
]
