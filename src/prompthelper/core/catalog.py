"""Placeholder definition catalogue: create, duplicate, edit and delete."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, List, Optional

from .errors import ValidationError
from .placeholders.models import PlaceholderDefinition, PlaceholderType
from .placeholders.parser import is_valid_key, suggest_key
from .store import JsonPromptStore

LOGGER = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_KEY = "new_placeholder"
DEFAULT_PLACEHOLDER_LABEL = "New Placeholder"

EDITABLE_FIELDS = (
    "key",
    "label",
    "type",
    "options",
    "is_global",
    "default_value",
    "description",
    "tags",
)


class PlaceholderCatalog:
    """Manage placeholder definitions held by a store."""

    def __init__(self, store: JsonPromptStore) -> None:
        self.store = store

    def create_placeholder(self) -> PlaceholderDefinition:
        definition = PlaceholderDefinition(
            key=DEFAULT_PLACEHOLDER_KEY,
            label=DEFAULT_PLACEHOLDER_LABEL,
            type=PlaceholderType.TEXT,
            is_global=True,
        )
        with self.store.transaction():
            self.store.insert_placeholder(definition)
        return definition

    def duplicate_placeholder(self, definition: PlaceholderDefinition) -> PlaceholderDefinition:
        duplicate = PlaceholderDefinition(
            key=f"{definition.key}_copy",
            label=f"{definition.label} (Copy)",
            type=definition.type,
            options=list(definition.options),
            is_global=definition.is_global,
            default_value=definition.default_value,
            description=definition.description,
            tags=list(definition.tags),
        )
        with self.store.transaction():
            self.store.insert_placeholder(duplicate)
        return duplicate

    def delete_placeholder(self, definition: PlaceholderDefinition) -> None:
        with self.store.transaction():
            self.store.delete_placeholder(definition)
        LOGGER.info("Deleted placeholder '%s'", definition.key)

    def validate_key(self, key: str, *, exclude: Optional[PlaceholderDefinition] = None) -> Optional[str]:
        """Return an error message for ``key`` or ``None`` when it can be used."""

        if not key.strip():
            return "The key must not be empty."
        if not is_valid_key(key):
            return "The key may only contain letters, digits, _ and -."
        for existing in self.store.find_placeholders(key):
            if existing is not exclude:
                return "A placeholder with this key already exists."
        return None

    def suggest_key(self, label: str) -> str:
        return suggest_key(label)

    def update_placeholder(self, definition: PlaceholderDefinition, **changes: Any) -> PlaceholderDefinition:
        """Apply ``changes`` after validating the result, then persist."""

        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown placeholder field(s): {', '.join(sorted(unknown))}")
        if "type" in changes:
            changes["type"] = PlaceholderType.from_raw(changes["type"])

        candidate = dataclasses.replace(definition, **changes)
        if candidate.key != definition.key:
            message = self.validate_key(candidate.key, exclude=definition)
            if message:
                raise ValidationError(message)
        candidate.validate()

        for name in changes:
            setattr(definition, name, getattr(candidate, name))
        definition.mark_as_updated()
        self.store.save()
        return definition

    def list_placeholders(self, search: str = "", *, global_only: bool = True) -> List[PlaceholderDefinition]:
        needle = search.strip().lower()
        results = []
        for definition in self.store.placeholders():
            if global_only and not definition.is_global:
                continue
            if needle and needle not in definition.key.lower() and needle not in definition.label.lower():
                continue
            results.append(definition)
        return sorted(results, key=lambda item: item.label.lower())


__all__ = ["DEFAULT_PLACEHOLDER_KEY", "DEFAULT_PLACEHOLDER_LABEL", "PlaceholderCatalog"]
