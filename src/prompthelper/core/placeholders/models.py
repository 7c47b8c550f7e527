"""Prompt template and placeholder data structures."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from ..errors import ValidationError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
    return _utcnow()


def _unique(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


class PlaceholderType(str, Enum):
    """Kinds of values a placeholder accepts."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    SINGLE_CHOICE = "singleChoice"
    MULTI_CHOICE = "multiChoice"

    @property
    def display_name(self) -> str:
        return {
            PlaceholderType.TEXT: "Text",
            PlaceholderType.NUMBER: "Number",
            PlaceholderType.DATE: "Date",
            PlaceholderType.SINGLE_CHOICE: "Single choice",
            PlaceholderType.MULTI_CHOICE: "Multiple choice",
        }[self]

    @property
    def requires_options(self) -> bool:
        return self in (PlaceholderType.SINGLE_CHOICE, PlaceholderType.MULTI_CHOICE)

    @classmethod
    def from_raw(cls, raw: Any) -> "PlaceholderType":
        """Decode a stored value, falling back to ``TEXT`` for unknown input."""

        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw))
        except ValueError:
            return cls.TEXT


@dataclass
class PlaceholderDefinition:
    """Reusable description of a placeholder (type, label, options, default)."""

    key: str
    label: str
    type: PlaceholderType = PlaceholderType.TEXT
    options: List[str] = field(default_factory=list)
    is_global: bool = True
    default_value: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def validate(self) -> None:
        """Raise :class:`ValidationError` when the definition is incomplete."""

        if not self.key.strip():
            raise ValidationError("The placeholder key must not be empty.")
        if " " in self.key:
            raise ValidationError("The placeholder key must not contain spaces.")
        if not self.label.strip():
            raise ValidationError("The label must not be empty.")
        if self.type.requires_options and not self.options:
            raise ValidationError("Choice placeholders need at least one option.")

    def mark_as_updated(self) -> None:
        self.updated_at = _utcnow()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "key": self.key,
            "label": self.label,
            "type": self.type.value,
            "options": list(self.options),
            "is_global": self.is_global,
            "default_value": self.default_value,
            "description": self.description,
            "tags": list(self.tags),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PlaceholderDefinition":
        return cls(
            id=str(payload.get("id") or _new_id()),
            key=str(payload.get("key", "")),
            label=str(payload.get("label", "")),
            type=PlaceholderType.from_raw(payload.get("type")),
            options=[str(option) for option in payload.get("options", []) or []],
            is_global=bool(payload.get("is_global", True)),
            default_value=payload.get("default_value"),
            description=payload.get("description"),
            tags=[str(tag) for tag in payload.get("tags", []) or []],
            created_at=_parse_timestamp(payload.get("created_at")),
            updated_at=_parse_timestamp(payload.get("updated_at")),
        )


@dataclass
class TemplatePlaceholder:
    """Join record linking a template to a placeholder definition.

    ``placeholder`` is ``None`` when the linked definition could not be
    resolved; such records are integrity violations and are skipped by the
    synchronizer and the renderer.
    """

    template_id: str
    placeholder: Optional[PlaceholderDefinition]
    is_required: bool = True
    sort_order: int = 0
    template_specific_default_value: Optional[str] = None
    id: str = field(default_factory=_new_id)

    @property
    def key(self) -> Optional[str]:
        return self.placeholder.key if self.placeholder else None

    @property
    def effective_default_value(self) -> Optional[str]:
        if self.template_specific_default_value is not None:
            return self.template_specific_default_value
        if self.placeholder is not None:
            return self.placeholder.default_value
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "template_id": self.template_id,
            "placeholder_id": self.placeholder.id if self.placeholder else None,
            "is_required": self.is_required,
            "sort_order": self.sort_order,
            "template_specific_default_value": self.template_specific_default_value,
        }

    @classmethod
    def from_dict(
        cls,
        payload: Mapping[str, Any],
        definitions: Mapping[str, PlaceholderDefinition],
    ) -> "TemplatePlaceholder":
        placeholder_id = payload.get("placeholder_id")
        return cls(
            id=str(payload.get("id") or _new_id()),
            template_id=str(payload.get("template_id", "")),
            placeholder=definitions.get(placeholder_id) if placeholder_id else None,
            is_required=bool(payload.get("is_required", True)),
            sort_order=int(payload.get("sort_order", 0) or 0),
            template_specific_default_value=payload.get("template_specific_default_value"),
        )


@dataclass
class PromptTemplate:
    """A block of prompt text with ``{{key}}`` markers and its metadata."""

    title: str
    content: str = ""
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    is_favorite: bool = False
    placeholders: List[TemplatePlaceholder] = field(default_factory=list)
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        self.tags = _unique(list(self.tags))

    def validate(self) -> None:
        if not self.title.strip():
            raise ValidationError("The title must not be empty.")

    def mark_as_updated(self) -> None:
        self.updated_at = _utcnow()

    def sorted_placeholders(self) -> List[TemplatePlaceholder]:
        return sorted(self.placeholders, key=lambda item: item.sort_order)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "tags": list(self.tags),
            "is_favorite": self.is_favorite,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "placeholders": [item.to_dict() for item in self.placeholders],
        }

    @classmethod
    def from_dict(
        cls,
        payload: Mapping[str, Any],
        definitions: Mapping[str, PlaceholderDefinition],
    ) -> "PromptTemplate":
        template = cls(
            id=str(payload.get("id") or _new_id()),
            title=str(payload.get("title", "")),
            description=payload.get("description"),
            content=str(payload.get("content", "")),
            tags=[str(tag) for tag in payload.get("tags", []) or []],
            is_favorite=bool(payload.get("is_favorite", False)),
            created_at=_parse_timestamp(payload.get("created_at")),
            updated_at=_parse_timestamp(payload.get("updated_at")),
        )
        template.placeholders = [
            TemplatePlaceholder.from_dict({**item, "template_id": template.id}, definitions)
            for item in payload.get("placeholders", []) or []
        ]
        return template


@dataclass
class PromptInstance:
    """A prompt generated from a template, kept for the history."""

    template_id: Optional[str]
    generated_text: str
    filled_values: Dict[str, str] = field(default_factory=dict)
    notes: Optional[str] = None
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "template_id": self.template_id,
            "filled_values": dict(self.filled_values),
            "generated_text": self.generated_text,
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PromptInstance":
        values = payload.get("filled_values") or {}
        return cls(
            id=str(payload.get("id") or _new_id()),
            template_id=payload.get("template_id"),
            filled_values={str(key): str(value) for key, value in values.items()},
            generated_text=str(payload.get("generated_text", "")),
            notes=payload.get("notes"),
            created_at=_parse_timestamp(payload.get("created_at")),
        )


__all__ = [
    "PlaceholderDefinition",
    "PlaceholderType",
    "PromptInstance",
    "PromptTemplate",
    "TemplatePlaceholder",
]
