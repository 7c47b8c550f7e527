"""Validate placeholder values and render templates into final prompts."""

from __future__ import annotations

import logging
import math
import re
from typing import Iterator, Mapping, Optional, Tuple

from .errors import (
    InvalidPlaceholderValueError,
    MissingRequiredPlaceholderError,
    RenderError,
)
from .placeholders.models import (
    PlaceholderDefinition,
    PlaceholderType,
    PromptTemplate,
    TemplatePlaceholder,
)
from .placeholders.parser import extract_keys, replace_placeholders

LOGGER = logging.getLogger(__name__)


NUMBER_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def _is_number(value: str) -> bool:
    if NUMBER_PATTERN.fullmatch(value) is None:
        return False
    return math.isfinite(float(value))


def validate_value(value: str, definition: PlaceholderDefinition) -> Optional[InvalidPlaceholderValueError]:
    """Return the type error for ``value`` or ``None`` when it is acceptable.

    Text and date values are not checked here.
    """

    if definition.type is PlaceholderType.NUMBER:
        if not _is_number(value):
            return InvalidPlaceholderValueError(definition.label, "must be a number")

    elif definition.type is PlaceholderType.SINGLE_CHOICE:
        if value and value not in definition.options:
            return InvalidPlaceholderValueError(definition.label, "must be one of the predefined options")

    elif definition.type is PlaceholderType.MULTI_CHOICE:
        selected = [part.strip() for part in value.split(",")]
        invalid = [part for part in selected if part and part not in definition.options]
        if invalid:
            return InvalidPlaceholderValueError(definition.label, f"invalid selection: {', '.join(invalid)}")

    return None


def _resolved(template: PromptTemplate) -> Iterator[Tuple[TemplatePlaceholder, PlaceholderDefinition]]:
    for association in template.sorted_placeholders():
        if association.placeholder is None:
            LOGGER.warning(
                "Ignoring association %s of template '%s': placeholder definition is missing",
                association.id,
                template.title,
            )
            continue
        yield association, association.placeholder


def validate_required_placeholders(
    template: PromptTemplate,
    values: Mapping[str, str],
) -> Optional[RenderError]:
    """Return the first required-field or type error, or ``None``.

    Associations are checked in ``sort_order``. Required fields are checked
    before any value is type-checked.
    """

    resolved = list(_resolved(template))

    for association, definition in resolved:
        if not association.is_required:
            continue
        if not (values.get(definition.key) or "").strip():
            return MissingRequiredPlaceholderError(definition.label)

    for _, definition in resolved:
        value = values.get(definition.key) or ""
        if not value:
            continue
        error = validate_value(value, definition)
        if error is not None:
            return error

    return None


def preview(template: PromptTemplate, values: Mapping[str, str]) -> str:
    """Substitute the values available so far; unfilled markers stay visible."""

    return replace_placeholders(template.content, values)


def render(template: PromptTemplate, values: Mapping[str, str]) -> str:
    """Return the final prompt or raise a :class:`RenderError`.

    A render is only complete when no ``{{...}}`` marker is left, so optional
    placeholders without a value fail as well.
    """

    error = validate_required_placeholders(template, values)
    if error is not None:
        raise error

    rendered = replace_placeholders(template.content, values)

    unfilled = extract_keys(rendered)
    if unfilled:
        raise RenderError(f"unfilled placeholders: {', '.join(unfilled)}")

    return rendered


__all__ = [
    "preview",
    "render",
    "validate_required_placeholders",
    "validate_value",
]
