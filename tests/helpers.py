"""Builders shared by the test modules."""

from __future__ import annotations

from typing import Iterable, Optional

from prompthelper.core.placeholders.models import (
    PlaceholderDefinition,
    PlaceholderType,
    PromptTemplate,
    TemplatePlaceholder,
)


def make_template(content: str, *definitions: PlaceholderDefinition, required: bool = True) -> PromptTemplate:
    """Build a template linked to ``definitions`` in the given order."""

    template = PromptTemplate(title="Test", content=content)
    for index, definition in enumerate(definitions):
        template.placeholders.append(
            TemplatePlaceholder(
                template_id=template.id,
                placeholder=definition,
                is_required=required,
                sort_order=index,
            )
        )
    return template


def text_definition(key: str, label: Optional[str] = None, **kwargs) -> PlaceholderDefinition:
    return PlaceholderDefinition(key=key, label=label or key.capitalize(), **kwargs)


def choice_definition(key: str, options: Iterable[str], *, multi: bool = False) -> PlaceholderDefinition:
    return PlaceholderDefinition(
        key=key,
        label=key.capitalize(),
        type=PlaceholderType.MULTI_CHOICE if multi else PlaceholderType.SINGLE_CHOICE,
        options=list(options),
    )
