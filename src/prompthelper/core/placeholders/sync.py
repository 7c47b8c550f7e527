"""Keep a template's placeholder associations in line with its content."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List

from .models import PlaceholderDefinition, PlaceholderType, PromptTemplate, TemplatePlaceholder
from .parser import distinct_keys, sorted_distinct

if TYPE_CHECKING:
    from ..store import PlaceholderStore

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class SyncResult:
    """Keys touched by one synchronisation run."""

    linked: List[str] = field(default_factory=list)
    created: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.linked or self.created or self.removed)


def default_label(key: str) -> str:
    """Capitalise each space separated word of ``key``."""

    return " ".join(word.capitalize() for word in key.split(" "))


def detect_placeholder_keys(template: PromptTemplate) -> List[str]:
    """Return the distinct keys used by ``template``, sorted."""

    return sorted_distinct(distinct_keys(template.content))


def resolved_keys(template: PromptTemplate) -> List[str]:
    """Return the keys of associations whose definition resolves.

    Associations without a definition are logged and left out.
    """

    keys: List[str] = []
    for association in template.placeholders:
        if association.placeholder is None:
            LOGGER.warning(
                "Skipping association %s of template '%s': placeholder definition is missing",
                association.id,
                template.title,
            )
            continue
        keys.append(association.placeholder.key)
    return list(dict.fromkeys(keys))


def sync_placeholders(template: PromptTemplate, store: "PlaceholderStore") -> SyncResult:
    """Create and delete associations so they match the keys in the content.

    Missing keys are linked to a global definition with the same key when one
    exists, otherwise a template-local text definition is created. Associations
    for keys that no longer appear are deleted. Nothing is saved here; wrap the
    call in ``store.transaction()``.
    """

    result = SyncResult()
    detected = distinct_keys(template.content)
    existing_keys = resolved_keys(template)
    existing = set(existing_keys)

    missing = [key for key in detected if key not in existing]
    if missing:
        global_placeholders = store.global_placeholders()
        for key in missing:
            definition = _find_by_key(global_placeholders, key)
            if definition is not None:
                result.linked.append(key)
            else:
                definition = PlaceholderDefinition(
                    key=key,
                    label=default_label(key),
                    type=PlaceholderType.TEXT,
                    is_global=False,
                )
                store.insert_placeholder(definition)
                result.created.append(key)

            store.insert_association(
                template,
                TemplatePlaceholder(
                    template_id=template.id,
                    placeholder=definition,
                    is_required=True,
                    sort_order=len(template.placeholders),
                ),
            )

    obsolete = existing - set(detected)
    for association in list(template.placeholders):
        key = association.key
        if key is not None and key in obsolete:
            store.delete_association(template, association)
            if key not in result.removed:
                result.removed.append(key)

    if result.changed:
        LOGGER.info(
            "Synced placeholders for '%s': linked=%s created=%s removed=%s",
            template.title,
            result.linked,
            result.created,
            result.removed,
        )
    return result


def find_missing_definitions(
    template: PromptTemplate,
    global_placeholders: Iterable[PlaceholderDefinition],
) -> List[str]:
    """Return detected keys with neither a global definition nor an association."""

    defined = {item.key for item in global_placeholders}
    defined.update(key for key in (item.key for item in template.placeholders) if key is not None)
    return [key for key in detect_placeholder_keys(template) if key not in defined]


def _find_by_key(definitions: Iterable[PlaceholderDefinition], key: str) -> PlaceholderDefinition | None:
    for definition in definitions:
        if definition.key == key:
            return definition
    return None


__all__ = [
    "SyncResult",
    "default_label",
    "detect_placeholder_keys",
    "find_missing_definitions",
    "resolved_keys",
    "sync_placeholders",
]
