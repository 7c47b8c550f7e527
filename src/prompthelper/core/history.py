"""History of generated prompts."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from .errors import PersistenceError
from .placeholders.models import PromptInstance, PromptTemplate
from .store import PlaceholderStore

LOGGER = logging.getLogger(__name__)


def record_instance(
    store: PlaceholderStore,
    template: PromptTemplate,
    values: Mapping[str, str],
    generated_text: str,
    *,
    notes: Optional[str] = None,
) -> Optional[PromptInstance]:
    """Store a generated prompt and return it.

    Storage failures are logged and ``None`` is returned.
    """

    instance = PromptInstance(
        template_id=template.id,
        filled_values=dict(values),
        generated_text=generated_text,
        notes=notes,
    )
    try:
        with store.transaction():
            store.insert_instance(instance)
    except PersistenceError as exc:
        LOGGER.warning("Could not save prompt history for '%s': %s", template.title, exc)
        return None
    return instance


__all__ = ["record_instance"]
