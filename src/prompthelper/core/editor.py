"""Editing session for a single prompt template."""

from __future__ import annotations

import logging
from typing import List

from .errors import ValidationError
from .placeholders.models import PromptTemplate
from .placeholders.parser import extract_keys, placeholder_token
from .placeholders.sync import SyncResult, find_missing_definitions, sync_placeholders
from .store import PlaceholderStore

LOGGER = logging.getLogger(__name__)


class TemplateEditor:
    """Hold unsaved edits of a template and apply them to the store."""

    def __init__(self, template: PromptTemplate, store: PlaceholderStore) -> None:
        self.template = template
        self.store = store

        self.edit_title = template.title
        self.edit_description = template.description or ""
        self.edit_content = template.content
        self.edit_tags: List[str] = list(template.tags)

    def save(self) -> None:
        """Copy the edits onto the template and persist them."""

        if not self.edit_title.strip():
            raise ValidationError("The title must not be empty.")

        self.template.title = self.edit_title
        self.template.description = self.edit_description or None
        self.template.content = self.edit_content
        self.template.tags = list(self.edit_tags)
        self.template.mark_as_updated()
        self.store.save()
        LOGGER.info("Saved template '%s'", self.template.title)

    def detect_and_sync_placeholders(self) -> SyncResult:
        """Align the template's placeholder associations with the edited content."""

        with self.store.transaction():
            self.store.update_content(self.template, self.edit_content)
            return sync_placeholders(self.template, self.store)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------
    def add_tag(self, tag: str) -> bool:
        tag = tag.strip()
        if not tag or tag in self.edit_tags:
            return False
        self.edit_tags.append(tag)
        return True

    def remove_tag(self, tag: str) -> None:
        self.edit_tags = [item for item in self.edit_tags if item != tag]

    # ------------------------------------------------------------------
    # Placeholders
    # ------------------------------------------------------------------
    def insert_placeholder(self, key: str) -> str:
        return placeholder_token(key)

    def detected_placeholder_keys(self) -> List[str]:
        return extract_keys(self.edit_content)

    def missing_placeholder_definitions(self) -> List[str]:
        return find_missing_definitions(self.template, self.store.global_placeholders())


__all__ = ["TemplateEditor"]
