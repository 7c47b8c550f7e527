"""Template library operations: create, duplicate, delete, favourite, search."""

from __future__ import annotations

import logging
from typing import List, Optional

from .placeholders.models import PromptInstance, PromptTemplate, TemplatePlaceholder
from .store import JsonPromptStore

LOGGER = logging.getLogger(__name__)

DEFAULT_TEMPLATE_TITLE = "New Template"
COPY_SUFFIX = " (Copy)"


class TemplateLibrary:
    """Manage the prompt templates held by a store."""

    def __init__(self, store: JsonPromptStore) -> None:
        self.store = store

    def create_template(self, title: str = DEFAULT_TEMPLATE_TITLE, content: str = "") -> PromptTemplate:
        template = PromptTemplate(title=title, content=content)
        with self.store.transaction():
            self.store.insert_template(template)
        LOGGER.info("Created template '%s'", template.title)
        return template

    def duplicate_template(self, template: PromptTemplate) -> PromptTemplate:
        """Copy a template and its placeholder associations (not its history)."""

        duplicate = PromptTemplate(
            title=f"{template.title}{COPY_SUFFIX}",
            description=template.description,
            content=template.content,
            tags=list(template.tags),
            is_favorite=False,
        )
        with self.store.transaction():
            self.store.insert_template(duplicate)
            for association in template.placeholders:
                self.store.insert_association(
                    duplicate,
                    TemplatePlaceholder(
                        template_id=duplicate.id,
                        placeholder=association.placeholder,
                        is_required=association.is_required,
                        sort_order=association.sort_order,
                        template_specific_default_value=association.template_specific_default_value,
                    ),
                )
        LOGGER.info("Duplicated template '%s'", template.title)
        return duplicate

    def delete_template(self, template: PromptTemplate) -> None:
        with self.store.transaction():
            self.store.delete_template(template)
        LOGGER.info("Deleted template '%s'", template.title)

    def toggle_favorite(self, template: PromptTemplate) -> bool:
        template.is_favorite = not template.is_favorite
        template.mark_as_updated()
        self.store.save()
        return template.is_favorite

    def all_tags(self) -> List[str]:
        return sorted({tag for template in self.store.templates() for tag in template.tags})

    def search(
        self,
        text: str = "",
        *,
        favorites_only: bool = False,
        tag: Optional[str] = None,
    ) -> List[PromptTemplate]:
        """Filter templates; favourites come first, then most recently updated."""

        needle = text.strip().lower()
        results = []
        for template in self.store.templates():
            if favorites_only and not template.is_favorite:
                continue
            if tag and tag not in template.tags:
                continue
            if needle and not _matches(template, needle):
                continue
            results.append(template)

        results.sort(key=lambda item: item.updated_at, reverse=True)
        results.sort(key=lambda item: not item.is_favorite)
        return results

    def history(self, template: PromptTemplate) -> List[PromptInstance]:
        return self.store.instances(template.id)


def _matches(template: PromptTemplate, needle: str) -> bool:
    haystack = [template.title, template.description or "", template.content, *template.tags]
    return any(needle in item.lower() for item in haystack)


__all__ = ["COPY_SUFFIX", "DEFAULT_TEMPLATE_TITLE", "TemplateLibrary"]
