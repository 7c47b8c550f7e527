"""
Storage for templates, placeholder definitions and generated prompts.

Design:
- ``PlaceholderStore`` is the narrow interface the synchronizer and the
  history recorder depend on. Callers inject it; there is no global instance.
- ``JsonPromptStore`` keeps everything in memory and persists to a single JSON
  file. Without a path it behaves as an in-memory store.
- ``transaction()`` is the save boundary: changes made inside the block are
  saved together, and undone in memory if anything raises.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

from .errors import PersistenceError, PlaceholderNotFoundError, TemplateNotFoundError
from .placeholders.models import (
    PlaceholderDefinition,
    PromptInstance,
    PromptTemplate,
    TemplatePlaceholder,
)

LOGGER = logging.getLogger(__name__)

STORE_VERSION = "1"


class PlaceholderStore(ABC):
    """Operations the placeholder synchronizer needs from a backing store."""

    @abstractmethod
    def global_placeholders(self) -> List[PlaceholderDefinition]:
        """Return every definition flagged as global."""

    @abstractmethod
    def insert_placeholder(self, definition: PlaceholderDefinition) -> None:
        ...

    @abstractmethod
    def insert_association(self, template: PromptTemplate, association: TemplatePlaceholder) -> None:
        ...

    @abstractmethod
    def delete_association(self, template: PromptTemplate, association: TemplatePlaceholder) -> None:
        ...

    @abstractmethod
    def insert_instance(self, instance: PromptInstance) -> None:
        ...

    @abstractmethod
    def save(self) -> None:
        """Persist pending changes, raising :class:`PersistenceError` on failure."""

    def update_content(self, template: PromptTemplate, content: str) -> None:
        template.content = content

    @contextmanager
    def transaction(self) -> Iterator["PlaceholderStore"]:
        yield self
        self.save()


class JsonPromptStore(PlaceholderStore):
    """JSON-file backed store for the whole prompt library."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path else None
        self._templates: Dict[str, PromptTemplate] = {}
        self._placeholders: Dict[str, PlaceholderDefinition] = {}
        self._instances: Dict[str, PromptInstance] = {}
        self._journal: Optional[List[Callable[[], None]]] = None

        if self.path and self.path.exists():
            self.load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Replace the in-memory state with the contents of ``self.path``."""

        if not self.path:
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Failed to read '{self.path}': {exc}") from exc

        version = str(data.get("version", "0"))
        if version != STORE_VERSION:
            LOGGER.warning("Store version mismatch: %s != %s", version, STORE_VERSION)

        placeholders = {}
        for item in data.get("placeholders", []) or []:
            definition = PlaceholderDefinition.from_dict(item)
            placeholders[definition.id] = definition

        templates = {}
        for item in data.get("templates", []) or []:
            template = PromptTemplate.from_dict(item, placeholders)
            for association in template.placeholders:
                if association.placeholder is None:
                    LOGGER.warning(
                        "Template '%s' links to a missing placeholder definition (association %s)",
                        template.title,
                        association.id,
                    )
            templates[template.id] = template

        instances = {}
        for item in data.get("instances", []) or []:
            instance = PromptInstance.from_dict(item)
            instances[instance.id] = instance

        self._placeholders = placeholders
        self._templates = templates
        self._instances = instances
        LOGGER.debug(
            "Loaded %d templates, %d placeholders, %d instances from %s",
            len(templates),
            len(placeholders),
            len(instances),
            self.path,
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "version": STORE_VERSION,
            "saved_at": datetime.now(timezone.utc).isoformat(),
            "placeholders": [item.to_dict() for item in self._placeholders.values()],
            "templates": [item.to_dict() for item in self._templates.values()],
            "instances": [item.to_dict() for item in self._instances.values()],
        }

    def save(self) -> None:
        if not self.path:
            return
        payload = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise PersistenceError(f"Failed to write '{self.path}': {exc}") from exc
        LOGGER.debug("Saved prompt library to %s", self.path)

    @contextmanager
    def transaction(self) -> Iterator["JsonPromptStore"]:
        """Group changes into one save; undo them in memory if anything fails."""

        if self._journal is not None:
            # Nested blocks join the outer transaction.
            yield self
            return

        self._journal = []
        try:
            yield self
            self.save()
        except Exception:
            journal, self._journal = self._journal, None
            LOGGER.warning("Rolling back %d pending change(s)", len(journal))
            for undo in reversed(journal):
                undo()
            raise
        finally:
            self._journal = None

    def _record(self, undo: Callable[[], None]) -> None:
        if self._journal is not None:
            self._journal.append(undo)

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------
    def templates(self) -> List[PromptTemplate]:
        return list(self._templates.values())

    def get_template(self, template_id: str) -> PromptTemplate:
        try:
            return self._templates[template_id]
        except KeyError:
            raise TemplateNotFoundError(template_id) from None

    def insert_template(self, template: PromptTemplate) -> None:
        self._templates[template.id] = template
        self._record(lambda: self._templates.pop(template.id, None))

    def update_content(self, template: PromptTemplate, content: str) -> None:
        previous = template.content
        template.content = content
        self._record(lambda: setattr(template, "content", previous))

    def delete_template(self, template: PromptTemplate) -> None:
        """Remove a template together with its generated instances."""

        removed = self._templates.pop(template.id, None)
        orphaned = [item for item in self._instances.values() if item.template_id == template.id]
        for instance in orphaned:
            del self._instances[instance.id]

        def _undo() -> None:
            if removed is not None:
                self._templates[removed.id] = removed
            for instance in orphaned:
                self._instances[instance.id] = instance

        self._record(_undo)

    # ------------------------------------------------------------------
    # Placeholder definitions
    # ------------------------------------------------------------------
    def placeholders(self) -> List[PlaceholderDefinition]:
        return list(self._placeholders.values())

    def global_placeholders(self) -> List[PlaceholderDefinition]:
        return [item for item in self._placeholders.values() if item.is_global]

    def get_placeholder(self, placeholder_id: str) -> PlaceholderDefinition:
        try:
            return self._placeholders[placeholder_id]
        except KeyError:
            raise PlaceholderNotFoundError(placeholder_id) from None

    def find_placeholders(self, key: str) -> List[PlaceholderDefinition]:
        return [item for item in self._placeholders.values() if item.key == key]

    def insert_placeholder(self, definition: PlaceholderDefinition) -> None:
        self._placeholders[definition.id] = definition
        self._record(lambda: self._placeholders.pop(definition.id, None))

    def delete_placeholder(self, definition: PlaceholderDefinition) -> None:
        """Remove a definition and every association that links to it."""

        removed = self._placeholders.pop(definition.id, None)
        detached: List[tuple[PromptTemplate, int, TemplatePlaceholder]] = []
        for template in self._templates.values():
            for index, association in enumerate(template.placeholders):
                if association.placeholder is definition:
                    detached.append((template, index, association))
            template.placeholders = [
                item for item in template.placeholders if item.placeholder is not definition
            ]

        def _undo() -> None:
            if removed is not None:
                self._placeholders[removed.id] = removed
            for template, index, association in detached:
                template.placeholders.insert(index, association)

        self._record(_undo)

    # ------------------------------------------------------------------
    # Associations
    # ------------------------------------------------------------------
    def insert_association(self, template: PromptTemplate, association: TemplatePlaceholder) -> None:
        template.placeholders.append(association)
        self._record(lambda: template.placeholders.remove(association))

    def delete_association(self, template: PromptTemplate, association: TemplatePlaceholder) -> None:
        index = template.placeholders.index(association)
        del template.placeholders[index]
        self._record(lambda: template.placeholders.insert(index, association))

    # ------------------------------------------------------------------
    # Generated instances
    # ------------------------------------------------------------------
    def insert_instance(self, instance: PromptInstance) -> None:
        self._instances[instance.id] = instance
        self._record(lambda: self._instances.pop(instance.id, None))

    def instances(self, template_id: Optional[str] = None) -> List[PromptInstance]:
        """Return generated instances, newest first."""

        items = [
            item
            for item in self._instances.values()
            if template_id is None or item.template_id == template_id
        ]
        return sorted(items, key=lambda item: item.created_at, reverse=True)

    def is_empty(self) -> bool:
        return not self._templates and not self._placeholders


__all__ = ["JsonPromptStore", "PlaceholderStore", "STORE_VERSION"]
