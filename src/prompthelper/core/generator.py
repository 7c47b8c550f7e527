"""Fill a template's placeholders and generate the final prompt."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .history import record_instance
from .placeholders.models import PromptInstance, PromptTemplate, TemplatePlaceholder
from .rendering import preview, render
from .store import PlaceholderStore

LOGGER = logging.getLogger(__name__)


class PromptGenerator:
    """Track filled values for one template and produce prompts from them."""

    def __init__(self, template: PromptTemplate, store: PlaceholderStore) -> None:
        self.template = template
        self.store = store
        self.filled_values: Dict[str, str] = {}
        self.generated_prompt = ""
        self.last_instance: Optional[PromptInstance] = None
        self._apply_defaults()
        self.update_preview()

    @property
    def sorted_placeholders(self) -> List[TemplatePlaceholder]:
        return self.template.sorted_placeholders()

    @property
    def all_required_filled(self) -> bool:
        for association in self.template.placeholders:
            if not association.is_required or association.placeholder is None:
                continue
            if not self.filled_values.get(association.placeholder.key, "").strip():
                return False
        return True

    def set_value(self, key: str, value: str) -> None:
        self.filled_values[key] = value
        self.update_preview()

    def update_preview(self) -> str:
        self.generated_prompt = preview(self.template, self.filled_values)
        return self.generated_prompt

    def generate(self, *, notes: Optional[str] = None) -> str:
        """Render the prompt and add it to the history.

        Render errors propagate; history failures are only logged.
        """

        prompt = render(self.template, self.filled_values)
        self.generated_prompt = prompt
        self.last_instance = record_instance(
            self.store,
            self.template,
            self.filled_values,
            prompt,
            notes=notes,
        )
        LOGGER.info("Generated prompt from '%s'", self.template.title)
        return prompt

    def reset(self) -> None:
        self.filled_values = {}
        self._apply_defaults()
        self.update_preview()

    def _apply_defaults(self) -> None:
        for association in self.template.placeholders:
            if association.placeholder is None:
                continue
            default = association.effective_default_value
            if default is not None:
                self.filled_values[association.placeholder.key] = default


__all__ = ["PromptGenerator"]
