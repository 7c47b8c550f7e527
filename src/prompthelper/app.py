"""
Application bootstrap: settings, logging and the shared prompt library store.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from prompthelper.config.app_config import (
    is_debug_enabled,
    load_app_settings,
    load_env_file,
    resolve_data_file,
)
from prompthelper.config.logging_config import ApplicationLogger
from prompthelper.config.paths import app_exports_dir
from prompthelper.core.catalog import PlaceholderCatalog
from prompthelper.core.editor import TemplateEditor
from prompthelper.core.generator import PromptGenerator
from prompthelper.core.library import TemplateLibrary
from prompthelper.core.placeholders.models import PromptTemplate
from prompthelper.core.sample_data import seed_if_empty
from prompthelper.core.store import JsonPromptStore


class PromptHelperApp:
    """Own the store and hand out library, catalogue and session objects."""

    def __init__(
        self,
        settings: Optional[Dict[str, Any]] = None,
        *,
        data_file: Optional[Path] = None,
        configure_logging: bool = True,
    ) -> None:
        load_env_file()
        self.settings = settings if settings is not None else load_app_settings()
        self.debug = is_debug_enabled(self.settings)
        if configure_logging:
            ApplicationLogger().setup(debug=self.debug)
        self.logger = logging.getLogger(__name__)

        self.data_file = Path(data_file) if data_file else resolve_data_file(self.settings)
        self.store = JsonPromptStore(self.data_file)
        self.library = TemplateLibrary(self.store)
        self.catalog = PlaceholderCatalog(self.store)

        general = self.settings.get("general_settings", {})
        if general.get("seed_sample_data", True) and seed_if_empty(self.store):
            self.logger.info("Created sample data in %s", self.data_file)

        self.logger.info("Prompt library opened: %s", self.data_file)

    @property
    def export_dir(self) -> Path:
        configured = self.settings.get("export_settings", {}).get("directory")
        if configured:
            path = Path(configured).expanduser()
            path.mkdir(parents=True, exist_ok=True)
            return path
        return app_exports_dir()

    def editor(self, template: PromptTemplate) -> TemplateEditor:
        return TemplateEditor(template, self.store)

    def generator(self, template: PromptTemplate) -> PromptGenerator:
        return PromptGenerator(template, self.store)


def create_app(**kwargs: Any) -> PromptHelperApp:
    return PromptHelperApp(**kwargs)


__all__ = ["PromptHelperApp", "create_app"]
