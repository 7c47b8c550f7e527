"""Import and export prompt templates as Markdown with YAML front matter."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

import frontmatter

from prompthelper.core.errors import ValidationError
from prompthelper.core.placeholders.models import PromptTemplate
from prompthelper.core.placeholders.sync import sync_placeholders
from prompthelper.core.store import JsonPromptStore

LOGGER = logging.getLogger(__name__)

DEFAULT_IMPORT_TITLE = "Imported Template"


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


def template_metadata(template: PromptTemplate) -> Dict[str, Any]:
    """Return the front matter payload describing ``template``."""

    placeholders: List[Dict[str, Any]] = []
    for association in template.sorted_placeholders():
        if association.placeholder is None:
            continue
        entry: Dict[str, Any] = {
            "key": association.placeholder.key,
            "required": association.is_required,
            "sort_order": association.sort_order,
        }
        if association.template_specific_default_value is not None:
            entry["default"] = association.template_specific_default_value
        placeholders.append(entry)

    return _prune_empty(
        {
            "title": template.title,
            "description": template.description,
            "tags": list(template.tags),
            "favorite": template.is_favorite or None,
            "placeholders": placeholders,
        }
    )


def export_template_markdown(template: PromptTemplate) -> str:
    post = frontmatter.Post(template.content, **template_metadata(template))
    return frontmatter.dumps(post)


def write_template_file(template: PromptTemplate, directory: Path) -> Path:
    """Write ``template`` into ``directory`` using a filename derived from its title."""

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = _unique_path(directory, _slugify(template.title))
    path.write_text(export_template_markdown(template), encoding="utf-8")
    LOGGER.info("Exported template '%s' to %s", template.title, path)
    return path


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


def import_template_markdown(text: str, store: JsonPromptStore) -> PromptTemplate:
    """Create a template from Markdown and link its placeholders.

    Placeholder overrides in the front matter (required flag, order and
    template default) are applied after synchronisation.
    """

    document = frontmatter.loads(text)
    metadata = document.metadata or {}

    template = PromptTemplate(
        title=str(metadata.get("title") or "").strip() or DEFAULT_IMPORT_TITLE,
        description=metadata.get("description") or None,
        content=document.content,
        tags=[str(tag) for tag in _as_list(metadata.get("tags"))],
        is_favorite=metadata.get("favorite") is True,
    )
    overrides = _placeholder_overrides(metadata.get("placeholders"))

    with store.transaction():
        store.insert_template(template)
        sync_placeholders(template, store)
        for association in template.placeholders:
            override = overrides.get(association.key or "")
            if not override:
                continue
            if "required" in override:
                association.is_required = override["required"]
            if "sort_order" in override:
                association.sort_order = override["sort_order"]
            if override.get("default") is not None:
                association.template_specific_default_value = str(override["default"])

    LOGGER.info("Imported template '%s'", template.title)
    return template


def read_template_file(path: Path, store: JsonPromptStore) -> PromptTemplate:
    return import_template_markdown(Path(path).read_text(encoding="utf-8"), store)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _placeholder_overrides(payload: Any) -> Dict[str, Mapping[str, Any]]:
    overrides: Dict[str, Mapping[str, Any]] = {}
    for entry in _as_list(payload):
        if isinstance(entry, Mapping) and entry.get("key"):
            overrides[str(entry["key"])] = _checked_override(entry)
        else:
            LOGGER.warning("Ignoring malformed placeholder entry in front matter: %r", entry)
    return overrides


def _checked_override(entry: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the override with ``required`` and ``sort_order`` type-checked.

    Raises :class:`ValidationError` for a non-boolean ``required`` or a
    non-integer ``sort_order``.
    """

    key = entry["key"]
    override = dict(entry)
    if "required" in override and not isinstance(override["required"], bool):
        raise ValidationError(f"Placeholder '{key}': 'required' must be true or false.")
    if "sort_order" in override:
        value = override["sort_order"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"Placeholder '{key}': 'sort_order' must be a whole number.")
    return override


def _as_list(value: Any) -> Iterable[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return value
    return [value]


def _slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.strip().lower())
    slug = slug.strip("-")
    return slug or "template"


def _unique_path(directory: Path, stem: str) -> Path:
    candidate = directory / f"{stem}.md"
    index = 2
    while candidate.exists():
        candidate = directory / f"{stem}-{index}.md"
        index += 1
    return candidate


def _prune_empty(payload: Mapping[str, Any]) -> Dict[str, Any]:
    clean: Dict[str, Any] = {}
    for key, value in payload.items():
        if value in (None, "", [], {}, ()):
            continue
        clean[key] = value
    return clean


__all__ = [
    "export_template_markdown",
    "import_template_markdown",
    "read_template_file",
    "template_metadata",
    "write_template_file",
]
