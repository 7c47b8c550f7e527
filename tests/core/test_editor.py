from __future__ import annotations

import pytest

from prompthelper.core.editor import TemplateEditor
from prompthelper.core.errors import PersistenceError, ValidationError
from prompthelper.core.placeholders.models import PromptTemplate
from prompthelper.core.placeholders.sync import sync_placeholders
from prompthelper.core.store import JsonPromptStore

from helpers import text_definition


@pytest.fixture
def template(file_store: JsonPromptStore) -> PromptTemplate:
    template = PromptTemplate(title="Draft", content="Hello {{name}}", description="old")
    with file_store.transaction():
        file_store.insert_template(template)
    return template


def test_save_applies_edits(file_store: JsonPromptStore, template: PromptTemplate) -> None:
    editor = TemplateEditor(template, file_store)
    previous = template.updated_at
    editor.edit_title = "Final"
    editor.edit_description = ""
    editor.edit_content = "Bye {{name}}"
    editor.add_tag("mail")

    editor.save()

    assert template.title == "Final"
    assert template.description is None
    assert template.content == "Bye {{name}}"
    assert template.tags == ["mail"]
    assert template.updated_at >= previous
    assert JsonPromptStore(file_store.path).get_template(template.id).title == "Final"


def test_save_rejects_blank_title(file_store: JsonPromptStore, template: PromptTemplate) -> None:
    editor = TemplateEditor(template, file_store)
    editor.edit_title = "  "

    with pytest.raises(ValidationError):
        editor.save()

    assert template.title == "Draft"


def test_detect_and_sync_placeholders(file_store: JsonPromptStore, template: PromptTemplate) -> None:
    editor = TemplateEditor(template, file_store)
    editor.edit_content = "Hello {{name}} from {{city}}"

    result = editor.detect_and_sync_placeholders()

    assert result.created == ["name", "city"]
    assert template.content == "Hello {{name}} from {{city}}"
    reloaded = JsonPromptStore(file_store.path).get_template(template.id)
    assert [item.key for item in reloaded.placeholders] == ["name", "city"]


def test_failed_sync_keeps_content_and_associations_consistent(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    store = JsonPromptStore(blocker / "library.json")
    template = PromptTemplate(title="T", content="{{a}}")
    store.insert_template(template)
    sync_placeholders(template, store)
    editor = TemplateEditor(template, store)
    editor.edit_content = "{{b}}"

    with pytest.raises(PersistenceError):
        editor.detect_and_sync_placeholders()

    assert template.content == "{{a}}"
    assert [item.key for item in template.placeholders] == ["a"]
    assert editor.edit_content == "{{b}}"


def test_tags_are_trimmed_and_unique(store: JsonPromptStore) -> None:
    editor = TemplateEditor(PromptTemplate(title="T", tags=["a"]), store)

    assert editor.add_tag(" b ")
    assert not editor.add_tag("a")
    assert not editor.add_tag("   ")
    editor.remove_tag("a")

    assert editor.edit_tags == ["b"]


def test_placeholder_helpers(store: JsonPromptStore) -> None:
    store.insert_placeholder(text_definition("topic"))
    template = PromptTemplate(title="T", content="{{topic}} {{tone}}")
    editor = TemplateEditor(template, store)
    editor.edit_content = "{{a}} {{a}}"

    assert editor.insert_placeholder("topic") == "{{topic}}"
    assert editor.detected_placeholder_keys() == ["a", "a"]
    assert editor.missing_placeholder_definitions() == ["tone"]
