from __future__ import annotations

import logging

from prompthelper.core.placeholders.models import PlaceholderType, PromptTemplate, TemplatePlaceholder
from prompthelper.core.placeholders.sync import (
    default_label,
    detect_placeholder_keys,
    find_missing_definitions,
    sync_placeholders,
)

from helpers import choice_definition, text_definition


def _keys(template: PromptTemplate) -> list:
    return [item.key for item in template.placeholders]


def test_sync_creates_local_text_definitions(store) -> None:
    template = PromptTemplate(title="Greeting", content="Hello {{name}}, you are {{age}}.")
    store.insert_template(template)

    result = sync_placeholders(template, store)

    assert result.created == ["name", "age"]
    assert result.linked == []
    assert _keys(template) == ["name", "age"]
    assert [item.sort_order for item in template.placeholders] == [0, 1]
    assert all(item.is_required for item in template.placeholders)

    definition = template.placeholders[0].placeholder
    assert definition.type is PlaceholderType.TEXT
    assert definition.label == "Name"
    assert definition.is_global is False
    assert store.get_placeholder(definition.id) is definition
    assert store.global_placeholders() == []


def test_sync_links_existing_global_definition(store) -> None:
    tone = choice_definition("tone", ["Friendly", "Formal"])
    store.insert_placeholder(tone)
    template = PromptTemplate(title="T", content="Be {{tone}} about {{topic}}")

    result = sync_placeholders(template, store)

    assert result.linked == ["tone"]
    assert result.created == ["topic"]
    assert template.placeholders[0].placeholder is tone
    assert len(store.placeholders()) == 2


def test_sync_ignores_non_global_definitions_of_other_templates(store) -> None:
    local = text_definition("name", is_global=False)
    store.insert_placeholder(local)
    template = PromptTemplate(title="T", content="{{name}}")

    result = sync_placeholders(template, store)

    assert result.created == ["name"]
    assert template.placeholders[0].placeholder is not local


def test_sync_is_idempotent(store) -> None:
    template = PromptTemplate(title="T", content="{{a}} {{b}} {{a}}")
    sync_placeholders(template, store)
    before = list(template.placeholders)
    definitions = len(store.placeholders())

    result = sync_placeholders(template, store)

    assert not result.changed
    assert template.placeholders == before
    assert len(store.placeholders()) == definitions


def test_sync_removes_exactly_the_dropped_key(store) -> None:
    template = PromptTemplate(title="T", content="{{x}} and {{y}}")
    sync_placeholders(template, store)
    kept = template.placeholders[0]

    template.content = "{{x}}"
    result = sync_placeholders(template, store)

    assert result.removed == ["y"]
    assert template.placeholders == [kept]


def test_sync_appends_new_keys_after_existing_ones(store) -> None:
    template = PromptTemplate(title="T", content="{{b}}")
    sync_placeholders(template, store)

    template.content = "{{a}} {{b}} {{c}}"
    sync_placeholders(template, store)

    assert _keys(template) == ["b", "a", "c"]
    assert [item.sort_order for item in template.placeholders] == [0, 1, 2]


def test_sync_skips_unresolved_associations(store, caplog) -> None:
    template = PromptTemplate(title="T", content="{{name}}")
    orphan = TemplatePlaceholder(template_id=template.id, placeholder=None)
    template.placeholders.append(orphan)

    with caplog.at_level(logging.WARNING):
        result = sync_placeholders(template, store)

    assert result.created == ["name"]
    assert orphan in template.placeholders
    assert "definition is missing" in caplog.text


def test_sync_empty_content_removes_everything(store) -> None:
    template = PromptTemplate(title="T", content="{{a}}")
    sync_placeholders(template, store)

    template.content = ""
    result = sync_placeholders(template, store)

    assert result.removed == ["a"]
    assert template.placeholders == []


def test_default_label_capitalises_words() -> None:
    assert default_label("name") == "Name"
    assert default_label("first name") == "First Name"
    assert default_label("user_name") == "User_name"


def test_detect_and_find_missing_definitions(store) -> None:
    topic = text_definition("topic")
    template = PromptTemplate(title="T", content="{{topic}} {{zeta}} {{alpha}} {{zeta}}")

    assert detect_placeholder_keys(template) == ["alpha", "topic", "zeta"]
    assert find_missing_definitions(template, [topic]) == ["alpha", "zeta"]
