from __future__ import annotations

import pytest

from prompthelper.core.errors import MissingRequiredPlaceholderError
from prompthelper.core.generator import PromptGenerator
from prompthelper.core.store import JsonPromptStore

from helpers import make_template, text_definition


def test_defaults_fill_values_and_preview(store: JsonPromptStore) -> None:
    template = make_template(
        "Write for {{audience}} about {{topic}}",
        text_definition("audience", default_value="developers"),
        text_definition("topic"),
    )
    template.placeholders[1].template_specific_default_value = "testing"

    generator = PromptGenerator(template, store)

    assert generator.filled_values == {"audience": "developers", "topic": "testing"}
    assert generator.generated_prompt == "Write for developers about testing"


def test_set_value_updates_preview(store: JsonPromptStore) -> None:
    generator = PromptGenerator(make_template("Hi {{name}}", text_definition("name")), store)

    assert generator.generated_prompt == "Hi {{name}}"
    assert not generator.all_required_filled

    generator.set_value("name", "Alice")

    assert generator.generated_prompt == "Hi Alice"
    assert generator.all_required_filled


def test_generate_records_history(file_store: JsonPromptStore) -> None:
    template = make_template("Hi {{name}}", text_definition("name"))
    generator = PromptGenerator(template, file_store)
    generator.set_value("name", "Alice")

    prompt = generator.generate(notes="ok")

    assert prompt == "Hi Alice"
    assert generator.last_instance is not None
    assert generator.last_instance.notes == "ok"
    assert [item.generated_text for item in file_store.instances(template.id)] == ["Hi Alice"]


def test_generate_propagates_render_errors(store: JsonPromptStore) -> None:
    template = make_template("Hi {{name}}", text_definition("name"))
    generator = PromptGenerator(template, store)

    with pytest.raises(MissingRequiredPlaceholderError):
        generator.generate()

    assert store.instances() == []
    assert generator.last_instance is None


def test_reset_restores_defaults(store: JsonPromptStore) -> None:
    template = make_template("{{tone}}", text_definition("tone", default_value="calm"))
    generator = PromptGenerator(template, store)
    generator.set_value("tone", "loud")

    generator.reset()

    assert generator.filled_values == {"tone": "calm"}
    assert generator.generated_prompt == "calm"
