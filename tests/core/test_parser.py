from __future__ import annotations

import pytest

from prompthelper.core.placeholders.parser import (
    distinct_keys,
    extract_keys,
    has_unfilled_placeholders,
    is_valid_key,
    placeholder_token,
    replace_placeholders,
    suggest_key,
)


def test_extract_keys_trims_whitespace_in_order() -> None:
    assert extract_keys("Hello {{ name }}, {{age}}") == ["name", "age"]


@pytest.mark.parametrize("text", ["", "no markers here", "{single} braces", "{{}}", None])
def test_extract_keys_without_markers_is_empty(text) -> None:
    assert extract_keys(text) == []


def test_extract_keys_keeps_duplicates_and_distinct_drops_them() -> None:
    text = "{{x}} and {{x}} again, then {{y}}"
    assert extract_keys(text) == ["x", "x", "y"]
    assert distinct_keys(text) == ["x", "y"]


def test_extract_keys_is_permissive_about_key_grammar() -> None:
    keys = extract_keys("Dear {{first name}}, see {{a.b}} and {{ok_key}}")
    assert keys == ["first name", "a.b", "ok_key"]
    assert [key for key in keys if is_valid_key(key)] == ["ok_key"]


def test_extract_keys_with_nested_braces() -> None:
    assert extract_keys("{{{inner}}}") == ["{inner"]


def test_has_unfilled_placeholders() -> None:
    assert has_unfilled_placeholders("Hi {{name}}")
    assert not has_unfilled_placeholders("Hi Alice")


@pytest.mark.parametrize("key", ["name", "user_name-2", "ABC", "1", "-_-"])
def test_is_valid_key_accepts_grammar(key: str) -> None:
    assert is_valid_key(key)


@pytest.mark.parametrize("key", ["", "user name", "user.name", "näme", "name!", "{{name}}", "name\n"])
def test_is_valid_key_rejects_everything_else(key: str) -> None:
    assert not is_valid_key(key)


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Größe und Länge", "groesse_und_laenge"),
        ("User@Name!", "username"),
        ("UserName", "username"),
        ("Über Straße", "ueber_strasse"),
        ("Target audience", "target_audience"),
        ("", ""),
    ],
)
def test_suggest_key(label: str, expected: str) -> None:
    assert suggest_key(label) == expected


def test_suggested_keys_are_valid_when_not_empty() -> None:
    key = suggest_key("Tonalität (kurz)")
    assert key == "tonalitaet_kurz"
    assert is_valid_key(key)


def test_replace_placeholders_partial_values() -> None:
    text = "Hello {{name}}, you are {{age}}."
    assert replace_placeholders(text, {"name": "Alice"}) == "Hello Alice, you are {{age}}."


def test_replace_placeholders_replaces_every_occurrence() -> None:
    assert replace_placeholders("{{x}}-{{x}}", {"x": "1"}) == "1-1"


def test_replace_placeholders_ignores_extra_and_empty_values() -> None:
    assert replace_placeholders("Hi {{name}}", {}) == "Hi {{name}}"
    assert replace_placeholders("Hi {{name}}", {"other": "x"}) == "Hi {{name}}"
    assert replace_placeholders("Hi {{name}}", {"name": ""}) == "Hi "


def test_replace_placeholders_is_single_pass() -> None:
    values = {"a": "{{b}}", "b": "B"}
    assert replace_placeholders("{{a}} {{b}}", values) == "{{b}} B"
    assert replace_placeholders("{{b}} {{a}}", values) == "B {{b}}"


def test_replace_placeholders_is_literal() -> None:
    assert replace_placeholders("{{a.b}} {{a+b}}", {"a.b": "dot"}) == "dot {{a+b}}"
    assert replace_placeholders("{{x}}", {"x": r"\1 $0"}) == r"\1 $0"


def test_replace_placeholders_does_not_match_padded_markers() -> None:
    assert replace_placeholders("{{ name }}", {"name": "Alice"}) == "{{ name }}"


def test_placeholder_token() -> None:
    assert placeholder_token("topic") == "{{topic}}"
