"""Placeholder parsing utilities for ``{{key}}`` markers."""

from __future__ import annotations

import re
from typing import Iterable, List, Mapping

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")
KEY_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
INVALID_KEY_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")

_TRANSLITERATIONS = (
    ("ä", "ae"),
    ("ö", "oe"),
    ("ü", "ue"),
    ("ß", "ss"),
)


def extract_keys(text: str) -> List[str]:
    """Return every placeholder key in ``text`` in order of appearance.

    Captured keys are stripped of surrounding whitespace. Duplicates are kept;
    use :func:`distinct_keys` when each key should appear once. The key grammar
    is not enforced here, see :func:`is_valid_key`.
    """

    return [match.group(1).strip() for match in PLACEHOLDER_PATTERN.finditer(text or "")]


def distinct_keys(text: str) -> List[str]:
    """Return the placeholder keys in ``text`` once each, first occurrence wins."""

    return list(dict.fromkeys(extract_keys(text)))


def has_unfilled_placeholders(text: str) -> bool:
    return PLACEHOLDER_PATTERN.search(text or "") is not None


def is_valid_key(key: str) -> bool:
    """Return ``True`` when ``key`` only uses letters, digits, ``_`` and ``-``."""

    return bool(key) and KEY_PATTERN.fullmatch(key) is not None


def suggest_key(label: str) -> str:
    """Derive a placeholder key from a human readable label.

    ``"Größe und Länge"`` becomes ``"groesse_und_laenge"``. The result is not
    checked for uniqueness.
    """

    key = (label or "").lower().replace(" ", "_")
    for source, target in _TRANSLITERATIONS:
        key = key.replace(source, target)
    return INVALID_KEY_CHARS_RE.sub("", key)


def placeholder_token(key: str) -> str:
    return "{{" + key + "}}"


def replace_placeholders(text: str, values: Mapping[str, str]) -> str:
    """Replace each ``{{key}}`` literal with its value in a single pass.

    Substituted values are never scanned again, so a value containing
    ``{{other}}`` stays as written.
    """

    text = text or ""
    if not values:
        return text

    tokens = {placeholder_token(key): "" if value is None else str(value) for key, value in values.items()}
    # Longest tokens first so overlapping literals resolve deterministically.
    pattern = re.compile("|".join(re.escape(token) for token in sorted(tokens, key=len, reverse=True)))
    return pattern.sub(lambda match: tokens[match.group(0)], text)


def sorted_distinct(keys: Iterable[str]) -> List[str]:
    return sorted(set(keys))


__all__ = [
    "KEY_PATTERN",
    "PLACEHOLDER_PATTERN",
    "distinct_keys",
    "extract_keys",
    "has_unfilled_placeholders",
    "is_valid_key",
    "placeholder_token",
    "replace_placeholders",
    "sorted_distinct",
    "suggest_key",
]
