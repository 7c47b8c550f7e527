"""Sample placeholders and templates for a fresh library."""

from __future__ import annotations

import logging

from .placeholders.models import PlaceholderDefinition, PlaceholderType, PromptTemplate
from .placeholders.sync import sync_placeholders
from .store import JsonPromptStore

LOGGER = logging.getLogger(__name__)

BLOG_POST_CONTENT = """Write a blog post about "{{topic}}" for the audience "{{audience}}".

The tone should be {{tone}}.
The length should be {{length}}.

Structure the post as follows:
1. Introduction with a hook
2. Main part with concrete examples
3. Summary and call to action"""


def seed_sample_data(store: JsonPromptStore) -> PromptTemplate:
    """Insert the sample global placeholders and a blog post template."""

    definitions = [
        PlaceholderDefinition(
            key="audience",
            label="Audience",
            description="The target audience for the content",
        ),
        PlaceholderDefinition(
            key="topic",
            label="Topic",
            description="The main topic of the content",
        ),
        PlaceholderDefinition(
            key="tone",
            label="Tone",
            type=PlaceholderType.SINGLE_CHOICE,
            options=["Professional", "Friendly", "Witty", "Factual"],
            description="The tone of voice",
        ),
        PlaceholderDefinition(
            key="length",
            label="Length",
            type=PlaceholderType.SINGLE_CHOICE,
            options=["Short (100 words)", "Medium (250 words)", "Long (500 words)"],
        ),
    ]
    template = PromptTemplate(
        title="Blog Post Generator",
        description="Generates a blog post for a specific audience",
        content=BLOG_POST_CONTENT,
        tags=["Blog", "Content Marketing", "Text"],
        is_favorite=True,
    )

    with store.transaction():
        for definition in definitions:
            store.insert_placeholder(definition)
        store.insert_template(template)
        sync_placeholders(template, store)

    LOGGER.info("Seeded sample data (%d placeholders, 1 template)", len(definitions))
    return template


def seed_if_empty(store: JsonPromptStore) -> bool:
    if not store.is_empty():
        return False
    seed_sample_data(store)
    return True


__all__ = ["BLOG_POST_CONTENT", "seed_if_empty", "seed_sample_data"]
