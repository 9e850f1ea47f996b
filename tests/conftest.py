"""Shared fixtures for the Aarya test-suite."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from aarya.models.schemas import KnowledgeEntry


def completion(content):
    """Build an object shaped like a chat-completions response."""
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def welcome_kb():
    return [
        KnowledgeEntry(
            id="1",
            topic="Welcome",
            keywords=["hello", "hi"],
            response="Hello! I am Aarya AI.",
        )
    ]


@pytest.fixture
def mock_client():
    """A stand-in for openai.AsyncOpenAI with a scripted chat.completions.create."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=completion("[HAPPY] Namaste!"))
    return client
