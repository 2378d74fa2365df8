"""Shared fixtures for the RAG example tests."""

import os
from typing import AsyncIterator, Iterator, List
from unittest.mock import MagicMock, patch

import pytest

from rag_example.core import dependencies as core_deps
from rag_example.core.config import Settings
from rag_example.interfaces.vector_store_interface import VectorStoreInterface
from rag_example.models import Document
from rag_example.prompts.template import PromptTemplate


class StubChatModel:
    """Chat model returning a fixed reply, whole or in fragments."""

    def __init__(self, fragments: List[str]):
        self.fragments = fragments
        self.prompts: List[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return "".join(self.fragments)

    def stream(self, prompt: str) -> Iterator[str]:
        self.prompts.append(prompt)
        yield from self.fragments

    async def astream(self, prompt: str) -> AsyncIterator[str]:
        self.prompts.append(prompt)
        for fragment in self.fragments:
            yield fragment


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    with patch.dict(os.environ, {}, clear=True):
        return Settings(_env_file=None)


@pytest.fixture
def stub_chat_model():
    return StubChatModel(["Why do ", "programmers ", "prefer dark mode?"])


@pytest.fixture
def mock_vector_store():
    store = MagicMock(spec=VectorStoreInterface)
    store.search.return_value = [
        Document(id="a", content="A", score=0.9),
        Document(id="b", content="B", score=0.5),
    ]
    return store


@pytest.fixture
def simple_template():
    return PromptTemplate("Q:{input} D:{documents}")


@pytest.fixture(autouse=True)
def reset_service_singletons():
    core_deps.reset_singletons()
    yield
    core_deps.reset_singletons()
