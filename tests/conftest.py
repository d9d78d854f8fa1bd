"""
Shared test fixtures for the support assistant test suite.

Provides: fake OpenAI client, empty knowledge store, services wired to the fake client.
"""

import pytest

from fakes import make_fake_client, make_services
from support_rag.rag.knowledge_store import InMemoryKnowledgeStore
from support_rag.services import SupportServices


@pytest.fixture
def fake_client():
    return make_fake_client()


@pytest.fixture
def store() -> InMemoryKnowledgeStore:
    return InMemoryKnowledgeStore()


@pytest.fixture
def services(fake_client) -> SupportServices:
    return make_services(fake_client)
