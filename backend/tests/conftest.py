"""Pytest configuration and shared fixtures."""

import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from docgate.core.config import Settings
from docgate.main import create_app
from docgate.services.ollama_client import OllamaClient
from docgate.storage.document_store import InMemoryDocumentStore


def ollama_reply(response_text: str = "Summary of A") -> httpx.Response:
    return httpx.Response(
        200,
        json={"model": "deepseek-r1:8b", "response": response_text, "done": True, "done_reason": "stop"},
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def ollama_requests() -> list:
    """Requests captured by the stubbed inference endpoint."""
    return []


@pytest.fixture
def make_ollama(settings, ollama_requests):
    created = []

    def _make(handler=None) -> OllamaClient:
        def recording(request: httpx.Request) -> httpx.Response:
            ollama_requests.append(request)
            return handler(request) if handler else ollama_reply()

        ollama = OllamaClient(
            settings.ollama_base_url,
            settings.model_name,
            transport=httpx.MockTransport(recording),
        )
        created.append(ollama)
        return ollama

    yield _make

    # 앱에 주입한 클라이언트는 lifespan 이 닫지 않음
    for ollama in created:
        asyncio.run(ollama.aclose())


@pytest.fixture
def make_client(settings, store, make_ollama):
    """Build a TestClient over an app wired to the in-memory store and a stubbed Ollama."""
    clients = []

    def _make(handler=None, store_override=None, settings_override=None) -> TestClient:
        app = create_app(
            settings_override or settings,
            store=store_override or store,
            ollama=make_ollama(handler),
        )
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def test_client(make_client) -> TestClient:
    return make_client()
