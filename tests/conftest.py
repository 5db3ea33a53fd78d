"""
Configuration des tests pytest.
"""
import json
import os
import sys
from typing import Callable, Dict, List

import httpx
import pytest

# Ajoute src au path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from sdd_chat_proxy.config.settings import ChatProxySettings  # noqa: E402


def pytest_configure(config):
    """Déclare les marqueurs du projet."""
    config.addinivalue_line("markers", "integration: test de l'application FastAPI complète")


@pytest.fixture
def settings() -> ChatProxySettings:
    """Settings de test avec une clé API fixe."""
    return ChatProxySettings(api_key="test-key")


@pytest.fixture
def upstream_calls() -> List[httpx.Request]:
    """Requêtes reçues par le faux DeepSeek."""
    return []


@pytest.fixture
def fake_upstream(upstream_calls) -> Callable[..., httpx.MockTransport]:
    """
    Fabrique un transport httpx qui simule DeepSeek.

    Usage: fake_upstream(status=200, json_body={...}) ou fake_upstream(text="...")
    ou fake_upstream(exc=httpx.ConnectError("..."))
    """
    def _make(
        status: int = 200,
        json_body: Dict = None,
        text: str = None,
        exc: Exception = None
    ) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            upstream_calls.append(request)
            if exc is not None:
                raise exc
            if json_body is not None:
                return httpx.Response(status, json=json_body)
            return httpx.Response(status, text=text or "")
        return httpx.MockTransport(handler)

    return _make


def completion_body(content) -> Dict:
    """Body de succès DeepSeek minimal."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def sent_payload(request: httpx.Request) -> Dict:
    """Décode le body JSON envoyé à DeepSeek."""
    return json.loads(request.content.decode("utf-8"))
