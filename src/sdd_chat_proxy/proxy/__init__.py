"""
Proxy HTTP vers l'API de complétion.
"""

from .client import CompletionClient, create_completion_client, extract_reply
from .handler import (
    ChatProxyHandler,
    ChatResponse,
    create_chat_handler,
    parse_message,
    preflight_response,
)

__all__ = [
    "CompletionClient",
    "create_completion_client",
    "extract_reply",
    "ChatProxyHandler",
    "ChatResponse",
    "create_chat_handler",
    "parse_message",
    "preflight_response",
]
