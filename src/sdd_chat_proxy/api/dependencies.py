"""
Fonctions de dépendance FastAPI.
"""
from fastapi import Request

from ..config.settings import ChatProxySettings
from ..proxy.handler import ChatProxyHandler, create_chat_handler


def get_settings(request: Request) -> ChatProxySettings:
    """Retourne les settings stockés dans l'app state."""
    return request.app.state.settings


def get_chat_handler(request: Request) -> ChatProxyHandler:
    """Construit un handler neuf pour la requête courante."""
    return create_chat_handler(
        settings=request.app.state.settings,
        transport=getattr(request.app.state, "upstream_transport", None)
    )
