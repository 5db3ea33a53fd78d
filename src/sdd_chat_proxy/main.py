"""
SDD Chat Proxy - Application FastAPI Factory.
Relaie le widget de chat vers DeepSeek avec un prompt système SDD.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from . import __version__
from .api.router import api_router
from .config.loader import load_config, get_chat_settings
from .config.settings import ChatProxySettings

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[ChatProxySettings] = None,
    upstream_transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """
    Factory pour créer l'application FastAPI.

    Args:
        settings: Paramètres injectés (sinon lus depuis config.toml)
        upstream_transport: Transport httpx alternatif vers DeepSeek (tests)

    Returns:
        Instance configurée de FastAPI
    """
    if settings is None:
        settings = get_chat_settings(load_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Gestion du cycle de vie de l'application."""
        _startup(app)
        yield
        logger.info("👋 Arrêt du serveur")

    app = FastAPI(
        title="SDD Chat Proxy",
        description="Proxy du widget de chat SDD vers l'API DeepSeek",
        version=__version__,
        lifespan=lifespan
    )

    # Pas de CORSMiddleware: les headers CORS sont posés par le handler
    app.state.settings = settings
    app.state.upstream_transport = upstream_transport

    app.include_router(api_router)
    return app


def _startup(app: FastAPI):
    """Log de démarrage."""
    settings: ChatProxySettings = app.state.settings
    logger.info(
        f"🚀 SDD Chat Proxy: model={settings.model} max_tokens={settings.max_tokens} "
        f"temperature={settings.temperature} bilingual={settings.bilingual}"
    )
    if not settings.resolve_api_key():
        logger.warning(f"⚠️ {settings.api_key_env} non défini: DeepSeek répondra 401")


# Crée l'application pour uvicorn
app = create_app()
