"""
Routes API pour le health check.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...config.settings import ChatProxySettings
from ..dependencies import get_settings

router = APIRouter()


@router.get("/health")
async def health_check(settings: ChatProxySettings = Depends(get_settings)) -> Dict[str, Any]:
    """Health check: modèle, mode bilingue et présence de la clé API."""
    return {
        "status": "ok",
        "model": settings.model,
        "bilingual": settings.bilingual,
        "api_key_configured": bool(settings.resolve_api_key()),
    }
