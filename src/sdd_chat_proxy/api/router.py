"""
Router principal de l'API.
"""
from fastapi import APIRouter

from .routes import chat, health

# Router principal
api_router = APIRouter()

api_router.include_router(chat.router, prefix="", tags=["chat"])
api_router.include_router(health.router, prefix="", tags=["health"])
