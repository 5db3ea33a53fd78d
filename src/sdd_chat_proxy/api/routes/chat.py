"""
Route du widget de chat.

`/.netlify/functions/chat` reste exposé pour les front-ends déployés
avec l'ancienne fonction Netlify.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from ...proxy.handler import ChatProxyHandler
from ..dependencies import get_chat_handler

router = APIRouter()


# Toute méthode autre que OPTIONS passe par le handler (500 JSON si body absent)
CHAT_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/chat", methods=CHAT_METHODS)
@router.api_route("/.netlify/functions/chat", methods=CHAT_METHODS)
async def chat(
    request: Request,
    handler: ChatProxyHandler = Depends(get_chat_handler)
) -> Response:
    """Relaie un message du widget vers DeepSeek."""
    body = await request.body()
    result = await handler.handle(request.method, body)
    return Response(
        content=result.content(),
        status_code=result.status_code,
        headers=result.headers,
    )
