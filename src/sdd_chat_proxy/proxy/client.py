"""
Client HTTPX vers l'API de complétion DeepSeek.

Un appel par invocation, sans retry: chaque erreur est retournée sous
forme de `Err` et convertie en réponse 500 par le handler.
"""
import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config.settings import ChatProxySettings
from ..core.exceptions import (
    UpstreamTransportError,
    UpstreamStatusError,
    UpstreamFormatError,
)
from ..core.language import Language
from ..core.prompts import fallback_reply
from ..core.result import Ok, Err, Result

logger = logging.getLogger(__name__)


class CompletionClient:
    """
    Client HTTP pour `/v1/chat/completions`.

    Un nouvel `httpx.AsyncClient` est ouvert pour chaque appel: aucune
    connexion n'est partagée entre invocations.
    """

    def __init__(
        self,
        settings: ChatProxySettings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings
        self._transport = transport

    def build_headers(self) -> Dict[str, str]:
        """Headers de l'appel upstream (clé lue au moment de l'appel)."""
        return {
            "Authorization": f"Bearer {self.settings.resolve_api_key()}",
            "Content-Type": "application/json",
        }

    def build_payload(self, system_prompt: str, message: str) -> Dict[str, Any]:
        """Body de complétion: exactement un message system puis un message user."""
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": message},
        ]
        return {
            "model": self.settings.model,
            "messages": messages,
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
            "stream": False,
        }

    def _truncate(self, text: str) -> str:
        limit = self.settings.error_body_limit
        if len(text) <= limit:
            return text
        return text[:limit] + "..."

    async def complete(self, system_prompt: str, message: str) -> Result[Dict[str, Any]]:
        """
        Envoie la requête de complétion.

        Returns:
            Ok(body JSON) si le statut est 2xx et le body bien formé,
            Err(UpstreamTransportError | UpstreamStatusError | UpstreamFormatError) sinon
        """
        payload = self.build_payload(system_prompt, message)
        timeout = httpx.Timeout(self.settings.timeout)

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.post(
                    self.settings.api_url,
                    headers=self.build_headers(),
                    json=payload
                )
        except httpx.TransportError as e:
            logger.error(f"❌ [UPSTREAM] Échec réseau vers {self.settings.api_url}: {e!r}")
            return Err(UpstreamTransportError(
                message=str(e) or e.__class__.__name__,
                error_type=e.__class__.__name__
            ))

        if not response.is_success:
            preview = self._truncate(response.text)
            logger.error(f"❌ [UPSTREAM] Statut {response.status_code}: {preview}")
            return Err(UpstreamStatusError(response.status_code, preview or None))

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            preview = self._truncate(response.text)
            logger.error(f"❌ [UPSTREAM] Body non JSON: {preview}")
            return Err(UpstreamFormatError("DeepSeek API returned a non-JSON body", preview))

        if not isinstance(data, dict) or not isinstance(data.get("choices"), list):
            preview = self._truncate(response.text)
            logger.error(f"❌ [UPSTREAM] Structure de complétion inattendue: {preview}")
            return Err(UpstreamFormatError("DeepSeek API response has no 'choices' list", preview))

        usage = data.get("usage")
        if isinstance(usage, dict):
            logger.debug(
                f"📊 [UPSTREAM] Tokens: prompt={usage.get('prompt_tokens')} "
                f"completion={usage.get('completion_tokens')}"
            )
        return Ok(data)


def extract_reply(data: Dict[str, Any], language: Language) -> str:
    """
    Extrait le contenu du premier choix.

    Une liste vide, un choix sans message ou un contenu vide donnent la
    réponse de repli dans la langue détectée.
    """
    choices = data.get("choices") or []
    first = choices[0] if choices else None
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None

    if isinstance(content, str) and content:
        return content
    logger.warning("⚠️ [UPSTREAM] Complétion vide, réponse de repli utilisée")
    return fallback_reply(language)


def create_completion_client(
    settings: ChatProxySettings,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> CompletionClient:
    """
    Crée un client de complétion.

    Args:
        settings: Paramètres du handler
        transport: Transport httpx alternatif (tests)

    Returns:
        Instance de CompletionClient
    """
    return CompletionClient(settings=settings, transport=transport)
