"""
ChatProxyHandler: une requête HTTP entrante -> une réponse JSON.

Cycle par invocation:
    reçu -> OPTIONS (préflight) | parse -> langue -> prompt -> DeepSeek -> réponse
Toute erreur termine en réponse 500 bien formée, jamais en exception.
"""
import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

import httpx

from ..config.settings import ChatProxySettings
from ..core.constants import CORS_PREFLIGHT_HEADERS, JSON_HEADERS, CREDENTIAL_ERROR_STATUSES
from ..core.exceptions import (
    ChatProxyError,
    RequestParseError,
    UpstreamFormatError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from ..core.language import Language, detect_language, detect_language_from_body
from ..core.prompts import select_system_prompt, unavailable_reply
from ..core.result import Ok, Err, Result
from .client import CompletionClient, create_completion_client, extract_reply

logger = logging.getLogger(__name__)

RawBody = Union[str, bytes, None]

# Déjà loggées en détail par le client
_UPSTREAM_ERRORS = (UpstreamTransportError, UpstreamStatusError, UpstreamFormatError)


@dataclass
class ChatResponse:
    """Réponse HTTP normalisée, indépendante du framework."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None

    def content(self) -> str:
        """Body sérialisé (chaîne vide pour le préflight)."""
        if self.body is None:
            return ""
        return json.dumps(self.body, ensure_ascii=False)

    def to_event(self) -> Dict[str, Any]:
        """Format de retour d'une fonction Netlify/Lambda."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.content(),
        }


def preflight_response() -> ChatResponse:
    """Réponse au préflight CORS."""
    headers = dict(CORS_PREFLIGHT_HEADERS)
    headers["Content-Type"] = JSON_HEADERS["Content-Type"]
    return ChatResponse(status_code=200, headers=headers, body=None)


def parse_message(raw_body: RawBody) -> Result[str]:
    """
    Extrait le champ `message` du body JSON.

    Un message vide ou blanc est refusé ici, sans appel à DeepSeek
    (l'ancienne fonction Netlify le transmettait tel quel).

    Returns:
        Ok(message) ou Err(RequestParseError)
    """
    if raw_body is None or not raw_body.strip():
        return Err(RequestParseError("Request body is empty", reason="empty_body"))

    try:
        data = json.loads(raw_body)
    except (ValueError, TypeError) as e:
        return Err(RequestParseError(f"Invalid JSON body: {e}", reason="invalid_json"))

    if not isinstance(data, dict):
        return Err(RequestParseError("JSON body must be an object", reason="not_an_object"))

    message = data.get("message")
    if not isinstance(message, str):
        return Err(RequestParseError("Field 'message' must be a string", reason="missing_message"))
    if not message.strip():
        return Err(RequestParseError("Field 'message' must not be empty", reason="empty_message"))

    return Ok(message)


class ChatProxyHandler:
    """
    Traduit une requête entrante en une réponse sortante, en déléguant
    la génération du texte à DeepSeek.

    Le handler ne garde aucun état entre deux invocations: ses seuls
    attributs sont la configuration et le client, fixés à la construction.
    """

    def __init__(
        self,
        settings: Optional[ChatProxySettings] = None,
        client: Optional[CompletionClient] = None
    ):
        self.settings = settings or ChatProxySettings()
        self._client = client or create_completion_client(self.settings)

    async def handle(self, method: str, raw_body: RawBody) -> ChatResponse:
        """
        Traite une requête.

        Args:
            method: Méthode HTTP
            raw_body: Body brut (texte ou octets)

        Returns:
            ChatResponse 200 (préflight ou réponse) ou 500 (erreur)
        """
        if (method or "").upper() == "OPTIONS":
            return preflight_response()

        try:
            result = await self._process(raw_body)
        except Exception as e:
            logger.exception(f"❌ [CHAT] Erreur inattendue: {e!r}")
            result = Err(ChatProxyError(str(e) or e.__class__.__name__, code="internal_error"))

        if isinstance(result, Err):
            return self._error_response(result.error, raw_body)
        return result.value

    async def handle_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Adaptateur fonction Netlify: `{httpMethod, body, isBase64Encoded}`
        -> `{statusCode, headers, body}`.
        """
        method = event.get("httpMethod") or "POST"
        raw_body = event.get("body")

        if raw_body and event.get("isBase64Encoded"):
            try:
                raw_body = base64.b64decode(raw_body, validate=True)
            except (binascii.Error, ValueError):
                logger.warning("⚠️ [CHAT] Body base64 invalide, traité tel quel")

        response = await self.handle(method, raw_body)
        return response.to_event()

    async def _process(self, raw_body: RawBody) -> Result[ChatResponse]:
        parsed = parse_message(raw_body)
        if isinstance(parsed, Err):
            return parsed
        message = parsed.value

        language = detect_language(message)
        system_prompt = select_system_prompt(language, self.settings.bilingual)
        logger.info(f"💬 [CHAT] Message reçu ({language.value}, {len(message)} caractères)")

        completion = await self._client.complete(system_prompt, message)
        if isinstance(completion, Err):
            return completion

        reply = extract_reply(completion.value, language)
        return Ok(ChatResponse(
            status_code=200,
            headers=dict(JSON_HEADERS),
            body={"reply": reply, "language": language.value}
        ))

    def _error_response(self, error: ChatProxyError, raw_body: RawBody) -> ChatResponse:
        derived: Optional[Language] = detect_language_from_body(raw_body)
        language = derived or self.settings.default_language

        credential_hint = (
            isinstance(error, UpstreamStatusError)
            and error.status_code in CREDENTIAL_ERROR_STATUSES
        )
        if not isinstance(error, _UPSTREAM_ERRORS):
            logger.error(f"❌ [CHAT] {error}")

        body: Dict[str, Any] = {
            "reply": unavailable_reply(language, credential_hint=credential_hint),
            "error": error.message,
        }
        if derived is not None:
            body["language"] = derived.value

        return ChatResponse(status_code=500, headers=dict(JSON_HEADERS), body=body)


def create_chat_handler(
    settings: Optional[ChatProxySettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> ChatProxyHandler:
    """
    Crée un handler avec son client de complétion.

    Args:
        settings: Paramètres (défauts si None)
        transport: Transport httpx alternatif (tests)
    """
    settings = settings or ChatProxySettings()
    return ChatProxyHandler(
        settings=settings,
        client=create_completion_client(settings, transport=transport)
    )
