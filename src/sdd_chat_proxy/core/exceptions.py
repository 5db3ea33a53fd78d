"""
Exceptions personnalisées pour SDD Chat Proxy.

Sur le chemin d'une requête, ces erreurs sont des valeurs transportées
par `Err` (voir core/result.py). Seule ConfigurationError est levée, au
démarrage.
"""
from typing import Optional


class ChatProxyError(Exception):
    """Exception de base pour toutes les erreurs du proxy."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or "unknown_error"
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} - Details: {self.details}"
        return f"[{self.code}] {self.message}"


class ConfigurationError(ChatProxyError):
    """Erreur de configuration (fichier manquant, TOML invalide)."""

    def __init__(self, message: str, config_key: str = None):
        super().__init__(
            message=message,
            code="config_error",
            details={"key": config_key} if config_key else {}
        )


class RequestParseError(ChatProxyError):
    """Body absent, JSON invalide ou champ `message` inutilisable."""

    def __init__(self, message: str, reason: str = None):
        super().__init__(
            message=message,
            code="request_parse_error",
            details={"reason": reason} if reason else {}
        )


class UpstreamTransportError(ChatProxyError):
    """Échec réseau vers l'API de complétion."""

    def __init__(self, message: str, error_type: str = None):
        super().__init__(
            message=message,
            code="upstream_transport_error",
            details={"error_type": error_type} if error_type else {}
        )
        self.error_type = error_type


class UpstreamStatusError(ChatProxyError):
    """L'API de complétion a répondu avec un statut non-2xx."""

    def __init__(self, status_code: int, body_preview: Optional[str] = None):
        message = f"DeepSeek API error: {status_code}"
        if body_preview:
            message = f"{message} - {body_preview}"
        super().__init__(
            message=message,
            code="upstream_status_error",
            details={"status_code": status_code, "body": body_preview}
        )
        self.status_code = status_code
        self.body_preview = body_preview


class UpstreamFormatError(ChatProxyError):
    """Réponse 2xx dont le body n'a pas la structure de complétion attendue."""

    def __init__(self, message: str, body_preview: Optional[str] = None):
        super().__init__(
            message=message,
            code="upstream_format_error",
            details={"body": body_preview} if body_preview else {}
        )
        self.body_preview = body_preview
