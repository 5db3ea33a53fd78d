"""
Dataclass de configuration injectée dans le handler.
"""
import os
from dataclasses import dataclass
from typing import Optional

from ..core.constants import (
    DEEPSEEK_API_URL,
    DEEPSEEK_MODEL,
    DEEPSEEK_API_KEY_ENV,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    DEFAULT_BILINGUAL,
    DEFAULT_LANGUAGE,
    DEFAULT_ERROR_BODY_LIMIT,
)
from ..core.language import Language


@dataclass(frozen=True)
class ChatProxySettings:
    """
    Paramètres d'une instance du handler.

    Les anciennes variantes de la fonction (limites de tokens,
    température, prompts bilingues ou non) se résument à
    `max_tokens`, `temperature` et `bilingual`.
    """
    api_url: str = DEEPSEEK_API_URL
    model: str = DEEPSEEK_MODEL
    api_key: Optional[str] = None
    api_key_env: str = DEEPSEEK_API_KEY_ENV
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    bilingual: bool = DEFAULT_BILINGUAL
    default_language: Language = Language(DEFAULT_LANGUAGE)
    # None = pas de timeout côté client, seule la plateforme borne l'appel
    timeout: Optional[float] = None
    error_body_limit: int = DEFAULT_ERROR_BODY_LIMIT
    log_level: str = "INFO"

    def resolve_api_key(self) -> str:
        """
        Retourne la clé API, lue dans l'environnement à chaque appel.

        Une clé absente n'est pas validée ici: elle se traduit par un
        401 côté DeepSeek.
        """
        if self.api_key:
            return self.api_key
        return os.environ.get(self.api_key_env, "")

