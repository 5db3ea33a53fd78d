"""
Détection de la langue d'un message (chinois ou anglais).
"""
import json
import re
from enum import Enum
from typing import Any, Optional, Union

from .constants import CJK_RANGE_START, CJK_RANGE_END

_CJK_PATTERN = re.compile(f"[{CJK_RANGE_START}-{CJK_RANGE_END}]")


class Language(str, Enum):
    """Langues supportées par le widget."""
    ZH = "zh"
    EN = "en"

    @classmethod
    def parse(cls, value: Any, default: "Language" = None) -> "Language":
        """Convertit une valeur de config en Language, avec fallback."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return default if default is not None else cls.ZH


def detect_language(text: Any) -> Language:
    """
    Détecte la langue d'un message.

    Le message est considéré chinois dès qu'il contient un idéogramme
    dans la plage U+4E00..U+9FA5. Tout le reste (y compris une valeur
    qui n'est pas une chaîne) est traité comme de l'anglais.

    Args:
        text: Contenu du message utilisateur

    Returns:
        Language.ZH ou Language.EN
    """
    if isinstance(text, str) and _CJK_PATTERN.search(text):
        return Language.ZH
    return Language.EN


def detect_language_from_body(raw_body: Union[str, bytes, None]) -> Optional[Language]:
    """
    Re-dérive la langue depuis le body brut sur le chemin d'erreur.

    Returns:
        La langue détectée si le body est un objet JSON avec un champ
        `message` texte, None sinon.
    """
    if raw_body is None:
        return None
    try:
        data = json.loads(raw_body)
    except (ValueError, TypeError):
        return None

    if not isinstance(data, dict):
        return None
    message = data.get("message")
    if not isinstance(message, str):
        return None
    return detect_language(message)
