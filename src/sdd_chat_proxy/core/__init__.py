"""
Noyau: langue, prompts, erreurs et type résultat.
"""

from .language import Language, detect_language, detect_language_from_body
from .result import Ok, Err, Result
from .exceptions import (
    ChatProxyError,
    ConfigurationError,
    RequestParseError,
    UpstreamTransportError,
    UpstreamStatusError,
    UpstreamFormatError,
)

__all__ = [
    "Language",
    "detect_language",
    "detect_language_from_body",
    "Ok",
    "Err",
    "Result",
    "ChatProxyError",
    "ConfigurationError",
    "RequestParseError",
    "UpstreamTransportError",
    "UpstreamStatusError",
    "UpstreamFormatError",
]
