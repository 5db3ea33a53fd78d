"""
Configuration de SDD Chat Proxy.
"""

from .loader import load_config, reload_config, get_config, get_chat_settings
from .settings import ChatProxySettings

__all__ = [
    "load_config",
    "reload_config",
    "get_config",
    "get_chat_settings",
    "ChatProxySettings",
]
