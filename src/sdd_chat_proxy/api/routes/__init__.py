"""
Routes API par domaine.
"""

from . import chat
from . import health

__all__ = [
    "chat",
    "health",
]
