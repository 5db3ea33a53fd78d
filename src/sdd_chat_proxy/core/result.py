"""
Type résultat explicite: succès (Ok) ou erreur typée (Err).

Chaque étape du handler retourne un Result au lieu de lever, ce qui
garde le mapping vers la réponse HTTP finale en un seul endroit.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .exceptions import ChatProxyError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Étape réussie."""
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Étape en échec, porte l'erreur typée."""
    error: ChatProxyError

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
