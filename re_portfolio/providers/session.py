"""Session provider: who is signed in."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Signed-in user. ``user_id`` doubles as the persistence scope."""

    user_id: str
    email: str | None = None


IdentityListener = Callable[[Identity | None], None]


class SessionProvider(ABC):
    """Source of the current identity and of sign-in/sign-out transitions."""

    @abstractmethod
    def get_current_identity(self) -> Identity | None:
        """Return the signed-in identity, or None."""

    @abstractmethod
    def on_identity_change(self, callback: IdentityListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""

    @abstractmethod
    def sign_out(self) -> None:
        """Terminate the session."""


class StaticSessionProvider(SessionProvider):
    """Session held in process memory.

    Used by the command line tools, where the identity comes from
    configuration, and by tests.
    """

    def __init__(self, identity: Identity | None = None) -> None:
        self._identity = identity
        self._listeners: list[IdentityListener] = []

    def get_current_identity(self) -> Identity | None:
        return self._identity

    def on_identity_change(self, callback: IdentityListener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def sign_in(self, identity: Identity) -> None:
        """Switch to ``identity`` and notify listeners."""
        self._set(identity)

    def sign_out(self) -> None:
        self._set(None)

    def _set(self, identity: Identity | None) -> None:
        if identity == self._identity:
            return
        self._identity = identity
        logger.info("Identity changed: %s", identity.user_id if identity else "signed out")
        for listener in list(self._listeners):
            listener(identity)
