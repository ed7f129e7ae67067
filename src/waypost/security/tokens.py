"""Auth token store.

Holds the bearer token issued at login. Clearing it is the forced-logout
side effect of an unauthorized API response.
"""

import logging
from typing import Protocol, runtime_checkable

from waypost.security.audit import emit_security_event
from waypost.storage import KeyValueStore

_log = logging.getLogger("waypost.security")


@runtime_checkable
class TokenProvider(Protocol):
    """Anything that can report and clear the current auth token."""

    def get_token(self) -> str | None: ...

    def clear_token(self) -> None: ...


class TokenStore:
    """Bearer token persisted in a ``KeyValueStore``."""

    __slots__ = ("_key", "_storage")

    def __init__(self, storage: KeyValueStore, key: str = "token") -> None:
        self._storage = storage
        self._key = key

    def get_token(self) -> str | None:
        return self._storage.get_item(self._key) or None

    def set_token(self, token: str) -> None:
        self._storage.set_item(self._key, token)

    def clear_token(self) -> None:
        had_token = self.get_token() is not None
        self._storage.remove_item(self._key)
        if had_token:
            _log.info("Auth token cleared")
            emit_security_event("auth.token.cleared")
