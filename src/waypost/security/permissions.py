"""Permission cache — the user's permission tokens, persisted locally.

Written whenever the authoritative permission set changes (after login)
and read on every guarded navigation. Loading never raises: a missing,
unparseable, tampered, or wrongly-typed payload reads as the empty set,
which denies every restricted route.

The payload is a JSON array. With a ``secret_key`` it is additionally
signed using ``itsdangerous``, which is then required.
"""

import json
import logging
from collections.abc import Iterable
from typing import Any, TypeAlias

from waypost.errors import ConfigurationError
from waypost.storage import KeyValueStore

_log = logging.getLogger("waypost.security")

PermSet: TypeAlias = frozenset[str]

_SALT = "waypost.perms"


def has_perm(perms: PermSet | set[str], required: str | None) -> bool:
    """Check ``required`` against a permission set.

    Routes without a requirement are unrestricted, even for an empty set.
    """
    if not required:
        return True
    if not perms:
        return False
    return required in perms


class PermissionCache:
    """Persisted set of permission tokens.

    Usage::

        cache = PermissionCache(storage)
        cache.save({"job:view", "job:edit"})
        perms = cache.load()
        cache.has(perms, "job:edit")   # True
    """

    __slots__ = ("_key", "_serializer", "_storage")

    def __init__(self, storage: KeyValueStore, key: str = "perms-cache", *, secret_key: str | None = None) -> None:
        self._storage = storage
        self._key = key
        self._serializer: Any = None
        if secret_key:
            try:
                from itsdangerous import URLSafeSerializer
            except ImportError:
                msg = (
                    "Signed permission caches require the 'itsdangerous' package. "
                    "Install it with: pip install itsdangerous"
                )
                raise ConfigurationError(msg) from None
            self._serializer = URLSafeSerializer(secret_key, salt=_SALT)

    @property
    def signed(self) -> bool:
        return self._serializer is not None

    def load(self) -> PermSet:
        """Return the stored permission set, or an empty set."""
        raw = self._storage.get_item(self._key)
        if not raw:
            return frozenset()
        try:
            decoded = self._decode(raw)
        except Exception:
            _log.warning("Discarding malformed permission cache payload")
            return frozenset()
        if not isinstance(decoded, list):
            return frozenset()
        return frozenset(str(item) for item in decoded)

    def _decode(self, raw: str) -> Any:
        if self._serializer is not None:
            return self._serializer.loads(raw)
        return json.loads(raw)

    def save(self, perms: Iterable[str]) -> None:
        """Persist ``perms``, overwriting any previous value."""
        items = sorted(set(perms))
        if self._serializer is not None:
            payload = self._serializer.dumps(items)
        else:
            payload = json.dumps(items)
        self._storage.set_item(self._key, payload)

    def clear(self) -> None:
        self._storage.remove_item(self._key)

    @staticmethod
    def has(perms: PermSet | set[str], required: str | None) -> bool:
        return has_perm(perms, required)
