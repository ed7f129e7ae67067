"""Navigation guard — decides every navigation before it happens.

The checks run in a fixed order and the first match wins:

1. **Unauthenticated** — a non-public target without a token goes to the
   login route, carrying the intended location as ``redirect``.
2. **Root redirect** — a non-public root target goes to the first
   navigable leaf found at compile time (history is replaced).
3. **Permission** — a non-public target whose ``perms`` is not in the
   cached permission set goes to the forbidden route, carrying the
   intended location as ``from``.
4. **Allow**.

Authentication is checked before permission, and the root redirect
before permission, so an authenticated user who may not see the root is
bounced to their first leaf instead of a 403. Public routes skip all
checks.

Usage::

    guard = NavigationGuard(result.first_leaf_path, tokens, permissions)
    decision = guard(NavigationTarget("/orders", "/orders", RouteMeta()))
    if isinstance(decision, Redirect):
        ...
"""

import logging
from dataclasses import dataclass, field
from typing import TypeAlias
from urllib.parse import urlencode

from waypost.config import WaypostConfig
from waypost.routing.route import RouteMeta
from waypost.security.audit import emit_security_event
from waypost.security.permissions import PermissionCache
from waypost.security.tokens import TokenProvider

_log = logging.getLogger("waypost.guard")


@dataclass(frozen=True, slots=True)
class NavigationTarget:
    """Where a navigation is headed.

    ``full_path`` includes the query string; ``path`` does not.
    """

    path: str
    full_path: str
    meta: RouteMeta = field(default_factory=RouteMeta)


@dataclass(frozen=True, slots=True)
class Allow:
    """Proceed to the target unmodified."""


@dataclass(frozen=True, slots=True)
class Redirect:
    """Navigate somewhere else instead.

    ``replace`` replaces the current history entry instead of pushing one.
    """

    path: str
    query: dict[str, str] = field(default_factory=dict)
    replace: bool = False

    @property
    def url(self) -> str:
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query, safe='/')}"


Decision: TypeAlias = Allow | Redirect

ALLOW = Allow()


class NavigationGuard:
    """Ordered decision procedure run before every navigation.

    The first-leaf path is fixed at construction, taken from the
    compilation result; the token and permission set are read fresh on
    every call.
    """

    __slots__ = ("_config", "_first_leaf_path", "_permissions", "_tokens")

    def __init__(
        self,
        first_leaf_path: str | None,
        tokens: TokenProvider,
        permissions: PermissionCache,
        config: WaypostConfig | None = None,
    ) -> None:
        self._first_leaf_path = first_leaf_path
        self._tokens = tokens
        self._permissions = permissions
        self._config = config or WaypostConfig()

    @property
    def first_leaf_path(self) -> str | None:
        return self._first_leaf_path

    def __call__(self, target: NavigationTarget) -> Decision:
        cfg = self._config
        meta = target.meta

        if meta.public:
            return ALLOW

        if not self._tokens.get_token():
            _log.debug("Unauthenticated navigation to %s", target.full_path)
            emit_security_event("guard.unauthenticated", path=target.full_path)
            return Redirect(cfg.login_path, {cfg.login_redirect_param: target.full_path})

        first = self._first_leaf_path
        if target.path == cfg.root_path and first and first != cfg.root_path:
            _log.debug("Root navigation redirected to first leaf %s", first)
            return Redirect(first, replace=True)

        if meta.perms and not self._permissions.has(self._permissions.load(), meta.perms):
            _log.info("Navigation to %s denied: missing %r", target.full_path, meta.perms)
            emit_security_event(
                "guard.forbidden",
                path=target.full_path,
                details={"required": meta.perms},
            )
            return Redirect(cfg.forbidden_path, {cfg.forbidden_from_param: target.full_path})

        return ALLOW
