"""The application shell: startup, route registration, guarded navigation.

Usage::

    from waypost import App, WaypostConfig

    async with App(WaypostConfig(origin="https://console.example.com")) as app:
        await app.startup()
        await app.sign_in("admin", "secret")
        resolution = app.navigate("/jobs/edit")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import parse_qsl, urlsplit

import httpx

from waypost import api
from waypost.config import WaypostConfig
from waypost.errors import ConfigurationError
from waypost.guard import NavigationGuard, NavigationTarget, Redirect
from waypost.http.client import ApiClient
from waypost.loader import load_routes
from waypost.routing.compiler import CompilationResult
from waypost.routing.components import ComponentRegistry
from waypost.routing.route import RouteMeta, RouteNode
from waypost.routing.router import Router, join_path
from waypost.security.permissions import PermissionCache
from waypost.security.tokens import TokenStore
from waypost.security.urls import is_safe_url
from waypost.storage import KeyValueStore, MemoryStorage

_log = logging.getLogger("waypost.app")

NOT_FOUND_PATH = "/{path_match:path}"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of one navigation: the location that was finally committed."""

    path: str
    full_path: str
    route: RouteNode
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    replaced: bool = False
    redirected_from: str | None = None

    @property
    def name(self) -> str:
        return self.route.name


def _split(location: str) -> tuple[str, str, dict[str, str]]:
    parts = urlsplit(location)
    path = parts.path or "/"
    full_path = f"{path}?{parts.query}" if parts.query else path
    return path, full_path, dict(parse_qsl(parts.query))


class App:
    """The console application shell.

    Lifecycle:
        ``startup()`` runs exactly once per session. It fetches the menu
        tree (failures degrade to static routes only), registers the
        compiled routes, freezes the route table, builds the navigation
        guard from the compilation result, and then mounts by navigating
        to the initial location. Afterwards ``navigate()`` is synchronous.
    """

    __slots__ = (
        "_client",
        "_current",
        "_guard",
        "_history",
        "_http",
        "_owns_http",
        "_result",
        "_router",
        "_started",
        "config",
        "permissions",
        "registry",
        "tokens",
    )

    def __init__(
        self,
        config: WaypostConfig | None = None,
        *,
        registry: ComponentRegistry | None = None,
        storage: KeyValueStore | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.config: WaypostConfig = config or WaypostConfig()
        self.registry: ComponentRegistry = registry or ComponentRegistry()
        storage = storage if storage is not None else MemoryStorage()
        self.tokens: TokenStore = TokenStore(storage, self.config.token_key)
        self.permissions: PermissionCache = PermissionCache(
            storage,
            self.config.perms_cache_key,
            secret_key=self.config.perms_secret_key,
        )
        self._owns_http = http is None
        self._http: httpx.AsyncClient = http or httpx.AsyncClient(timeout=self.config.request_timeout)
        self._client = ApiClient(
            self.config,
            self.tokens,
            http=self._http,
            on_logout=self.hard_redirect,
            current_location=lambda: self.current_location,
        )
        self._started = False
        self._router: Router | None = None
        self._guard: NavigationGuard | None = None
        self._result: CompilationResult | None = None
        self._current: Resolution | None = None
        self._history: list[str] = []

    # -- Introspection --

    @property
    def client(self) -> ApiClient:
        return self._client

    @property
    def router(self) -> Router:
        if self._router is None:
            msg = "Routes are not registered yet. Call App.startup() first."
            raise ConfigurationError(msg)
        return self._router

    @property
    def first_leaf_path(self) -> str | None:
        return self._result.first_leaf_path if self._result else None

    @property
    def current(self) -> Resolution | None:
        return self._current

    @property
    def current_location(self) -> str:
        if self._current is not None:
            return self._current.full_path
        return self.config.root_path

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    # -- Lifecycle --

    async def startup(self, initial: str | None = None) -> Resolution:
        """Load the menu, register routes once, then mount at ``initial``."""
        if self._started:
            msg = "App.startup() may only run once per session."
            raise ConfigurationError(msg)
        self._started = True

        result = await load_routes(self._http, self._menu_url(), self.registry)
        self._freeze(result)
        return self.navigate(initial or self.config.root_path)

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> App:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _menu_url(self) -> str:
        url = self.config.menu_url
        if url.startswith("/"):
            return self.config.origin.rstrip("/") + url
        return url

    def _static_route(self, path: str, name: str, ref: str, title: str, *, public: bool) -> RouteNode:
        return RouteNode(
            path=path,
            name=name,
            component=self.registry.resolve(ref),
            meta=RouteMeta(title=title, public=public),
        )

    def _freeze(self, result: CompilationResult) -> None:
        cfg = self.config
        router = Router()
        router.add(self._static_route(cfg.login_path, "login", "views/Login", "Login", public=True))
        router.add(self._static_route(cfg.root_path, "dashboard", "views/Dashboard", "Dashboard", public=False))
        router.add(self._static_route(cfg.forbidden_path, "forbidden", "views/Forbidden", "Forbidden", public=True))
        for route in result.routes:
            router.add(route)
        # Catch-all must stay last
        router.add(self._static_route(NOT_FOUND_PATH, "not-found", "views/NotFound", "Not Found", public=True))
        router.compile()

        self._router = router
        self._result = result
        self._guard = NavigationGuard(result.first_leaf_path, self.tokens, self.permissions, cfg)

    # -- Navigation --

    def navigate(self, location: str, *, replace: bool = False) -> Resolution:
        """Resolve ``location`` through record redirects and the guard, then commit it.

        Authorization outcomes never raise: they resolve to the login or
        forbidden route. A redirect chain longer than ``max_redirects``
        lands on the forbidden route.
        """
        router = self.router
        guard = self._guard
        if guard is None:
            msg = "Navigation guard is not built yet. Call App.startup() first."
            raise ConfigurationError(msg)

        redirected_from: str | None = None
        target = location
        for _ in range(self.config.max_redirects + 1):
            path, full_path, query = _split(target)
            match = router.match(path)
            route = match.route

            if route.redirect:
                parent = match.full_path.rsplit("/", 1)[0] or "/"
                redirect = join_path(parent, route.redirect)
                if redirect != path:
                    redirected_from = redirected_from or full_path
                    target = redirect
                    continue

            decision = guard(NavigationTarget(path=path, full_path=full_path, meta=route.meta))
            if isinstance(decision, Redirect):
                redirected_from = redirected_from or full_path
                target = decision.url
                replace = replace or decision.replace
                continue

            return self._commit(
                Resolution(
                    path=path,
                    full_path=full_path,
                    route=route,
                    params=match.path_params,
                    query=query,
                    replaced=replace,
                    redirected_from=redirected_from,
                )
            )

        _log.error("Redirect limit exceeded navigating to %s", location)
        fallback = Redirect(self.config.forbidden_path, {self.config.forbidden_from_param: location})
        path, full_path, query = _split(fallback.url)
        match = router.match(path)
        return self._commit(
            Resolution(
                path=path,
                full_path=full_path,
                route=match.route,
                params=match.path_params,
                query=query,
                replaced=replace,
                redirected_from=location,
            )
        )

    def _commit(self, resolution: Resolution) -> Resolution:
        if resolution.replaced and self._history:
            self._history[-1] = resolution.full_path
        else:
            self._history.append(resolution.full_path)
        self._current = resolution
        _log.debug("Navigated to %s (%s)", resolution.full_path, resolution.name)
        return resolution

    def hard_redirect(self, url: str) -> None:
        """Full-page redirect, used for forced logouts."""
        _log.info("Hard redirect to %s", url)
        if self._router is None:
            self._history.append(url)
            return
        self.navigate(url)

    # -- Session --

    async def sync_permissions(self) -> frozenset[str]:
        """Refresh the permission cache from the backend."""
        perms = await api.get_my_perms(self._client)
        self.permissions.save(perms)
        return self.permissions.load()

    async def sign_in(self, username: str, password: str) -> Resolution:
        """Log in, cache permissions, and continue to the requested location."""
        token = await api.login(self._client, username, password)
        self.tokens.set_token(token)
        await self.sync_permissions()

        target = self.config.root_path
        current = self._current
        if current is not None and current.path == self.config.login_path:
            requested = current.query.get(self.config.login_redirect_param)
            if is_safe_url(requested):
                target = requested
        return self.navigate(target, replace=True)

    def sign_out(self) -> Resolution:
        self.tokens.clear_token()
        self.permissions.clear()
        return self.navigate(self.config.login_path)
