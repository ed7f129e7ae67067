"""Async API client — bearer auth plus envelope unwrapping.

Every response body is a ``{code, message, data}`` envelope. Successful
calls return ``data``; failures raise ``ApiError``. Two conditions force
a logout (token cleared, hard redirect to the login route):

- the reserved unauthorized envelope code, redirecting to the bare
  login route;
- HTTP 401, redirecting with the current location URL-encoded in the
  ``redirect`` query parameter. It is checked before the envelope.

Failed requests are never retried.

Usage::

    client = ApiClient(config, tokens, on_logout=app.hard_redirect)
    profile = await client.get("/user/profile")
"""

import logging
from collections.abc import Callable
from typing import Any, TypeAlias
from urllib.parse import quote

import httpx

from waypost.config import WaypostConfig
from waypost.errors import ApiError, Unauthorized
from waypost.http.envelope import Envelope
from waypost.security.audit import emit_security_event
from waypost.security.tokens import TokenProvider

_log = logging.getLogger("waypost.http")

RedirectHook: TypeAlias = Callable[[str], None]


def _no_redirect(url: str) -> None:
    _log.info("Forced logout; redirect to %s not wired", url)


class ApiClient:
    """Thin wrapper around ``httpx.AsyncClient`` for the backend API.

    ``current_location`` reports the location to return to after a 401
    re-login; ``on_logout`` performs the full-page redirect.
    """

    __slots__ = ("_config", "_current_location", "_http", "_on_logout", "_owns_http", "_tokens")

    def __init__(
        self,
        config: WaypostConfig,
        tokens: TokenProvider,
        *,
        http: httpx.AsyncClient | None = None,
        on_logout: RedirectHook | None = None,
        current_location: Callable[[], str] | None = None,
    ) -> None:
        self._config = config
        self._tokens = tokens
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=config.request_timeout)
        self._on_logout = on_logout or _no_redirect
        self._current_location = current_location or (lambda: config.root_path)

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def _url(self, path: str) -> str:
        return self._config.api_url + "/" + path.lstrip("/")

    def _headers(self) -> dict[str, str]:
        token = self._tokens.get_token()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def _force_logout(self, url: str, reason: str) -> None:
        self._tokens.clear_token()
        emit_security_event("auth.forced_logout", details={"reason": reason})
        self._on_logout(url)

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the unwrapped ``data`` payload."""
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            response = await self._http.request(method, self._url(path), headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            _log.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(str(exc) or type(exc).__name__) from exc

        if response.status_code == 401:
            cfg = self._config
            location = quote(self._current_location(), safe="")
            self._force_logout(f"{cfg.login_path}?{cfg.login_redirect_param}={location}", "http_401")
            raise Unauthorized("Unauthorized", status=401)

        if response.is_error:
            raise ApiError(response.reason_phrase or "Request Error", status=response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise ApiError("Invalid response body", status=response.status_code) from exc

        envelope = Envelope.from_body(body)
        if envelope is None:
            return body
        if envelope.ok:
            return envelope.data

        if envelope.code == self._config.unauthorized_code:
            self._force_logout(self._config.login_path, "envelope_unauthorized")
            raise Unauthorized(envelope.message or "Unauthorized", code=envelope.code)
        raise envelope.error()

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)
