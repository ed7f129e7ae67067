"""Application configuration.

WaypostConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WaypostConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = WaypostConfig(origin="https://console.example.com", request_timeout=5.0)
    """

    # Backend
    origin: str = "http://127.0.0.1:8080"
    api_base_url: str = "/api"
    request_timeout: float = 10.0

    # Menu tree (static JSON, fetched once at startup)
    menu_url: str = "/static/config/tree.json"

    # Well-known routes
    login_path: str = "/login"
    root_path: str = "/"
    forbidden_path: str = "/403"

    # Query parameters carrying the originally intended location
    login_redirect_param: str = "redirect"
    forbidden_from_param: str = "from"

    # Envelope code that forces logout
    unauthorized_code: int = 10003

    # Persisted storage keys
    perms_cache_key: str = "perms-cache"
    token_key: str = "token"

    # Sign the permission cache payload (requires itsdangerous)
    perms_secret_key: str | None = None

    # Upper bound on chained redirects during one navigation
    max_redirects: int = 10

    @property
    def api_url(self) -> str:
        """Absolute base URL for API calls."""
        return self.origin.rstrip("/") + "/" + self.api_base_url.strip("/")
