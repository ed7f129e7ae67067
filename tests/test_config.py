"""Tests for waypost.config — WaypostConfig frozen dataclass."""

import pytest

from waypost.config import WaypostConfig


class TestWaypostConfig:
    def test_defaults(self) -> None:
        cfg = WaypostConfig()

        assert cfg.menu_url == "/static/config/tree.json"
        assert cfg.api_base_url == "/api"
        assert cfg.request_timeout == 10.0
        assert cfg.login_path == "/login"
        assert cfg.root_path == "/"
        assert cfg.forbidden_path == "/403"
        assert cfg.login_redirect_param == "redirect"
        assert cfg.forbidden_from_param == "from"
        assert cfg.unauthorized_code == 10003
        assert cfg.perms_cache_key == "perms-cache"
        assert cfg.token_key == "token"
        assert cfg.perms_secret_key is None

    def test_override(self) -> None:
        cfg = WaypostConfig(origin="https://console.example.com", request_timeout=5.0)
        assert cfg.origin == "https://console.example.com"
        assert cfg.request_timeout == 5.0

    def test_frozen(self) -> None:
        cfg = WaypostConfig()
        with pytest.raises(AttributeError):
            cfg.login_path = "/signin"  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("origin", "base", "expected"),
        [
            ("http://h", "/api", "http://h/api"),
            ("http://h/", "/api/", "http://h/api"),
            ("http://h", "v1", "http://h/v1"),
        ],
    )
    def test_api_url(self, origin: str, base: str, expected: str) -> None:
        assert WaypostConfig(origin=origin, api_base_url=base).api_url == expected
