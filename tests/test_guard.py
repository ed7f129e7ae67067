"""Tests for waypost.guard — the ordered navigation decision procedure."""

import pytest

from waypost.config import WaypostConfig
from waypost.guard import ALLOW, Allow, NavigationGuard, NavigationTarget, Redirect
from waypost.routing.route import RouteMeta
from waypost.security.audit import SecurityEvent
from waypost.security.permissions import PermissionCache
from waypost.security.tokens import TokenStore
from waypost.storage import MemoryStorage


def _guard(
    *,
    token: str | None = "tok",
    perms: set[str] | None = None,
    first_leaf: str | None = None,
    config: WaypostConfig | None = None,
) -> NavigationGuard:
    storage = MemoryStorage()
    tokens = TokenStore(storage)
    if token:
        tokens.set_token(token)
    cache = PermissionCache(storage)
    if perms is not None:
        cache.save(perms)
    return NavigationGuard(first_leaf, tokens, cache, config)


def _target(path: str, *, full_path: str | None = None, public: bool = False, perms: str | None = None):
    return NavigationTarget(path=path, full_path=full_path or path, meta=RouteMeta(public=public, perms=perms))


class TestRedirectUrl:
    def test_without_query(self) -> None:
        assert Redirect("/jobs").url == "/jobs"

    def test_slash_kept(self) -> None:
        assert Redirect("/login", {"redirect": "/orders"}).url == "/login?redirect=/orders"

    def test_query_characters_escaped(self) -> None:
        assert Redirect("/login", {"redirect": "/orders?page=2"}).url == "/login?redirect=/orders%3Fpage%3D2"


class TestUnauthenticated:
    def test_scenario_a_redirects_to_login(self) -> None:
        decision = _guard(token=None)(_target("/orders"))
        assert decision == Redirect("/login", {"redirect": "/orders"})
        assert decision.url == "/login?redirect=/orders"
        assert decision.replace is False

    def test_carries_full_path(self) -> None:
        decision = _guard(token=None)(_target("/orders", full_path="/orders?page=2"))
        assert decision == Redirect("/login", {"redirect": "/orders?page=2"})

    def test_public_route_allowed_without_token(self) -> None:
        assert _guard(token=None)(_target("/login", public=True)) is ALLOW

    def test_checked_before_root_redirect(self) -> None:
        decision = _guard(token=None, first_leaf="/jobs")(_target("/"))
        assert decision == Redirect("/login", {"redirect": "/"})

    def test_checked_before_permissions(self) -> None:
        decision = _guard(token=None, perms=set())(_target("/jobs/edit", perms="job:edit"))
        assert isinstance(decision, Redirect)
        assert decision.path == "/login"

    def test_emits_event(self, security_events: list[SecurityEvent]) -> None:
        _guard(token=None)(_target("/orders"))
        assert security_events[0].name == "guard.unauthenticated"
        assert security_events[0].path == "/orders"


class TestRootRedirect:
    def test_scenario_b_redirects_to_first_leaf(self) -> None:
        decision = _guard(first_leaf="/jobs")(_target("/"))
        assert decision == Redirect("/jobs", replace=True)

    def test_no_first_leaf_allows(self) -> None:
        assert _guard(first_leaf=None)(_target("/")) is ALLOW

    def test_first_leaf_equal_to_root_allows(self) -> None:
        assert _guard(first_leaf="/")(_target("/")) is ALLOW

    def test_public_root_is_not_redirected(self) -> None:
        assert _guard(first_leaf="/jobs")(_target("/", public=True)) is ALLOW

    def test_checked_before_permissions(self) -> None:
        decision = _guard(first_leaf="/jobs", perms=set())(_target("/", perms="dashboard:view"))
        assert decision == Redirect("/jobs", replace=True)

    def test_other_paths_not_redirected(self) -> None:
        assert _guard(first_leaf="/jobs")(_target("/orders")) is ALLOW

    def test_custom_root(self) -> None:
        guard = _guard(first_leaf="/jobs", config=WaypostConfig(root_path="/home"))
        assert guard(_target("/home")) == Redirect("/jobs", replace=True)
        assert guard(_target("/")) is ALLOW


class TestPermissionGuard:
    def test_scenario_c_forbidden(self) -> None:
        decision = _guard(perms={"job:view"})(_target("/jobs/edit", perms="job:edit"))
        assert decision == Redirect("/403", {"from": "/jobs/edit"})
        assert decision.url == "/403?from=/jobs/edit"

    def test_granted(self) -> None:
        assert _guard(perms={"job:edit"})(_target("/jobs/edit", perms="job:edit")) is ALLOW

    def test_unrestricted_route_with_empty_cache(self) -> None:
        assert _guard(perms=set())(_target("/about")) is ALLOW

    def test_empty_cache_denies_restricted_route(self) -> None:
        decision = _guard()(_target("/jobs/edit", perms="job:edit"))
        assert isinstance(decision, Redirect)
        assert decision.path == "/403"

    def test_public_route_skips_permission_check(self) -> None:
        assert _guard(perms=set())(_target("/help", public=True, perms="help:view")) is ALLOW

    def test_reads_cache_on_every_call(self) -> None:
        storage = MemoryStorage({"token": "t"})
        cache = PermissionCache(storage)
        guard = NavigationGuard(None, TokenStore(storage), cache)
        target = _target("/jobs/edit", perms="job:edit")

        assert isinstance(guard(target), Redirect)
        cache.save({"job:edit"})
        assert guard(target) is ALLOW

    def test_custom_paths(self) -> None:
        config = WaypostConfig(forbidden_path="/denied", forbidden_from_param="next")
        decision = _guard(perms={"a"}, config=config)(_target("/b", perms="b"))
        assert decision == Redirect("/denied", {"next": "/b"})

    def test_emits_event(self, security_events: list[SecurityEvent]) -> None:
        _guard(perms={"job:view"})(_target("/jobs/edit", perms="job:edit"))
        assert security_events[0].name == "guard.forbidden"
        assert security_events[0].details == {"required": "job:edit"}


class TestAllow:
    def test_allow_singleton_equality(self) -> None:
        assert Allow() == ALLOW

    @pytest.mark.parametrize("path", ["/orders", "/jobs/list", "/anything"])
    def test_authenticated_unrestricted(self, path: str) -> None:
        assert _guard(first_leaf="/jobs")(_target(path)) is ALLOW

    def test_first_leaf_exposed(self) -> None:
        assert _guard(first_leaf="/jobs").first_leaf_path == "/jobs"
