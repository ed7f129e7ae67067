"""RouteNode, RouteMeta and RouteMatch frozen dataclasses."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

Loader: TypeAlias = Callable[[], Any]


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:    ``/jobs``              (is_param=False)
    Param:     ``/{id}``              (is_param=True, param_name="id")
    Catch-all: ``/{path_match:path}`` (is_param=True, catch_all=True)
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    catch_all: bool = False


@dataclass(frozen=True, slots=True)
class RouteMeta:
    """Per-route metadata consulted by the navigation guard."""

    title: str = ""
    perms: str | None = None
    public: bool = False


@dataclass(frozen=True, slots=True)
class RouteNode:
    """A compiled route record.

    Composite routes carry ``children`` and a ``redirect`` to their first
    navigable leaf; leaf routes carry neither.
    """

    path: str
    name: str
    component: Loader = field(compare=False)
    children: tuple[RouteNode, ...] = ()
    redirect: str | None = None
    meta: RouteMeta = field(default_factory=RouteMeta)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``matched`` lists the records from the outermost parent down to the
    matched route; ``full_path`` is the absolute path the route was
    registered under.
    """

    route: RouteNode
    full_path: str
    path_params: dict[str, str]
    matched: tuple[RouteNode, ...] = ()

    @property
    def meta(self) -> RouteMeta:
        return self.route.meta
