"""Route table with trie-based path matching.

Routes are registered once per session and compiled into an immutable
lookup structure before the application mounts. Nested routes are
flattened into the trie under their absolute paths; each terminal node
remembers the chain of records that led to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from waypost.errors import NotFound
from waypost.routing.route import PathSegment, RouteMatch, RouteNode

_log = logging.getLogger("waypost.routing")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/jobs"               -> [PathSegment("jobs")]
        "/jobs/{id}"          -> [PathSegment("jobs"), PathSegment("{id}", is_param=True, ...)]
        "/{path_match:path}"  -> [PathSegment("{path_match:path}", is_param=True, catch_all=True)]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            param_name, _, param_type = part[1:-1].partition(":")
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    catch_all=param_type == "path",
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def join_path(parent: str, child: str) -> str:
    """Resolve a child route path against its parent.

    Absolute child paths are kept; relative ones are appended to the parent.
    """
    if child.startswith("/"):
        return child
    return parent.rstrip("/") + "/" + child


class _TrieNode:
    """A node in the route trie. Mutable during registration only."""

    __slots__ = ("catch_all", "children", "entry", "param_child")

    def __init__(self) -> None:
        # Static segment children: "jobs" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Catch-all entry (consumes the rest of the path)
        self.catch_all: _CatchAllEdge | None = None
        # Record registered exactly at this node
        self.entry: _Entry | None = None


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all edge — consumes remaining path."""

    param_name: str
    entry: _Entry


@dataclass(frozen=True, slots=True)
class _Entry:
    full_path: str
    matched: tuple[RouteNode, ...]

    @property
    def route(self) -> RouteNode:
        return self.matched[-1]


class Router:
    """Route table with trie-based path matching.

    Usage::

        router = Router()
        router.add(RouteNode("/login", "login", login_view, meta=RouteMeta(public=True)))
        for route in result.routes:
            router.add(route)
        router.compile()
        match = router.match("/jobs/edit")

    When two records claim the same path, the first one registered wins.
    """

    __slots__ = ("_compiled", "_entries", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._entries: list[_Entry] = []
        self._compiled = False

    def add(self, route: RouteNode, parent: str | None = None) -> None:
        """Add a route and its nested children. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        base = parent if parent is not None else "/"
        self._add(route, join_path(base, route.path), ())

    def _add(self, route: RouteNode, full_path: str, ancestors: tuple[RouteNode, ...]) -> None:
        entry = _Entry(full_path=full_path, matched=(*ancestors, route))
        if self._insert(entry):
            self._entries.append(entry)
        else:
            _log.debug("Route %r shadowed by an earlier record at %s", route.name, full_path)

        for child in route.children:
            self._add(child, join_path(full_path, child.path), entry.matched)

    def _insert(self, entry: _Entry) -> bool:
        node = self._root
        for seg in parse_path(entry.full_path):
            if seg.catch_all:
                # Catch-all: consumes rest of path, must be last segment
                if node.catch_all is not None:
                    return False
                node.catch_all = _CatchAllEdge(param_name=seg.param_name or "path", entry=entry)
                return True

            if seg.is_param:
                if node.param_child is None:
                    node.param_child = _ParamEdge(param_name=seg.param_name or "", node=_TrieNode())
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        if node.entry is not None:
            return False
        node.entry = entry
        return True

    @property
    def routes(self) -> list[RouteNode]:
        """Every registered record, in registration order."""
        return [entry.route for entry in self._entries]

    @property
    def paths(self) -> list[str]:
        """Absolute path of every registered record, in registration order."""
        return [entry.full_path for entry in self._entries]

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, path: str) -> RouteMatch:
        """Match a path against registered routes.

        Returns a ``RouteMatch`` on success. Raises ``NotFound`` if no
        route matches the path.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        result = self._match_node(self._root, parts, 0, {})
        if result is None:
            raise NotFound(f"No route matches {path!r}")

        entry, params = result
        return RouteMatch(
            route=entry.route,
            full_path=entry.full_path,
            path_params=params,
            matched=entry.matched,
        )

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[_Entry, dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        # All parts consumed — return this node's record
        if index == len(parts):
            if node.entry is not None:
                return node.entry, params
            if node.catch_all is not None:
                return node.catch_all.entry, {**params, node.catch_all.param_name: ""}
            return None

        part = parts[index]

        # 1. Try static child first (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Try parameter child
        if node.param_child is not None:
            edge = node.param_child
            new_params = {**params, edge.param_name: part}
            result = self._match_node(edge.node, parts, index + 1, new_params)
            if result is not None:
                return result

        # 3. Try catch-all
        if node.catch_all is not None:
            remaining = "/".join(parts[index:])
            return node.catch_all.entry, {**params, node.catch_all.param_name: remaining}

        return None
