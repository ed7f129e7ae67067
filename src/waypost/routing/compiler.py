"""Menu tree → route tree compiler.

Children are filtered through the visibility filter at every depth, both
when compiling routes and, independently, when resolving a composite's
first leaf. A pathless node cannot anchor a route, so it is dropped along
with its whole subtree.

Usage::

    from waypost.routing.compiler import compile_tree

    result = compile_tree(parse_menu_tree(payload), registry)
    for route in result.routes:
        table.add(route)
    guard = NavigationGuard(result.first_leaf_path, tokens, permissions)
"""

from collections.abc import Iterable
from dataclasses import dataclass

from waypost.menu.names import normalize_name
from waypost.menu.node import MenuNode
from waypost.menu.visibility import visible
from waypost.routing.components import ComponentRegistry
from waypost.routing.route import RouteMeta, RouteNode


@dataclass(frozen=True, slots=True)
class CompilationResult:
    """Compiled routes plus the first navigable leaf of the first visible root."""

    routes: tuple[RouteNode, ...] = ()
    first_leaf_path: str | None = None


def first_leaf_path(node: MenuNode) -> str | None:
    """Path of the first visible leaf beneath ``node``, depth-first.

    A childless node resolves to its own path. When no visible child
    yields a path, the node's own path is used. Returns ``None`` when
    neither exists.
    """
    if not node.children:
        return node.path
    for child in visible(node.children):
        path = first_leaf_path(child)
        if path:
            return path
    return node.path


def compile_node(node: MenuNode, registry: ComponentRegistry) -> RouteNode | None:
    """Compile one visible node into a route, or ``None`` when it has no path."""
    if not node.path:
        return None

    name = normalize_name(node.path, node.id)
    meta = RouteMeta(title=node.name, perms=node.perms)
    children = visible(node.children)

    if children:
        compiled = tuple(
            route for route in (compile_node(child, registry) for child in children) if route is not None
        )
        return RouteNode(
            path=node.path,
            name=name,
            component=registry.parent_holder,
            children=compiled,
            redirect=first_leaf_path(node),
            meta=meta,
        )

    return RouteNode(
        path=node.path,
        name=name,
        component=registry.resolve(node.component),
        meta=meta,
    )


def compile_tree(nodes: Iterable[MenuNode], registry: ComponentRegistry | None = None) -> CompilationResult:
    """Compile the top-level node list into the route table to register."""
    registry = registry or ComponentRegistry()
    roots = visible(list(nodes))
    routes = tuple(route for route in (compile_node(root, registry) for root in roots) if route is not None)
    return CompilationResult(
        routes=routes,
        first_leaf_path=first_leaf_path(roots[0]) if roots else None,
    )
