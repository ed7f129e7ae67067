"""Route compilation and matching."""

from waypost.routing.compiler import CompilationResult, compile_node, compile_tree, first_leaf_path
from waypost.routing.components import ComponentRegistry, lazy
from waypost.routing.route import RouteMatch, RouteMeta, RouteNode
from waypost.routing.router import Router

__all__ = [
    "CompilationResult",
    "ComponentRegistry",
    "RouteMatch",
    "RouteMeta",
    "RouteNode",
    "Router",
    "compile_node",
    "compile_tree",
    "first_leaf_path",
    "lazy",
]
