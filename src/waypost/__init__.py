"""Waypost — menu-driven routing and navigation guards for admin consoles.

Compiles a server-delivered menu/permission tree into a navigable route
table and decides every navigation: login, first-leaf redirect,
forbidden, or allow.

Basic usage::

    from waypost import App, WaypostConfig

    async with App(WaypostConfig(origin="https://console.example.com")) as app:
        await app.startup()
        app.navigate("/jobs")

Compiling a tree directly::

    from waypost.menu import parse_menu_tree
    from waypost.routing import compile_tree

    result = compile_tree(parse_menu_tree(payload))
    result.routes, result.first_leaf_path
"""

__version__ = "0.1.0"
__all__ = [
    "Allow",
    "ApiError",
    "App",
    "CompilationResult",
    "ComponentRegistry",
    "ConfigurationError",
    "MenuFormatError",
    "MenuNode",
    "NavigationGuard",
    "NavigationTarget",
    "NotFound",
    "PermissionCache",
    "Redirect",
    "RouteNode",
    "Unauthorized",
    "WaypostConfig",
    "WaypostError",
    "compile_tree",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypost`` fast while providing a clean top-level API.
    """
    if name == "App":
        from waypost.app import App

        return App

    if name == "WaypostConfig":
        from waypost.config import WaypostConfig

        return WaypostConfig

    if name in ("Allow", "NavigationGuard", "NavigationTarget", "Redirect"):
        from waypost import guard as _guard

        return getattr(_guard, name)

    if name == "MenuNode":
        from waypost.menu.node import MenuNode

        return MenuNode

    if name in ("CompilationResult", "compile_tree"):
        from waypost.routing import compiler as _compiler

        return getattr(_compiler, name)

    if name == "ComponentRegistry":
        from waypost.routing.components import ComponentRegistry

        return ComponentRegistry

    if name == "RouteNode":
        from waypost.routing.route import RouteNode

        return RouteNode

    if name == "PermissionCache":
        from waypost.security.permissions import PermissionCache

        return PermissionCache

    if name in (
        "ApiError",
        "ConfigurationError",
        "MenuFormatError",
        "NotFound",
        "Unauthorized",
        "WaypostError",
    ):
        from waypost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
