"""Menu-tree loader.

Fetches the static menu tree once at startup and compiles it. Any
failure (transport error, non-2xx status, invalid JSON, malformed tree)
is logged and degrades to an empty compilation result: only the static
routes remain and no first-leaf redirect happens.
"""

import logging

import httpx

from waypost.errors import MenuFormatError
from waypost.menu.node import MenuNode, parse_menu_tree
from waypost.routing.compiler import CompilationResult, compile_tree
from waypost.routing.components import ComponentRegistry
from waypost.security.audit import emit_security_event

_log = logging.getLogger("waypost.loader")

_NO_CACHE = {"Cache-Control": "no-store", "Pragma": "no-cache"}


async def fetch_menu_tree(http: httpx.AsyncClient, url: str) -> list[MenuNode]:
    """GET the menu tree, bypassing caches. Raises on any failure."""
    response = await http.get(url, headers=_NO_CACHE)
    response.raise_for_status()
    return parse_menu_tree(response.json())


async def load_routes(
    http: httpx.AsyncClient,
    url: str,
    registry: ComponentRegistry | None = None,
) -> CompilationResult:
    """Fetch and compile the menu tree; never raises for load failures."""
    try:
        nodes = await fetch_menu_tree(http, url)
    except (httpx.HTTPError, MenuFormatError, ValueError) as exc:
        _log.warning("Menu tree load from %s failed: %s", url, exc)
        emit_security_event("menu.load.failed", path=url, details={"error": str(exc)})
        return CompilationResult()

    result = compile_tree(nodes, registry)
    _log.info(
        "Compiled %d top-level routes from %s (first leaf: %s)",
        len(result.routes),
        url,
        result.first_leaf_path,
    )
    return result
