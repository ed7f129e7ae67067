"""Menu tree resolution — loads a tree from a file path or URL and compiles it.

Shared utility used by ``waypost routes`` and ``waypost check``.
"""

import json
from collections.abc import Iterator
from pathlib import Path

import anyio
import httpx

from waypost.loader import fetch_menu_tree
from waypost.menu.node import MenuNode, parse_menu_tree
from waypost.routing.compiler import CompilationResult, compile_tree
from waypost.routing.route import RouteNode
from waypost.routing.router import join_path


async def _fetch(url: str) -> list[MenuNode]:
    async with httpx.AsyncClient() as http:
        return await fetch_menu_tree(http, url)


def resolve_tree(source: str) -> CompilationResult:
    """Load and compile the menu tree at ``source``.

    ``source`` is an ``http(s)://`` URL or a filesystem path.

    Raises:
        OSError: If the file cannot be read.
        httpx.HTTPError: If the URL cannot be fetched.
        ValueError: If the payload is not valid JSON or not a menu tree.
    """
    if source.startswith(("http://", "https://")):
        nodes = anyio.run(_fetch, source)
    else:
        nodes = parse_menu_tree(json.loads(Path(source).read_text(encoding="utf-8")))
    return compile_tree(nodes)


def flatten(routes: tuple[RouteNode, ...], parent: str = "/") -> Iterator[tuple[str, RouteNode]]:
    """Yield ``(absolute_path, route)`` for every route, parents first."""
    for route in routes:
        full_path = join_path(parent, route.path)
        yield full_path, route
        yield from flatten(route.children, full_path)
