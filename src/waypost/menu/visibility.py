"""Visibility filter over menu nodes.

Applied wherever a node's children are about to be processed, at every
depth. It is idempotent, so reapplying it to an already-filtered list is
harmless.
"""

from collections.abc import Iterable

from waypost.menu.node import MenuNode, MenuType


def is_visible(node: MenuNode) -> bool:
    """Enabled, not hidden, and not a button."""
    return node.status == 0 and node.is_hidden == 0 and node.menu_type is not MenuType.BUTTON


def visible(nodes: Iterable[MenuNode] | None) -> list[MenuNode]:
    """Return the visible nodes, preserving order."""
    if not nodes:
        return []
    return [node for node in nodes if is_visible(node)]
