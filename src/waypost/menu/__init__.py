"""Menu tree model, visibility filter, and name derivation."""

from waypost.menu.names import normalize_name
from waypost.menu.node import MenuNode, MenuType, parse_menu_tree
from waypost.menu.visibility import is_visible, visible

__all__ = [
    "MenuNode",
    "MenuType",
    "is_visible",
    "normalize_name",
    "parse_menu_tree",
    "visible",
]
