"""MenuNode — the server-delivered menu/permission tree.

Nodes are frozen after parsing. The server speaks camelCase JSON::

    {"id": 3, "name": "Jobs", "path": "/jobs", "component": "views/jobs/index",
     "menuType": "M", "isHidden": 0, "status": 0, "perms": "job:view",
     "children": [...]}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from waypost.errors import MenuFormatError


class MenuType(StrEnum):
    """Kind of menu entry. Buttons carry permissions but never become routes."""

    CATALOG = "C"
    MENU = "M"
    BUTTON = "B"


@dataclass(frozen=True, slots=True)
class MenuNode:
    """A single entry of the menu tree."""

    id: str | int
    name: str = ""
    path: str | None = None
    component: str | None = None
    children: tuple[MenuNode, ...] = ()
    is_hidden: int = 0
    menu_type: MenuType | None = None
    status: int = 0
    perms: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> MenuNode:
        """Build a node (and its subtree) from decoded JSON.

        Missing or ``null`` fields take their defaults and unknown keys are
        ignored. Raises ``MenuFormatError`` for a non-object node, a
        non-list ``children`` value, or a non-string ``path``,
        ``component`` or ``perms``. An unparseable ``status`` or
        ``isHidden`` flag hides the node.
        """
        if not isinstance(data, dict):
            msg = f"Menu node must be an object, got {type(data).__name__}"
            raise MenuFormatError(msg)

        raw_children = data.get("children")
        if raw_children is None:
            raw_children = []
        if not isinstance(raw_children, list):
            msg = f"Menu node {data.get('id')!r}: 'children' must be a list"
            raise MenuFormatError(msg)

        try:
            menu_type: MenuType | None = MenuType(data["menuType"])
        except (KeyError, ValueError, TypeError):
            menu_type = None

        return cls(
            id=data.get("id", ""),
            name=str(data.get("name") or ""),
            path=_as_str(data, "path"),
            component=_as_str(data, "component"),
            children=tuple(cls.from_dict(child) for child in raw_children),
            is_hidden=_as_int(data.get("isHidden")),
            menu_type=menu_type,
            status=_as_int(data.get("status")),
            perms=_as_str(data, "perms"),
        )


def _as_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        msg = f"Menu node {data.get('id')!r}: {key!r} must be a string, got {type(value).__name__}"
        raise MenuFormatError(msg)
    return value


def _as_int(value: Any) -> int:
    # Anything but a clean integer counts as set, which hides the node
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 1


def parse_menu_tree(data: Any) -> list[MenuNode]:
    """Parse the decoded top-level payload (a JSON array) into nodes."""
    if not isinstance(data, list):
        msg = f"Menu tree must be a list, got {type(data).__name__}"
        raise MenuFormatError(msg)
    return [MenuNode.from_dict(item) for item in data]
