"""Shared fixtures: a representative menu tree and HTTP mocking helpers."""

import json
from collections.abc import Callable
from typing import Any, TypeAlias

import httpx
import pytest

from waypost.security.audit import SecurityEvent, set_security_event_sink

MENU_TREE: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Jobs",
        "path": "/jobs",
        "menuType": "C",
        "children": [
            {
                "id": 11,
                "name": "Job List",
                "path": "/jobs/list",
                "component": "views/jobs/list",
                "menuType": "M",
                "perms": "job:view",
            },
            {
                "id": 12,
                "name": "Edit Job",
                "path": "/jobs/edit",
                "component": "views/jobs/edit",
                "menuType": "M",
                "perms": "job:edit",
                "children": [{"id": 121, "name": "Save", "menuType": "B", "perms": "job:save"}],
            },
            {"id": 13, "name": "Archive", "path": "/jobs/archive", "isHidden": 1, "menuType": "M"},
        ],
    },
    {
        "id": 2,
        "name": "Orders",
        "path": "/orders",
        "component": "views/orders/index",
        "menuType": "M",
        "perms": "order:view",
    },
    {"id": 3, "name": "Reports", "path": "/reports", "status": 1, "menuType": "M"},
    {
        "id": 4,
        "name": "Group",
        "menuType": "C",
        "children": [{"id": 41, "name": "Orphan", "path": "/orphan", "menuType": "M"}],
    },
]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def menu_tree() -> list[dict[str, Any]]:
    # Deep copy so tests may mutate freely
    return json.loads(json.dumps(MENU_TREE))


@pytest.fixture
def security_events() -> list[SecurityEvent]:
    events: list[SecurityEvent] = []
    set_security_event_sink(events.append)
    yield events
    set_security_event_sink(None)


Handler: TypeAlias = Callable[[httpx.Request], httpx.Response]


def mock_http(handler: Handler) -> httpx.AsyncClient:
    """An ``httpx.AsyncClient`` whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def envelope(data: Any = None, code: int = 0, message: str = "") -> dict[str, Any]:
    return {"code": code, "message": message, "data": data}
