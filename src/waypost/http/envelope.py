"""Unified API response envelope: ``{"code": int, "message": str, "data": any}``.

``code == 0`` is success. Every other code is an error carrying
``message``; ``ErrorCode.UNAUTHORIZED`` additionally forces a logout.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from waypost.errors import ApiError


class ErrorCode(IntEnum):
    """Envelope codes issued by the backend."""

    SUCCESS = 0
    INTERNAL_SERVER = 10001
    INVALID_PARAM = 10002
    UNAUTHORIZED = 10003
    FORBIDDEN = 10004
    NOT_FOUND = 10005
    HAS_CHILDREN = 10006

    USER_NOT_FOUND = 20001
    USER_ALREADY_EXISTS = 20002
    USER_INVALID_PASSWORD = 20003
    USER_INVALID_TOKEN = 20004
    USER_TOKEN_EXPIRED = 20005


@dataclass(frozen=True, slots=True)
class Envelope:
    code: int
    message: str = ""
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.code == ErrorCode.SUCCESS

    @classmethod
    def from_body(cls, body: Any) -> Envelope | None:
        """Return the envelope in ``body``, or ``None`` if it carries no ``code``."""
        if not isinstance(body, dict) or body.get("code") is None:
            return None
        try:
            code = int(body["code"])
        except (TypeError, ValueError):
            return None
        return cls(code=code, message=str(body.get("message") or ""), data=body.get("data"))

    def error(self) -> ApiError:
        return ApiError(self.message or "Request Error", code=self.code)
