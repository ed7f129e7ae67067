"""Permission cache, token store, audit events, and redirect safety.

Usage::

    from waypost.security import PermissionCache, TokenStore, is_safe_url
"""

from waypost.security.audit import SecurityEvent, emit_security_event, set_security_event_sink
from waypost.security.permissions import PermissionCache, has_perm
from waypost.security.tokens import TokenProvider, TokenStore
from waypost.security.urls import is_safe_url

__all__ = [
    "PermissionCache",
    "SecurityEvent",
    "TokenProvider",
    "TokenStore",
    "emit_security_event",
    "has_perm",
    "is_safe_url",
    "set_security_event_sink",
]
