"""HTTP collaborator: response envelope and API client."""

from waypost.http.client import ApiClient
from waypost.http.envelope import Envelope, ErrorCode

__all__ = ["ApiClient", "Envelope", "ErrorCode"]
