from enum import Enum
from typing import Any, Dict, Optional
import msgspec


class HTTPMethod(Enum):
    """HTTP methods with wire string values."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        """GET and DELETE requests never carry a body."""
        return self not in (HTTPMethod.GET, HTTPMethod.DELETE)


class SignedRequest(msgspec.Struct, frozen=True):
    """Transport-ready request produced by a request signer."""
    url: str
    method: HTTPMethod
    headers: Optional[Dict[str, str]] = None
    body: Optional[str] = None  # Pre-encoded JSON, sent as-is


class TransportResponse(msgspec.Struct, frozen=True):
    """What the transport hands back: status, parsed JSON (or None) and raw text."""
    status_code: int
    body: Any = None
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code < 400
