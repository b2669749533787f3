from .structs import HTTPMethod, SignedRequest, TransportResponse
from .nonce import MillisecondNonce, FixedNonce
from .transport import RestTransport, AiohttpRestTransport

__all__ = [
    "HTTPMethod",
    "SignedRequest",
    "TransportResponse",
    "MillisecondNonce",
    "FixedNonce",
    "RestTransport",
    "AiohttpRestTransport",
]
