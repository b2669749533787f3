from .exchange import NominexErrorResponse, NominexErrorCodesResponse, NominexErrorListResponse

__all__ = [
    "NominexErrorResponse",
    "NominexErrorCodesResponse",
    "NominexErrorListResponse",
]
