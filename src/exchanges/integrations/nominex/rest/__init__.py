# This module provides Nominex REST API implementations
from .nominex_rest import NominexRestClient
from .signer import NominexRequestSigner
from .exception_handler import NominexExceptionHandler, ERROR_CODE_MAPPING

__all__ = [
    "NominexRestClient",
    "NominexRequestSigner",
    "NominexExceptionHandler",
    "ERROR_CODE_MAPPING",
]
