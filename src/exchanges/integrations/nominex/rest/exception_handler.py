"""
Nominex error translation.

Maps a failed HTTP response to the unified exception hierarchy. The error
body comes in one of three shapes, tried in this order:

    {"code": "1102", ...}
    {"codes": ["110.110", ...], ...}
    [{"code": "1106", ...}, ...]

Codes are matched exactly against ERROR_CODE_MAPPING. A code missing from the
table raises the base ExchangeRestError; the raw body is attached either way.
"""

from typing import Any, Callable, Optional, Tuple

import msgspec

from exchanges.integrations.nominex.structs.exchange import (
    NominexErrorCode, NominexErrorCodesResponse, NominexErrorListResponse, NominexErrorResponse
)
from exchanges.structs.enums import ExchangeEnum
from infrastructure.exceptions.exchange import (
    AuthenticationError, BadRequestError, DuplicateOrderIdError, ExchangeRestError,
    InsufficientBalanceError, InsufficientPermissionsError, InvalidAddressError,
    InvalidNonceError, InvalidOrderError, InvalidSymbolError, OrderNotFoundError,
    RateLimitErrorRest
)
from infrastructure.logging import HFTLoggerInterface, get_exchange_logger

ERROR_CODE_MAPPING = {
    '100.2': InvalidSymbolError,            # Symbol not found
    '101': InvalidNonceError,               # Nonce is too small
    '103': AuthenticationError,             # Invalid api key or signature
    '103.4': InvalidOrderError,             # Invalid order amount
    '104.4': InvalidOrderError,             # Invalid order price
    '110.110': RateLimitErrorRest,          # Too many requests
    '121': InsufficientPermissionsError,    # Api key has no permission
    '601': BadRequestError,                 # Bad request
    '1101': InsufficientBalanceError,       # Not enough funds
    '1102': DuplicateOrderIdError,          # Client order id already exists
    '1106': OrderNotFoundError,             # Order not found
    '20002': InvalidAddressError,           # Invalid withdrawal address
}


def _code_to_str(code: NominexErrorCode) -> str:
    if isinstance(code, float) and code.is_integer():
        return str(int(code))
    return str(code)


def _from_code(body: Any) -> Optional[str]:
    return _code_to_str(msgspec.convert(body, NominexErrorResponse).code)


def _from_codes(body: Any) -> Optional[str]:
    codes = msgspec.convert(body, NominexErrorCodesResponse).codes
    return _code_to_str(codes[0]) if codes else None


def _from_list(body: Any) -> Optional[str]:
    errors = msgspec.convert(body, NominexErrorListResponse)
    return _code_to_str(errors[0].code) if errors else None


_SHAPE_DECODERS: Tuple[Callable[[Any], Optional[str]], ...] = (_from_code, _from_codes, _from_list)


def extract_error_code(body: Any) -> Optional[str]:
    """
    Provider error code from a parsed error body.

    The first shape that decodes wins. Returns None when no shape matches
    or the matching shape carries no code.
    """
    for decode in _SHAPE_DECODERS:
        try:
            return decode(body)
        except msgspec.ValidationError:
            continue
    return None


class NominexExceptionHandler:
    """Raises the unified exception for a failed Nominex response."""

    def __init__(self, logger: Optional[HFTLoggerInterface] = None):
        self.logger = logger or get_exchange_logger(ExchangeEnum.NOMINEX.value, 'rest.exception_handler')

    def handle_errors(self, status_code: int, body: Any, text: str = "") -> None:
        """
        Raise for a failed response, do nothing otherwise.

        Args:
            status_code: HTTP status code
            body: Parsed JSON body, None when absent or not valid JSON
            text: Raw body text, used in the error message

        Raises:
            ExchangeRestError: Or the subclass mapped from the provider code
        """
        if body is None or status_code < 400:
            return

        api_code = extract_error_code(body)
        message = f"nominex {text or msgspec.json.encode(body).decode()}"

        error_class = ERROR_CODE_MAPPING.get(api_code) if api_code is not None else None
        if error_class is None:
            self.logger.warning("Unknown Nominex error",
                                status=status_code,
                                api_code=api_code)
            self.logger.metric("nominex_unknown_errors", 1, tags={"status": str(status_code)})
            raise ExchangeRestError(status_code, message, api_code, body)

        self.logger.warning("Nominex request rejected",
                            status=status_code,
                            api_code=api_code,
                            error=error_class.__name__)
        raise error_class(status_code, message, api_code, body)
