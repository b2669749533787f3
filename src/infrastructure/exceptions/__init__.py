from .exchange import (
    ExchangeRestError, AuthenticationMissingError, ArgumentsRequiredError,
    RateLimitErrorRest, AuthenticationError, InvalidNonceError,
    InsufficientPermissionsError, BadRequestError, InvalidSymbolError,
    InvalidOrderError, InsufficientBalanceError, DuplicateOrderIdError,
    OrderNotFoundError, InvalidAddressError
)
from .system import ConfigurationError

__all__ = [
    "ExchangeRestError",
    "AuthenticationMissingError",
    "ArgumentsRequiredError",
    "RateLimitErrorRest",
    "AuthenticationError",
    "InvalidNonceError",
    "InsufficientPermissionsError",
    "BadRequestError",
    "InvalidSymbolError",
    "InvalidOrderError",
    "InsufficientBalanceError",
    "DuplicateOrderIdError",
    "OrderNotFoundError",
    "InvalidAddressError",
    "ConfigurationError",
]
