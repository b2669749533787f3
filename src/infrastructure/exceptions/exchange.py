from typing import Any, Optional


class ExchangeRestError(Exception):
    """Base exception for all exchange REST API errors.

    Also raised as the catch-all when a failure body carries a provider code
    that has no entry in the exchange's error table.
    """
    def __init__(self, code: int, message: str, api_code: Optional[str] = None,
                 body: Any = None) -> None:
        self.api_code = api_code
        self.message = message
        self.status_code = code
        # Raw error body as received from the exchange, kept for diagnosis
        self.body = body
        super().__init__(f"HTTP {code}: {message}")


# Request precondition errors (raised before any network call)
class AuthenticationMissingError(ExchangeRestError):
    """Private endpoint requested without api key / secret configured."""
    def __init__(self, message: str) -> None:
        super().__init__(0, message)


class ArgumentsRequiredError(ExchangeRestError):
    """Operation called without an argument it cannot work without."""
    def __init__(self, message: str) -> None:
        super().__init__(0, message)


# Rate Limiting Errors (Retryable with backoff)
class RateLimitErrorRest(ExchangeRestError):
    """Rate limit exceeded errors."""
    def __init__(self, code: int, message: str, api_code: Optional[str] = None,
                 body: Any = None, retry_after: Optional[int] = None) -> None:
        super().__init__(code, message, api_code, body)
        self.retry_after = retry_after

    def __str__(self):
        return f"RateLimitError: {self.status_code} - {self.message} - {self.api_code} - {self.retry_after}"


# Authentication and Authorization Errors (Non-retryable)
class AuthenticationError(ExchangeRestError):
    """Authentication failed - API key or signature rejected."""
    pass


class InvalidNonceError(AuthenticationError):
    """Nonce rejected - equal to or lower than a previously used one."""
    pass


class InsufficientPermissionsError(AuthenticationError):
    """API key lacks required permissions for endpoint."""
    pass


# Business Logic Errors (Non-retryable)
class BadRequestError(ExchangeRestError):
    """Malformed request or invalid parameters."""
    pass


class InvalidSymbolError(BadRequestError):
    """Invalid or non-existent trading symbol."""
    pass


class InvalidOrderError(ExchangeRestError):
    """Order rejected - invalid price, amount or type."""
    pass


class InsufficientBalanceError(InvalidOrderError):
    """Insufficient balance for operation."""
    pass


class DuplicateOrderIdError(InvalidOrderError):
    """Client order id already used."""
    pass


class OrderNotFoundError(InvalidOrderError):
    """Order not found for given ID."""
    pass


class InvalidAddressError(ExchangeRestError):
    """Deposit or withdrawal address is missing or malformed."""
    pass
