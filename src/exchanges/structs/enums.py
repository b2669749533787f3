from enum import Enum

from .types import ExchangeName


class ExchangeEnum(Enum):
    """
    Enumeration of supported centralized exchanges.

    Used throughout the system for type-safe exchange identification
    and consistent naming across all components.
    """
    NOMINEX = ExchangeName("nominex")


class Side(str, Enum):
    """Order side as exposed in canonical records."""
    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    """Order types supported by the REST adapter."""
    LIMIT = "limit"
    MARKET = "market"


class OrderStatus(str, Enum):
    """Canonical order status, derived from the exchange ``active`` flag."""
    OPEN = "open"
    CLOSED = "closed"


class TakerOrMaker(str, Enum):
    TAKER = "taker"
    MAKER = "maker"


class TransactionType(str, Enum):
    """Wallet transaction direction."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class TransactionStatus(str, Enum):
    """
    Canonical transaction status.

    Exchange statuses without a canonical counterpart are kept verbatim,
    so ``Transaction.status`` is a plain string rather than this enum.
    """
    PENDING = "pending"
    CANCELED = "canceled"
    OK = "ok"


class KlineInterval(str, Enum):
    """Kline/candlestick interval definitions."""
    MINUTE_1 = "1m"
    MINUTE_5 = "5m"
    MINUTE_15 = "15m"
    MINUTE_30 = "30m"
    HOUR_1 = "1h"
    HOUR_3 = "3h"
    HOUR_6 = "6h"
    HOUR_12 = "12h"
    DAY_1 = "1d"
    WEEK_1 = "1w"
    WEEK_2 = "2w"
    MONTH_1 = "1M"


class WalletType(str, Enum):
    """Nominex wallet kinds; balances and orders are scoped to one of them."""
    SPOT = "SPOT"
    MARGIN = "MARGIN"
