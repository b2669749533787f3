"""
Canonical data structures shared by exchange integrations.

Every exchange response is normalized into one of these records, so client
code never sees provider field names. All structures use msgspec.Struct and
are frozen: a normalized record is an immutable snapshot.

Conventions:
- Missing values are ``None``, never a substituted zero
- Timestamps are Unix milliseconds, ``datetime`` is the matching ISO-8601 string
- ``info`` keeps the raw exchange record the struct was built from
"""

from typing import Any, Dict, List, Optional

from msgspec import Struct

from .types import AssetName, MarketId, OrderId, UnifiedSymbol


class MinMax(Struct, frozen=True):
    min: Optional[float] = None
    max: Optional[float] = None


class MarketPrecision(Struct, frozen=True):
    """Tick sizes for price and amount (not decimal places)."""
    price: Optional[float] = None
    amount: Optional[float] = None


class MarketLimits(Struct, frozen=True):
    amount: MinMax = MinMax()
    cost: MinMax = MinMax()


class Market(Struct, frozen=True):
    """Trading pair as listed by the exchange.

    ``symbol`` is always ``base + "/" + quote``.
    """
    id: MarketId
    symbol: UnifiedSymbol
    base: AssetName
    quote: AssetName
    base_id: str
    quote_id: str
    active: Optional[bool] = None
    precision: MarketPrecision = MarketPrecision()
    limits: MarketLimits = MarketLimits()
    info: Any = None

    def __str__(self) -> str:
        return self.symbol


class Currency(Struct, frozen=True):
    """Currency information. ``precision`` is the decimal scale."""
    id: str
    code: AssetName
    name: Optional[str] = None
    active: bool = True
    fee: Optional[float] = None
    precision: Optional[int] = None
    info: Any = None


class Ticker(Struct, frozen=True):
    """24hr ticker statistics."""
    symbol: Optional[UnifiedSymbol]
    timestamp: Optional[int] = None
    datetime: Optional[str] = None
    high: Optional[float] = None
    low: Optional[float] = None
    bid: Optional[float] = None
    bid_volume: Optional[float] = None
    ask: Optional[float] = None
    ask_volume: Optional[float] = None
    vwap: Optional[float] = None
    open: Optional[float] = None
    close: Optional[float] = None
    last: Optional[float] = None
    previous_close: Optional[float] = None
    change: Optional[float] = None
    percentage: Optional[float] = None
    average: Optional[float] = None
    base_volume: Optional[float] = None
    quote_volume: Optional[float] = None
    info: Any = None


class Fee(Struct, frozen=True):
    """Fee paid for a trade or wallet transaction."""
    cost: Optional[float] = None
    currency: Optional[AssetName] = None
    rate: Optional[float] = None


class Trade(Struct, frozen=True):
    """Public trade or own fill."""
    id: Optional[str]
    symbol: Optional[UnifiedSymbol]
    timestamp: Optional[int] = None
    datetime: Optional[str] = None
    type: Optional[str] = None
    order: Optional[OrderId] = None
    side: Optional[str] = None
    taker_or_maker: Optional[str] = None
    price: Optional[float] = None
    amount: Optional[float] = None
    cost: Optional[float] = None
    fee: Optional[Fee] = None
    info: Any = None


class Order(Struct, frozen=True):
    """Order state.

    ``filled + remaining == amount`` where ``amount`` is the original order
    size. ``last_trade_timestamp`` is the creation time of a partially or
    fully executed order; the exchange does not report the actual fill time.
    """
    id: Optional[OrderId]
    symbol: Optional[UnifiedSymbol]
    client_order_id: Optional[str] = None
    timestamp: Optional[int] = None
    datetime: Optional[str] = None
    last_trade_timestamp: Optional[int] = None
    type: Optional[str] = None
    side: Optional[str] = None
    price: Optional[float] = None
    stop_price: Optional[float] = None
    trailing_price: Optional[float] = None
    future_price: Optional[float] = None
    distance: Optional[float] = None
    average: Optional[float] = None
    amount: Optional[float] = None
    filled: Optional[float] = None
    remaining: Optional[float] = None
    status: Optional[str] = None
    hidden: Optional[bool] = None
    cost: Optional[float] = None
    fee: Optional[Fee] = None
    trades: Optional[List[Trade]] = None
    info: Any = None

    @property
    def is_open(self) -> bool:
        return self.status == "open"

    def __str__(self):
        return (f"{self.symbol} {self.side} {self.type} "
                f"({self.amount}/{self.filled})@{self.price} status: {self.status}")


class Transaction(Struct, frozen=True):
    """Deposit or withdrawal."""
    id: Optional[str]
    currency: Optional[AssetName]
    txid: Optional[str] = None
    timestamp: Optional[int] = None
    datetime: Optional[str] = None
    updated: Optional[int] = None
    address: Optional[str] = None
    tag: Optional[str] = None
    type: Optional[str] = None
    amount: Optional[float] = None
    status: Optional[str] = None
    fee: Optional[Fee] = None
    info: Any = None


class Balance(Struct, frozen=True):
    """Account balance for a single currency."""
    free: Optional[float] = None
    used: Optional[float] = None
    total: Optional[float] = None

    def __str__(self):
        return f"{self.total}({self.free}/{self.used})"


class Balances(Struct, frozen=True):
    """Balances of one wallet keyed by currency code."""
    balances: Dict[str, Balance]
    info: Any = None

    def __getitem__(self, code: str) -> Balance:
        return self.balances[code]

    def __contains__(self, code: str) -> bool:
        return code in self.balances

    @property
    def free(self) -> Dict[str, Optional[float]]:
        return {code: b.free for code, b in self.balances.items()}

    @property
    def total(self) -> Dict[str, Optional[float]]:
        return {code: b.total for code, b in self.balances.items()}


class OrderBookEntry(Struct, frozen=True):
    """Individual orderbook entry."""
    price: float
    amount: float


class OrderBook(Struct, frozen=True):
    """Orderbook snapshot, both sides sorted best price first."""
    symbol: UnifiedSymbol
    bids: List[OrderBookEntry]
    asks: List[OrderBookEntry]
    timestamp: Optional[int] = None
    datetime: Optional[str] = None
    nonce: Optional[int] = None


class Kline(Struct, frozen=True):
    """Kline/candlestick data."""
    timestamp: Optional[int]  # Unix timestamp (milliseconds)
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[float] = None  # Base asset volume


class TradingFees(Struct, frozen=True):
    """Account trading fees in percent (e.g. 0.1 for 0.1%)."""
    maker: Optional[float] = None
    taker: Optional[float] = None
    info: Any = None


class DepositAddress(Struct, frozen=True):
    """Deposit address information for receiving funds."""
    currency: AssetName
    address: Optional[str]
    tag: Optional[str] = None
    info: Any = None


class WithdrawalResult(Struct, frozen=True):
    """Identifier of an accepted withdrawal request."""
    id: Optional[str]
    info: Any = None
