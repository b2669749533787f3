from .common import (
    Balance, Balances, Currency, DepositAddress, Fee, Kline, Market, MarketLimits, MarketPrecision,
    MinMax, Order, OrderBook, OrderBookEntry, Ticker, Trade, TradingFees, Transaction, WithdrawalResult
)
from .enums import (
    ExchangeEnum, KlineInterval, OrderStatus, OrderType, Side, TakerOrMaker,
    TransactionStatus, TransactionType, WalletType
)
from .types import AssetName, ExchangeName, MarketId, OrderId, UnifiedSymbol

__all__ = [
    "Balance",
    "Balances",
    "Currency",
    "DepositAddress",
    "Fee",
    "Kline",
    "Market",
    "MarketLimits",
    "MarketPrecision",
    "MinMax",
    "Order",
    "OrderBook",
    "OrderBookEntry",
    "Ticker",
    "Trade",
    "TradingFees",
    "Transaction",
    "WithdrawalResult",
    "ExchangeEnum",
    "KlineInterval",
    "OrderStatus",
    "OrderType",
    "Side",
    "TakerOrMaker",
    "TransactionStatus",
    "TransactionType",
    "WalletType",
    "AssetName",
    "ExchangeName",
    "MarketId",
    "OrderId",
    "UnifiedSymbol",
]
