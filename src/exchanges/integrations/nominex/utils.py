"""
Nominex Direct Utility Functions

Plain functions turning raw Nominex JSON into canonical structs. No I/O and
no shared state: market and currency lookups go through the registry passed
in by the caller.

Every field is optional. Absent fields become None; derived values
(cost, filled, average, open) are only computed when their inputs exist.
"""

from typing import Any, Dict, Iterable, List, Optional

from exchanges.integrations.nominex.services.market_registry import MarketRegistry
from exchanges.structs.common import (
    Balance, Balances, Currency, DepositAddress, Fee, Kline, Market, MarketLimits, MarketPrecision,
    MinMax, Order, OrderBook, OrderBookEntry, Ticker, Trade, TradingFees, Transaction
)
from exchanges.structs.enums import (
    KlineInterval, OrderStatus, Side, TakerOrMaker, TransactionStatus, TransactionType, WalletType
)
from exchanges.structs.types import AssetName, MarketId, OrderId, UnifiedSymbol
from exchanges.utils.precision import (
    iso8601, safe_float, safe_integer, safe_string, safe_string_lower, safe_value
)

# Nominex -> Unified mappings
_NOMINEX_TRANSACTION_STATUS_MAP = {
    'PROCESSED': TransactionStatus.PENDING.value,
    'CANCELED': TransactionStatus.CANCELED.value,
    'COMPLETED': TransactionStatus.OK.value,
}

# Unified -> Nominex mappings
_NOMINEX_SIDE_MAP = {
    Side.BUY: 'BUY',
    Side.SELL: 'SELL',
}

_NOMINEX_KLINE_INTERVAL_MAP = {
    KlineInterval.MINUTE_1: 'TF1M',
    KlineInterval.MINUTE_5: 'TF5M',
    KlineInterval.MINUTE_15: 'TF15M',
    KlineInterval.MINUTE_30: 'TF30M',
    KlineInterval.HOUR_1: 'TF1H',
    KlineInterval.HOUR_3: 'TF3H',
    KlineInterval.HOUR_6: 'TF6H',
    KlineInterval.HOUR_12: 'TF12H',
    KlineInterval.DAY_1: 'TF1D',
    KlineInterval.WEEK_1: 'TF7D',
    KlineInterval.WEEK_2: 'TF14D',
    KlineInterval.MONTH_1: 'TF1MO',
}


# Direct conversion functions
def from_side(side: str) -> str:
    """Convert unified side ('buy'/'sell') to Nominex format, unknown values pass through."""
    try:
        return _NOMINEX_SIDE_MAP[Side(side)]
    except ValueError:
        return side


def from_kline_interval(timeframe: str) -> str:
    """
    Convert unified timeframe ('1m', '1h', '1M', ...) to Nominex format.

    Raises:
        ValueError: If the timeframe is not supported
    """
    try:
        return _NOMINEX_KLINE_INTERVAL_MAP[KlineInterval(timeframe)]
    except ValueError:
        supported = ", ".join(i.value for i in KlineInterval)
        raise ValueError(f"Unsupported timeframe '{timeframe}'. Supported: {supported}")


def parse_transaction_status(status: Optional[str]) -> Optional[str]:
    """Map a Nominex transaction status; unknown statuses are returned unchanged."""
    if status is None:
        return None
    return _NOMINEX_TRANSACTION_STATUS_MAP.get(status, status)


def safe_currency_code(currency_id: Optional[str], registry: Optional[MarketRegistry] = None) -> Optional[AssetName]:
    """Unified currency code for a native id, the upper-cased id if unknown."""
    if currency_id is None:
        return None
    if registry is not None:
        currency = registry.currency_by_id(currency_id)
        if currency is not None:
            return currency.code
    return AssetName(currency_id.upper())


def split_market_id(market_id: str) -> List[str]:
    """
    Split a native pair id into base and quote ids.

    Nominex ids are "BTC/USDT". Ids without a separator fall back to a
    fixed-width split (3 + 3 characters), which is a best effort only and
    needs at least 6 characters.

    Raises:
        ValueError: If the id does not yield a non-empty base and quote
    """
    if '/' in market_id:
        base_id, quote_id = market_id.split('/', 1)
    elif len(market_id) >= 6:
        base_id, quote_id = market_id[0:3], market_id[3:6]
    else:
        base_id, quote_id = '', ''
    if not base_id or not quote_id:
        raise ValueError(f"Cannot split Nominex pair id into base and quote: {market_id!r}")
    return [base_id, quote_id]


def resolve_symbol(market_id: Optional[str], registry: Optional[MarketRegistry] = None) -> Optional[UnifiedSymbol]:
    """
    Unified symbol for a native pair id, registry first, split heuristic otherwise.

    Ids that cannot be split are returned unchanged.
    """
    if market_id is None:
        return None
    if registry is not None:
        market = registry.market_by_id(market_id)
        if market is not None:
            return market.symbol
    try:
        base_id, quote_id = split_market_id(market_id)
    except ValueError:
        return UnifiedSymbol(market_id)
    return UnifiedSymbol(f"{safe_currency_code(base_id, registry)}/{safe_currency_code(quote_id, registry)}")


def _market_symbol(raw: Dict[str, Any], key: str, market: Optional[Market],
                   registry: Optional[MarketRegistry]) -> Optional[UnifiedSymbol]:
    if market is not None:
        return market.symbol
    return resolve_symbol(safe_string(raw, key), registry)


def parse_market(raw: Dict[str, Any], registry: Optional[MarketRegistry] = None) -> Market:
    """Pair record from /pairs to Market; symbol is always base/quote."""
    market_id = safe_string(raw, 'name')
    if market_id is None:
        raise ValueError(f"Nominex pair without name: {raw}")
    base_id, quote_id = split_market_id(market_id)
    base = safe_currency_code(base_id, registry)
    quote = safe_currency_code(quote_id, registry)

    return Market(
        id=MarketId(market_id),
        symbol=UnifiedSymbol(f"{base}/{quote}"),
        base=base,
        quote=quote,
        base_id=base_id,
        quote_id=quote_id,
        active=safe_value(raw, 'active'),
        precision=MarketPrecision(
            price=safe_float(raw, 'quoteStep'),
            amount=safe_float(raw, 'baseStep'),
        ),
        limits=MarketLimits(
            amount=MinMax(min=safe_float(raw, 'minBaseAmount'), max=safe_float(raw, 'maxBaseAmount')),
            cost=MinMax(min=safe_float(raw, 'minQuoteAmount'), max=safe_float(raw, 'maxQuoteAmount')),
        ),
        info=raw,
    )


def parse_markets(raws: Iterable[Dict[str, Any]], registry: Optional[MarketRegistry] = None) -> List[Market]:
    return [parse_market(raw, registry) for raw in raws]


def parse_currency(raw: Dict[str, Any]) -> Currency:
    code = safe_string(raw, 'code')
    return Currency(
        id=code,
        code=AssetName(code) if code is not None else None,
        name=safe_string(raw, 'name'),
        active=True,
        fee=safe_float(raw, 'withdrawalFee'),
        precision=safe_integer(raw, 'scale'),
        info=raw,
    )


def parse_currencies(raws: Iterable[Dict[str, Any]]) -> List[Currency]:
    return [parse_currency(raw) for raw in raws]


def parse_ticker(raw: Dict[str, Any], market: Optional[Market] = None,
                 registry: Optional[MarketRegistry] = None) -> Ticker:
    """
    Ticker record to Ticker.

    open and previous_close are reconstructed as last - dailyChange.
    average is quoteVolume / baseVolume, None for a zero base volume.
    """
    timestamp = safe_integer(raw, 'timestamp')
    last = safe_float(raw, 'price')
    change = safe_float(raw, 'dailyChange')
    base_volume = safe_float(raw, 'baseVolume')
    quote_volume = safe_float(raw, 'quoteVolume')

    open_price = last - change if last is not None and change is not None else None
    average = None
    if base_volume and quote_volume is not None:
        average = quote_volume / base_volume

    return Ticker(
        symbol=_market_symbol(raw, 'pair', market, registry),
        timestamp=timestamp,
        datetime=iso8601(timestamp),
        high=safe_float(raw, 'high'),
        low=safe_float(raw, 'low'),
        bid=safe_float(raw, 'bid'),
        bid_volume=safe_float(raw, 'bidSize'),
        ask=safe_float(raw, 'ask'),
        ask_volume=safe_float(raw, 'askSize'),
        vwap=None,
        open=open_price,
        close=last,
        last=last,
        previous_close=open_price,
        change=change,
        percentage=safe_float(raw, 'dailyChangeP'),
        average=average,
        base_volume=base_volume,
        quote_volume=quote_volume,
        info=raw,
    )


def parse_trade(raw: Dict[str, Any], market: Optional[Market] = None,
                registry: Optional[MarketRegistry] = None) -> Trade:
    """Public trade or own fill to Trade."""
    timestamp = safe_integer(raw, 'timestamp')
    price = safe_float(raw, 'price')
    amount = safe_float(raw, 'amount')
    cost = price * amount if price is not None and amount is not None else None

    maker = safe_value(raw, 'maker')
    taker_or_maker = None
    if maker is not None:
        taker_or_maker = TakerOrMaker.MAKER.value if maker else TakerOrMaker.TAKER.value

    fee_cost = safe_float(raw, 'fee')
    fee = None
    if fee_cost is not None:
        fee = Fee(cost=fee_cost, currency=safe_string(raw, 'feeCurrencyCode'))

    order_id = safe_string(raw, 'orderId')

    return Trade(
        id=safe_string(raw, 'id'),
        symbol=_market_symbol(raw, 'pairName', market, registry),
        timestamp=timestamp,
        datetime=iso8601(timestamp),
        type=None,
        order=OrderId(order_id) if order_id is not None else None,
        side=safe_string_lower(raw, 'side'),
        taker_or_maker=taker_or_maker,
        price=price,
        amount=amount,
        cost=cost,
        fee=fee,
        info=raw,
    )


def parse_trades(raws: Optional[Iterable[Dict[str, Any]]], market: Optional[Market] = None,
                 registry: Optional[MarketRegistry] = None) -> List[Trade]:
    return [parse_trade(raw, market, registry) for raw in raws or ()]


def parse_order(raw: Dict[str, Any], market: Optional[Market] = None,
                registry: Optional[MarketRegistry] = None) -> Order:
    """
    Order record to Order.

    Nominex reports ``originalAmount`` (order size) and ``amount`` (what is
    left), so ``filled = originalAmount - amount``. The exchange has no last
    fill time; an order with fills reports its creation time instead.
    """
    timestamp = safe_integer(raw, 'created')
    original_amount = safe_float(raw, 'originalAmount')
    remaining = safe_float(raw, 'amount')

    filled = None
    last_trade_timestamp = None
    if original_amount is not None and remaining is not None:
        filled = original_amount - remaining
        if remaining < original_amount:
            last_trade_timestamp = timestamp

    order_id = safe_string(raw, 'id')
    status = OrderStatus.OPEN if safe_value(raw, 'active') else OrderStatus.CLOSED

    return Order(
        id=OrderId(order_id) if order_id is not None else None,
        symbol=_market_symbol(raw, 'pairName', market, registry),
        client_order_id=safe_string(raw, 'cid'),
        timestamp=timestamp,
        datetime=iso8601(timestamp),
        last_trade_timestamp=last_trade_timestamp,
        type=safe_string_lower(raw, 'type'),
        side=safe_string_lower(raw, 'side'),
        price=safe_float(raw, 'limitPrice'),
        stop_price=safe_float(raw, 'stopPrice'),
        trailing_price=safe_float(raw, 'trailingPrice'),
        future_price=safe_float(raw, 'futurePrice'),
        distance=safe_float(raw, 'distance'),
        average=None,
        amount=original_amount,
        filled=filled,
        remaining=remaining,
        status=status.value,
        hidden=safe_value(raw, 'hidden'),
        cost=None,
        fee=None,
        trades=None,
        info=raw,
    )


def parse_orders(raws: Optional[Iterable[Dict[str, Any]]], market: Optional[Market] = None,
                 registry: Optional[MarketRegistry] = None) -> List[Order]:
    return [parse_order(raw, market, registry) for raw in raws or ()]


def parse_transaction(raw: Dict[str, Any], registry: Optional[MarketRegistry] = None) -> Transaction:
    """
    Deposit or withdrawal record to Transaction.

    Nominex has no separate address field; ``walletId`` is reported as the
    address and the tag is always None.
    """
    timestamp = safe_integer(raw, 'timestamp')
    code = safe_currency_code(safe_string(raw, 'currencyCode'), registry)
    fee_cost = safe_float(raw, 'fee')

    return Transaction(
        id=safe_string(raw, 'id'),
        txid=safe_string(raw, 'txHash'),
        timestamp=timestamp,
        datetime=iso8601(timestamp),
        updated=safe_integer(raw, 'updated'),
        address=safe_string(raw, 'walletId'),
        tag=None,
        type=safe_string_lower(raw, 'type'),
        amount=safe_float(raw, 'amount'),
        currency=code,
        status=parse_transaction_status(safe_string(raw, 'status')),
        fee=Fee(currency=code, cost=abs(fee_cost) if fee_cost is not None else None, rate=None),
        info=raw,
    )


def parse_transactions(raws: Optional[Iterable[Dict[str, Any]]],
                       registry: Optional[MarketRegistry] = None,
                       transaction_type: Optional[TransactionType] = None) -> List[Transaction]:
    """
    Parse a page of transactions.

    Deposit and withdrawal endpoints do not tag their records, so
    ``transaction_type`` is written into each record before parsing.
    """
    if transaction_type is not None:
        tag = transaction_type.value.upper()
        raws = [{**raw, 'type': tag} if isinstance(raw, dict) else raw for raw in raws or ()]
    return [parse_transaction(raw, registry) for raw in raws or ()]


def parse_balance(raws: Iterable[Dict[str, Any]], wallet_type: str = WalletType.SPOT.value,
                  registry: Optional[MarketRegistry] = None) -> Balances:
    """
    Wallet list to Balances of one wallet type.

    The first entry per currency wins.
    """
    raws = list(raws or ())
    balances: Dict[str, Balance] = {}
    for raw in raws:
        if safe_value(raw, 'type') != wallet_type:
            continue
        code = safe_currency_code(safe_string(raw, 'currency'), registry)
        if code is None or code in balances:
            continue
        free = safe_float(raw, 'balanceAvailable')
        total = safe_float(raw, 'balance')
        used = total - free if total is not None and free is not None else None
        balances[code] = Balance(free=free, used=used, total=total)
    return Balances(balances=balances, info=raws)


def parse_order_book(raws: Iterable[Dict[str, Any]], symbol: UnifiedSymbol) -> OrderBook:
    """Price levels to OrderBook; SELL levels are asks, everything else bids."""
    bids = []
    asks = []
    for level in raws or ():
        price = safe_float(level, 'price')
        amount = safe_float(level, 'amount')
        if price is None or amount is None:
            continue
        entry = OrderBookEntry(price=price, amount=amount)
        if safe_string(level, 'side') == 'SELL':
            asks.append(entry)
        else:
            bids.append(entry)

    return OrderBook(
        symbol=symbol,
        bids=sorted(bids, key=lambda e: e.price, reverse=True),
        asks=sorted(asks, key=lambda e: e.price),
    )


def parse_ohlcv(raw: Dict[str, Any]) -> Kline:
    return Kline(
        timestamp=safe_integer(raw, 'timestamp'),
        open=safe_float(raw, 'open'),
        high=safe_float(raw, 'high'),
        low=safe_float(raw, 'low'),
        close=safe_float(raw, 'close'),
        volume=safe_float(raw, 'volume'),
    )


def parse_ohlcvs(raws: Optional[Iterable[Dict[str, Any]]]) -> List[Kline]:
    return [parse_ohlcv(raw) for raw in raws or ()]


def parse_trading_fees(raw: Dict[str, Any]) -> TradingFees:
    """Fee factors (0.001) to percent (0.1)."""
    maker = safe_float(raw, 'makerFeeFactor')
    taker = safe_float(raw, 'takerFeeFactor')
    return TradingFees(
        maker=maker * 100.0 if maker is not None else None,
        taker=taker * 100.0 if taker is not None else None,
        info=raw,
    )


def parse_deposit_address(raw: Dict[str, Any], code: str) -> DepositAddress:
    return DepositAddress(
        currency=AssetName(code),
        address=safe_string(raw, 'address'),
        tag=safe_string(raw, 'tag'),
        info=raw,
    )
