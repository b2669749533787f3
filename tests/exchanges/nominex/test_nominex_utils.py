"""
Tests for Nominex response normalization.
"""

import pytest

from exchanges.integrations.nominex.services.market_registry import InMemoryMarketRegistry
from exchanges.integrations.nominex.utils import (
    from_kline_interval, from_side, parse_balance, parse_currency, parse_market, parse_markets,
    parse_ohlcv, parse_order, parse_order_book, parse_orders, parse_ticker, parse_trade,
    parse_trades, parse_trading_fees, parse_transaction, parse_transaction_status,
    parse_transactions, resolve_symbol, split_market_id
)
from exchanges.structs.enums import TransactionType


class TestMarkets:

    def test_parse_market(self):
        raw = {
            "name": "BTC/USDT", "active": True, "quoteStep": 0.01, "baseStep": 0.000001,
            "minBaseAmount": 0.0001, "maxBaseAmount": 100, "minQuoteAmount": 10, "maxQuoteAmount": 1000000
        }
        market = parse_market(raw)
        assert market.id == "BTC/USDT"
        assert market.symbol == "BTC/USDT"
        assert (market.base, market.quote) == ("BTC", "USDT")
        assert (market.base_id, market.quote_id) == ("BTC", "USDT")
        assert market.active is True
        assert market.precision.price == 0.01
        assert market.precision.amount == 0.000001
        assert market.limits.amount.min == 0.0001
        assert market.limits.amount.max == 100
        assert market.limits.cost.min == 10
        assert market.limits.cost.max == 1000000
        assert market.info is raw

    @pytest.mark.parametrize("name", ["BTC/USDT", "eth/btc", "NMX/USDT", "XRP/EUR"])
    def test_symbol_is_base_slash_quote(self, name):
        market = parse_market({"name": name})
        assert market.symbol == market.base + "/" + market.quote

    def test_missing_fields_are_none(self):
        market = parse_market({"name": "BTC/USDT"})
        assert market.active is None
        assert market.precision.price is None
        assert market.limits.cost.max is None

    def test_market_without_name(self):
        with pytest.raises(ValueError):
            parse_market({"active": True})

    def test_parse_markets_preserves_order(self):
        markets = parse_markets([{"name": "ETH/BTC"}, {"name": "BTC/USDT"}])
        assert [m.id for m in markets] == ["ETH/BTC", "BTC/USDT"]

    def test_parse_currency(self):
        currency = parse_currency({"code": "BTC", "name": "Bitcoin", "withdrawalFee": "0.0005", "scale": 8})
        assert currency.id == currency.code == "BTC"
        assert currency.name == "Bitcoin"
        assert currency.active is True
        assert currency.fee == 0.0005
        assert currency.precision == 8


class TestSymbolResolution:

    def test_split_with_separator(self):
        assert split_market_id("BTC/USDT") == ["BTC", "USDT"]

    def test_fixed_width_fallback(self):
        assert split_market_id("BTCUSD") == ["BTC", "USD"]

    @pytest.mark.parametrize("market_id", ["BTC", "BTCUS", "BTC/", "/USDT", ""])
    def test_unsplittable_ids(self, market_id):
        with pytest.raises(ValueError):
            split_market_id(market_id)

    def test_short_pair_name_is_rejected(self):
        with pytest.raises(ValueError):
            parse_market({"name": "BTC"})

    def test_unsplittable_id_resolves_to_itself(self):
        assert resolve_symbol("BTC") == "BTC"

    def test_registry_first(self, registry):
        assert resolve_symbol("ETH/BTC", registry) == "ETH/BTC"

    def test_unknown_id_falls_back(self, registry):
        assert resolve_symbol("LTCUSD", registry) == "LTC/USD"

    def test_none(self):
        assert resolve_symbol(None) is None


class TestTicker:

    RAW = {
        "pair": "BTC/USDT", "timestamp": 1600000000000, "price": 10500.0, "dailyChange": 500.0,
        "dailyChangeP": 5.0, "high": 10600.0, "low": 9900.0, "bid": 10499.0, "bidSize": 1.5,
        "ask": 10501.0, "askSize": 2.5, "baseVolume": 10.0, "quoteVolume": 500.0,
    }

    def test_parse_ticker(self, registry):
        ticker = parse_ticker(self.RAW, registry=registry)
        assert ticker.symbol == "BTC/USDT"
        assert ticker.timestamp == 1600000000000
        assert ticker.datetime == "2020-09-13T12:26:40.000Z"
        assert ticker.last == ticker.close == 10500.0
        assert ticker.open == ticker.previous_close == 10000.0
        assert ticker.change == 500.0
        assert ticker.percentage == 5.0
        assert ticker.bid_volume == 1.5
        assert ticker.ask_volume == 2.5
        assert ticker.vwap is None
        assert ticker.average == 50.0

    def test_malformed_timestamp(self):
        ticker = parse_ticker({**self.RAW, "timestamp": "NaN"})
        assert ticker.timestamp is None
        assert ticker.datetime is None
        assert ticker.last == 10500.0

    def test_average_undefined_for_zero_base_volume(self):
        ticker = parse_ticker({**self.RAW, "baseVolume": 0})
        assert ticker.average is None

    def test_open_undefined_without_change(self):
        raw = {k: v for k, v in self.RAW.items() if k != "dailyChange"}
        ticker = parse_ticker(raw)
        assert ticker.open is None
        assert ticker.previous_close is None
        assert ticker.last == 10500.0

    def test_market_symbol_wins(self, markets):
        ticker = parse_ticker({**self.RAW, "pair": "XXXYYY"}, market=markets[1])
        assert ticker.symbol == "ETH/BTC"


class TestTrade:

    def test_parse_trade(self, markets):
        raw = {
            "id": 11, "timestamp": 1600000000000, "side": "BUY", "orderId": 99, "price": "100.5",
            "amount": "2", "maker": True, "fee": 0.1, "feeCurrencyCode": "USDT",
        }
        trade = parse_trade(raw, markets[0])
        assert trade.id == "11"
        assert trade.symbol == "BTC/USDT"
        assert trade.side == "buy"
        assert trade.order == "99"
        assert trade.type is None
        assert trade.price == 100.5
        assert trade.amount == 2.0
        assert trade.cost == 201.0
        assert trade.taker_or_maker == "maker"
        assert trade.fee.cost == 0.1
        assert trade.fee.currency == "USDT"

    def test_optional_fields_absent(self, markets):
        trade = parse_trade({"id": 1, "side": "SELL", "price": 10}, markets[0])
        assert trade.order is None
        assert trade.taker_or_maker is None
        assert trade.fee is None
        assert trade.cost is None

    def test_non_object_record(self):
        trade = parse_trade(None)
        assert trade.id is None
        assert trade.taker_or_maker is None
        assert trade.fee is None

    def test_taker(self, markets):
        assert parse_trade({"maker": False}, markets[0]).taker_or_maker == "taker"

    def test_parse_trades_handles_missing_page(self, markets):
        assert parse_trades(None, markets[0]) == []
        trades = parse_trades([{"id": 2}, {"id": 1}], markets[0])
        assert [t.id for t in trades] == ["2", "1"]


class TestOrder:

    RAW = {
        "id": 123, "cid": 77, "pairName": "BTC/USDT", "side": "BUY", "type": "LIMIT",
        "created": 1600000000000, "originalAmount": 1.0, "amount": 0.25, "limitPrice": 10000.0,
        "active": True, "hidden": False,
    }

    def test_parse_order(self, registry):
        order = parse_order(self.RAW, registry=registry)
        assert order.id == "123"
        assert order.client_order_id == "77"
        assert order.symbol == "BTC/USDT"
        assert order.side == "buy"
        assert order.type == "limit"
        assert order.status == "open"
        assert order.amount == 1.0
        assert order.remaining == 0.25
        assert order.filled == 0.75
        assert order.price == 10000.0
        assert order.hidden is False
        assert order.timestamp == 1600000000000
        assert order.last_trade_timestamp == 1600000000000
        assert order.average is None
        assert order.fee is None

    def test_closed_status(self):
        assert parse_order({**self.RAW, "active": False}).status == "closed"
        assert parse_order(self.RAW).is_open()
        assert not parse_order({**self.RAW, "active": False}).is_open()
        assert parse_order({k: v for k, v in self.RAW.items() if k != "active"}).status == "closed"

    def test_malformed_created(self):
        order = parse_order({**self.RAW, "created": "Infinity"})
        assert order.timestamp is None
        assert order.last_trade_timestamp is None
        assert order.filled == 0.75

    @pytest.mark.parametrize("raw", [None, [], "ok"])
    def test_non_object_record(self, raw):
        order = parse_order(raw)
        assert order.id is None
        assert order.status == "closed"
        assert order.info == raw

    @pytest.mark.parametrize("original, remaining", [(1.0, 1.0), (0.3, 0.1), (5, 0), (0.7, 0.2)])
    def test_filled_plus_remaining_equals_amount(self, original, remaining):
        order = parse_order({**self.RAW, "originalAmount": original, "amount": remaining})
        assert order.filled + order.remaining == pytest.approx(order.amount)

    def test_untouched_order_has_no_last_trade(self):
        order = parse_order({**self.RAW, "amount": 1.0})
        assert order.filled == 0.0
        assert order.last_trade_timestamp is None

    def test_conditional_prices_only_when_present(self):
        order = parse_order(self.RAW)
        assert order.stop_price is None
        assert order.trailing_price is None
        assert order.future_price is None
        assert order.distance is None

        order = parse_order({**self.RAW, "stopPrice": 9000, "trailingPrice": 50,
                             "futurePrice": 9500, "distance": 1.5})
        assert order.stop_price == 9000.0
        assert order.trailing_price == 50.0
        assert order.future_price == 9500.0
        assert order.distance == 1.5

    def test_market_order_without_limit_price(self):
        order = parse_order({k: v for k, v in self.RAW.items() if k != "limitPrice"})
        assert order.price is None

    def test_parse_orders(self, registry):
        orders = parse_orders([self.RAW, {**self.RAW, "id": 124}], registry=registry)
        assert [o.id for o in orders] == ["123", "124"]


class TestTransaction:

    @pytest.mark.parametrize("status, expected", [
        ("PROCESSED", "pending"),
        ("CANCELED", "canceled"),
        ("COMPLETED", "ok"),
        ("REJECTED", "REJECTED"),
        (None, None),
    ])
    def test_status_mapping(self, status, expected):
        assert parse_transaction_status(status) == expected

    def test_parse_transaction(self, registry):
        raw = {
            "id": 5, "txHash": "0xabc", "timestamp": 1600000000000, "updated": 1600000001000,
            "walletId": "wallet-1", "type": "DEPOSIT", "amount": "1.5", "currencyCode": "BTC",
            "status": "COMPLETED", "fee": -0.0005,
        }
        tx = parse_transaction(raw, registry)
        assert tx.id == "5"
        assert tx.txid == "0xabc"
        assert tx.updated == 1600000001000
        assert tx.address == "wallet-1"
        assert tx.tag is None
        assert tx.type == "deposit"
        assert tx.amount == 1.5
        assert tx.currency == "BTC"
        assert tx.status == "ok"
        assert tx.fee.cost == 0.0005
        assert tx.fee.currency == "BTC"
        assert tx.fee.rate is None

    def test_parse_transactions_sets_type_without_mutating(self):
        raws = [{"id": 1, "status": "PROCESSED"}, {"id": 2, "status": "CANCELED"}]
        txs = parse_transactions(raws, transaction_type=TransactionType.WITHDRAWAL)
        assert [tx.type for tx in txs] == ["withdrawal", "withdrawal"]
        assert [tx.status for tx in txs] == ["pending", "canceled"]
        assert "type" not in raws[0]


class TestBalance:

    def test_first_entry_per_currency_wins(self):
        raws = [
            {"currency": "BTC", "type": "SPOT", "balance": 2.0, "balanceAvailable": 1.5},
            {"currency": "BTC", "type": "SPOT", "balance": 9.0, "balanceAvailable": 9.0},
            {"currency": "USDT", "type": "MARGIN", "balance": 100.0, "balanceAvailable": 100.0},
            {"currency": "USDT", "type": "SPOT", "balance": 50.0, "balanceAvailable": 20.0},
        ]
        balances = parse_balance(raws)
        assert set(balances.balances) == {"BTC", "USDT"}
        assert balances["BTC"].total == 2.0
        assert balances["BTC"].free == 1.5
        assert balances["BTC"].used == 0.5
        assert balances["USDT"].total == 50.0
        assert balances.total == {"BTC": 2.0, "USDT": 50.0}
        assert balances.free == {"BTC": 1.5, "USDT": 20.0}
        assert balances.info == raws

    def test_wallet_type_scope(self):
        raws = [{"currency": "USDT", "type": "MARGIN", "balance": 100.0, "balanceAvailable": 60.0}]
        assert "USDT" not in parse_balance(raws)
        assert parse_balance(raws, "MARGIN")["USDT"].used == 40.0

    def test_non_object_entries_are_skipped(self):
        balances = parse_balance([None, "SPOT", {"currency": "BTC", "type": "SPOT", "balance": 1.0}])
        assert list(balances.balances) == ["BTC"]

    def test_unknown_amounts(self):
        balances = parse_balance([{"currency": "BTC", "type": "SPOT", "balance": 1.0}])
        assert balances["BTC"].free is None
        assert balances["BTC"].used is None


class TestMisc:

    def test_order_book_sides_and_sorting(self):
        levels = [
            {"side": "BUY", "price": 99, "amount": 1},
            {"side": "SELL", "price": 102, "amount": 2},
            {"side": "BUY", "price": 100, "amount": 3},
            {"side": "SELL", "price": 101, "amount": 4},
        ]
        book = parse_order_book(levels, "BTC/USDT")
        assert [e.price for e in book.bids] == [100.0, 99.0]
        assert [e.price for e in book.asks] == [101.0, 102.0]
        assert book.asks[0].amount == 4.0

    def test_ohlcv(self):
        kline = parse_ohlcv({"timestamp": 1, "open": 1, "high": 3, "low": 0.5, "close": 2, "volume": 10})
        assert (kline.timestamp, kline.open, kline.high, kline.low, kline.close, kline.volume) == \
            (1, 1.0, 3.0, 0.5, 2.0, 10.0)

    def test_trading_fees_in_percent(self):
        fees = parse_trading_fees({"makerFeeFactor": 0.001, "takerFeeFactor": 0.002})
        assert fees.maker == pytest.approx(0.1)
        assert fees.taker == pytest.approx(0.2)

    @pytest.mark.parametrize("timeframe, expected", [
        ("1m", "TF1M"), ("3h", "TF3H"), ("1w", "TF7D"), ("2w", "TF14D"), ("1M", "TF1MO"),
    ])
    def test_kline_interval(self, timeframe, expected):
        assert from_kline_interval(timeframe) == expected

    def test_unsupported_interval(self):
        with pytest.raises(ValueError):
            from_kline_interval("2m")

    def test_side(self):
        assert from_side("buy") == "BUY"
        assert from_side("sell") == "SELL"
