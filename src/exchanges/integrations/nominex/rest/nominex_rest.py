"""
Nominex REST API Implementation

Async client for the Nominex public and private REST endpoints.

Request flow:
    operation -> parameter bag -> NominexRequestSigner -> RestTransport
              -> NominexExceptionHandler (failure) or utils.parse_* (success)

Nominex REST API Specifications:
- Base URL: https://nominex.io (demo: https://demo.nominex.io)
- Public API: /api/rest/v1, private API: /api/rest/v1/private
- Authentication: HMAC-SHA384 signature, nonce and api key headers
- Pair ids are "BTC/USDT" and go into the URL path verbatim

No retries and no rate limiting: a failed request raises immediately.
"""

import time
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Union

from config.structs import ExchangeConfig
from exchanges.integrations.nominex.rest.exception_handler import NominexExceptionHandler
from exchanges.integrations.nominex.rest.signer import URL_PARAMS_KEY, NominexRequestSigner
from exchanges.integrations.nominex.services.market_registry import InMemoryMarketRegistry
from exchanges.integrations.nominex.utils import (
    from_kline_interval, from_side, parse_balance, parse_currencies, parse_deposit_address,
    parse_markets, parse_ohlcvs, parse_order, parse_order_book, parse_orders, parse_ticker,
    parse_trades, parse_trading_fees, parse_transactions
)
from exchanges.structs.common import (
    Balances, Currency, DepositAddress, Kline, Market, Order, OrderBook, Ticker, Trade,
    TradingFees, Transaction, WithdrawalResult
)
from exchanges.structs.enums import ExchangeEnum, OrderType, TransactionType, WalletType
from exchanges.utils.precision import amount_to_precision, price_to_precision, safe_string, safe_value
from infrastructure.exceptions.exchange import ArgumentsRequiredError, ExchangeRestError, InvalidAddressError
from infrastructure.logging import HFTLoggerInterface, LoggingTimer, get_exchange_logger
from infrastructure.networking.http.structs import HTTPMethod
from infrastructure.networking.http.transport import AiohttpRestTransport, RestTransport

_ORDER_BOOK_DEPTHS = (25, 100)
_DEFAULT_ORDER_BOOK_DEPTH = 100


class NominexRestClient:
    """
    Nominex REST client.

    Markets and currencies are loaded once into the registry and reused by
    every operation that resolves a symbol or currency code.
    """

    def __init__(self, config: ExchangeConfig,
                 transport: Optional[RestTransport] = None,
                 nonce: Optional[Callable[[], int]] = None,
                 registry: Optional[InMemoryMarketRegistry] = None,
                 logger: Optional[HFTLoggerInterface] = None):
        """
        Initialize Nominex REST client with constructor injection.

        Args:
            config: ExchangeConfig with Nominex URLs and credentials
            transport: HTTP transport (aiohttp based by default)
            nonce: Nonce source for private requests
            registry: Market/currency registry shared with normalizers
            logger: HFT logger instance
        """
        self.config = config
        self.logger = logger or get_exchange_logger(ExchangeEnum.NOMINEX.value, 'rest')
        self.transport = transport or AiohttpRestTransport(config.network, logger=self.logger)
        self.registry = registry or InMemoryMarketRegistry()
        self.signer = NominexRequestSigner(config, nonce=nonce, logger=self.logger)
        self.exception_handler = NominexExceptionHandler(logger=self.logger)

        self.logger.debug("Nominex REST client initialized",
                          host=config.host,
                          private=config.has_credentials())

    async def __aenter__(self) -> 'NominexRestClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.transport.close()

    @staticmethod
    def milliseconds() -> int:
        return int(time.time() * 1000)

    async def request(self, path: str, api: str = 'public',
                      method: HTTPMethod = HTTPMethod.GET,
                      params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Sign, send and check one request.

        Returns:
            Parsed JSON body

        Raises:
            ExchangeRestError: Or a subclass for any failed request
        """
        signed = self.signer.sign(path, api, method, params)
        tags = {"endpoint": path, "method": signed.method.value}

        with LoggingTimer(self.logger, "nominex_rest_request", tags):
            response = await self.transport.send(signed)

        self.logger.metric("nominex_rest_requests", 1,
                           tags={**tags, "status": str(response.status_code)})
        if response.ok:
            return response.body

        self.exception_handler.handle_errors(response.status_code, response.body, response.text)

        # Failure body that is not JSON
        self.logger.error("Nominex request failed",
                          endpoint=path,
                          status=response.status_code)
        raise ExchangeRestError(response.status_code, f"nominex {response.text or 'empty response'}",
                                body=response.text)

    @staticmethod
    def _expect_object(response: Any, path: str) -> Dict[str, Any]:
        """Successful responses that must carry a JSON object."""
        if not isinstance(response, dict):
            raise ExchangeRestError(200, f"nominex {path} returned no record: {response!r}", body=response)
        return response

    # Markets and currencies

    async def load_markets(self, reload: bool = False) -> Dict[str, Market]:
        """Fetch markets and currencies into the registry once, or again on ``reload``."""
        if self.registry.is_loaded and not reload:
            return self.registry.markets()

        currencies = await self.fetch_currencies()
        markets = await self.fetch_markets()
        self.registry.load(markets, currencies.values())

        self.logger.info("Loaded Nominex markets",
                         markets=len(markets),
                         currencies=len(currencies))
        return self.registry.markets()

    def market(self, symbol: str) -> Market:
        return self.registry.market(symbol)

    def currency(self, code: str) -> Currency:
        return self.registry.currency(code)

    async def fetch_markets(self) -> List[Market]:
        response = await self.request('pairs')
        return parse_markets(response or [], self.registry)

    async def fetch_currencies(self) -> Dict[str, Currency]:
        response = await self.request('currencies')
        return {currency.code: currency for currency in parse_currencies(response or [])}

    # Public market data

    async def fetch_ticker(self, symbol: str) -> Ticker:
        await self.load_markets()
        market = self.market(symbol)
        response = await self.request('ticker/{symbol}', params={'symbol': market.id})
        return parse_ticker(response, market, self.registry)

    async def fetch_tickers(self, symbols: Optional[List[str]] = None) -> Dict[str, Ticker]:
        """
        Tickers of ``symbols``, or of every market when omitted.

        The response is a list aligned with the requested pair ids.
        """
        await self.load_markets()
        if symbols:
            markets = [self.market(symbol) for symbol in symbols]
        else:
            markets = list(self.registry.markets().values())

        params = {URL_PARAMS_KEY: {'pairs': ','.join(market.id for market in markets)}}
        response = await self.request('ticker', params=params)

        result = {}
        for market, raw in zip(markets, response or []):
            result[market.symbol] = parse_ticker(raw, market, self.registry)
        return result

    async def fetch_order_book(self, symbol: str, limit: Optional[int] = None) -> OrderBook:
        """Order book snapshot; Nominex serves 25 or 100 levels, anything else gets 100."""
        await self.load_markets()
        market = self.market(symbol)
        depth = limit if limit in _ORDER_BOOK_DEPTHS else _DEFAULT_ORDER_BOOK_DEPTH
        response = await self.request('orderbook/{symbol}/A0/{limit}',
                                      params={'symbol': market.id, 'limit': depth})
        return parse_order_book(response or [], market.symbol)

    async def fetch_ohlcv(self, symbol: str, timeframe: str = '1m',
                          since: Optional[int] = None, limit: int = 100) -> List[Kline]:
        await self.load_markets()
        market = self.market(symbol)
        url_params = {
            'limit': limit if limit is not None else 100,
            'end': self.milliseconds(),
        }
        if since is not None:
            url_params['start'] = int(since)

        response = await self.request('candles/{symbol}/{timeframe}', params={
            'symbol': market.id,
            'timeframe': from_kline_interval(timeframe),
            URL_PARAMS_KEY: url_params,
        })
        return parse_ohlcvs(response)

    async def fetch_trades(self, symbol: str, since: Optional[int] = None, limit: Optional[int] = 50) -> List[Trade]:
        await self.load_markets()
        market = self.market(symbol)
        url_params = {}
        if since is not None:
            url_params['start'] = int(since)
        if limit is not None:
            url_params['limit'] = limit

        response = await self.request('trades/{symbol}', params={
            'symbol': market.id,
            URL_PARAMS_KEY: url_params,
        })
        return parse_trades(safe_value(response, 'items'), market, self.registry)

    # Account

    async def fetch_trading_fees(self) -> TradingFees:
        await self.load_markets()
        response = await self.request('trading-fee-rates', 'private')
        return parse_trading_fees(response or {})

    async def fetch_balance(self, wallet_type: str = WalletType.SPOT.value) -> Balances:
        await self.load_markets()
        response = await self.request('wallets', 'private')
        return parse_balance(response or [], wallet_type, self.registry)

    async def fetch_my_trades(self, symbol: Optional[str] = None, since: Optional[int] = None,
                              limit: Optional[int] = None) -> List[Trade]:
        """
        Own fills of one market.

        Raises:
            ArgumentsRequiredError: If symbol is not given
        """
        if symbol is None:
            raise ArgumentsRequiredError("nominex fetch_my_trades requires a symbol argument")
        await self.load_markets()
        market = self.market(symbol)
        url_params = {}
        if limit is not None:
            url_params['limit'] = limit
        if since is not None:
            url_params['start'] = int(since)

        response = await self.request('trades/{symbol}', 'private', params={
            'symbol': market.id,
            URL_PARAMS_KEY: url_params,
        })
        return parse_trades(safe_value(response, 'items'), market, self.registry)

    # Orders

    async def create_order(self, symbol: str, type: Union[OrderType, str], side: str, amount: float,
                           price: Optional[float] = None, client_order_id: Optional[int] = None,
                           wallet_type: str = WalletType.SPOT.value) -> Order:
        """
        Place an order.

        Amount is truncated to the market amount step, price rounded to the
        price step.

        Raises:
            ArgumentsRequiredError: Limit order without price
        """
        order_type = OrderType(type.lower()).value
        if order_type == OrderType.LIMIT.value and price is None:
            raise ArgumentsRequiredError("nominex create_order requires a price for limit orders")

        await self.load_markets()
        market = self.market(symbol)
        request = {
            'pairName': market.id,
            'side': from_side(side),
            'amount': amount_to_precision(amount, market.precision.amount),
            'type': order_type.upper(),
            'walletType': wallet_type,
        }
        if client_order_id is not None:
            request['cid'] = int(client_order_id)
        if order_type == OrderType.LIMIT.value:
            request['limitPrice'] = price_to_precision(price, market.precision.price)

        response = await self.request('orders', 'private', HTTPMethod.POST, request)
        order = parse_order(self._expect_object(response, 'orders'), registry=self.registry)
        self.logger.info("Nominex order created",
                         symbol=market.symbol,
                         side=side,
                         order_id=order.id)
        return order

    def _order_id_params(self, order_id: Optional[Union[str, int]],
                         client_order_id: Optional[int], operation: str) -> Dict[str, Any]:
        """Path params addressing an order by exchange id, or by client id with ``cid=true``."""
        if order_id is not None:
            return {'id': int(order_id)}
        if client_order_id is not None:
            return {'id': int(client_order_id), URL_PARAMS_KEY: {'cid': True}}
        raise ArgumentsRequiredError(f"nominex {operation} requires an order id or client_order_id")

    async def edit_order(self, id: Optional[Union[str, int]], symbol: Optional[str] = None,
                         type: Optional[Union[OrderType, str]] = None, side: Optional[str] = None,
                         amount: Optional[float] = None, price: Optional[float] = None,
                         client_order_id: Optional[int] = None,
                         wallet_type: str = WalletType.SPOT.value) -> Order:
        """
        Modify an open order; only the given fields are sent.

        Raises:
            ArgumentsRequiredError: No order id, or amount/price without symbol
        """
        request = self._order_id_params(id, client_order_id, 'edit_order')
        if (amount is not None or price is not None) and symbol is None:
            raise ArgumentsRequiredError("nominex edit_order requires a symbol to change amount or price")

        await self.load_markets()
        request['walletType'] = wallet_type
        market = self.market(symbol) if symbol is not None else None
        if price is not None:
            request['limitPrice'] = price_to_precision(price, market.precision.price)
        if amount is not None:
            request['amount'] = amount_to_precision(amount, market.precision.amount)
        if market is not None:
            request['pairName'] = market.id
        if side is not None:
            request['side'] = from_side(side)
        if type is not None:
            request['type'] = OrderType(type.lower()).value.upper()

        response = await self.request('orders/{id}', 'private', HTTPMethod.PUT, request)
        return parse_order(self._expect_object(response, 'orders/{id}'), registry=self.registry)

    async def cancel_order(self, id: Optional[Union[str, int]], symbol: Optional[str] = None,
                           client_order_id: Optional[int] = None) -> Any:
        """Cancel an order. Returns the raw exchange acknowledgement."""
        request = self._order_id_params(id, client_order_id, 'cancel_order')
        await self.load_markets()
        response = await self.request('orders/{id}', 'private', HTTPMethod.DELETE, request)
        self.logger.info("Nominex order canceled", order_id=request['id'])
        return response

    async def fetch_order(self, id: Optional[Union[str, int]], symbol: Optional[str] = None,
                          client_order_id: Optional[int] = None) -> Order:
        request = self._order_id_params(id, client_order_id, 'fetch_order')
        await self.load_markets()
        response = await self.request('orders/{id}', 'private', params=request)
        return parse_order(self._expect_object(response, 'orders/{id}'), registry=self.registry)

    async def _fetch_orders(self, active: bool, symbol: Optional[str],
                            since: Optional[int], limit: Optional[int]) -> List[Order]:
        await self.load_markets()
        url_params = {}
        if since is not None:
            url_params['start'] = int(since)
        if limit is not None:
            url_params['limit'] = limit
        url_params['active'] = active

        request = {URL_PARAMS_KEY: url_params}
        if symbol is not None:
            request['symbol'] = self.market(symbol).id
            response = await self.request('orders/{symbol}', 'private', params=request)
        else:
            response = await self.request('orders', 'private', params=request)
        return parse_orders(safe_value(response, 'items'), registry=self.registry)

    async def fetch_open_orders(self, symbol: Optional[str] = None, since: Optional[int] = None,
                                limit: Optional[int] = None) -> List[Order]:
        return await self._fetch_orders(True, symbol, since, limit)

    async def fetch_closed_orders(self, symbol: Optional[str] = None, since: Optional[int] = None,
                                  limit: Optional[int] = None) -> List[Order]:
        return await self._fetch_orders(False, symbol, since, limit)

    # Wallets

    @staticmethod
    def _check_address(address: Optional[str]) -> str:
        if not address or any(ch.isspace() for ch in address):
            raise InvalidAddressError(0, f"nominex address is invalid or has not been generated yet: {address}")
        return address

    async def create_deposit_address(self, code: str) -> DepositAddress:
        await self.load_markets()
        currency = self.currency(code)
        response = await self.request('wallets/{currency}/address', 'private', HTTPMethod.POST,
                                      {'currency': currency.id})
        self._check_address(safe_string(response, 'address'))
        return parse_deposit_address(response, currency.code)

    async def fetch_deposit_address(self, code: str) -> DepositAddress:
        await self.load_markets()
        currency = self.currency(code)
        response = await self.request('wallets/{currency}/address', 'private', params={
            'currency': currency.id,
            URL_PARAMS_KEY: {'formatted': True},
        })
        self._check_address(safe_string(response, 'address'))
        return parse_deposit_address(response, currency.code)

    async def _fetch_transactions(self, transaction_type: TransactionType, code: Optional[str],
                                  since: Optional[int], limit: Optional[int]) -> List[Transaction]:
        await self.load_markets()
        url_params = {
            'start': int(since) if since is not None else 0,
            'end': self.milliseconds(),
        }
        if limit is not None:
            url_params['limit'] = limit

        collection = 'deposits' if transaction_type == TransactionType.DEPOSIT else 'withdrawals'
        request = {URL_PARAMS_KEY: url_params}
        if code is not None:
            request['currency'] = self.currency(code).id
            response = await self.request(f'wallets/{{currency}}/{collection}', 'private', params=request)
        else:
            response = await self.request(collection, 'private', params=request)
        return parse_transactions(safe_value(response, 'items'), self.registry, transaction_type)

    async def fetch_deposits(self, code: Optional[str] = None, since: Optional[int] = None,
                             limit: Optional[int] = None) -> List[Transaction]:
        return await self._fetch_transactions(TransactionType.DEPOSIT, code, since, limit)

    async def fetch_withdrawals(self, code: Optional[str] = None, since: Optional[int] = None,
                                limit: Optional[int] = None) -> List[Transaction]:
        return await self._fetch_transactions(TransactionType.WITHDRAWAL, code, since, limit)

    async def withdraw(self, code: str, amount: float, address: str, tag: Optional[str] = None) -> WithdrawalResult:
        """
        Request a withdrawal.

        Nominex deducts the withdrawal fee from the requested amount, so the
        currency fee is added on top and ``amount`` arrives at ``address``.
        Tagged destinations are sent as ``address:tag``.
        """
        self._check_address(address)
        await self.load_markets()
        currency = self.currency(code)

        destination = f"{address}:{tag}" if tag is not None else address
        fee = currency.fee
        total = Decimal(str(amount)) + Decimal(str(fee)) if fee is not None else Decimal(str(amount))
        request = {
            'currency': currency.id,
            'amount': float(total),
            'fee': fee,
            'currencyCode': currency.id,
            'destination': destination,
        }
        response = await self.request('withdrawals/{currency}', 'private', HTTPMethod.POST, request)

        result = WithdrawalResult(id=safe_string(response, 'id'), info=response)
        self.logger.info("Nominex withdrawal requested",
                         currency=currency.code,
                         amount=amount,
                         withdrawal_id=result.id)
        return result
