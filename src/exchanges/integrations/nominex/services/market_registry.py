"""
Market and currency registry.

Normalizers resolve native pair ids and currency ids through a registry
populated by ``load_markets``. The registry is read-only for them; only the
client replaces its contents.
"""

from typing import Dict, Iterable, Optional, Protocol

from exchanges.structs.common import Currency, Market
from infrastructure.exceptions.exchange import BadRequestError, InvalidSymbolError


class MarketRegistry(Protocol):
    """Lookup of canonical markets and currencies."""

    def market_by_id(self, market_id: str) -> Optional[Market]:
        """Market for a native pair id, None if unknown."""
        ...

    def market(self, symbol: str) -> Market:
        """Market for a unified symbol, raising InvalidSymbolError if unknown."""
        ...

    def currency(self, code: str) -> Currency:
        """Currency for a code, raising BadRequestError if unknown."""
        ...

    def currency_by_id(self, currency_id: str) -> Optional[Currency]:
        ...

    def markets(self) -> Dict[str, Market]:
        ...

    def currencies(self) -> Dict[str, Currency]:
        ...


class InMemoryMarketRegistry:
    """Dictionary backed MarketRegistry."""

    def __init__(self, markets: Iterable[Market] = (), currencies: Iterable[Currency] = ()):
        self._markets: Dict[str, Market] = {}
        self._markets_by_id: Dict[str, Market] = {}
        self._currencies: Dict[str, Currency] = {}
        self._currencies_by_id: Dict[str, Currency] = {}
        self._loaded = False
        if markets or currencies:
            self.load(markets, currencies)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self, markets: Iterable[Market], currencies: Iterable[Currency] = ()) -> None:
        """Replace registry contents."""
        markets = list(markets)
        currencies = list(currencies)
        self._markets = {m.symbol: m for m in markets}
        self._markets_by_id = {m.id: m for m in markets}
        self._currencies = {c.code: c for c in currencies}
        self._currencies_by_id = {c.id: c for c in currencies}
        self._loaded = True

    def market_by_id(self, market_id: str) -> Optional[Market]:
        return self._markets_by_id.get(market_id)

    def market(self, symbol: str) -> Market:
        market = self._markets.get(symbol) or self._markets_by_id.get(symbol)
        if market is None:
            raise InvalidSymbolError(0, f"nominex does not have market symbol {symbol}")
        return market

    def currency(self, code: str) -> Currency:
        currency = self._currencies.get(code) or self._currencies_by_id.get(code)
        if currency is None:
            raise BadRequestError(0, f"nominex does not have currency code {code}")
        return currency

    def currency_by_id(self, currency_id: str) -> Optional[Currency]:
        return self._currencies_by_id.get(currency_id)

    def markets(self) -> Dict[str, Market]:
        return dict(self._markets)

    def currencies(self) -> Dict[str, Currency]:
        return dict(self._currencies)
