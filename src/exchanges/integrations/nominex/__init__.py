"""
Nominex Exchange Implementation

REST adapter for the Nominex exchange.

Architecture:
- REST Client: async operations over an injected transport
- Signer: HMAC-SHA384 request signing with injected nonce source
- Exception Handler: provider error codes to unified exceptions
- Utils: direct functions normalizing raw JSON into canonical structs
- Services: market/currency registry used for symbol resolution

Usage:
    from config.config_manager import load_config
    from exchanges.integrations.nominex import NominexRestClient

    config = load_config().get_exchange_config('nominex')
    async with NominexRestClient(config) as client:
        ticker = await client.fetch_ticker('BTC/USDT')
"""

from .rest import NominexRestClient, NominexRequestSigner, NominexExceptionHandler
from .services import MarketRegistry, InMemoryMarketRegistry

__all__ = [
    "NominexRestClient",
    "NominexRequestSigner",
    "NominexExceptionHandler",
    "MarketRegistry",
    "InMemoryMarketRegistry",
]
