"""
Pytest configuration and shared fixtures for Nominex adapter tests.

Provides a recording fake transport, exchange configs and loaded registries
so tests never touch the network.
"""

import os
import sys
from pathlib import Path
from typing import Any, List, Optional

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Configure test environment
os.environ['ENVIRONMENT'] = 'test'

from config.structs import ExchangeConfig, ExchangeCredentials
from exchanges.integrations.nominex.services.market_registry import InMemoryMarketRegistry
from exchanges.integrations.nominex.utils import parse_currencies, parse_markets
from exchanges.structs.types import ExchangeName
from infrastructure.logging.factory import LoggerFactory
from infrastructure.logging.structs import LoggingConfig
from infrastructure.networking.http.structs import SignedRequest, TransportResponse

API_KEY = "test-api-key"
SECRET_KEY = "test-secret-key"

RAW_PAIRS = [
    {
        "name": "BTC/USDT", "active": True, "quoteStep": 0.01, "baseStep": 0.000001,
        "minBaseAmount": 0.0001, "maxBaseAmount": 100, "minQuoteAmount": 10, "maxQuoteAmount": 1000000
    },
    {
        "name": "ETH/BTC", "active": False, "quoteStep": 0.000001, "baseStep": 0.001,
        "minBaseAmount": 0.01, "maxBaseAmount": 1000, "minQuoteAmount": 0.0001, "maxQuoteAmount": 100
    },
]

RAW_CURRENCIES = [
    {"code": "BTC", "name": "Bitcoin", "withdrawalFee": 0.0005, "scale": 8},
    {"code": "ETH", "name": "Ethereum", "withdrawalFee": 0.01, "scale": 8},
    {"code": "USDT", "name": "Tether", "withdrawalFee": 1, "scale": 6},
]


class FakeTransport:
    """Records sent requests and replays queued responses in order."""

    def __init__(self, responses: Optional[List[TransportResponse]] = None):
        self.responses = list(responses or [])
        self.requests: List[SignedRequest] = []
        self.closed = False

    def queue(self, body: Any = None, status_code: int = 200, text: str = "") -> None:
        self.responses.append(TransportResponse(status_code=status_code, body=body, text=text))

    async def send(self, request: SignedRequest) -> TransportResponse:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method.value} {request.url}")
        return self.responses.pop(0)

    async def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> SignedRequest:
        return self.requests[-1]


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Set up test-appropriate logging configuration."""
    LoggerFactory.clear_cache()
    LoggerFactory._default_config = LoggingConfig.default_test()
    yield
    LoggerFactory.clear_cache()


@pytest.fixture
def private_config():
    return ExchangeConfig(
        name=ExchangeName("nominex"),
        credentials=ExchangeCredentials(api_key=API_KEY, secret_key=SECRET_KEY)
    )


@pytest.fixture
def public_config():
    return ExchangeConfig(name=ExchangeName("nominex"))


@pytest.fixture
def markets():
    return parse_markets(RAW_PAIRS)


@pytest.fixture
def currencies():
    return parse_currencies(RAW_CURRENCIES)


@pytest.fixture
def registry(markets, currencies):
    return InMemoryMarketRegistry(markets, currencies)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def raw_pairs():
    return [dict(pair) for pair in RAW_PAIRS]


@pytest.fixture
def raw_currencies():
    return [dict(currency) for currency in RAW_CURRENCIES]
