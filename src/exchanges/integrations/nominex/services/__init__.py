from .market_registry import MarketRegistry, InMemoryMarketRegistry

__all__ = [
    "MarketRegistry",
    "InMemoryMarketRegistry",
]
