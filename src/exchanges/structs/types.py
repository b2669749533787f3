from typing import NewType

ExchangeName = NewType('Exchange', str)
AssetName = NewType('AssetName', str)
OrderId = NewType("OrderId", str)
MarketId = NewType("MarketId", str)
UnifiedSymbol = NewType("UnifiedSymbol", str)
