"""
CEX (Centralized Exchange) Module

Exchange integrations behind canonical data structures.

Layout:
- structs: canonical records shared by all integrations (msgspec structs)
- utils: numeric and precision helpers
- integrations: exchange-specific REST adapters (nominex)

Integrations are imported explicitly, e.g.
``from exchanges.integrations.nominex import NominexRestClient``, so that
importing the canonical structs never pulls in transport dependencies.
"""

from .structs.enums import ExchangeEnum

__all__ = [
    'ExchangeEnum',
]
