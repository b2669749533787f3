"""
Exchange configuration management module.
"""

from .exchange_config import ExchangeConfigManager

__all__ = [
    'ExchangeConfigManager'
]
