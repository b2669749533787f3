from .structs import ExchangeConfig, ExchangeCredentials, NetworkConfig

__all__ = [
    'ExchangeConfig',
    'ExchangeCredentials',
    'NetworkConfig',
]
