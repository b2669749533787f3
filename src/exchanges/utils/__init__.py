"""
Exchange Utils

Numeric helpers shared by exchange integrations:
- precision: optional-field accessors, tick-size rounding, ISO-8601 timestamps
"""

from .precision import (
    Rounding, amount_to_precision, decimal_to_precision, iso8601, price_to_precision,
    safe_float, safe_integer, safe_string, safe_string_lower, safe_value
)

__all__ = [
    'Rounding',
    'amount_to_precision',
    'decimal_to_precision',
    'iso8601',
    'price_to_precision',
    'safe_float',
    'safe_integer',
    'safe_string',
    'safe_string_lower',
    'safe_value',
]
