"""
Numeric and precision helpers for exchange payloads.

Exchange JSON is loosely typed: numbers arrive as numbers or strings, fields
may be missing or null. The ``safe_*`` accessors return ``None`` for absent or
unconvertible values instead of raising, so normalizers can treat every
field as optional.

Rounding works in tick-size mode: ``tick`` is the minimum increment
(e.g. 0.01), not a number of decimal places.
"""

import math
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, localcontext
from enum import Enum
from typing import Any, Mapping, Optional, Union

Number = Union[int, float, str, Decimal]


class Rounding(Enum):
    ROUND = "round"        # nearest tick, half away from zero
    TRUNCATE = "truncate"  # toward zero


def safe_value(data: Any, key: Any, default: Any = None) -> Any:
    """Value for ``key`` or ``default`` when absent or null."""
    if isinstance(data, Mapping):
        value = data.get(key)
    elif isinstance(data, (list, tuple)) and isinstance(key, int):
        value = data[key] if -len(data) <= key < len(data) else None
    else:
        return default
    return default if value is None else value


def safe_string(data: Any, key: Any, default: Optional[str] = None) -> Optional[str]:
    value = safe_value(data, key)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def safe_string_lower(data: Any, key: Any, default: Optional[str] = None) -> Optional[str]:
    value = safe_string(data, key)
    return default if value is None else value.lower()


def safe_float(data: Any, key: Any, default: Optional[float] = None) -> Optional[float]:
    value = safe_value(data, key)
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def safe_integer(data: Any, key: Any, default: Optional[int] = None) -> Optional[int]:
    value = safe_float(data, key)
    return default if value is None else int(value)


def iso8601(timestamp: Optional[int]) -> Optional[str]:
    """Millisecond timestamp to ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    if timestamp is None or isinstance(timestamp, bool):
        return None
    try:
        seconds, millis = divmod(int(timestamp), 1000)
        dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None
    return dt.strftime('%Y-%m-%dT%H:%M:%S.') + f"{millis:03d}Z"


def _to_decimal(value: Number) -> Decimal:
    try:
        dec = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {value!r}") from e
    if not dec.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return dec


def decimal_to_precision(value: Number, tick: Optional[Number],
                         rounding: Rounding = Rounding.ROUND) -> str:
    """
    Snap ``value`` to a multiple of ``tick`` and render it as a plain decimal string.

    Without a tick the value is only normalized. Trailing zeros are dropped.

    Raises:
        ValueError: If value or tick is not numeric, or tick is not positive
    """
    dec = _to_decimal(value)
    if tick is not None:
        step = _to_decimal(tick)
        if step <= 0:
            raise ValueError(f"Tick size must be positive, got {tick!r}")
        try:
            dec = _snap(dec, step, rounding)
        except InvalidOperation as e:
            raise ValueError(f"Cannot snap {value!r} to tick {tick!r}") from e
    return _format_decimal(dec)


def _snap(dec: Decimal, step: Decimal, rounding: Rounding) -> Decimal:
    with localcontext() as ctx:
        # Exact for any value/tick pair that fits in a float
        ctx.prec = 800
        missing = abs(dec) % step
        if missing:
            if rounding is Rounding.ROUND and missing * 2 >= step:
                snapped = abs(dec) - missing + step
            else:
                snapped = abs(dec) - missing
            dec = snapped if dec > 0 else -snapped
        return dec.quantize(step) if step.as_tuple().exponent < 0 else dec


def _format_decimal(dec: Decimal) -> str:
    text = format(dec, 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text in ('', '-0'):
        return '0'
    return text


def amount_to_precision(amount: Number, tick: Optional[Number]) -> str:
    """Order amounts are truncated so they never exceed what the caller asked for."""
    return decimal_to_precision(amount, tick, Rounding.TRUNCATE)


def price_to_precision(price: Number, tick: Optional[Number]) -> str:
    return decimal_to_precision(price, tick, Rounding.ROUND)
