"""
Value-level helpers that turn free-text component specs into comparable numbers.

Every helper returns ``None`` for "unknown" rather than 0 so that callers can
leave a metric out of a weighted average instead of scoring it as zero.
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Optional

_NUMBER_RE = re.compile(r'([0-9]+(?:\.[0-9]+)?)')
_CLOCK_RE = re.compile(r'([0-9]+(?:\.[0-9]+)?)\s*(ghz|mhz)?')
_MEMORY_UNITS = [
    (re.compile(r'([0-9]+(?:\.[0-9]+)?)\s*tb'), 'tb'),
    (re.compile(r'([0-9]+(?:\.[0-9]+)?)\s*gb'), 'gb'),
    (re.compile(r'([0-9]+(?:\.[0-9]+)?)\s*mb'), 'mb'),
]


def _round3(value: float) -> float:
    return float(Decimal(value).quantize(Decimal('0.001'), rounding=ROUND_HALF_UP))


def _as_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_number(value: Any) -> Optional[float]:
    """Return the first decimal number found in ``value``, or None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value

    match = _NUMBER_RE.search(_as_text(value))
    return float(match.group(1)) if match else None


def parse_clock_ghz(value: Any) -> Optional[float]:
    """Parse a clock speed such as '3.5GHz' or '3500 MHz' into GHz.

    Values without a unit are assumed to already be in GHz.
    """
    if not value:
        return None

    match = _CLOCK_RE.search(_as_text(value).lower())
    if not match:
        return None

    number = float(match.group(1))
    if match.group(2) == 'mhz':
        return _round3(number / 1000)
    return number


def parse_memory_gb(value: Any) -> Optional[float]:
    """Parse a capacity such as '1TB', '16 GB' or '512MB' into GB.

    Units are tried in tb, gb, mb order and the first one found wins. Without
    a unit the bare number is returned as is.
    """
    if not value:
        return None

    text = _as_text(value).lower()
    for pattern, unit in _MEMORY_UNITS:
        match = pattern.search(text)
        if not match:
            continue
        number = float(match.group(1))
        if unit == 'tb':
            return number * 1024
        if unit == 'mb':
            return _round3(number / 1024)
        return number

    return parse_number(text)


def clamp01(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return min(1.0, max(0.0, value))


def norm_divide(value: Optional[float], ceiling: float) -> Optional[float]:
    """Normalize a larger-is-better value against its saturation ceiling"""
    if value is None:
        return None
    return clamp01(value / ceiling)


def inv_range(value: Optional[float], low: float, high: float) -> Optional[float]:
    """Normalize a smaller-is-better value inside [low, high]"""
    if value is None:
        return None
    value = min(high, max(low, value))
    return (high - value) / (high - low)


def baseline_ratio(value: Optional[float], baseline: float) -> Optional[float]:
    """Score ``baseline / value`` for metrics where lower raw values are better.

    Zero and negative values carry no usable information and count as absent.
    """
    if not value or value <= 0:
        return None
    return clamp01(baseline / value)


def weighted_composite(weights: Mapping[str, float],
                       metrics: Mapping[str, Optional[float]]) -> float:
    """Weighted average over the metrics that are present.

    Absent metrics are dropped from both the sum and the denominator.
    """
    total = 0.0
    weight_sum = 0.0

    for name, weight in weights.items():
        value = metrics.get(name)
        if value is not None:
            total += value * weight
            weight_sum += weight

    return total / (weight_sum or 1)


def first_truthy(spec: Mapping[str, Any], *keys: str) -> Any:
    """Return the first truthy value among ``keys`` in ``spec``"""
    for key in keys:
        value = spec.get(key)
        if value:
            return value
    return None
