"""
Gas price estimate conversions: provider units -> wei -> ether / fiat strings.

ethgasstation reports prices in tenths of a gwei. Callers scale an estimate
to gwei before handing it to estimate_to_wei(); api_value_to_gwei() does that
scaling for display.
"""

from __future__ import annotations

import math
import re

from gas.units import WEI_PER_GWEI, render_from_wei, wei_to_fiat
from gas.validation import InvalidInput, validate_estimate, validate_gas_limit

DEFAULT_GAS_LIMIT = 21000  # plain ether transfer

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def estimate_to_wei(estimate) -> int:
    """
    Convert a gwei-denominated estimate to wei.

    The estimate is read through its decimal string, so 1.1 gives exactly
    1_100_000_000. Sub-wei remainders are truncated.

    Raises:
        InvalidInput: If the estimate is non-numeric, NaN, Inf or negative.
    """
    num, den = validate_estimate(estimate).as_integer_ratio()
    return num * WEI_PER_GWEI // den


def _leading_int(value) -> int:
    if isinstance(value, bool):
        raise InvalidInput(f"Invalid API gas value: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidInput(f"Invalid API gas value: {value!r}")
        return int(value)
    if isinstance(value, str):
        m = _LEADING_INT.match(value)
        if m:
            return int(m.group(1))
    raise InvalidInput(f"Invalid API gas value: {value!r}")


def api_value_to_gwei(value) -> str:
    """
    Convert an ethgasstation price (tenths of a gwei) to a gwei string.

    Only the integer part of value is used: "150" -> "15", "25" -> "2.5",
    "25.9" -> "2.5".
    """
    tenths = _leading_int(value)
    whole, frac = divmod(abs(tenths), 10)
    sign = "-" if tenths < 0 else ""
    if frac:
        return f"{sign}{whole}.{frac}"
    return f"{sign}{whole}" if whole else "0"


def wei_gas_fee(estimate, gas_limit: int = DEFAULT_GAS_LIMIT) -> int:
    """Total fee in wei for a transaction of gas_limit units at estimate gwei."""
    return estimate_to_wei(estimate) * validate_gas_limit(gas_limit)


def renderable_eth_gas_fee(estimate, gas_limit: int = DEFAULT_GAS_LIMIT) -> str:
    """Total fee as an ether display string."""
    return render_from_wei(wei_gas_fee(estimate, gas_limit))


def renderable_fiat_gas_fee(
    estimate,
    conversion_rate,
    currency_code: str,
    gas_limit: int = DEFAULT_GAS_LIMIT,
) -> str:
    """Total fee as a fiat display string in currency_code."""
    return wei_to_fiat(wei_gas_fee(estimate, gas_limit), conversion_rate, currency_code)


__all__ = [
    "DEFAULT_GAS_LIMIT",
    "estimate_to_wei",
    "api_value_to_gwei",
    "wei_gas_fee",
    "renderable_eth_gas_fee",
    "renderable_fiat_gas_fee",
]
