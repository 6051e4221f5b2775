"""
Wei <-> ether conversion and display strings.

All rounding is done on integers so arbitrarily large wei amounts render
exactly; Decimal values are only ever built from strings.
"""

from __future__ import annotations

from decimal import Decimal

from gas.validation import validate_conversion_rate

WEI_PER_ETHER = 10 ** 18
WEI_PER_GWEI = 10 ** 9

CURRENCY_SYMBOLS = {
    "aud": "$",
    "cad": "$",
    "eur": "€",
    "gbp": "£",
    "inr": "₹",
    "jpy": "¥",
    "krw": "₩",
    "rub": "₽",
    "usd": "$",
}


def _check_wei(wei) -> int:
    if isinstance(wei, bool) or not isinstance(wei, int):
        raise TypeError(f"wei amount must be int, got {type(wei).__name__}")
    return wei


def _div_half_up(n: int, d: int) -> int:
    """n / d rounded half away from zero."""
    q, r = divmod(abs(n), d)
    if 2 * r >= d:
        q += 1
    return -q if n < 0 else q


def _fixed(scaled: int, decimals: int, strip: bool) -> str:
    """Render scaled / 10**decimals in fixed point."""
    sign = "-" if scaled < 0 else ""
    digits = str(abs(scaled)).rjust(decimals + 1, "0")
    whole, frac = digits[: len(digits) - decimals], digits[len(digits) - decimals:]
    if strip:
        frac = frac.rstrip("0")
    if not frac:
        return "0" if whole == "0" else f"{sign}{whole}"
    return f"{sign}{whole}.{frac}"


def from_wei(wei: int) -> Decimal:
    """Convert wei to ether."""
    return Decimal(f"{_check_wei(wei)}E-18")


def render_from_wei(wei: int, decimals_to_show: int = 5) -> str:
    """
    Render a wei amount as an ether display string.

    Rounded half-up to decimals_to_show places, trailing zeros dropped:
    420000000000000 -> "0.00042", 10**18 -> "1", 0 -> "0".
    """
    scaled = _div_half_up(_check_wei(wei) * 10 ** decimals_to_show, WEI_PER_ETHER)
    return _fixed(scaled, decimals_to_show, strip=True)


def _fiat_scaled(wei: int, conversion_rate, decimals: int) -> int:
    num, den = validate_conversion_rate(conversion_rate).as_integer_ratio()
    return _div_half_up(_check_wei(wei) * num * 10 ** decimals, WEI_PER_ETHER * den)


def wei_to_fiat_number(wei: int, conversion_rate, decimals_to_show: int = 5) -> Decimal:
    """Value of a wei amount in fiat, rounded half-up."""
    return Decimal(_fixed(_fiat_scaled(wei, conversion_rate, decimals_to_show), decimals_to_show, strip=True))


def wei_to_fiat(wei: int, conversion_rate, currency_code: str) -> str:
    """
    Render a wei amount in fiat at two decimals.

    Known currencies get their symbol as a prefix ("$0.53"); anything else is
    suffixed with the upper-cased code ("0.53 XYZ").
    """
    value = _fixed(_fiat_scaled(wei, conversion_rate, 2), 2, strip=False)
    symbol = CURRENCY_SYMBOLS.get(currency_code.lower())
    if symbol:
        return f"{symbol}{value}"
    return f"{value} {currency_code.upper()}"
