"""
Input coercion for gas estimates, gas limits and wait times.

Every public function either returns a clean numeric value or raises
InvalidInput. Call these at the top of each conversion so bad data fails
before it reaches wei-scale arithmetic.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation

# widest decimal exponent accepted; keeps exact int conversions bounded
_MAX_EXPONENT = 1000


class InvalidInput(ValueError):
    """Raised when a value cannot be used as a number in a gas calculation."""
    pass


def to_decimal(value, context: str = "value") -> Decimal:
    """
    Coerce an int, float, Decimal or numeric string into a finite Decimal.

    Floats go through their shortest repr, so 1.1 becomes Decimal("1.1")
    rather than the exact binary expansion.

    Raises:
        InvalidInput: If the value is a bool, non-numeric, NaN or infinite.
    """
    if isinstance(value, bool):
        raise InvalidInput(f"Invalid {context}: {value!r} is not a number")
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, (int, float, str)):
        try:
            d = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidInput(f"Invalid {context}: {value!r} is not a number") from None
        except ValueError:
            # int too long for str()
            raise InvalidInput(f"Invalid {context}: value out of range") from None
    else:
        raise InvalidInput(f"Invalid {context}: {type(value).__name__} is not a number")

    if d.is_nan():
        raise InvalidInput(f"Invalid {context}: NaN")
    if d.is_infinite():
        raise InvalidInput(f"Invalid {context}: Inf")
    if not d.is_zero() and (d.adjusted() > _MAX_EXPONENT or -d.as_tuple().exponent > _MAX_EXPONENT):
        raise InvalidInput(f"Invalid {context}: value out of range")
    return d


def validate_estimate(value, context: str = "gas price estimate") -> Decimal:
    """Coerce a gas price estimate. Must be finite and non-negative."""
    d = to_decimal(value, context)
    if d < 0:
        raise InvalidInput(f"Invalid {context}: negative value {value!r}")
    return d


def validate_gas_limit(value, context: str = "gas limit") -> int:
    """
    Coerce a gas limit into a non-negative int.

    Accepts ints and strings of decimal digits. Floats are rejected even when
    integral, since a gas limit is a unit count.
    """
    if isinstance(value, bool):
        raise InvalidInput(f"Invalid {context}: {value!r} is not an integer")
    if isinstance(value, str):
        s = value.strip()
        if not (s.isascii() and s.isdigit()):
            raise InvalidInput(f"Invalid {context}: {value!r} is not an integer")
        return int(s)
    if not isinstance(value, int):
        raise InvalidInput(f"Invalid {context}: {type(value).__name__} is not an integer")
    if value < 0:
        raise InvalidInput(f"Invalid {context}: negative value {value}")
    return value


def validate_minutes(value, context: str = "wait time") -> float:
    """Coerce a wait time in minutes into a finite, non-negative float."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidInput(f"Invalid {context}: {value!r} is not a number")
    try:
        m = float(value)
    except OverflowError:
        raise InvalidInput(f"Invalid {context}: value out of range") from None
    if math.isnan(m):
        raise InvalidInput(f"Invalid {context}: NaN")
    if math.isinf(m):
        raise InvalidInput(f"Invalid {context}: Inf")
    if m < 0.0:
        raise InvalidInput(f"Invalid {context}: negative value {m}")
    return m


def validate_conversion_rate(value, context: str = "conversion rate") -> Decimal:
    """Coerce a fiat conversion rate. Must be finite and non-negative."""
    d = to_decimal(value, context)
    if d < 0:
        raise InvalidInput(f"Invalid {context}: negative value {value!r}")
    return d
