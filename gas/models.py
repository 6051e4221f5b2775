"""
Data models for gas station estimates. Pure data, no I/O.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum


class GasSpeed(Enum):
    """Speed tiers reported by ethgasstation, slowest first."""
    SAFE_LOW = "safeLow"
    AVERAGE = "average"
    FAST = "fast"
    FASTEST = "fastest"


# record key -> wire key, for the two fields the gas station names differently
_WIRE_NAMES = {
    "averageWait": "avgWait",
    "blockTime": "block_time",
}


@dataclass(frozen=True)
class BasicGasEstimates:
    """
    Normalized ethgasstation payload.

    Prices are in tenths of a gwei, waits in minutes, block_time in seconds.
    """
    average: float
    average_wait: float
    block_time: float
    block_num: int
    fast: float
    fastest: float
    fastest_wait: float
    fast_wait: float
    safe_low: float
    safe_low_wait: float
    speed: float

    @classmethod
    def from_payload(cls, payload: dict) -> BasicGasEstimates:
        """
        Build from the raw gas station JSON object.

        Raises:
            KeyError: If a field is missing.
            ValueError: If a field is not a finite number.
        """
        values = {}
        for f in fields(cls):
            key = _record_key(f.name)
            raw = payload[_WIRE_NAMES.get(key, key)]
            values[f.name] = _number(raw, key, as_int=f.type == "int")
        return cls(**values)

    def to_record(self) -> dict:
        """Camel-cased mapping: average, averageWait, blockTime, blockNum, ..."""
        return {_record_key(f.name): getattr(self, f.name) for f in fields(self)}

    def price(self, speed: GasSpeed) -> float:
        """Price for a speed tier, in tenths of a gwei."""
        return self.to_record()[speed.value]

    def wait(self, speed: GasSpeed) -> float:
        """Expected wait for a speed tier, in minutes."""
        return self.to_record()[f"{speed.value}Wait"]


def _record_key(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _number(raw, key: str, as_int: bool = False) -> float | int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError(f"Invalid {key}: {raw!r}")
    if as_int and isinstance(raw, int):
        return raw
    try:
        value = float(raw)
    except (ValueError, OverflowError):
        raise ValueError(f"Invalid {key}: {raw!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"Invalid {key}: {raw!r}")
    if as_int:
        if not value.is_integer():
            raise ValueError(f"Invalid {key}: {raw!r} is not an integer")
        return int(value)
    return value
