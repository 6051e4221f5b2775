"""
ethgasstation client. One GET, no retry, no cache.
"""

from __future__ import annotations

import json
import logging

import httpx

from gas.models import BasicGasEstimates

logger = logging.getLogger(__name__)

GAS_STATION_URL = "https://ethgasstation.info/json/ethgasAPI.json"

_HEADERS = {
    "Referer": "http://ethgasstation.info/json/",
    "Referrer-Policy": "no-referrer-when-downgrade",
    "Sec-Fetch-Mode": "cors",
}


class NetworkError(Exception):
    """Raised when the gas station cannot be reached or answers non-2xx."""
    pass


class ParseError(ValueError):
    """Raised when the gas station body is not a valid estimates object."""
    pass


async def _get(client: httpx.AsyncClient, url: str, timeout: float | None) -> httpx.Response:
    try:
        resp = await client.get(url, headers=_HEADERS, timeout=timeout)
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise NetworkError(f"Gas station returned HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise NetworkError(f"Gas station request failed: {e}") from e
    return resp


def parse_basic_gas_estimates(body: str | bytes) -> BasicGasEstimates:
    """Parse a gas station response body. Raises ParseError on bad data."""
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"Gas station response is not JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ParseError(f"Gas station response is not an object: {type(payload).__name__}")
    try:
        return BasicGasEstimates.from_payload(payload)
    except KeyError as e:
        raise ParseError(f"Gas station response missing field {e}") from e
    except ValueError as e:
        raise ParseError(f"Gas station response malformed: {e}") from e


async def fetch_basic_gas_estimates(
    url: str = GAS_STATION_URL,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> BasicGasEstimates:
    """
    Fetch and normalize the current gas station estimates.

    timeout defaults to None: a hung request waits indefinitely. An injected
    client is used as-is and left open.

    Raises:
        NetworkError: On transport failure or a non-2xx status.
        ParseError: On a body that is not a valid estimates object.
    """
    if client is None:
        async with httpx.AsyncClient() as owned:
            resp = await _get(owned, url, timeout)
    else:
        resp = await _get(client, url, timeout)

    estimates = parse_basic_gas_estimates(resp.content)
    logger.debug("Basic gas estimates: %s", estimates.to_record())
    return estimates


__all__ = [
    "GAS_STATION_URL",
    "NetworkError",
    "ParseError",
    "fetch_basic_gas_estimates",
    "parse_basic_gas_estimates",
]
