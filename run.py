#!/usr/bin/env python3
"""
Gas fee snapshot -- fetch ethgasstation estimates and print one row per speed.

Each row shows the gas price in gwei, the fee for the configured gas limit in
ether (and fiat when a conversion rate is set), and the expected wait.

Usage:
  uv run python run.py                                  # ether fees only
  uv run python run.py --conversion-rate 1850.25        # add a USD column
  uv run python run.py --currency eur --conversion-rate 1700 --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from config import load_config, Config
from client.gas_station import NetworkError, ParseError, fetch_basic_gas_estimates
from gas.custom_gas import api_value_to_gwei, renderable_eth_gas_fee, renderable_fiat_gas_fee
from gas.models import BasicGasEstimates, GasSpeed
from gas.validation import InvalidInput
from gas.wait_time import parse_wait_time
from monitor.logger import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Gas fee snapshot from ethgasstation")
    parser.add_argument("--gas-limit", type=int, default=None, help="Gas units per transaction (default: GAS_LIMIT or 21000)")
    parser.add_argument("--conversion-rate", type=float, default=None, help="Fiat per ether; 0 hides the fiat column")
    parser.add_argument("--currency", type=str, default=None, help="Fiat currency code (default: CURRENCY_CODE or usd)")
    parser.add_argument("--json", action="store_true", help="Print rows as JSON instead of a table")
    parser.add_argument("--log-level", type=str, default=None, help="Console log level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--log-file", type=str, default=None, help="Path to a verbose debug log file")
    return parser.parse_args(argv)


def apply_overrides(cfg: Config, args: argparse.Namespace) -> Config:
    """Return cfg with any CLI flags that were given taking precedence."""
    update = {}
    if args.gas_limit is not None:
        update["gas_limit"] = args.gas_limit
    if args.conversion_rate is not None:
        update["conversion_rate"] = args.conversion_rate
    if args.currency is not None:
        update["currency_code"] = args.currency
    if args.log_level is not None:
        update["log_level"] = args.log_level
    if not update:
        return cfg
    # model_copy skips validation, so re-validate the merged values
    return Config.model_validate({**cfg.model_dump(), **update})


def build_rows(estimates: BasicGasEstimates, cfg: Config) -> list[dict]:
    """One display row per speed tier, slowest first."""
    rows = []
    for speed in GasSpeed:
        gwei = api_value_to_gwei(estimates.price(speed))
        row = {
            "speed": speed.value,
            "gwei": gwei,
            "fee_eth": renderable_eth_gas_fee(gwei, cfg.gas_limit),
            "wait": parse_wait_time(
                estimates.wait(speed), cfg.hour_label, cfg.minute_label, cfg.second_label,
            ),
        }
        if cfg.conversion_rate > 0:
            row["fee_fiat"] = renderable_fiat_gas_fee(
                gwei, cfg.conversion_rate, cfg.currency_code, cfg.gas_limit,
            )
        rows.append(row)
    return rows


def format_table(rows: list[dict], estimates: BasicGasEstimates) -> str:
    show_fiat = any("fee_fiat" in r for r in rows)
    header = f"{'SPEED':<8} {'GWEI':>8} {'FEE (ETH)':>12}"
    if show_fiat:
        header += f" {'FEE (FIAT)':>12}"
    header += f"  {'WAIT':<10}"
    lines = [f"Block {estimates.block_num}  (block time {estimates.block_time:.1f}s)", header]
    for r in rows:
        line = f"{r['speed']:<8} {r['gwei']:>8} {r['fee_eth']:>12}"
        if show_fiat:
            line += f" {r['fee_fiat']:>12}"
        line += f"  {r['wait'] or '-':<10}"
        lines.append(line)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = apply_overrides(load_config(), args)
    setup_logging(cfg.log_level, log_file=args.log_file)
    logger.info("Fetching gas estimates from %s", cfg.gas_station_url)

    try:
        estimates = asyncio.run(
            fetch_basic_gas_estimates(cfg.gas_station_url, timeout=cfg.gas_station_timeout_sec)
        )
        rows = build_rows(estimates, cfg)
    except (NetworkError, ParseError) as e:
        logger.error("Could not load gas estimates: %s", e)
        sys.exit(1)
    except InvalidInput as e:
        logger.error("Gas station returned unusable values: %s", e)
        sys.exit(1)

    if args.json:
        print(json.dumps({"estimates": estimates.to_record(), "gas_limit": cfg.gas_limit, "rows": rows}, indent=2))
    else:
        print(format_table(rows, estimates))


if __name__ == "__main__":
    main()
