"""CLI entry point for the Pingu perpetuals client."""

import argparse
import json
import logging

from pingu.client import PinguClient
from pingu.config.loader import get_config_value, load_config
from pingu.config.schema import ClientConfig
from pingu.reader import Reader
from pingu.reporting.formatters import (
    format_funding_scan,
    format_market,
    format_market_row,
    format_order,
    format_position,
)
from pingu.reporting.funding_scanner import DEFAULT_THRESHOLD, FundingScanner
from pingu.rpc.errors import PinguError
from pingu.trading.trader import Trader

DEFAULT_DECIMALS = 18


def build_client(config: ClientConfig) -> PinguClient:
    return PinguClient(config)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pingu",
        description="Pingu perpetual futures client",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # markets / market
    sub.add_parser("markets", help="List all markets")
    market_p = sub.add_parser("market", help="Show one market")
    market_p.add_argument("name", help="Market symbol, e.g. ETH-USD")

    # positions / orders
    pos_p = sub.add_parser("positions", help="Show open positions")
    pos_p.add_argument("--address", help="Account (default: signer)")
    ord_p = sub.add_parser("orders", help="Show open orders")
    ord_p.add_argument("--address", help="Account (default: signer)")

    # funding-scan
    fs_p = sub.add_parser("funding-scan", help="Scan funding rates")
    fs_p.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help="Anomaly threshold in percent per 8h",
    )
    fs_p.add_argument("--asset", default=None, help="Asset name")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Get a config value")
    get_p.add_argument("key", help="Dotted key, e.g. chain.chain_id")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "config":
        return _cmd_config(config, args)

    try:
        if args.command == "markets":
            return _cmd_markets(config, args)
        elif args.command == "market":
            return _cmd_market(config, args)
        elif args.command == "positions":
            return _cmd_positions(config, args)
        elif args.command == "orders":
            return _cmd_orders(config, args)
        elif args.command == "funding-scan":
            return _cmd_funding_scan(config, args)
    except PinguError as e:
        print(f"Error: {e}")
        return 1

    parser.print_help()
    return 1


def _cmd_markets(config, args) -> int:
    reader = Reader(build_client(config))
    markets = reader.get_markets()
    print(f"Markets: {len(markets)}")
    for m in markets:
        print(format_market_row(m))
    return 0


def _cmd_market(config, args) -> int:
    reader = Reader(build_client(config))
    print(format_market(reader.get_market_info(args.name)))
    return 0


def _cmd_positions(config, args) -> int:
    trader = Trader(build_client(config))
    positions = trader.get_positions(args.address)
    print(f"Open positions: {len(positions)}")
    for p in positions:
        print(format_position(p, _decimals(config, p.asset)))
    return 0


def _cmd_orders(config, args) -> int:
    trader = Trader(build_client(config))
    orders = trader.get_orders(args.address)
    print(f"Open orders: {len(orders)}")
    for o in orders:
        print(format_order(o, _decimals(config, o.asset)))
    return 0


def _cmd_funding_scan(config, args) -> int:
    scanner = FundingScanner(Reader(build_client(config)), threshold=args.threshold)
    print(format_funding_scan(scanner.scan(args.asset)))
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        if hasattr(value, "model_dump"):
            value = value.model_dump()
        if isinstance(value, (dict, list)):
            print(json.dumps(value, indent=2, default=_jsonable))
        else:
            print(value)
        return 0
    else:
        print("Use: config show | config get <key>")
        return 1


def _jsonable(obj):
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    return str(obj)


def _decimals(config: ClientConfig, asset_name: str) -> int:
    asset = config.chain.assets.get(asset_name)
    return asset.decimals if asset is not None else DEFAULT_DECIMALS


if __name__ == "__main__":
    raise SystemExit(main())
