from __future__ import annotations

import argparse
import asyncio
import json
from dataclasses import asdict

from app.core.database import AsyncSessionLocal
from app.core.logging import setup_logging
from app.services.market_errors import MarketStoreError, MarketValidationError
from app.services.market_filters import SUSPENSION_STATUSES, MarketFilters
from app.services.market_overrides import clear_manual_suspension, set_manual_suspension
from app.services.market_query import list_filter_options, list_markets, summarize_markets
from app.services.market_seed import load_seed, read_seed_file


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Market board operational CLI")
    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List markets with resolved suspension state")
    list_parser.add_argument("--position", default=None)
    list_parser.add_argument("--stat-type", default=None)
    list_parser.add_argument("--search", default=None)
    list_parser.add_argument("--suspension-status", default=None, choices=SUSPENSION_STATUSES)
    list_parser.add_argument("--summary", action="store_true", help="Print counts instead of rows")

    subparsers.add_parser("filter-options", help="Print positions and stat types present on the board")

    for name, help_text in (
        ("suspend", "Force a market suspended"),
        ("unsuspend", "Force a market active"),
        ("clear-override", "Remove a market's manual override"),
    ):
        override_parser = subparsers.add_parser(name, help=help_text)
        override_parser.add_argument("market_id", type=int)

    seed_parser = subparsers.add_parser("seed", help="Replace board contents from a JSON snapshot")
    seed_parser.add_argument("path")

    return parser


async def _run_list(args: argparse.Namespace) -> int:
    filters = MarketFilters.from_params(
        position=args.position,
        stat_type=args.stat_type,
        search=args.search,
        suspension_status=args.suspension_status,
    )
    async with AsyncSessionLocal() as db:
        markets = await list_markets(db, filters)
    if args.summary:
        _print_json(asdict(summarize_markets(markets)))
    else:
        _print_json({"data": [asdict(market) for market in markets], "count": len(markets)})
    return 0


async def _run_filter_options() -> int:
    async with AsyncSessionLocal() as db:
        options = await list_filter_options(db)
    _print_json(asdict(options))
    return 0


async def _run_override(command: str, market_id: int) -> int:
    async with AsyncSessionLocal() as db:
        if command == "clear-override":
            matched = await clear_manual_suspension(db, market_id)
        else:
            matched = await set_manual_suspension(db, market_id, command == "suspend")
    _print_json({"id": market_id, "command": command, "matched": matched})
    return 0 if matched else 2


async def _run_seed(path: str) -> int:
    payload = read_seed_file(path)
    async with AsyncSessionLocal() as db:
        summary = await load_seed(db, payload)
    _print_json(summary)
    return 0


def _dispatch(args: argparse.Namespace) -> int | None:
    if args.command == "list":
        return asyncio.run(_run_list(args))
    if args.command == "filter-options":
        return asyncio.run(_run_filter_options())
    if args.command in {"suspend", "unsuspend", "clear-override"}:
        return asyncio.run(_run_override(args.command, args.market_id))
    if args.command == "seed":
        return asyncio.run(_run_seed(args.path))
    return None


def main(argv: list[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    setup_logging()
    try:
        exit_code = _dispatch(args)
    except MarketValidationError as exc:
        _print_json({"error": "invalid_input", "field": exc.field, "reason": exc.reason})
        return 2
    except MarketStoreError as exc:
        # Logged with its cause where it was raised.
        _print_json({"error": "store_unavailable", "operation": exc.operation, "market_id": exc.market_id})
        return 3

    if exit_code is None:
        parser.print_help()
        return 1
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
