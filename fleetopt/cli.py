"""Command line entry point.

    fleetopt fleet workload.toml --provider Azure --payment onDemand
    fleetopt single --vcpus 4 --memory 8 --region us-east-1
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from rich.console import Console

from fleetopt.client import OptimizerClient
from fleetopt.config import Settings, Workload, load_settings, load_workload
from fleetopt.display import render_error, render_fleet, render_instances
from fleetopt.logging import setup_logging, teardown_logging
from fleetopt.routing import PROVIDERS
from fleetopt.session import FleetSession, SearchSession
from fleetopt.types import as_region


def _parse_region(value: str) -> str | tuple[str, ...]:
    """``"all"``, one region, or a comma-separated list."""
    parts = [p.strip() for p in value.split(",") if p.strip()]
    if len(parts) > 1:
        return as_region(parts)
    return parts[0] if parts else "all"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fleetopt",
        description="Find the cheapest cloud configuration for your workload",
    )
    parser.add_argument("--api-url", type=str, default=None, help="Optimization service URL")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests to stderr")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--provider", choices=list(PROVIDERS), default=None)
    common.add_argument("--os", choices=["linux", "windows"], default=None)
    common.add_argument("--payment", choices=["Spot", "onDemand"], default=None)
    common.add_argument(
        "--region", type=_parse_region, default=None,
        help="Region, comma-separated regions, or 'all'",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    fleet = sub.add_parser("fleet", parents=[common], help="Optimize a multi-app fleet")
    fleet.add_argument("workload", type=Path, help="Workload TOML file")

    single = sub.add_parser("single", parents=[common], help="Search single instances")
    single.add_argument("--vcpus", type=int, default=4)
    single.add_argument("--memory", type=int, default=8, help="Memory in GB")

    return parser


async def run_fleet(
    args: argparse.Namespace, workload: Workload, settings: Settings, console: Console
) -> int:
    async with OptimizerClient(settings.api_url, timeout=settings.timeout) as client:
        session = FleetSession(
            client=client,
            provider=args.provider or workload.provider,
            os=args.os or workload.os,
            payment=args.payment or workload.payment,
            region=args.region or workload.region,
            form=workload.form,
        )
        await session.submit()

    if session.error is not None:
        console.print(render_error(session.error))
        return 1
    console.print(render_fleet(session.results))
    return 0


async def run_single(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    region = args.region or "all"
    if not isinstance(region, str):
        console.print(render_error("Single-instance search takes one region or 'all'"))
        return 1

    async with OptimizerClient(settings.api_url, timeout=settings.timeout) as client:
        session = SearchSession(
            client=client,
            provider=args.provider or "AWS",
            os=args.os or "linux",
            payment=args.payment or "Spot",
            region=region,
            vcpus=args.vcpus,
            memory=args.memory,
        )
        await session.submit()

    if session.error is not None:
        console.print(render_error(session.error))
        return 1
    console.print(render_instances(session.results))
    return 0


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    try:
        settings = load_settings()
    except (OSError, ValueError) as e:
        console.print(render_error(f"Cannot load settings: {e}"))
        return 1
    if args.api_url:
        settings = replace(settings, api_url=args.api_url)
    log_config = settings.logging
    if args.verbose:
        log_config = replace(log_config, level="INFO")
    handler_ids = setup_logging(log_config)

    try:
        match args.command:
            case "fleet":
                try:
                    workload = load_workload(args.workload)
                except (OSError, ValueError) as e:
                    console.print(render_error(f"Cannot load {args.workload}: {e}"))
                    return 1
                return asyncio.run(run_fleet(args, workload, settings, console))
            case "single":
                return asyncio.run(run_single(args, settings, console))
            case _:
                raise ValueError(f"Unknown command: {args.command}")
    finally:
        teardown_logging(handler_ids)


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
