"""Entry point for the health aggregator — `health-aggregator` console script."""

from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import sys
from typing import Any

import uvicorn
from rich.console import Console
from rich.panel import Panel

from .config import settings
from .health import Health, State

console = Console()
logger = logging.getLogger(__name__)


class CheckLoadError(Exception):
    """Raised when a --check target cannot be imported."""


def load_check(target: str) -> Any:
    """Import ``module:attr``; classes are instantiated with no arguments."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise CheckLoadError(f"Expected 'module:attr', got {target!r}")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise CheckLoadError(f"Cannot import {module_name!r}: {e}") from e
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise CheckLoadError(f"{module_name!r} has no attribute {attr!r}") from e
    if inspect.isclass(obj):
        obj = obj()
    return obj


def build_health(targets: list[str], status_expiration_ms: int | None = None) -> Health:
    health = Health(status_expiration_ms=status_expiration_ms)
    for target in targets:
        try:
            health.register_check(load_check(target))
        except TypeError as e:
            raise CheckLoadError(f"{target}: {e}") from e
    return health


def run_status(health: Health, simple: bool = False) -> int:
    """Evaluate all checks once, print the payload, return the exit code."""
    status = health.force_update_status()
    payload = status.to_simple_dict() if simple else status.to_dict()
    console.print_json(data=payload)
    return 0 if status.state is State.UP else 1


def run_server(health: Health, host: str, port: int) -> None:
    from .api.server import create_app

    console.print(
        Panel.fit(
            f"[bold]Health Aggregator[/bold]\n"
            f"Bind:   {host}:{port}\n"
            f"Path:   {settings.health_path}\n"
            f"Checks: {health.check_count}\n"
            f"Cache:  {health.status_expiration_ms} ms",
            title="health-aggregator",
            border_style="green",
        )
    )
    uvicorn.run(create_app(health), host=host, port=port, log_level=settings.log_level.lower())


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    parser = argparse.ArgumentParser(description="In-process health status aggregator")
    sub = parser.add_subparsers(dest="command")

    def add_check_args(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--check", action="append", default=[], metavar="MODULE:ATTR",
            help="Health check to register (object with evaluate() or closure); repeatable",
        )
        p.add_argument(
            "--expiration-ms", type=int, default=None,
            help=f"Status cache window in ms (default {settings.status_expiration_ms})",
        )

    status_parser = sub.add_parser("status", help="Evaluate checks once and print the status")
    add_check_args(status_parser)
    status_parser.add_argument("--simple", action="store_true", help="Print only the state")

    serve_parser = sub.add_parser("serve", help="Serve the status over HTTP")
    add_check_args(serve_parser)
    serve_parser.add_argument("--host", default=settings.api_host)
    serve_parser.add_argument("--port", type=int, default=settings.api_port)

    args = parser.parse_args(argv)

    if args.command not in ("status", "serve"):
        parser.print_help()
        return 2

    try:
        health = build_health(args.check, args.expiration_ms)
    except (CheckLoadError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return 2

    if args.command == "status":
        return run_status(health, simple=args.simple)
    run_server(health, args.host, args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
