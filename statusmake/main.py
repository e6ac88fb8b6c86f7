"""Entry point for statusmake."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

import uvicorn
from rich.console import Console
from rich.panel import Panel

from statusmake.config import settings
from statusmake.health.inspection import InspectionError, load_inspection_set
from statusmake.health.orchestrator import build_report

console = Console()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)


def run_server() -> None:
    """Start the FastAPI server."""
    console.print(Panel(f"Serving health checks at {settings.route_path}", style="bold green"))
    uvicorn.run(
        "statusmake.api.server:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
    )


def run_check(inspection_file: str) -> int:
    """Run every check once and print the report. Returns the exit code."""
    try:
        inspection = load_inspection_set(inspection_file)
    except InspectionError as e:
        console.print(f"[bold red]Invalid inspection file:[/bold red] {e}")
        return 2

    with console.status("[bold green]Running checks..."):
        report = asyncio.run(build_report(
            inspection,
            timeout=settings.probe_timeout_seconds,
            disk_path=settings.disk_path,
        ))

    console.print_json(json.dumps(report.to_dict()))
    style = "bold green" if report.healthy else "bold red"
    console.print(Panel("healthy" if report.healthy else "unhealthy", style=style))
    return 0 if report.healthy else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="statusmake health aggregator")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="Start the health endpoint server")

    check_parser = sub.add_parser("check", help="Run all checks once and print the report")
    check_parser.add_argument(
        "--inspection-file",
        default=settings.inspection_file,
        help="YAML file listing apis/functions to check",
    )

    args = parser.parse_args()

    if args.command == "serve":
        run_server()
    elif args.command == "check":
        sys.exit(run_check(args.inspection_file))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
