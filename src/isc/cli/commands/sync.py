"""Command module for isc copy runs."""

import asyncio
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from loguru import logger
from pydantic import ValidationError

from isc.checksum import Algorithm
from isc.cli.app import app, version_callback
from isc.config import SyncConfig
from isc.exceptions import SyncError
from isc.sync import CopyOutcome, SyncService
from isc.utils import setup_logging


def load_config(**overrides: Any) -> SyncConfig:
    """Load settings from the environment; command line values win when given."""
    updates: Dict[str, Any] = {k: v for k, v in overrides.items() if v is not None}
    return SyncConfig(**updates)


def echo_outcome(outcome: CopyOutcome) -> None:
    typer.echo(str(outcome), err=True)


async def run_sync(
    source: Path, destination: Path, config: SyncConfig, live: bool = False
) -> str:
    """Run a full copy and return the rendered report."""
    service = SyncService.from_config(config)
    report = await service.sync(source, destination, on_complete=echo_outcome if live else None)
    return str(report)


@app.command()
def sync(
    source: Path = typer.Argument(..., help="The source directory to copy from."),
    destination: Path = typer.Argument(
        Path("./"),
        help="The destination directory to copy to, the current directory if omitted.",
    ),
    thread_count: Optional[int] = typer.Option(
        None,
        "--thread-count",
        "-t",
        min=1,
        help="Worker threads and concurrent copies [default: number of CPUs].",
    ),
    algorithm: Optional[Algorithm] = typer.Option(
        None,
        "--algorithm",
        "-a",
        case_sensitive=False,
        help="Checksum algorithm [default: sha2-256].",
    ),
    live: bool = typer.Option(
        False,
        "--live",
        help="Print each copy result to stderr as soon as it finishes.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level for diagnostics on stderr.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Copy every file of SOURCE whose content is not already in DESTINATION."""
    try:
        config = load_config(thread_count=thread_count, algorithm=algorithm, log_level=log_level)
    except ValidationError as e:
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        raise typer.Exit(1)

    setup_logging(config.log_level, config.log_file)
    logger.debug(f"Configuration: {config}")

    try:
        report = asyncio.run(run_sync(source, destination, config, live=live))
    except SyncError as e:
        logger.error(f"Sync failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Sync failed")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(report, nl=False)
