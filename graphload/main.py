from __future__ import annotations

import signal
import sys
import threading
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from graphload.config import get_settings
from graphload.errors import StartupError
from graphload.infrastructure.graph_client import BoltQueryClient
from graphload.orchestrator import LoadConfig, prepare_entities, run_load
from graphload.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Graph database load generator CLI.")
log = get_logger(__name__)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    table = Table(title="Load Generator Settings", box=box.ROUNDED)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="magenta")

    table.add_row("Graph store", settings.uri)
    table.add_row("User", settings.db_user or "(no auth)")
    table.add_row("Concurrency", str(settings.concurrency))
    table.add_row("Timeout (s)", f"{settings.timeout:g}")
    table.add_row("Min supply chain size", str(settings.min_supply_chain_size))
    table.add_row("Dataset", str(settings.data_path))
    table.add_row("Query memory limit (MB)", str(settings.query_memory_limit_mb))
    table.add_row("Query result limit", str(settings.query_result_limit))
    Console().print(table)


@app.command()
def entities(
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="Entity dataset (CSV)."),
    min_size: Optional[int] = typer.Option(
        None, "--min-size", "-m", help="Keep entities with supply chain size above this."
    ),
    limit: int = typer.Option(10, "--limit", "-l", help="Number of entities to preview."),
) -> None:
    """
    Load and filter the dataset, then preview the entities that would be queried.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    config = LoadConfig.from_settings(settings, data_path=data, min_supply_chain_size=min_size)
    try:
        loaded = prepare_entities(config)
    except StartupError as exc:
        log.error(str(exc))
        raise typer.Exit(code=1) from exc

    table = Table(
        title=f"{len(loaded):,} entities with supply chain size > {config.min_supply_chain_size}",
        box=box.ROUNDED,
    )
    table.add_column("#", justify="right", style="blue")
    table.add_column("Entity id", style="cyan")
    table.add_column("Supply chain size", justify="right", style="green")
    for position, entity in enumerate(loaded[:limit]):
        table.add_row(str(position), entity.id, f"{entity.supply_chain_size:,}")
    Console().print(table)


def _install_signal_handlers(stop_event: threading.Event) -> None:
    def _handle(signum: int, frame: object) -> None:
        del frame
        log.info(f"Received signal {signum}, stopping runners")
        stop_event.set()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


@app.command()
def run(
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", "-c", min=1, help="Number of parallel runners."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", min=0.001, help="Seconds allowed per query attempt."
    ),
    min_size: Optional[int] = typer.Option(
        None, "--min-size", "-m", help="Keep entities with supply chain size above this."
    ),
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="Entity dataset (CSV)."),
    iterations: Optional[int] = typer.Option(
        None, "--iterations", "-n", min=1, help="Stop each runner after this many attempts."
    ),
    single_pass: bool = typer.Option(
        False, "--single-pass", help="Query every entity once instead of cycling forever."
    ),
) -> None:
    """
    Issue the traversal query continuously until interrupted.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    config = LoadConfig.from_settings(
        settings,
        concurrency=concurrency,
        timeout=timeout,
        min_supply_chain_size=min_size,
        data_path=data,
        max_iterations=iterations,
        single_pass=single_pass or None,
    )

    try:
        loaded = prepare_entities(config)
        client = BoltQueryClient.from_settings(settings)
    except StartupError as exc:
        log.error(str(exc))
        raise typer.Exit(code=1) from exc

    stop_event = threading.Event()
    _install_signal_handlers(stop_event)
    try:
        run_load(
            config,
            client,
            entities=loaded,
            stop_event=stop_event,
            target=f"Memgraph at {settings.host}:{settings.port}",
        )
    finally:
        client.close()


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
