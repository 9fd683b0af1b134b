# src/cli/runner.py

"""Headless CLI runner around the async ingestion orchestrator."""

import json
import logging
import sys
import time

from rich.console import Console
from rich.table import Table

from src.models.product import EnrichedProduct
from src.scrapers.errors import FetchError
from src.services.ingest_orchestrator import IngestOrchestrator

logger = logging.getLogger("productscout.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _print_table(products: list[EnrichedProduct]) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title="Search Results",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("SKU", style="magenta")
    table.add_column("Name", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Images", justify="right")
    table.add_column("URL", overflow="fold", style="dim")

    for idx, p in enumerate(products, 1):
        table.add_row(
            str(idx),
            p.id or "—",
            p.name[:60] or "—",
            p.price or "N/A",
            str(len(p.images)),
            p.detail_url,
        )

    Console().print(table)


async def cli_ingest(
    search_term: str,
    output_format: str = "json",
    workers: int | None = None,
) -> int:
    """Run one ingestion and return an exit code (0=ok, 1=fail)."""
    orchestrator = IngestOrchestrator(max_workers=workers)
    _err.print(
        f"[bold]Searching:[/bold] {search_term}  "
        f"[dim]workers={orchestrator.max_workers}[/dim]"
    )

    start = time.monotonic()
    try:
        products = await orchestrator.ingest(search_term)
    except FetchError as exc:
        logger.error("Ingestion failed: %s", exc)
        _err.print(f"[red]Error: {exc}[/red]")
        return 1
    elapsed_ms = (time.monotonic() - start) * 1000

    if products:
        _err.print(
            f"[green]✓ {len(products)} products[/green]"
        )
    else:
        _err.print("[yellow]No products found.[/yellow]")

    if output_format == "table":
        _print_table(products)
    else:
        json.dump(
            [p.to_dict() for p in products],
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    _err.print(f"[dim]Request took {elapsed_ms:.0f}ms[/dim]")
    return 0


async def run_health_check() -> int:
    """Run a connectivity check against the search endpoint."""
    from src.services.health_checker import HealthChecker

    _err.print("[bold]Running search endpoint health check...[/bold]")
    result = await HealthChecker().check()

    table = Table(
        title="Search Endpoint Health",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Endpoint", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    if result.status == "ok":
        status = "[green]✅ OK[/green]"
    elif result.status == "slow":
        status = "[yellow]⚠️  SLOW[/yellow]"
    else:
        status = "[red]❌ DOWN[/red]"

    latency = (
        f"{result.latency_ms:.0f}ms"
        if result.latency_ms > 0
        else "—"
    )
    table.add_row(result.target, status, latency, result.message)

    Console().print(table)
    return 1 if result.status == "down" else 0
