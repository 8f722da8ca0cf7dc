"""
Strata CLI - Command-line interface.

Commands:
- strata get todos/1      → Fetch through the caching composition
- strata header todos/1 content-type → Show one response header
- strata evict todos/1    → Drop a reference from the disk cache only
- strata demo             → Miss, hit, then clean up the cache
- strata status           → Show the active configuration
"""

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from strata.combinators.metadata import read_metadata
from strata.compose import Composition, build_http_cache
from strata.core.config import settings, setup_logging
from strata.core.errors import PartialWriteFailure, StoreError

app = typer.Typer(
    name="strata",
    help="Strata - compositional storage combinators",
    no_args_is_help=True,
)
console = Console()


def run_async(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


def get_composition(verbose: bool) -> Composition:
    """Build the default HTTP + disk cache composition."""
    return build_http_cache(settings, verbose=verbose)


def report_error(error: StoreError) -> None:
    """Print a store error; its text names the layer that raised it."""
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    if isinstance(error, PartialWriteFailure):
        console.print("[yellow]The cache holds data the source has not accepted.[/yellow]")


@app.command()
def get(
    ref: str = typer.Argument(..., help="Reference relative to the base URL"),
    verbose: bool = typer.Option(True, "--verbose/--quiet", help="Log store operations"),
):
    """Fetch a reference, reading through the cache."""
    setup_logging()
    composition = get_composition(verbose)

    try:
        data = run_async(composition.store.get(ref))
    except StoreError as e:
        report_error(e)
        raise typer.Exit(code=1)

    if data is None:
        console.print(f"[dim]{ref}: not found[/dim]")
        raise typer.Exit(code=1)
    console.print(Panel(Text(data), title=ref))


@app.command()
def header(
    ref: str = typer.Argument(..., help="Reference relative to the base URL"),
    name: str = typer.Argument(..., help="Header name (case-insensitive)"),
):
    """Show a response header of a reference (bypasses the cache)."""
    setup_logging()
    composition = get_composition(verbose=False)

    try:
        value = run_async(read_metadata(composition.remote, ref, name))
    except StoreError as e:
        report_error(e)
        raise typer.Exit(code=1)

    if value is None:
        console.print(f"[dim]{name}: not present[/dim]")
        raise typer.Exit(code=1)
    console.print(f"{name}: {value}", markup=False)


@app.command()
def evict(
    ref: str = typer.Argument(..., help="Reference to drop from the cache"),
):
    """Remove a reference from the disk cache without touching the source."""
    setup_logging()
    composition = get_composition(verbose=False)

    try:
        run_async(composition.cache.delete(ref))
    except StoreError as e:
        report_error(e)
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] Cache for '{ref}' cleaned.")


@app.command()
def demo(
    ref: str = typer.Argument("todos/1", help="Reference to fetch twice"),
):
    """Fetch a reference twice (miss, then hit) and clean the cache."""
    setup_logging()
    composition = get_composition(verbose=True)

    async def _run() -> None:
        console.print("[bold]--- First request (should be a cache miss) ---[/bold]")
        data = await composition.store.get(ref)
        console.print(f"Data: {data}\n", markup=False)

        console.print("[bold]--- Second request (should be a cache hit) ---[/bold]")
        data = await composition.store.get(ref)
        console.print(f"Data: {data}\n", markup=False)

        console.print("[bold]--- Cleaning up cache ---[/bold]")
        await composition.cache.delete(ref)
        console.print(f"Cache for '{ref}' cleaned.")

    try:
        run_async(_run())
    except StoreError as e:
        report_error(e)
        raise typer.Exit(code=1)


@app.command()
def status():
    """Show the active configuration."""
    table = Table(title="Strata")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Base URL", settings.base_url)
    table.add_row("Cache directory", str(settings.cache_dir))
    table.add_row("HTTP timeout", f"{settings.http_timeout}s")
    table.add_row("Log sink ref", settings.log_sink_ref)
    table.add_row("Log level", settings.log_level)

    console.print(table)


if __name__ == "__main__":
    app()
