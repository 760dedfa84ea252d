"""
Command-line interface for the Weekend Vibes events proxy.

Runs the HTTP server and offers one-shot helpers for checking the upstream
prompt, the live endpoint and the extractor against saved responses.
"""

import asyncio
import json
import sys
from datetime import date
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax

from weekend_vibes.config import get_settings
from weekend_vibes.extraction.json_array import extract_json_array
from weekend_vibes.gateway.handler import EventsGateway
from weekend_vibes.utils.errors import ExtractionError, MalformedJSONError
from weekend_vibes.utils.logging import setup_logging

app = typer.Typer(
    name="weekend-vibes",
    help="Weekend Vibes North events proxy",
    add_completion=False,
)
console = Console()


def _print_json(data) -> None:
    console.print(Syntax(json.dumps(data, indent=2, ensure_ascii=False), "json"))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from settings)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Serve the events endpoint with uvicorn."""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[cyan]Serving events endpoint on http://{host}:{port}[/cyan]")
    uvicorn.run("weekend_vibes.gateway.app:create_app", factory=True, host=host, port=port, reload=reload)


@app.command()
def fetch(
    raw: bool = typer.Option(False, "--raw", help="Print the untouched upstream text"),
):
    """Run one request through the gateway and print the result."""
    gateway = EventsGateway(get_settings())

    if raw:
        if not gateway.settings.has_upstream_credential:
            console.print("[red]Error:[/red] UPSTREAM_API_KEY is not configured")
            raise typer.Exit(1)
        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                progress.add_task("Asking upstream...", total=None)
                text = asyncio.run(gateway.fetch_raw_text())
        except Exception as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        console.print(text, markup=False, highlight=False)
        return

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Fetching events...", total=None)
        response = asyncio.run(gateway.handle("GET"))

    body = json.loads(response.body)
    colour = "green" if response.status_code == 200 else "red"
    console.print(f"[{colour}]Status {response.status_code}[/{colour}]")
    _print_json(body)
    if response.status_code != 200:
        raise typer.Exit(1)


@app.command()
def extract(
    source: str = typer.Argument(..., help="File holding a raw model response, or - for stdin"),
):
    """Extract the JSON array from a saved model response."""
    if source == "-":
        text = sys.stdin.read()
    else:
        try:
            with open(source, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)

    try:
        records = extract_json_array(text)
    except MalformedJSONError as e:
        console.print(f"[red]✗[/red] {e.message}")
        console.print(e.raw_snippet, markup=False, highlight=False)
        raise typer.Exit(1)
    except ExtractionError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Extracted {len(records)} records")
    _print_json(records)


@app.command()
def prompt(
    on: Optional[str] = typer.Option(None, "--date", help="Date to build the prompt for (YYYY-MM-DD)"),
):
    """Print the query that would be sent upstream."""
    gateway = EventsGateway(get_settings())
    try:
        today = date.fromisoformat(on) if on else None
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid date: {on}")
        raise typer.Exit(1)

    console.print(gateway.build_query(today), markup=False, highlight=False)


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Weekend Vibes North - upcoming events in Northern Taiwan, via Gemini search."""
    log_level = "DEBUG" if debug else None
    setup_logging(log_level=log_level)


if __name__ == "__main__":
    app()
