"""Command line entry point: run the API, watch the ISS, check space weather."""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.live import Live

from cosmic_atlas.core.config import settings
from cosmic_atlas.core.logging import setup_logging
from cosmic_atlas.schemas.space_weather import latest_kp, storm_level
from cosmic_atlas.services.space_weather import SpaceWeatherClient
from cosmic_atlas.tracker.iss import ISSTracker
from cosmic_atlas.tracker.render import render_tracker

app = typer.Typer(help="Cosmic Atlas space data aggregator", no_args_is_help=True)
iss_app = typer.Typer(help="Live ISS tracking", no_args_is_help=True)
app.add_typer(iss_app, name="iss")

console = Console()


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(3001, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("cosmic_atlas.main:app", host=host, port=port, reload=reload, log_level=settings.LOG_LEVEL.lower())


async def _watch(backend_url: Optional[str], interval: float) -> None:
    with Live(console=console, refresh_per_second=4) as live:
        tracker = ISSTracker(backend_url, interval, on_update=lambda t: live.update(render_tracker(t)))
        live.update(render_tracker(tracker))
        async with tracker:
            while True:
                await asyncio.sleep(3600)


@iss_app.command("watch")
def watch(
    backend_url: Optional[str] = typer.Option(None, "--backend-url", help="Backend base URL"),
    interval: float = typer.Option(settings.ISS_POLL_INTERVAL_SECONDS, help="Seconds between refreshes"),
):
    """Show the ISS position and crew, refreshed until Ctrl+C."""
    try:
        asyncio.run(_watch(backend_url, interval))
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")


async def _kp() -> int:
    async with SpaceWeatherClient() as client:
        result = await client.get_geomagnetic_activity()
    if not result.success:
        console.print(f"[red]{result.error.code}: {result.error.message}[/red]")
        return 1
    kp = latest_kp(result.data)
    if kp is None:
        console.print("[yellow]No Kp readings available[/yellow]")
        return 1
    console.print(f"Kp [bold]{kp:.2f}[/bold] ({storm_level(kp)})")
    return 0


@app.command()
def kp():
    """Print the latest planetary Kp index."""
    raise typer.Exit(code=asyncio.run(_kp()))


def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    app()


if __name__ == "__main__":
    main()
