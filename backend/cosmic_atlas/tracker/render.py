"""Rich renderables for the ISS tracker."""

from datetime import datetime, timezone

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from cosmic_atlas.tracker.iss import ISSTracker


def build_position_panel(tracker: ISSTracker) -> Panel:
    pos = tracker.position
    if pos is None:
        return Panel(Text("No position yet", style="dim"), title="ISS Position", border_style="cyan")

    table = Table.grid(padding=(0, 2))
    table.add_column(style="cyan", no_wrap=True)
    table.add_column(style="white")
    table.add_row("Latitude", f"{pos['latitude']:.4f}°")
    table.add_row("Longitude", f"{pos['longitude']:.4f}°")
    table.add_row("Altitude", f"{pos['altitude']:.1f} km")
    table.add_row("Velocity", f"{pos['velocity']:,.0f} km/h")
    seen = datetime.fromtimestamp(pos["timestamp"], tz=timezone.utc)
    table.add_row("Updated", seen.strftime("%Y-%m-%d %H:%M:%S UTC"))
    return Panel(table, title="ISS Position", border_style="cyan")


def build_crew_table(tracker: ISSTracker) -> Table:
    table = Table(title=f"Crew aboard the ISS ({len(tracker.astronauts)})")
    table.add_column("Name", style="white")
    table.add_column("Craft", style="magenta")
    for person in tracker.astronauts:
        table.add_row(person["name"], person["craft"])
    return table


def render_tracker(tracker: ISSTracker):
    if tracker.loading:
        return Panel(Text("Loading ISS data...", style="dim"), border_style="blue")
    if tracker.error:
        return Panel(Text(tracker.error, style="bold red"), border_style="red")
    return Group(build_position_panel(tracker), build_crew_table(tracker))
