"""Terminal view of the colony built from rich tables."""

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from stellar_reality.game.input import InputMode, Mode
from stellar_reality.models.colony import Colony

TITLE = "Stellar Reality"


def create_header(colony: Colony) -> Panel:
    """Title panel with the colony aggregates."""
    return Panel.fit(
        f"[bold cyan]{TITLE}[/bold cyan] - Day [yellow]{colony.day}[/yellow]\n"
        f"Population: [green]{colony.population:.0f}[/green] | "
        f"Happiness: [green]{colony.happiness:.1f}%[/green]\n"
        f"Tech Points: [magenta]{colony.tech_points:.1f}[/magenta]",
        border_style="blue",
    )


def create_resource_table(colony: Colony) -> Table:
    """Create a rich table for the resource ledger."""
    table = Table(title="Resources", show_header=True, header_style="bold magenta")

    table.add_column("Resource", style="cyan", width=10)
    table.add_column("Amount", style="yellow", width=10, justify="right")
    table.add_column("Rates", style="white", width=16, justify="right")

    for resource in colony.resources.values():
        rates = f"+{resource.production_rate:.1f}/-{resource.consumption_rate:.1f}"
        table.add_row(resource.name, f"{resource.amount:.1f}", rates)

    return table


def create_building_table(colony: Colony) -> Table:
    """Create a rich table for the building registry."""
    table = Table(title="Buildings", show_header=True, header_style="bold magenta")

    table.add_column("Building", style="cyan", width=16)
    table.add_column("Qty", style="green", width=4, justify="right")
    table.add_column("Cost", style="white", width=16)

    for building in colony.buildings.values():
        cost = ", ".join(
            f"{name[:1]}:{amount:.0f}"
            for name, amount in building.construction_cost.items()
        )
        table.add_row(building.name, str(building.quantity), cost)

    return table


def create_research_table(colony: Colony) -> Table:
    """Create a rich table for the research tree."""
    table = Table(title="Research", show_header=True, header_style="bold magenta")

    table.add_column("Research", style="cyan", width=22)
    table.add_column("Status", width=12)
    table.add_column("Cost", style="yellow", width=6, justify="right")
    table.add_column("Description", style="white")

    for item in colony.research_items:
        status_style = "green" if item.completed else "dim"
        table.add_row(
            item.name,
            f"[{status_style}]{item.status}[/{status_style}]",
            f"{item.cost:.0f}",
            item.description,
        )

    return table


def create_event_panel(colony: Colony, count: int) -> Panel:
    """Most recent events, newest first."""
    lines = colony.recent_events(count)
    body = Text("\n".join(lines)) if lines else Text("Nothing yet.", style="dim")
    return Panel(body, title="Recent Events", border_style="yellow")


def create_prompt(mode: InputMode) -> Text:
    """Command hint or the prompt being typed."""
    if mode.mode is Mode.BUILD:
        return Text(f"Enter building name to construct: {mode.text}")
    if mode.mode is Mode.RESEARCH:
        return Text(f"Enter research name: {mode.text}")
    return Text("Commands: (b) Build, (r) Research, (q) Quit", style="bold")


def render_colony(
    colony: Colony, mode: InputMode, recent_events: int = 3
) -> RenderableType:
    """Full screen; reads the colony without modifying it."""
    return Group(
        create_header(colony),
        Columns([create_resource_table(colony), create_building_table(colony)]),
        create_research_table(colony),
        create_event_panel(colony, recent_events),
        create_prompt(mode),
    )
