"""Stellar Reality colony simulation CLI."""

import argparse
import logging
import random
import sys
from pathlib import Path

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table

from stellar_reality.game.renderer import (
    create_building_table,
    create_research_table,
    create_resource_table,
    render_colony,
)
from stellar_reality.game.scheduler import ColonyScheduler
from stellar_reality.game.terminal import RawKeyReader
from stellar_reality.models.colony import Colony
from stellar_reality.models.errors import NotFoundError
from stellar_reality.solvers.build_advisor import BuildAdvisor, BuildPlan
from stellar_reality.utils.catalog import new_colony
from stellar_reality.utils.config import SimulationConfig, load_config
from stellar_reality.utils.log import configure_logging

console = Console()
logger = logging.getLogger(__name__)

REFRESH_PER_SECOND = 10


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Stellar Reality - colony simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                            # Play in the terminal
  %(prog)s --days 100 --seed 7        # Simulate 100 days headless
  %(prog)s --advise Food              # Recommend builds for food output
  %(prog)s --config settings.json     # Load simulation settings
        """,
    )

    parser.add_argument("--config", type=Path, help="Path to settings JSON file")
    parser.add_argument("--seed", type=int, help="Random seed for world events")
    parser.add_argument(
        "--tick-interval",
        type=int,
        dest="tick_interval_ms",
        help="Milliseconds between days (default: 500)",
    )
    parser.add_argument(
        "--event-chance",
        type=float,
        help="Chance of a world event per loop iteration (default: 0.02)",
    )
    parser.add_argument(
        "--days", type=int, help="Simulate this many days without a terminal UI"
    )
    parser.add_argument(
        "--advise",
        metavar="RESOURCE",
        help="Recommend buildings that maximize a resource's production",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Minimal output (headless summary only)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Settings file first, then command line overrides."""
    return load_config(args.config).with_overrides(
        seed=args.seed,
        tick_interval_ms=args.tick_interval_ms,
        event_chance=args.event_chance,
    )


def create_plan_table(plan: BuildPlan) -> Table:
    """Create a rich table for a build recommendation."""
    table = Table(
        title=f"Build Plan ({plan.target})",
        show_header=True,
        header_style="bold magenta",
    )

    table.add_column("Building", style="cyan", width=18)
    table.add_column("Count", style="green", width=6, justify="right")

    for name, count in plan.builds.items():
        table.add_row(name, str(count))

    return table


def print_summary(colony: Colony, quiet: bool) -> None:
    """Print the colony state after a headless run."""
    if quiet:
        print(
            f"day={colony.day} population={colony.population:.0f} "
            f"happiness={colony.happiness:.1f} tech_points={colony.tech_points:.1f}"
        )
        return

    console.print(
        Panel.fit(
            f"[bold cyan]Stellar Reality[/bold cyan] - Day {colony.day}\n"
            f"Population: [green]{colony.population:.0f}[/green] | "
            f"Happiness: [green]{colony.happiness:.1f}%[/green] | "
            f"Tech Points: [magenta]{colony.tech_points:.1f}[/magenta]",
            border_style="blue",
        )
    )
    console.print(create_resource_table(colony))
    console.print(create_building_table(colony))
    console.print(create_research_table(colony))

    if colony.events:
        console.print("\n[bold]Events:[/bold]")
        for event in colony.events:
            console.print(f"  • {event}")


def run_advisor(colony: Colony, target: str) -> int:
    """Print a build recommendation; returns the exit code."""
    try:
        plan = BuildAdvisor(colony).recommend(target)
    except NotFoundError:
        console.print(f"[red]Unknown resource: {target}[/red]")
        return 1

    if plan.is_empty:
        console.print(f"[yellow]No affordable builds improve {target}.[/yellow]")
        return 0

    console.print(create_plan_table(plan))
    costs = ", ".join(f"{name}: {amount:.0f}" for name, amount in plan.cost.items())
    console.print(f"\n[bold]Total cost:[/bold] {costs}")
    console.print(f"[bold]{target} gain:[/bold] [green]+{plan.gain:.1f}/day[/green]")
    return 0


def run_interactive(scheduler: ColonyScheduler) -> None:
    """Play in the terminal until the player quits."""
    config = scheduler.config
    poll_timeout = min(config.tick_interval_seconds, 1.0 / REFRESH_PER_SECOND)

    with RawKeyReader() as keys, Live(
        render_colony(scheduler.colony, scheduler.input_mode, config.recent_events),
        console=console,
        screen=True,
        auto_refresh=False,
    ) as live:
        while True:
            key = keys.read_key(poll_timeout)
            if not scheduler.step(key):
                break
            live.update(
                render_colony(
                    scheduler.colony, scheduler.input_mode, config.recent_events
                ),
                refresh=True,
            )


def main(argv: list[str] | None = None) -> int:
    """Run the colony simulation with CLI."""
    args = parse_args(argv)
    configure_logging(args.verbose, console)

    try:
        config = build_config(args)
    except (OSError, TypeError, ValueError) as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        return 2

    colony = new_colony(max_events=config.max_events)

    if args.advise:
        return run_advisor(colony, args.advise)

    scheduler = ColonyScheduler(colony, config, random.Random(config.seed))

    if args.days is not None:
        logger.info("Simulating %d days", args.days)
        scheduler.advance_days(args.days)
        print_summary(colony, args.quiet)
        return 0

    if not sys.stdin.isatty():
        console.print("[red]Interactive mode needs a terminal; use --days.[/red]")
        return 2

    run_interactive(scheduler)
    return 0


if __name__ == "__main__":
    sys.exit(main())
