"""Terminal rendering of optimization results."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from fleetopt.results import (
    NO_RESULTS_MESSAGE,
    DisplayConfiguration,
    DisplayInstance,
    format_price,
)


def _hourly(price: float) -> str:
    return f"{format_price(price)}/hr"


def render_error(message: str) -> RenderableType:
    return Panel(Text(message, style="red"), border_style="red", title="Error")


def render_no_results() -> RenderableType:
    return Panel(Text(NO_RESULTS_MESSAGE, style="yellow"), border_style="yellow")


def render_configuration(config: DisplayConfiguration) -> RenderableType:
    """One fleet configuration.

    Layout:
        Configuration #1                      $0.1234 per hour
        Region: us-east-1
        ┌──────────┬──────┬────────┬─────────┬────────────┬─────────────┬──────────┐
        │ Instance │ vCPU │ Memory │ Network │ Components │ Price       │ Discount │
    """
    table = Table(expand=True, show_edge=False)
    table.add_column("Instance", style="bold")
    table.add_column("vCPU", justify="right")
    table.add_column("Memory", justify="right")
    table.add_column("Network")
    table.add_column("Components", style="cyan")
    table.add_column("Price", justify="right")
    table.add_column("Discount", style="green")

    for inst in config.instances:
        table.add_row(
            inst.type_name,
            inst.cpu,
            f"{inst.memory}GB",
            inst.network,
            inst.components_summary or "",
            _hourly(inst.spot_price),
            inst.discount_badge or "",
        )

    title = Text()
    title.append(f"Configuration #{config.rank}", style="bold magenta")
    title.append("  ")
    title.append(format_price(config.price), style="green bold")
    title.append(" per hour", style="dim")
    return Panel(
        Group(Text(f"Region: {config.region}", style="dim"), table),
        title=title,
        title_align="left",
        border_style="magenta",
    )


def render_fleet(configurations: Sequence[DisplayConfiguration]) -> RenderableType:
    if not configurations:
        return render_no_results()
    return Group(
        Text("Optimization Results", style="bold"),
        *(render_configuration(c) for c in configurations),
    )


def render_instances(instances: Sequence[DisplayInstance]) -> RenderableType:
    if not instances:
        return render_no_results()

    table = Table(title="Matching Instances", expand=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Instance", style="bold")
    table.add_column("Region")
    table.add_column("vCPU", justify="right")
    table.add_column("Memory", justify="right")
    table.add_column("Network")
    table.add_column("Total", justify="right", style="green bold")
    table.add_column("Spot", justify="right")

    for index, inst in enumerate(instances, start=1):
        table.add_row(
            str(index),
            inst.type_name,
            inst.region,
            inst.cpu,
            f"{inst.memory}GB",
            inst.network,
            _hourly(inst.price),
            _hourly(inst.spot_price),
        )
    return table
