from __future__ import annotations

from rich.console import Console
from rich.table import Table


def print_sensor_summary(sensors, console: Console = None) -> None:
    """
    Prints one row per sensor: id, position, detected object, and radius.
    """
    console = console or Console()

    table = Table(title="Sensors")
    table.add_column("Id", style="bold")
    table.add_column("Position")
    table.add_column("Beacon")
    table.add_column("Radius", justify="right")

    for s in sensors:
        table.add_row(
            s.sensor_id,
            f"({s.position.x}, {s.position.y})",
            f"({s.nearest_object.x}, {s.nearest_object.y})",
            f"{s.radius:,}",
        )

    console.print(table)


def print_row_table(df, console: Console = None) -> None:
    """Render the per-row coverage DataFrame built by ``row_table``."""
    console = console or Console()

    table = Table(title="Coverage by Row")
    table.add_column("Row", justify="right", style="bold")
    table.add_column("Covered", justify="right")
    table.add_column("Occupied", justify="right")
    table.add_column("Uncertain", justify="right")

    for r in df.itertuples(index=False):
        table.add_row(str(r.row), f"{r.covered:,}", f"{r.occupied:,}", f"{r.uncertain:,}")

    console.print(table)
