from pathlib import Path

import typer
from rich.console import Console

from beaconscan.constants import DEFAULT_DOMAIN_LIMIT, DEFAULT_TARGET_ROW
from beaconscan.coverage.analyzer import count_uncertain_positions, find_uncovered_point, tuning_frequency
from beaconscan.coverage.errors import AmbiguousGapError, GapSearchError
from beaconscan.coverage.grid import CoverageMap, row_table
from beaconscan.io.sensor_reader import SensorParseError, load_sensors
from beaconscan.models import coverage_bounds
from beaconscan.reports.json_report import JSONReporter
from beaconscan.reports.terminal_report import print_row_table, print_sensor_summary


app = typer.Typer(add_completion=False)
console = Console()


def _load(input_file: str):
    path = Path(input_file)
    if not path.exists():
        raise typer.BadParameter(f"Sensor file not found: {path}")
    try:
        return load_sensors(str(path))
    except SensorParseError as e:
        raise typer.BadParameter(str(e))
    except ValueError as e:
        raise typer.BadParameter(f"Could not read sensors from {path}: {e}")


@app.command("count-row")
def count_row(
    input_file: str = typer.Argument(..., help="Sensor report (.txt lines or .csv)."),
    row: int = typer.Option(DEFAULT_TARGET_ROW, "--row", help="Row (y) to inspect."),
    out_json: str = typer.Option(None, "--out-json", help="Optional JSON summary path."),
    show_sensors: bool = typer.Option(False, "--show-sensors", help="Print the sensor table."),
):
    """Count positions on a row where an undetected beacon cannot be."""
    sensors = _load(input_file)
    if show_sensors:
        print_sensor_summary(sensors, console=console)

    count = count_uncertain_positions(sensors, row)

    if out_json:
        JSONReporter().generate(sensors, out_json, row=row, uncertain_positions=count)
        console.print(f"[green]OK[/green] JSON summary saved to: {out_json}")

    console.print(f"[bold]Row {row}:[/bold] {count} position(s) cannot contain a beacon")


@app.command("find-gap")
def find_gap(
    input_file: str = typer.Argument(..., help="Sensor report (.txt lines or .csv)."),
    limit: int = typer.Option(DEFAULT_DOMAIN_LIMIT, "--limit", help="Search the square [0, limit] x [0, limit]."),
    workers: int = typer.Option(
        1, "--workers",
        help="Worker threads scanning row bands. Threads share the GIL, so this does not make the row scan faster.",
    ),
    out_json: str = typer.Option(None, "--out-json", help="Optional JSON summary path."),
):
    """
    Locate the single uncovered point in the bounded square and print its tuning frequency.
    """
    if limit < 0:
        raise typer.BadParameter("--limit must be >= 0")
    if workers < 1:
        raise typer.BadParameter("--workers must be >= 1")
    sensors = _load(input_file)

    try:
        point = find_uncovered_point(sensors, limit, workers=workers)
    except AmbiguousGapError as e:
        console.print(f"[bold red]Ambiguous gap:[/bold red] {e}")
        for c in e.candidates:
            console.print(f"  candidate: {c}")
        raise typer.Exit(code=1)
    except GapSearchError as e:
        console.print(f"[bold red]Gap search failed:[/bold red] {e}")
        raise typer.Exit(code=1)

    freq = tuning_frequency(point)
    if out_json:
        JSONReporter().generate(sensors, out_json, domain_limit=limit, gap=point, tuning_frequency=freq)
        console.print(f"[green]OK[/green] JSON summary saved to: {out_json}")

    console.print(f"[bold]Gap:[/bold] x={point.x}, y={point.y}  |  Tuning frequency: {freq}")


@app.command("row-table")
def row_table_cmd(
    input_file: str = typer.Argument(..., help="Sensor report (.txt lines or .csv)."),
    start: int = typer.Option(None, "--start", help="First row (defaults to the coverage bounding box)."),
    stop: int = typer.Option(None, "--stop", help="Last row, inclusive (defaults to the coverage bounding box)."),
    out_csv: str = typer.Option(None, "--out-csv", help="Optional CSV output path."),
):
    """Per-row covered / occupied / uncertain counts over a row range."""
    sensors = _load(input_file)
    bounds = coverage_bounds(sensors)
    if bounds is None and (start is None or stop is None):
        raise typer.BadParameter("No sensors: pass --start and --stop explicitly")
    start = bounds[1] if start is None else start
    stop = bounds[3] if stop is None else stop
    if stop < start:
        raise typer.BadParameter(f"--stop ({stop}) is before --start ({start})")

    df = row_table(sensors, start, stop)
    print_row_table(df, console=console)

    if out_csv:
        df.to_csv(out_csv, index=False)
        console.print(f"[green]OK[/green] Row table CSV: {out_csv}")


@app.command("render-map")
def render_map(
    input_file: str = typer.Argument(..., help="Sensor report (.txt lines or .csv)."),
    x_min: int = typer.Option(None, "--x-min"),
    x_max: int = typer.Option(None, "--x-max"),
    y_min: int = typer.Option(None, "--y-min"),
    y_max: int = typer.Option(None, "--y-max"),
    out_png: str = typer.Option(None, "--out-png", help="Optional PNG coverage map path."),
    out_txt: str = typer.Option(None, "--out-txt", help="Optional text map path."),
    quiet: bool = typer.Option(False, "--quiet", help="Do not print the text map."),
    mark_gap: bool = typer.Option(False, "--mark-gap", help="Locate the uncovered point in [0, limit]^2 and mark it on the PNG."),
    limit: int = typer.Option(DEFAULT_DOMAIN_LIMIT, "--limit", help="Search square used by --mark-gap."),
):
    """
    Render sensors (S), beacons (B), covered (#) and uncovered (.) cells for a window.

    Missing bounds default to the bounding box of all coverage diamonds.
    """
    sensors = _load(input_file)
    if mark_gap and limit < 0:
        raise typer.BadParameter("--limit must be >= 0")
    bounds = coverage_bounds(sensors)
    if bounds is None and None in (x_min, x_max, y_min, y_max):
        raise typer.BadParameter("No sensors: pass all window bounds explicitly")
    if bounds is not None:
        x_min = bounds[0] if x_min is None else x_min
        y_min = bounds[1] if y_min is None else y_min
        x_max = bounds[2] if x_max is None else x_max
        y_max = bounds[3] if y_max is None else y_max

    try:
        cmap = CoverageMap(sensors, x_min, x_max, y_min, y_max)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    cov = cmap.coverage_grid()
    summary = cmap.summary(cov)
    lines = cmap.render(cov)

    gap = None
    if mark_gap:
        try:
            gap = find_uncovered_point(sensors, limit)
        except GapSearchError as e:
            console.print(f"[bold red]Gap search failed:[/bold red] {e}")
            raise typer.Exit(code=1)
        console.print(f"[bold]Gap:[/bold] x={gap.x}, y={gap.y}")

    if not quiet:
        width = max(len(str(y_min)), len(str(y_max)))
        for y, line in zip(range(y_min, y_max + 1), lines):
            console.print(f"{y:>{width}} {line}", markup=False, highlight=False, soft_wrap=True)

    if out_txt:
        Path(out_txt).write_text("\n".join(lines) + "\n", encoding="utf-8")
        console.print(f"[green]OK[/green] Text map: {out_txt}")

    if out_png:
        from beaconscan.coverage.viz import plot_coverage

        title = None if gap is None else f"Sensor coverage (gap at {gap.x}, {gap.y})"
        plot_coverage(cmap, cov, out_png=out_png, show_blind_spots=True, gap=gap, title=title)
        console.print(f"[green]OK[/green] Coverage PNG: {out_png}")

    console.print(
        f"[bold]Coverage:[/bold] {summary.coverage_pct:.2f}%  |  "
        f"Uncovered: {summary.uncovered_cells}  |  Single-covered: {summary.single_covered_cells}"
    )


if __name__ == "__main__":
    app()
