import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import matplotlib.colors as mcolors
import numpy as np


def plot_coverage(coverage_map, cov, out_png, show_blind_spots=True,
                  *,
                  gap=None,
                  title=None):
    """Render a coverage heat map with sensors, detected objects, and blind spots.

    ``coverage_map`` is the CoverageMap the grid was computed from; it supplies
    the window origin and the sensor list. ``gap`` optionally marks the
    located uncovered point.
    """

    cov = np.asarray(cov)
    x0, y0 = coverage_map.x_min, coverage_map.y_min
    extent = (x0 - 0.5, coverage_map.x_max + 0.5, coverage_map.y_max + 0.5, y0 - 0.5)

    norm = None
    if cov.size and cov.max() > 0:
        norm = mcolors.Normalize(vmin=0, vmax=int(cov.max()))

    fig, ax = plt.subplots(figsize=(9, 6), constrained_layout=True)

    im = ax.imshow(
        cov,
        cmap="inferno",
        norm=norm,
        extent=extent,
        interpolation="nearest",
        alpha=0.92,
        zorder=1,
    )

    sensors = coverage_map.sensors
    handles = []
    labels = []
    if sensors:
        sensor_sc = ax.scatter(
            [s.position.x for s in sensors], [s.position.y for s in sensors],
            s=70, marker="o", facecolors="cyan", edgecolors="black", linewidths=0.8, zorder=4,
        )
        beacon_sc = ax.scatter(
            [s.nearest_object.x for s in sensors], [s.nearest_object.y for s in sensors],
            s=60, marker="D", facecolors="lime", edgecolors="black", linewidths=0.8, zorder=4,
        )
        handles += [sensor_sc, beacon_sc]
        labels += ["Sensor", "Beacon"]

    blind_count = 0
    if show_blind_spots:
        blind = coverage_map.blind_spots(cov)
        blind_count = len(blind)
        if blind:
            blind_sc = ax.scatter(
                [b[0] for b in blind], [b[1] for b in blind],
                s=10, marker="x", linewidths=0.8, c="white", alpha=0.55, zorder=3,
            )
            handles.append(blind_sc)
            labels.append("Blind spot")

    if gap is not None:
        gap_sc = ax.scatter([gap.x], [gap.y], s=160, marker="*", c="red", edgecolors="white", zorder=5)
        handles.append(gap_sc)
        labels.append("Gap")

    ax.set_xlim(extent[0], extent[1])
    ax.set_ylim(extent[2], extent[3])
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_title(title or "Sensor coverage")

    if norm is not None:
        cbar = fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
        cbar.set_label("Sensors covering cell")

    if handles:
        ax.legend(handles, labels, loc="upper right", framealpha=0.90)

    summary = coverage_map.summary(cov)
    stats = (
        f"Cells: {summary.width * summary.height:,}\n"
        f"Covered: {summary.covered_cells:,} ({summary.coverage_pct:.1f}%)\n"
        f"Blind spots: {blind_count:,}\n"
        f"Sensors: {summary.sensors:,}"
    )
    ax.text(
        0.01, 0.01, stats,
        transform=ax.transAxes,
        va="bottom",
        ha="left",
        fontsize=9,
        bbox=dict(boxstyle="round", facecolor="black", alpha=0.45, edgecolor="none"),
        color="white",
        zorder=6,
    )

    fig.savefig(out_png, dpi=240)
    plt.close(fig)
