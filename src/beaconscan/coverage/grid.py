from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from beaconscan.constants import GLYPH_BEACON, GLYPH_COVERED, GLYPH_FREE, GLYPH_SENSOR
from beaconscan.coverage.analyzer import row_counts
from beaconscan.models import Point, Sensor, occupied_points

# Dense grids are for inspecting small windows, not whole puzzle inputs.
MAX_GRID_CELLS = 25_000_000


@dataclass(frozen=True)
class CoverageSummary:
    x_min: int
    y_min: int
    width: int
    height: int
    covered_cells: int
    uncovered_cells: int
    coverage_pct: float
    sensors: int
    single_covered_cells: int


class CoverageMap:
    """Dense per-cell coverage counts for a bounded window.

    The window is inclusive on both ends. Row ``i`` of the grid is
    ``y_min + i`` and column ``j`` is ``x_min + j``.
    """

    def __init__(self, sensors: Sequence[Sensor], x_min: int, x_max: int, y_min: int, y_max: int):
        if x_max < x_min or y_max < y_min:
            raise ValueError(f"Empty window: x=[{x_min}, {x_max}], y=[{y_min}, {y_max}]")
        self.sensors = tuple(sensors)
        self.x_min, self.x_max = int(x_min), int(x_max)
        self.y_min, self.y_max = int(y_min), int(y_max)
        self.w = self.x_max - self.x_min + 1
        self.h = self.y_max - self.y_min + 1
        if self.w * self.h > MAX_GRID_CELLS:
            raise ValueError(f"Window of {self.w}x{self.h} cells exceeds the {MAX_GRID_CELLS:,} cell limit")

    def coverage_grid(self) -> np.ndarray:
        xs = np.arange(self.x_min, self.x_max + 1, dtype=np.int64)
        ys = np.arange(self.y_min, self.y_max + 1, dtype=np.int64)
        cov = np.zeros((self.h, self.w), dtype=np.int64)
        for s in self.sensors:
            dist = np.abs(xs[None, :] - s.position.x) + np.abs(ys[:, None] - s.position.y)
            cov += dist <= s.radius
        return cov

    def _occupied_mask(self) -> np.ndarray:
        mask = np.zeros((self.h, self.w), dtype=bool)
        for p in occupied_points(self.sensors):
            if self.x_min <= p.x <= self.x_max and self.y_min <= p.y <= self.y_max:
                mask[p.y - self.y_min, p.x - self.x_min] = True
        return mask

    def blind_spots(self, cov: np.ndarray) -> List[Tuple[int, int]]:
        occ = self._occupied_mask()
        ys, xs = np.nonzero((cov <= 0) & ~occ)
        return [(int(x) + self.x_min, int(y) + self.y_min) for y, x in zip(ys, xs)]

    def summary(self, cov: np.ndarray) -> CoverageSummary:
        total = self.w * self.h
        covered = int((cov > 0).sum())
        single = int((cov == 1).sum())
        return CoverageSummary(
            self.x_min, self.y_min, self.w, self.h,
            covered, total - covered,
            100 * covered / total,
            len(self.sensors), single,
        )

    def render(self, cov: np.ndarray) -> List[str]:
        """Text map: S sensor, B detected object, # covered, . uncovered."""
        sensors = {s.position for s in self.sensors}
        beacons = {s.nearest_object for s in self.sensors}
        lines = []
        for i in range(self.h):
            y = self.y_min + i
            row = []
            for j in range(self.w):
                p = Point(self.x_min + j, y)
                if p in sensors:
                    row.append(GLYPH_SENSOR)
                elif p in beacons:
                    row.append(GLYPH_BEACON)
                elif cov[i, j] > 0:
                    row.append(GLYPH_COVERED)
                else:
                    row.append(GLYPH_FREE)
            lines.append("".join(row))
        return lines


def row_table(sensors: Sequence[Sensor], start: int, stop: int) -> pd.DataFrame:
    """Covered / occupied / uncertain counts for every row in [start, stop]."""
    if stop < start:
        raise ValueError(f"Row range is empty: start={start}, stop={stop}")
    occupied = occupied_points(sensors)
    records = []
    for row in range(start, stop + 1):
        covered, known = row_counts(sensors, row, occupied)
        records.append({"row": row, "covered": covered, "occupied": known, "uncertain": covered - known})
    return pd.DataFrame.from_records(records, columns=["row", "covered", "occupied", "uncertain"])
