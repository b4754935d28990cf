from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from beaconscan.models import Interval, Sensor


CoverageSet = Tuple[Interval, ...]


def interval_at_row(sensor: Sensor, row: int) -> Optional[Interval]:
    """Cross-section of the sensor's diamond on ``row``, or None if it misses the row."""
    vertical = abs(sensor.position.y - row)
    if vertical > sensor.radius:
        return None
    half = sensor.radius - vertical
    return Interval(sensor.position.x - half, sensor.position.x + half)


def clip(interval: Interval, lo: int, hi: int) -> Optional[Interval]:
    """Intersect with [lo, hi]; None when nothing is left."""
    a = max(interval.lo, lo)
    b = min(interval.hi, hi)
    if a > b:
        return None
    return Interval(a, b)


def row_intervals(sensors: Iterable[Sensor], row: int, *, limit: Optional[int] = None) -> List[Interval]:
    """Per-sensor intervals on a row, clipped to [0, limit] when a limit is given."""
    out: List[Interval] = []
    for s in sensors:
        iv = interval_at_row(s, row)
        if iv is None:
            continue
        if limit is not None:
            iv = clip(iv, 0, limit)
            if iv is None:
                continue
        out.append(iv)
    return out


def merge(intervals: Iterable[Interval]) -> CoverageSet:
    """Union of closed integer intervals as a sorted, disjoint, non-adjacent tuple.

    Overlapping and touching intervals (``b.lo == a.hi + 1``) are fused, since
    together they leave no integer uncovered. O(n log n) for the sort, one
    linear sweep after that.
    """
    ordered = sorted(intervals, key=lambda iv: iv.lo)
    if not ordered:
        return ()

    merged: List[Interval] = []
    lo, hi = ordered[0].lo, ordered[0].hi
    for iv in ordered[1:]:
        if iv.lo <= hi + 1:
            if iv.hi > hi:
                hi = iv.hi
        else:
            merged.append(Interval(lo, hi))
            lo, hi = iv.lo, iv.hi
    merged.append(Interval(lo, hi))
    return tuple(merged)


def covered_length(coverage: Sequence[Interval]) -> int:
    return sum(iv.length for iv in coverage)


def coverage_at_row(sensors: Sequence[Sensor], row: int, *, limit: Optional[int] = None) -> CoverageSet:
    return merge(row_intervals(sensors, row, limit=limit))


def row_gaps(coverage: Sequence[Interval], domain_limit: int) -> CoverageSet:
    """Uncovered runs of [0, domain_limit] for a clipped, merged coverage set."""
    gaps: List[Interval] = []
    cursor = 0
    for iv in coverage:
        if iv.lo > cursor:
            gaps.append(Interval(cursor, iv.lo - 1))
        cursor = max(cursor, iv.hi + 1)
    if cursor <= domain_limit:
        gaps.append(Interval(cursor, domain_limit))
    return tuple(gaps)
