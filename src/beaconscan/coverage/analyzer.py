from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
import math
import threading
from typing import AbstractSet, Iterable, List, Optional, Sequence, Tuple

from beaconscan.constants import TUNING_MULTIPLIER
from beaconscan.coverage.errors import AmbiguousGapError, DomainGuaranteeError, NoGapFoundError
from beaconscan.coverage.intervals import coverage_at_row, covered_length, row_gaps
from beaconscan.models import Point, Sensor, occupied_points


def row_counts(
    sensors: Sequence[Sensor],
    row: int,
    occupied: Optional[AbstractSet[Point]] = None,
) -> Tuple[int, int]:
    """(covered positions, covered positions holding a known sensor or object) on ``row``."""
    if occupied is None:
        occupied = occupied_points(sensors)
    coverage = coverage_at_row(sensors, row)
    known = sum(
        1 for p in occupied
        if p.y == row and any(iv.contains(p.x) for iv in coverage)
    )
    return covered_length(coverage), known


def count_uncertain_positions(sensors: Sequence[Sensor], target_row: int) -> int:
    """Positions on ``target_row`` where an undetected object cannot be.

    Covered positions that already hold a known sensor or detected object are
    determined rather than uncertain, so they are left out of the count.
    """
    covered, known = row_counts(sensors, target_row)
    return covered - known


def tuning_frequency(point: Point) -> int:
    return point.x * TUNING_MULTIPLIER + point.y


def gap_in_row(sensors: Sequence[Sensor], row: int, domain_limit: int) -> Optional[Point]:
    """The single uncovered point on ``row`` within [0, domain_limit], if any.

    Raises AmbiguousGapError when the row is missing more than one point.
    """
    coverage = coverage_at_row(sensors, row, limit=domain_limit)
    if len(coverage) == 1 and coverage[0].lo == 0 and coverage[0].hi == domain_limit:
        return None

    gaps = row_gaps(coverage, domain_limit)
    if not gaps:
        return None
    if len(gaps) == 1 and gaps[0].length == 1:
        return Point(gaps[0].lo, row)

    missing = sum(g.length for g in gaps)
    raise AmbiguousGapError(
        f"Row {row} has {missing} uncovered point(s) in {len(gaps)} run(s); expected exactly one",
        row=row,
        candidates=[g.as_tuple() for g in gaps],
    )


class _RowCutoff:
    """Lowest row at which any band has seen a gap or an ambiguous row.

    Rows above the cutoff cannot change the outcome, so bands stop there.
    Rows below it are always scanned.
    """

    def __init__(self) -> None:
        self._row: Optional[int] = None
        self._lock = threading.Lock()

    def lower(self, row: int) -> None:
        with self._lock:
            if self._row is None or row < self._row:
                self._row = row

    def passed(self, row: int) -> bool:
        with self._lock:
            return self._row is not None and row > self._row


def _scan_rows(
    sensors: Sequence[Sensor],
    rows: Iterable[int],
    domain_limit: int,
    cutoff: Optional[_RowCutoff] = None,
) -> Optional[Point]:
    for row in rows:
        # in-flight rows finish; rows past a known gap are not started
        if cutoff is not None and cutoff.passed(row):
            return None
        try:
            found = gap_in_row(sensors, row, domain_limit)
        except AmbiguousGapError:
            if cutoff is not None:
                cutoff.lower(row)
            raise
        if found is not None:
            if cutoff is not None:
                cutoff.lower(row)
            return found
    return None


def _bands(domain_limit: int, count: int) -> List[Tuple[int, int]]:
    total = domain_limit + 1
    size = max(1, math.ceil(total / count))
    return [(start, min(start + size, total)) for start in range(0, total, size)]


def find_uncovered_point(sensors: Sequence[Sensor], domain_limit: int, *, workers: int = 1) -> Point:
    """Locate the only point of [0, domain_limit]^2 that no sensor covers.

    Rows are scanned in ascending order and the first row with a gap decides
    the outcome. With ``workers > 1`` contiguous row bands run on a thread
    pool; once a band reports row ``r``, bands starting after ``r`` are
    cancelled while bands below ``r`` run to completion, so the lowest-row
    outcome is the one ``workers=1`` would produce. Threads share the GIL, so
    extra workers do not make the CPU-bound row scan faster.

    Raises:
        DomainGuaranteeError: no sensors, so every point would be uncovered.
        AmbiguousGapError: the first row with a gap misses more than one point.
        NoGapFoundError: every row is fully covered.
    """
    if domain_limit < 0:
        raise ValueError(f"domain_limit must be >= 0, got {domain_limit}")
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if not sensors:
        raise DomainGuaranteeError("No sensors given: every point in the domain is uncovered")

    sensors = tuple(sensors)

    if workers == 1:
        found = _scan_rows(sensors, range(domain_limit + 1), domain_limit)
        if found is None:
            raise NoGapFoundError(domain_limit)
        return found

    cutoff = _RowCutoff()
    outcomes: List[Tuple[int, object]] = []
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {
            pool.submit(_scan_rows, sensors, range(a, b), domain_limit, cutoff): a
            for a, b in _bands(domain_limit, workers * 8)
        }
        try:
            for fut in as_completed(futures):
                if fut.cancelled():
                    continue
                try:
                    found = fut.result()
                except AmbiguousGapError as e:
                    outcomes.append((e.row, e))
                    row = e.row
                else:
                    if found is None:
                        continue
                    outcomes.append((found.y, found))
                    row = found.y
                for other, start in futures.items():
                    if start > row:
                        other.cancel()
        except BaseException:
            cutoff.lower(-1)
            for other in futures:
                other.cancel()
            raise

    if not outcomes:
        raise NoGapFoundError(domain_limit)
    _, first = min(outcomes, key=lambda o: o[0])
    if isinstance(first, AmbiguousGapError):
        raise first
    return first
