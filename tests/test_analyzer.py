import pytest

from beaconscan.coverage.analyzer import (
    _RowCutoff,
    _bands,
    _scan_rows,
    count_uncertain_positions,
    find_uncovered_point,
    gap_in_row,
    row_counts,
    tuning_frequency,
)
from beaconscan.coverage.errors import (
    AmbiguousGapError,
    DomainGuaranteeError,
    GapSearchError,
    NoGapFoundError,
)
from beaconscan.models import Point, Sensor

# Uncertain-position counts for every row the example's sensors reach.
EXAMPLE_ROW_COUNTS = {
    -10: 1, -9: 3, -8: 5, -7: 7, -6: 10, -5: 14, -4: 18, -3: 22, -2: 26, -1: 31,
    0: 34, 1: 34, 2: 32, 3: 29, 4: 29, 5: 27, 6: 25, 7: 21, 8: 23, 9: 25,
    10: 26, 11: 27, 12: 29, 13: 29, 14: 28, 15: 29, 16: 28, 17: 28, 18: 29, 19: 28,
    20: 25, 21: 25, 22: 20, 23: 15, 24: 9, 25: 4, 26: 1,
}


def test_example_row_10(example_sensors):
    assert count_uncertain_positions(example_sensors, 10) == 26


@pytest.mark.parametrize("row,expected", sorted(EXAMPLE_ROW_COUNTS.items()))
def test_example_every_row(example_sensors, row, expected):
    assert count_uncertain_positions(example_sensors, row) == expected


def test_rows_outside_all_diamonds_are_zero(example_sensors):
    assert count_uncertain_positions(example_sensors, -11) == 0
    assert count_uncertain_positions(example_sensors, 27) == 0


def test_empty_sensor_list_counts_zero():
    assert count_uncertain_positions([], 10) == 0


def test_row_counts_splits_known_positions(example_sensors):
    covered, known = row_counts(example_sensors, 10)
    assert covered == 27
    assert known == 1


def test_sensor_and_beacon_on_row_are_not_uncertain():
    s = Sensor.from_coords(0, 0, 3, 0)
    # [-3, 3] covered, sensor and beacon both on the row
    assert count_uncertain_positions([s], 0) == 5


def test_example_gap(example_sensors):
    assert find_uncovered_point(example_sensors, 20) == Point(14, 11)


def test_example_tuning_frequency(example_sensors):
    assert tuning_frequency(find_uncovered_point(example_sensors, 20)) == 56_000_011


@pytest.mark.parametrize("workers", [1, 2, 3, 8])
def test_gap_is_independent_of_worker_count(example_sensors, workers):
    assert find_uncovered_point(example_sensors, 20, workers=workers) == Point(14, 11)


@pytest.mark.parametrize("hole", [(2, 3), (0, 0), (5, 5), (0, 5), (5, 0), (3, 0)])
def test_synthetic_single_gap(pinholes, hole):
    sensors = pinholes(5, [hole])
    assert find_uncovered_point(sensors, 5) == Point(*hole)
    assert find_uncovered_point(sensors, 5, workers=4) == Point(*hole)


def test_gap_at_origin_is_a_result_not_an_error(pinholes):
    found = find_uncovered_point(pinholes(3, [(0, 0)]), 3)
    assert found == Point(0, 0)
    assert tuning_frequency(found) == 0


def test_gap_between_real_diamonds():
    # four diamonds meeting around (5, 5); (5, 5) itself is left open
    sensors = [
        Sensor.from_coords(0, 0, 9, 0),
        Sensor.from_coords(10, 0, 10, 9),
        Sensor.from_coords(0, 10, 0, 1),
        Sensor.from_coords(10, 10, 1, 10),
    ]
    assert find_uncovered_point(sensors, 10) == Point(5, 5)


def test_fully_covered_domain_raises():
    sensors = [Sensor.from_coords(10, 10, 40, 10)]
    with pytest.raises(NoGapFoundError):
        find_uncovered_point(sensors, 20)


def test_fully_covered_domain_raises_in_parallel():
    sensors = [Sensor.from_coords(10, 10, 40, 10)]
    with pytest.raises(NoGapFoundError):
        find_uncovered_point(sensors, 20, workers=4)


def test_empty_sensor_list_violates_domain_guarantee():
    with pytest.raises(DomainGuaranteeError):
        find_uncovered_point([], 20)


def test_two_gaps_in_one_row_are_ambiguous(pinholes):
    with pytest.raises(AmbiguousGapError) as exc:
        find_uncovered_point(pinholes(4, [(1, 1), (3, 1)]), 4)
    assert exc.value.row == 1
    assert exc.value.candidates == ((1, 1), (3, 3))


def test_wide_gap_is_ambiguous(pinholes):
    with pytest.raises(AmbiguousGapError) as exc:
        find_uncovered_point(pinholes(4, [(1, 2), (2, 2)]), 4)
    assert exc.value.row == 2
    assert exc.value.candidates == ((1, 2),)


def test_row_with_no_coverage_is_ambiguous():
    sensors = [Sensor.from_coords(0, 0, 0, 0)]
    with pytest.raises(AmbiguousGapError):
        gap_in_row(sensors, 3, 4)


def test_ambiguity_errors_are_gap_search_errors(pinholes):
    with pytest.raises(GapSearchError):
        find_uncovered_point(pinholes(4, [(1, 1), (3, 1)]), 4, workers=2)


def test_gap_in_row(example_sensors):
    assert gap_in_row(example_sensors, 11, 20) == Point(14, 11)
    assert gap_in_row(example_sensors, 10, 20) is None


def test_invalid_arguments(example_sensors):
    with pytest.raises(ValueError):
        find_uncovered_point(example_sensors, -1)
    with pytest.raises(ValueError):
        find_uncovered_point(example_sensors, 20, workers=0)


def test_bands_cover_every_row_once():
    bands = _bands(20, 8)
    rows = [r for a, b in bands for r in range(a, b)]
    assert rows == list(range(21))
    assert _bands(0, 8) == [(0, 1)]


def test_tuning_frequency_at_domain_limit_fits_int64():
    freq = tuning_frequency(Point(4_000_000, 4_000_000))
    assert freq == 16_000_004_000_000
    assert freq < 2 ** 63 - 1


def test_two_gap_rows_give_lowest_row_for_any_worker_count(pinholes):
    sensors = pinholes(39, [(5, 20), (9, 30)])
    assert find_uncovered_point(sensors, 39) == Point(5, 20)
    for _ in range(5):
        assert find_uncovered_point(sensors, 39, workers=4) == Point(5, 20)


def test_ambiguous_row_below_a_gap_row_wins(pinholes):
    sensors = pinholes(19, [(1, 3), (3, 3), (2, 15)])
    for workers in (1, 4):
        with pytest.raises(AmbiguousGapError) as exc:
            find_uncovered_point(sensors, 19, workers=workers)
        assert exc.value.row == 3


def test_gap_row_below_an_ambiguous_row_wins(pinholes):
    sensors = pinholes(19, [(2, 3), (1, 15), (3, 15)])
    for workers in (1, 4):
        assert find_uncovered_point(sensors, 19, workers=workers) == Point(2, 3)


def test_scan_stops_before_rows_past_cutoff():
    # every row of this layout is ambiguous, so scanning any row would raise
    sensors = [Sensor.from_coords(0, 0, 0, 0)]
    cutoff = _RowCutoff()
    cutoff.lower(-1)
    assert _scan_rows(sensors, range(0, 10), 9, cutoff) is None


def test_scan_records_gap_row_in_cutoff(pinholes):
    sensors = pinholes(5, [(4, 2)])
    cutoff = _RowCutoff()
    assert _scan_rows(sensors, range(0, 6), 5, cutoff) == Point(4, 2)
    assert cutoff.passed(3)
    assert not cutoff.passed(2)


def test_cutoff_only_moves_down():
    cutoff = _RowCutoff()
    assert not cutoff.passed(10 ** 9)
    cutoff.lower(7)
    cutoff.lower(12)
    assert cutoff.passed(8)
    assert not cutoff.passed(7)
