from beaconscan.coverage.grid import CoverageMap
from beaconscan.coverage.viz import plot_coverage
from beaconscan.models import Point


def test_plot_coverage_with_gap_marker(example_sensors, tmp_path):
    cmap = CoverageMap(example_sensors, 0, 20, 0, 20)
    out_png = tmp_path / "coverage.png"
    plot_coverage(cmap, cmap.coverage_grid(), str(out_png), gap=Point(14, 11), title="Gap at 14, 11")
    assert out_png.exists()
    assert out_png.stat().st_size > 0


def test_plot_coverage_empty_window(tmp_path):
    cmap = CoverageMap([], 0, 3, 0, 3)
    out_png = tmp_path / "empty.png"
    plot_coverage(cmap, cmap.coverage_grid(), str(out_png), show_blind_spots=False)
    assert out_png.exists()
