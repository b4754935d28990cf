"""Pytest configuration."""

import sys
from pathlib import Path

import pytest

# Make the src/ layout importable without an editable install.
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from beaconscan.io.sensor_reader import load_sensors_text  # noqa: E402
from beaconscan.models import Sensor  # noqa: E402

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def example_path():
    return DATA_DIR / "example_sensors.txt"


@pytest.fixture
def example_sensors(example_path):
    return load_sensors_text(str(example_path))


def pinhole_sensors(limit, holes):
    """Radius-0 sensors on every point of [0, limit]^2 except ``holes``."""
    holes = set(holes)
    return [
        Sensor.from_coords(x, y, x, y)
        for y in range(limit + 1)
        for x in range(limit + 1)
        if (x, y) not in holes
    ]


@pytest.fixture
def pinholes():
    return pinhole_sensors
