import numbers
import re
from pathlib import Path
from typing import Iterable, List

import pandas as pd

from beaconscan.models import Sensor

_LINE_RE = re.compile(
    r"^\s*Sensor at x=\s*(-?\d+)\s*,\s*y=\s*(-?\d+)\s*:"
    r"\s*closest beacon is at x=\s*(-?\d+)\s*,\s*y=\s*(-?\d+)\s*$"
)

CSV_COLUMNS = {"sensor_x", "sensor_y", "beacon_x", "beacon_y"}


def _as_int(value) -> int:
    if isinstance(value, numbers.Integral):
        return int(value)
    f = float(value)
    if not f.is_integer():
        raise ValueError(f"non-integer coordinate {value!r}")
    return int(f)


class SensorParseError(ValueError):
    """A sensor report line that does not match the expected format."""

    def __init__(self, line_no: int, text: str):
        super().__init__(f"Invalid sensor record at line {line_no}: {text!r}")
        self.line_no = line_no
        self.text = text


def parse_sensor_line(text: str, line_no: int = 1) -> Sensor:
    m = _LINE_RE.match(text)
    if m is None:
        raise SensorParseError(line_no, text)
    sx, sy, bx, by = (int(g) for g in m.groups())
    return Sensor.from_coords(sx, sy, bx, by, sensor_id=f"S{line_no}")


def parse_sensors(lines: Iterable[str]) -> List[Sensor]:
    """Parse ``Sensor at x=.., y=..: closest beacon is at x=.., y=..`` lines.

    Blank lines are skipped. Sensor ids are ``S<line number>``.
    """
    sensors: List[Sensor] = []
    for idx, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        sensors.append(parse_sensor_line(line.rstrip("\r\n"), idx))
    return sensors


def load_sensors_text(path: str) -> List[Sensor]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Sensor report not found: {p}")
    return parse_sensors(p.read_text(encoding="utf-8").splitlines())


def load_sensors_csv(path: str) -> List[Sensor]:
    """Load sensors from a CSV with sensor_x,sensor_y,beacon_x,beacon_y[,sensor_id]."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Sensor CSV not found: {p}")
    df = pd.read_csv(p)
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = sorted(CSV_COLUMNS - set(df.columns))
    if missing:
        raise ValueError(f"Missing columns: {missing}")
    if "sensor_id" not in df.columns:
        df["sensor_id"] = [f"S{i + 1}" for i in range(len(df))]
    try:
        return [
            Sensor.from_coords(
                _as_int(r.sensor_x), _as_int(r.sensor_y), _as_int(r.beacon_x), _as_int(r.beacon_y),
                sensor_id=str(r.sensor_id),
            )
            for r in df.itertuples(index=False)
        ]
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid coordinate in {p}: {e}") from e


def load_sensors(path: str) -> List[Sensor]:
    """Pick the loader from the file suffix: ``.csv`` or the text report format."""
    if Path(path).suffix.lower() == ".csv":
        return load_sensors_csv(path)
    return load_sensors_text(path)
