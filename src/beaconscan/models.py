from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Point:
    """Integer grid position. Coordinates may be negative."""

    x: int
    y: int

    def manhattan(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


@dataclass(frozen=True)
class Sensor:
    """A sensor and the nearest object (beacon) it detected.

    The sensor covers the closed Manhattan diamond of all points within
    ``radius`` of ``position``. ``radius`` is derived once at construction.
    """

    position: Point
    nearest_object: Point
    sensor_id: str = ""
    radius: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "radius", self.position.manhattan(self.nearest_object))

    @classmethod
    def from_coords(cls, sx: int, sy: int, bx: int, by: int, sensor_id: str = "") -> "Sensor":
        return cls(Point(int(sx), int(sy)), Point(int(bx), int(by)), sensor_id=sensor_id)

    def covers(self, p: Point) -> bool:
        return self.position.manhattan(p) <= self.radius


@dataclass(frozen=True)
class Interval:
    """Closed integer range [lo, hi] on one row."""

    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo > self.hi:
            raise ValueError(f"Interval lower bound {self.lo} exceeds upper bound {self.hi}")

    @property
    def length(self) -> int:
        return self.hi - self.lo + 1

    def contains(self, x: int) -> bool:
        return self.lo <= x <= self.hi

    def as_tuple(self) -> tuple:
        return (self.lo, self.hi)


def occupied_points(sensors) -> frozenset:
    """Positions already known to hold a sensor or a detected object."""
    pts = set()
    for s in sensors:
        pts.add(s.position)
        pts.add(s.nearest_object)
    return frozenset(pts)


def coverage_bounds(sensors) -> Optional[tuple]:
    """Bounding box (x_min, y_min, x_max, y_max) of every sensor's diamond."""
    if not sensors:
        return None
    x_min = min(s.position.x - s.radius for s in sensors)
    x_max = max(s.position.x + s.radius for s in sensors)
    y_min = min(s.position.y - s.radius for s in sensors)
    y_max = max(s.position.y + s.radius for s in sensors)
    return x_min, y_min, x_max, y_max
