import json
from pathlib import Path
from typing import Any, Dict, Sequence

from beaconscan.models import Point, Sensor


class JSONReporter:
    """Writes solver results as a JSON summary"""

    def build(self, sensors: Sequence[Sensor], **results: Any) -> Dict[str, Any]:
        report: Dict[str, Any] = {
            "sensors": len(sensors),
            "max_radius": max((s.radius for s in sensors), default=0),
        }
        for key, value in results.items():
            report[key] = _jsonable(value)
        return report

    def generate(self, sensors: Sequence[Sensor], output_path: str, **results: Any) -> Dict[str, Any]:
        """Write the summary to ``output_path`` and return it"""
        report = self.build(sensors, **results)
        Path(output_path).write_text(json.dumps(report, indent=2), encoding="utf-8")
        return report


def _jsonable(value: Any) -> Any:
    if isinstance(value, Point):
        return {"x": value.x, "y": value.y}
    return value
