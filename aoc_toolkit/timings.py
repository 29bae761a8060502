"""Benchmark timings per day, stored as JSON."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from aoc_toolkit.day import Day, DayParseError

TIMINGS_FILE_PATH = "./data/timings.json"


class TimingsError(ValueError):
    """Raised when stored timings cannot be read."""


@dataclass
class Timing:
    """Benchmark times for a single day."""

    day: Day
    part_1: str | None = None
    part_2: str | None = None
    total_nanos: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """The JSON-ready form of this timing."""
        return {
            "day": str(self.day),
            "total_nanos": float(self.total_nanos),
            "part_1": self.part_1,
            "part_2": self.part_2,
        }

    @classmethod
    def from_dict(cls, value: Any) -> Timing:
        """Build a timing from its decoded JSON form."""
        if not isinstance(value, dict):
            raise TimingsError("Expected timing to be a JSON object.")

        raw_day = value.get("day")
        try:
            if not isinstance(raw_day, str):
                raise DayParseError()
            day = Day.parse(raw_day)
        except DayParseError:
            raise TimingsError("Expected timing.day to be a Day struct.") from None

        parts = []
        for key in ("part_1", "part_2"):
            if key not in value:
                raise TimingsError(f"Expected timing.{key} to be null or string.")
            raw = value[key]
            parts.append(raw if isinstance(raw, str) else None)

        total = value.get("total_nanos")
        if isinstance(total, bool) or not isinstance(total, (int, float)):
            raise TimingsError("Expected timing.total_nanos to be a number.")

        return cls(day=day, part_1=parts[0], part_2=parts[1], total_nanos=float(total))


@dataclass
class Timings:
    """Benchmark times for a set of days."""

    data: list[Timing] = field(default_factory=list)

    def to_json(self) -> str:
        """Serialize to a JSON document."""
        return json.dumps({"data": [timing.to_dict() for timing in self.data]})

    @classmethod
    def from_json(cls, text: str) -> Timings:
        """Parse a JSON document produced by :meth:`to_json`."""
        try:
            document = json.loads(text)
        except (json.JSONDecodeError, TypeError):
            raise TimingsError("not valid JSON file.") from None
        if not isinstance(document, dict):
            raise TimingsError("expected JSON document to be an object.")
        if "data" not in document:
            raise TimingsError("expected JSON document to have key `data`.")
        entries = document["data"]
        if not isinstance(entries, list):
            raise TimingsError("expected `json.data` to be an array.")
        return cls(data=[Timing.from_dict(entry) for entry in entries])

    def store_file(self, path: str | Path = TIMINGS_FILE_PATH) -> None:
        """Write the timings to a JSON file."""
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def read_from_file(cls, path: str | Path = TIMINGS_FILE_PATH) -> Timings:
        """Read timings from a JSON file; on any failure report it and return empty timings."""
        try:
            return cls.from_json(Path(path).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, TimingsError) as exc:
            print(exc, file=sys.stderr)
            return cls()

    def merge(self, new: Timings) -> Timings:
        """Combine with ``new``, whose entries win for days present in both."""
        data = list(new.data)
        seen = {timing.day for timing in data}
        data.extend(timing for timing in self.data if timing.day not in seen)
        data.sort(key=lambda timing: timing.day)
        return Timings(data=data)

    def total_millis(self) -> float:
        """Total duration of all timings in milliseconds."""
        return sum(timing.total_nanos for timing in self.data) / 1_000_000

    def is_day_complete(self, day: Day) -> bool:
        """Whether both parts of ``day`` have a timing."""
        return any(
            timing.day == day and timing.part_1 is not None and timing.part_2 is not None
            for timing in self.data
        )