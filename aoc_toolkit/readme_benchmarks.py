"""Write a table of benchmark timings into the README between two markers."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from aoc_toolkit.day import Day
from aoc_toolkit.timings import Timings

MARKER = "<!--- benchmarking table --->"


class ReadmeError(Exception):
    """Raised when the README table cannot be located or written."""


class TablePosition(NamedTuple):
    """Start and end offsets of the benchmark table in the README."""

    start: int
    end: int


def get_path_for_bin(day: Day) -> str:
    """Path of the solution source for ``day``."""
    return f"./src/bin/{day}.rs"


def _marker_offsets(text: str) -> list[int]:
    offsets = []
    position = text.find(MARKER)
    while position != -1:
        offsets.append(position)
        position = text.find(MARKER, position + len(MARKER))
    return offsets


def locate_table(readme: str) -> TablePosition:
    """Find the span from the first marker to the end of the last one."""
    offsets = _marker_offsets(readme)
    if len(offsets) > 2:
        raise ReadmeError("too many occurences of marker in README.")
    if not offsets:
        raise ReadmeError("Could not find table start position.")
    return TablePosition(offsets[0], offsets[-1] + len(MARKER))


def construct_table(prefix: str, timings: Timings, total_millis: float) -> str:
    """Render the benchmark table, markers included."""
    lines = [
        MARKER,
        f"{prefix} Benchmarks",
        "",
        "| Day | Part 1 | Part 2 |",
        "| :---: | :---: | :---:  |",
    ]
    for timing in timings.data:
        part_1 = "-" if timing.part_1 is None else timing.part_1
        part_2 = "-" if timing.part_2 is None else timing.part_2
        lines.append(
            f"| [Day {timing.day.value}]({get_path_for_bin(timing.day)}) "
            f"| `{part_1}` | `{part_2}` |"
        )
    lines.append("")
    lines.append(f"**Total: {total_millis:.2f}ms**")
    lines.append(MARKER)
    return "\n".join(lines)


def update_content(text: str, timings: Timings, total_millis: float) -> str:
    """Return ``text`` with its benchmark table replaced."""
    position = locate_table(text)
    table = construct_table("##", timings, total_millis)
    return text[: position.start] + table + text[position.end :]


def update(timings: Timings, path: str | Path = "README.md") -> None:
    """Rewrite the benchmark table in the README file at ``path``."""
    readme_path = Path(path)
    try:
        readme = readme_path.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        raise ReadmeError(str(exc)) from exc
    updated = update_content(readme, timings, timings.total_millis())
    try:
        readme_path.write_text(updated, encoding="utf-8")
    except OSError as exc:
        raise ReadmeError(str(exc)) from exc