"""Reading puzzle inputs and examples from the data directory."""

from __future__ import annotations

from pathlib import Path

from aoc_toolkit.day import Day


def _data_path(folder: str, name: str) -> Path:
    return Path.cwd() / "data" / folder / name


def read_file(folder: str, day: Day) -> str:
    """Read ``data/<folder>/<day>.txt`` relative to the working directory."""
    return _data_path(folder, f"{day}.txt").read_text(encoding="utf-8")


def read_file_part(folder: str, day: Day, part: int) -> str:
    """Read ``data/<folder>/<day>-<part>.txt`` relative to the working directory."""
    return _data_path(folder, f"{day}-{part}.txt").read_text(encoding="utf-8")