"""Thin wrapper around the ``aoc`` command-line client."""

from __future__ import annotations

import os
import re
import subprocess
from collections.abc import Sequence

from aoc_toolkit.day import Day

_YEAR_PATTERN = re.compile(r"\+?[0-9]+")
_MAX_YEAR = 0xFFFF


class AocCommandError(Exception):
    """Raised when the ``aoc`` command is missing, not callable or fails."""

    def __init__(
        self, message: str, output: subprocess.CompletedProcess | None = None
    ) -> None:
        super().__init__(message)
        self.output = output


def check() -> None:
    """Make sure the ``aoc`` command can be started."""
    try:
        subprocess.run(["aoc", "-V"], capture_output=True, check=False)
    except OSError:
        raise AocCommandError("aoc-cli is not present in environment.") from None


def read(day: Day) -> subprocess.CompletedProcess:
    """Show the puzzle description for ``day``."""
    args = build_args(
        "read", ["--description-only", "--puzzle-file", get_puzzle_path(day)], day
    )
    return _call_aoc_cli(args)


def download(day: Day) -> subprocess.CompletedProcess:
    """Download the input and puzzle description for ``day``."""
    input_path = get_input_path(day)
    puzzle_path = get_puzzle_path(day)
    args = build_args(
        "download",
        ["--overwrite", "--input-file", input_path, "--puzzle-file", puzzle_path],
        day,
    )
    output = _call_aoc_cli(args)
    print("---")
    print(f'🎄 Successfully wrote input to "{input_path}".')
    print(f'🎄 Successfully wrote puzzle to "{puzzle_path}".')
    return output


def submit(day: Day, part: int, result: str) -> subprocess.CompletedProcess:
    """Submit ``result`` as the answer to ``part`` of ``day``."""
    # The client expects part and answer after the subcommand.
    args = build_args("submit", [], day)
    args.extend([str(part), str(result)])
    return _call_aoc_cli(args)


def get_input_path(day: Day) -> str:
    """Where the input for ``day`` is stored."""
    return f"data/inputs/{day}.txt"


def get_puzzle_path(day: Day) -> str:
    """Where the puzzle description for ``day`` is stored."""
    return f"data/puzzles/{day}.md"


def get_year() -> int | None:
    """The year from ``AOC_YEAR``, or None when unset or not a valid year."""
    raw = os.environ.get("AOC_YEAR")
    if raw is None or not _YEAR_PATTERN.fullmatch(raw):
        return None
    year = int(raw)
    return year if year <= _MAX_YEAR else None


def build_args(command: str, args: Sequence[str], day: Day) -> list[str]:
    """Arguments for ``aoc``: the options, then year and day, then the subcommand."""
    cmd_args = list(args)
    year = get_year()
    if year is not None:
        cmd_args.extend(["--year", str(year)])
    cmd_args.extend(["--day", str(day), command])
    return cmd_args


def _call_aoc_cli(args: Sequence[str]) -> subprocess.CompletedProcess:
    try:
        output = subprocess.run(["aoc", *args], check=False)
    except OSError:
        raise AocCommandError("aoc-cli could not be called.") from None
    if output.returncode != 0:
        raise AocCommandError("aoc-cli exited with a non-zero status.", output)
    return output