"""Handlers for the toolkit's subcommands."""

from __future__ import annotations

import subprocess
import sys

from aoc_toolkit import aoc_cli, readme_benchmarks
from aoc_toolkit.day import Day, all_days
from aoc_toolkit.run_multi import run_multi
from aoc_toolkit.timings import Timings

_AOC_MISSING = (
    'command "aoc" not found or not callable. '
    'Try running "cargo install aoc-cli" to install it.'
)


def _ensure_aoc() -> None:
    try:
        aoc_cli.check()
    except aoc_cli.AocCommandError:
        print(_AOC_MISSING, file=sys.stderr)
        raise SystemExit(1) from None


def handle_all(is_release: bool) -> None:
    """Run every day's solution."""
    run_multi(set(all_days()), is_release, False)


def handle_download(day: Day) -> None:
    """Download the input and puzzle for ``day``; exit with status 1 on failure."""
    _ensure_aoc()
    try:
        aoc_cli.download(day)
    except aoc_cli.AocCommandError as exc:
        print(f"failed to call aoc-cli: {exc}", file=sys.stderr)
        raise SystemExit(1) from None


def handle_read(day: Day) -> None:
    """Show the puzzle for ``day``; exit with status 1 on failure."""
    _ensure_aoc()
    try:
        aoc_cli.read(day)
    except aoc_cli.AocCommandError as exc:
        print(f"failed to call aoc-cli: {exc}", file=sys.stderr)
        raise SystemExit(1) from None


def _solve_command(
    day: Day, release: bool, dhat: bool, submit_part: int | None
) -> list[str]:
    command = [sys.executable]
    if dhat:
        # Heap profiling takes precedence over an optimised run.
        command.extend(["-X", "tracemalloc"])
    elif release:
        command.append("-O")
    command.extend(["-m", f"aoc_toolkit.solutions.day{day}"])
    if submit_part is not None:
        command.extend(["--submit", str(submit_part)])
    return command


def handle_solve(
    day: Day, release: bool, dhat: bool, submit_part: int | None
) -> int:
    """Run the solution for ``day`` in a child process; return its exit status."""
    completed = subprocess.run(
        _solve_command(day, release, dhat, submit_part), check=False
    )
    return completed.returncode


def handle_time(day: Day | None, run_all: bool, store: bool) -> None:
    """Benchmark solutions and optionally store the timings and README table."""
    stored_timings = Timings.read_from_file()

    if day is not None:
        days_to_run = {day}
    elif run_all:
        days_to_run = set(all_days())
    else:
        days_to_run = {d for d in all_days() if not stored_timings.is_day_complete(d)}

    timings = run_multi(days_to_run, True, True)
    if timings is None:
        timings = Timings()

    if not store:
        return

    merged = stored_timings.merge(timings)
    merged.store_file()

    print()
    try:
        readme_benchmarks.update(merged)
    except readme_benchmarks.ReadmeError:
        print("Failed to store updated benchmarks.", file=sys.stderr)
    else:
        print("Stored updated benchmarks.")