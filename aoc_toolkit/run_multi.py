"""Run several days' solutions in child processes and collect their timings."""

from __future__ import annotations

import os
import subprocess
import sys
import threading
from collections.abc import Collection
from pathlib import Path
from typing import IO

from aoc_toolkit.day import Day, all_days
from aoc_toolkit.runner import ANSI_BOLD, ANSI_ITALIC, ANSI_RESET
from aoc_toolkit.timings import Timing, Timings

_SOLUTIONS_DIR = Path(__file__).resolve().parent / "solutions"


def _solution_file(day: Day) -> Path:
    return _SOLUTIONS_DIR / f"day{day}.py"


def _solution_module(day: Day) -> str:
    return f"aoc_toolkit.solutions.day{day}"


def run_multi(
    days_to_run: Collection[Day], is_release: bool, is_timed: bool
) -> Timings | None:
    """Run the given days in order; return their timings when timed."""
    timings: list[Timing] = []
    need_space = False

    for day in all_days():
        if day not in days_to_run:
            continue
        if need_space:
            print()
        need_space = True

        print(f"{ANSI_BOLD}Day {day}{ANSI_RESET}")
        print("------")

        output = run_solution(day, is_timed, is_release)
        if not output:
            print("Not solved.")
        else:
            timings.append(parse_exec_time(output, day))

    if not is_timed:
        return None

    result = Timings(data=timings)
    total_millis = result.total_millis()
    print(
        f"\n{ANSI_BOLD}Total (Run):{ANSI_RESET} {ANSI_ITALIC}{total_millis:.2f}ms{ANSI_RESET}"
    )
    return result


def _strip_newline(line: str) -> str:
    line = line[:-1] if line.endswith("\n") else line
    return line[:-1] if line.endswith("\r") else line


def _forward_stderr(stream: IO[str]) -> None:
    for line in stream:
        print(_strip_newline(line), file=sys.stderr)


def run_solution(day: Day, is_timed: bool, is_release: bool) -> list[str]:
    """Run a day's solution, echoing its output; return its stdout lines.

    Days without a solution module yield no lines.
    """
    if not _solution_file(day).exists():
        return []

    command = [sys.executable]
    if is_release:
        command.append("-O")
    command.extend(["-m", _solution_module(day)])
    if is_timed:
        command.append("--time")

    env = {**os.environ, "PYTHONIOENCODING": "utf-8"}
    output: list[str] = []
    with subprocess.Popen(
        command,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
        env=env,
    ) as process:
        forwarder = threading.Thread(
            target=_forward_stderr, args=(process.stderr,), daemon=True
        )
        forwarder.start()
        for raw in process.stdout:
            line = _strip_newline(raw)
            print(line)
            output.append(line)
        forwarder.join()
        process.wait()
    return output


def parse_exec_time(output: list[str], day: Day) -> Timing:
    """Collect part timings from lines such as ``Part 1: 3 (1.2ms @ 10 samples)``."""
    timing = Timing(day=day, part_1=None, part_2=None, total_nanos=0.0)

    for line in output:
        if " samples)" not in line:
            continue
        parsed = parse_time(line)
        if parsed is None:
            print(f"Could not parse timings from line: {line}", file=sys.stderr)
            continue
        timing_str, nanos = parsed
        part = line.split(":", 1)[0]
        if "Part 1" in part:
            timing.part_1 = timing_str
        elif "Part 2" in part:
            timing.part_2 = timing_str
        timing.total_nanos += nanos

    return timing


def _parse_float(text: str) -> float | None:
    if not text or text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _parse_scaled(text: str, postfix: str, scale: float) -> float | None:
    value = _parse_float(text.split(postfix, 1)[0])
    return None if value is None else value * scale


def parse_time(line: str) -> tuple[str, float] | None:
    """Extract the timing text and its value in nanoseconds from a result line."""
    timing_str = (
        line.split(" samples)", 1)[0].split("(")[-1].split("@", 1)[0].strip()
    )

    if "ns" in timing_str:
        nanos = _parse_scaled(timing_str, "ns", 1.0)
    elif "µs" in timing_str:
        nanos = _parse_scaled(timing_str, "µs", 1_000.0)
    elif "ms" in timing_str:
        nanos = _parse_scaled(timing_str, "ms", 1_000_000.0)
    else:
        nanos = _parse_scaled(timing_str, "s", 1_000_000_000.0)

    if nanos is None:
        return None
    return timing_str, nanos