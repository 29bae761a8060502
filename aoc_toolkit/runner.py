"""Run solution functions, time them and optionally submit their answers."""

from __future__ import annotations

import logging
import re
import sys
import time
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from aoc_toolkit import aoc_cli
from aoc_toolkit.day import Day
from aoc_toolkit.files import read_file

ANSI_ITALIC = "\x1b[3m"
ANSI_BOLD = "\x1b[1m"
ANSI_RESET = "\x1b[0m"

NANOS_PER_SECOND = 1_000_000_000

_SUBMIT_USAGE = "Unexpected command-line input. Format: cargo solve 1 --submit 1"
_PART_PATTERN = re.compile(r"\+?[0-9]+")

T = TypeVar("T")


def _argv(argv: Sequence[str] | None) -> list[str]:
    return list(sys.argv if argv is None else argv)


def run_part(
    func: Callable[[str], Any],
    input_text: str,
    day: Day,
    part: int,
    argv: Sequence[str] | None = None,
) -> None:
    """Run one part, print its result and timing, and submit it if asked to."""
    part_str = f"Part {part}"
    result, duration, samples = run_timed(
        func, input_text, lambda value: print_result(value, part_str, ""), argv
    )
    print_result(result, part_str, format_duration(duration, samples))
    if result is not None:
        try:
            submit_result(result, day, part, argv)
        except aoc_cli.AocCommandError as exc:
            print(f"failed to call aoc-cli: {exc}", file=sys.stderr)


def run_timed(
    func: Callable[[str], T],
    input_text: str,
    hook: Callable[[T], Any],
    argv: Sequence[str] | None = None,
) -> tuple[T, int, int]:
    """Run ``func`` once, then benchmark it when ``--time`` is given.

    Returns the result, the duration in nanoseconds and the number of samples.
    """
    start = time.perf_counter_ns()
    result = func(input_text)
    base_time = time.perf_counter_ns() - start

    hook(result)

    if "--time" in _argv(argv):
        duration, samples = bench(func, input_text, base_time)
    else:
        duration, samples = base_time, 1
    return result, duration, samples


def bench(func: Callable[[str], Any], input_text: str, base_time: int) -> tuple[int, int]:
    """Repeat ``func`` for about a second, 10 to 10000 times; return mean nanos and count."""
    print(f" > {ANSI_ITALIC}benching{ANSI_RESET}", end="", flush=True)
    iterations = NANOS_PER_SECOND // max(base_time, 10)
    iterations = min(max(iterations, 10), 10_000)

    timers = []
    for _ in range(iterations):
        start = time.perf_counter_ns()
        func(input_text)
        timers.append(time.perf_counter_ns() - start)

    return average_duration(timers), iterations


def average_duration(durations: Sequence[int]) -> int:
    """Integer mean of durations in nanoseconds."""
    return sum(durations) // len(durations)


def _format_nanos(nanos: int) -> str:
    if nanos >= NANOS_PER_SECOND:
        unit, suffix = NANOS_PER_SECOND, "s"
    elif nanos >= 1_000_000:
        unit, suffix = 1_000_000, "ms"
    elif nanos >= 1_000:
        unit, suffix = 1_000, "µs"
    else:
        unit, suffix = 1, "ns"
    tenths = (nanos * 10 + unit // 2) // unit
    return f"{tenths // 10}.{tenths % 10}{suffix}"


def format_duration(duration: int, samples: int) -> str:
    """Format a duration in nanoseconds, with the sample count when benchmarked."""
    if samples == 1:
        return f" ({_format_nanos(duration)})"
    return f" ({_format_nanos(duration)} @ {samples} samples)"


def print_result(result: Any, part: str, duration_str: str) -> None:
    """Print a result; an empty ``duration_str`` marks an intermediate print."""
    intermediate = duration_str == ""

    if result is None:
        if intermediate:
            print(f"{part}: ✖", end="")
        else:
            print("\r", end="")
            print(f"{part}: ✖             ")
        return

    text = str(result)
    if "\n" in text:
        line = f"{part}: ▼ {duration_str}"
        if intermediate:
            print(line, end="")
        else:
            print("\r", end="")
            print(line)
            print(text)
    else:
        line = f"{part}: {ANSI_BOLD}{text}{ANSI_RESET}{duration_str}"
        if intermediate:
            print(line, end="")
        else:
            print("\r", end="")
            print(line)


def submit_result(
    result: Any, day: Day, part: int, argv: Sequence[str] | None = None
):
    """Submit ``result`` when ``--submit <part>`` names this part.

    Returns the completed ``aoc`` call, or None when nothing was submitted.
    """
    args = _argv(argv)
    if "--submit" not in args:
        return None

    if len(args) < 3:
        print(_SUBMIT_USAGE, file=sys.stderr)
        raise SystemExit(1)

    part_index = args.index("--submit") + 1
    raw = args[part_index] if part_index < len(args) else ""
    if not _PART_PATTERN.fullmatch(raw) or int(raw) > 255:
        print(_SUBMIT_USAGE, file=sys.stderr)
        raise SystemExit(1)

    if int(raw) != part:
        return None

    try:
        aoc_cli.check()
    except aoc_cli.AocCommandError:
        print(
            'command "aoc" not found or not callable. '
            'Try running "cargo install aoc-cli" to install it.',
            file=sys.stderr,
        )
        raise SystemExit(1) from None

    print("Submitting result via aoc-cli...")
    return aoc_cli.submit(day, part, str(result))


def run_day(
    day: Day,
    part_one: Callable[[str], Any] | None,
    part_two: Callable[[str], Any] | None,
    argv: Sequence[str] | None = None,
) -> None:
    """Read the day's input and run each given part on it."""
    logging.basicConfig(level=logging.DEBUG)
    input_text = read_file("inputs", day)
    for part, func in ((1, part_one), (2, part_two)):
        if func is not None:
            run_part(func, input_text, day, part, argv)