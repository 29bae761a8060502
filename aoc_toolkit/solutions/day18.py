"""Day 18: the shortest way through falling memory bytes, and the byte that cuts it off."""

from __future__ import annotations

import heapq
import itertools
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from aoc_toolkit.day import Day
from aoc_toolkit.runner import run_day

DAY = Day(18)

logger = logging.getLogger(__name__)

Position = tuple[int, int]

_COORDINATES = re.compile(r"(\d+),(\d+)")

EXAMPLE_SIZE = 7
EXAMPLE_BYTES = 12


@dataclass
class Memory:
    """A square of memory with some corrupted positions."""

    corrupted: set[Position] = field(default_factory=set)
    width: int = EXAMPLE_SIZE
    height: int = EXAMPLE_SIZE

    def render(self, visited: Iterable[Position] | None = None) -> str:
        """Draw the memory: ``#`` corrupted, ``X`` visited, ``.`` free."""
        marked = set(visited or ())
        rows = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if (x, y) in self.corrupted:
                    row.append("#")
                elif (x, y) in marked:
                    row.append("X")
                else:
                    row.append(".")
            rows.append("".join(row))
        return "\n".join(rows)

    def siblings(self, position: Position) -> list[Position]:
        """Neighbouring positions inside the memory bounds."""
        x, y = position
        result = []
        if x > 0:
            result.append((x - 1, y))
        if x < self.width - 1:
            result.append((x + 1, y))
        if y > 0:
            result.append((x, y - 1))
        if y < self.height - 1:
            result.append((x, y + 1))
        return result

    def search_for_end(
        self, start: Position
    ) -> tuple[set[Position], list[Position]] | None:
        """Shortest path from ``start`` to the bottom-right corner.

        Returns the positions stepped on and the path, or None if the corner
        cannot be reached.
        """
        goal = (self.width - 1, self.height - 1)
        order = itertools.count()
        heap: list[tuple[int, int, Position, set[Position], list[Position]]] = [
            (0, next(order), start, set(), [start])
        ]
        expanded: set[Position] = set()

        while heap:
            cost, _, position, visited, path = heapq.heappop(heap)
            if position in expanded:
                continue
            expanded.add(position)

            for sibling in self.siblings(position):
                if sibling in self.corrupted or sibling in visited:
                    continue
                new_path = [*path, sibling]
                new_visited = visited | {sibling}
                if sibling == goal:
                    return new_visited, new_path
                heapq.heappush(
                    heap, (cost + 1, next(order), sibling, new_visited, new_path)
                )

        return None


def parse_input(
    input_text: str, width: int, height: int, lines_to_take: int
) -> tuple[Memory, str]:
    """Memory with the first ``lines_to_take`` bytes fallen, and the last line taken."""
    lines = input_text.splitlines()
    if lines_to_take < 1 or lines_to_take > len(lines):
        raise ValueError(
            f"cannot take {lines_to_take} lines from an input of {len(lines)} lines"
        )
    taken = lines[:lines_to_take]
    corrupted = {
        (int(match.group(1)), int(match.group(2)))
        for line in taken
        for match in _COORDINATES.finditer(line)
    }
    return Memory(corrupted, width, height), taken[-1]


def part_one(input_text: str) -> int | None:
    """Fewest steps to the exit after the first bytes have fallen."""
    memory, _ = parse_input(input_text, EXAMPLE_SIZE, EXAMPLE_SIZE, EXAMPLE_BYTES)
    result = memory.search_for_end((0, 0))
    if result is None:
        return None
    _, path = result
    return len(path) - 1


def part_two(input_text: str) -> str | None:
    """Coordinates of the first byte after which the exit is unreachable."""
    total_lines = len(input_text.splitlines())
    for line_index in range(EXAMPLE_BYTES, total_lines):
        memory, line = parse_input(input_text, EXAMPLE_SIZE, EXAMPLE_SIZE, line_index)
        if memory.search_for_end((0, 0)) is None:
            logger.debug("Blocked after %d bytes by %s", line_index, line)
            return line
    return None


def main(argv: Sequence[str] | None = None) -> None:
    """Solve both parts on this day's input."""
    run_day(DAY, part_one, part_two, argv)


if __name__ == "__main__":
    main()