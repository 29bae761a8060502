"""Day 16: the cheapest way through a reindeer maze, and the tiles on the best paths."""

from __future__ import annotations

import heapq
import itertools
import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import NamedTuple

from aoc_toolkit.day import Day
from aoc_toolkit.runner import run_day

DAY = Day(16)

logger = logging.getLogger(__name__)

Position = tuple[int, int]
Grid = list[list[str]]

STEP_SCORE = 1
TURN_SCORE = 1001
REVERSE_SCORE = 2001


class Direction(Enum):
    """A compass direction with its step offset."""

    NORTH = (0, -1)
    SOUTH = (0, 1)
    EAST = (1, 0)
    WEST = (-1, 0)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))

    def score_from(self, other: Direction) -> int:
        """Cost of stepping in direction ``other`` while facing this direction."""
        if self is other:
            return STEP_SCORE
        if self is other.opposite:
            return REVERSE_SCORE
        return TURN_SCORE


class SearchResult(NamedTuple):
    """Tiles visited on the way to the end, the score and the path taken."""

    visited: set[Position]
    score: int
    path: list[Position]


def parse_input(input_text: str) -> tuple[Position | None, Grid]:
    """Return the start position (None if absent) and the maze grid."""
    grid = [list(line) for line in input_text.splitlines()]
    start = None
    for y, row in enumerate(grid):
        for x, tile in enumerate(row):
            if tile == "S":
                start = (x, y)
    return start, grid


def valid_siblings(position: Position, grid: Sequence[Sequence[str]]) -> dict[Direction, Position]:
    """Neighbouring tiles that are inside the grid and not walls, by direction."""
    x, y = position
    siblings = {}
    for direction in (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST):
        dx, dy = direction.value
        nx, ny = x + dx, y + dy
        if 0 <= ny < len(grid) and 0 <= nx < len(grid[ny]) and grid[ny][nx] != "#":
            siblings[direction] = (nx, ny)
    return siblings


def search_for_end(
    start_position: Position,
    start_direction: Direction,
    grid: Sequence[Sequence[str]],
    start_visited: Iterable[Position],
    start_score: int,
) -> SearchResult | None:
    """Cheapest-first search from the start until a tile next to ``E`` is expanded."""
    order = itertools.count()
    heap = [
        (
            start_score,
            next(order),
            start_position,
            start_direction,
            set(start_visited),
            [start_position],
        )
    ]
    expanded: set[Position] = set()

    while heap:
        cost, _, position, direction, visited, path = heapq.heappop(heap)
        if position in expanded:
            continue
        expanded.add(position)

        for new_direction, new_position in valid_siblings(position, grid).items():
            if new_position in visited:
                continue
            new_path = [*path, new_position]
            new_score = cost + direction.score_from(new_direction)
            new_visited = visited | {new_position}

            x, y = new_position
            if grid[y][x] == "E":
                return SearchResult(new_visited, new_score, new_path)

            heapq.heappush(
                heap,
                (new_score, next(order), new_position, new_direction, new_visited, new_path),
            )

    return None


def _score_for_custom_path(
    start_position: Position,
    current_end: Position,
    new_end: Position,
    grid: Sequence[Sequence[str]],
) -> tuple[set[Position], int]:
    new_grid = [list(row) for row in grid]
    new_grid[current_end[1]][current_end[0]] = "."
    new_grid[new_end[1]][new_end[0]] = "E"

    result = search_for_end(start_position, Direction.EAST, new_grid, set(), 0)
    if result is None:
        return {start_position}, 0
    return result.visited, result.score


def get_end_position(grid: Sequence[Sequence[str]]) -> Position:
    """Position of the last ``E`` in the grid, or (0, 0) if there is none."""
    end = (0, 0)
    for y, row in enumerate(grid):
        for x, tile in enumerate(row):
            if tile == "E":
                end = (x, y)
    return end


def find_alternative_shortest_paths(
    start_position: Position, grid: Sequence[Sequence[str]]
) -> list[tuple[set[Position], int]]:
    """The best path plus every detour found that reaches the end at the same score."""
    initial = search_for_end(start_position, Direction.EAST, grid, {start_position}, 0)
    if initial is None:
        return []

    all_paths = [(set(initial.visited), initial.score)]
    end_position = get_end_position(grid)

    for on_path in initial.visited:
        detours = {
            direction: position
            for direction, position in valid_siblings(on_path, grid).items()
            if position not in initial.visited
        }
        for direction, position in detours.items():
            visited, custom_score = _score_for_custom_path(
                start_position, end_position, position, grid
            )
            result = search_for_end(position, direction, grid, visited, custom_score)
            if result is not None and result.score == initial.score:
                all_paths.append((result.visited, result.score))

    return all_paths


def find_shortest_path_score(
    start_position: Position, grid: Sequence[Sequence[str]]
) -> int | None:
    """Score of the cheapest path from the start to the end, or None."""
    result = search_for_end(start_position, Direction.EAST, grid, {start_position}, 0)
    if result is None:
        return None
    logger.info("Score: %d", result.score)
    return result.score


def part_one(input_text: str) -> int | None:
    """Lowest score a reindeer could get."""
    start, grid = parse_input(input_text)
    if start is None:
        return None
    logger.info("Start position: %s", start)
    return find_shortest_path_score(start, grid)


def part_two(input_text: str) -> int | None:
    """Number of tiles on at least one of the best paths."""
    start, grid = parse_input(input_text)
    if start is None:
        return None
    logger.info("Start position: %s", start)
    paths = find_alternative_shortest_paths(start, grid)
    tiles = set().union(*(visited for visited, _ in paths))
    return len(tiles)


def main(argv: Sequence[str] | None = None) -> None:
    """Solve both parts on this day's input."""
    run_day(DAY, part_one, part_two, argv)


if __name__ == "__main__":
    main()