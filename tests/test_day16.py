import pytest

from aoc_toolkit.solutions.day16 import (
    Direction,
    find_alternative_shortest_paths,
    find_shortest_path_score,
    get_end_position,
    parse_input,
    part_one,
    part_two,
    search_for_end,
    valid_siblings,
)

EXAMPLE_1 = """\
###############
#.......#....E#
#.#.###.#.###.#
#.....#.#...#.#
#.###.#####.#.#
#.#.#.......#.#
#.#.#####.###.#
#...........#.#
###.#.#####.#.#
#...#.....#.#.#
#.#.#.###.#.#.#
#.....#...#.#.#
#.###.#.#.#.#.#
#S..#.....#...#
###############
"""

EXAMPLE_2 = """\
#################
#...#...#...#..E#
#.#.#.#.#.#.#.#.#
#.#.#.#...#...#.#
#.#.#.#.###.#.#.#
#...#.#.#.....#.#
#.#.#.#.#.#####.#
#.#...#.#.#.....#
#.#.#####.#.###.#
#.#.#.......#...#
#.#.###.#####.###
#.#.#...#.....#.#
#.#.#.#####.###.#
#.#.#.........#.#
#.#.#.#########.#
#S#.............#
#################
"""

STRAIGHT = "#####\n#S.E#\n#####\n"
TURN = "####\n#.E#\n#S##\n####\n"


def test_part_one_first_example():
    assert part_one(EXAMPLE_1) == 7036


def test_part_one_second_example():
    assert part_one(EXAMPLE_2) == 11048


def test_part_two_first_example():
    assert part_two(EXAMPLE_1) == 45


def test_part_one_straight_corridor():
    assert part_one(STRAIGHT) == 2


def test_part_one_with_turn():
    assert part_one(TURN) == 2002


def test_part_two_straight_corridor():
    assert part_two(STRAIGHT) == 3


def test_missing_start_gives_none():
    assert part_one("###\n#E#\n###\n") is None
    assert part_two("###\n#E#\n###\n") is None


@pytest.mark.parametrize(
    ("facing", "moving", "expected"),
    [
        (Direction.NORTH, Direction.NORTH, 1),
        (Direction.EAST, Direction.NORTH, 1001),
        (Direction.WEST, Direction.SOUTH, 1001),
        (Direction.EAST, Direction.WEST, 2001),
        (Direction.SOUTH, Direction.NORTH, 2001),
    ],
)
def test_score_from(facing, moving, expected):
    assert facing.score_from(moving) == expected


def test_parse_input_finds_start():
    start, grid = parse_input(TURN)
    assert start == (1, 2)
    assert grid[1] == ["#", ".", "E", "#"]


def test_get_end_position():
    _, grid = parse_input(EXAMPLE_1)
    assert get_end_position(grid) == (13, 1)


def test_valid_siblings_skips_walls():
    _, grid = parse_input(TURN)
    assert valid_siblings((1, 2), grid) == {Direction.NORTH: (1, 1)}
    assert valid_siblings((1, 1), grid) == {
        Direction.SOUTH: (1, 2),
        Direction.EAST: (2, 1),
    }


def test_search_for_end_returns_path():
    start, grid = parse_input(TURN)
    result = search_for_end(start, Direction.EAST, grid, {start}, 0)
    assert result.score == 2002
    assert result.path == [(1, 2), (1, 1), (2, 1)]
    assert result.visited == {(1, 2), (1, 1), (2, 1)}


def test_search_for_end_without_end():
    start, grid = parse_input("####\n#S.#\n####\n")
    assert search_for_end(start, Direction.EAST, grid, {start}, 0) is None
    assert find_shortest_path_score(start, grid) is None
    assert find_alternative_shortest_paths(start, grid) == []