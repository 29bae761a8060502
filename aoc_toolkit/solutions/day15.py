"""Day 15: a robot pushing boxes around a warehouse."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from aoc_toolkit.day import Day
from aoc_toolkit.runner import run_day

DAY = Day(15)

logger = logging.getLogger(__name__)

Position = tuple[int, int]

_OFFSETS = {
    "^": (0, -1),
    "v": (0, 1),
    "<": (-1, 0),
    ">": (1, 0),
}

_WIDENED = {
    ".": "..",
    "#": "##",
    "@": "@.",
    "O": "[]",
}

_HORIZONTAL = ("<", ">")


def _step(position: Position, direction: str) -> Position:
    try:
        dx, dy = _OFFSETS[direction]
    except KeyError:
        raise ValueError(f"unexpected direction: {direction}") from None
    return position[0] + dx, position[1] + dy


@dataclass
class Warehouse:
    """The warehouse floor: empty spots, walls, the robot and the boxes."""

    empty_spots: set[Position] = field(default_factory=set)
    walls: set[Position] = field(default_factory=set)
    robot: Position = (0, 0)
    boxes: set[Position] = field(default_factory=set)
    big_boxes_l: set[Position] = field(default_factory=set)
    big_boxes_r: set[Position] = field(default_factory=set)

    def _place(self, position: Position, spot: str) -> None:
        if spot == ".":
            self.empty_spots.add(position)
        elif spot == "#":
            self.walls.add(position)
        elif spot == "@":
            self.robot = position
        elif spot == "O":
            self.boxes.add(position)
        elif spot == "[":
            self.big_boxes_l.add(position)
        elif spot == "]":
            self.big_boxes_r.add(position)
        else:
            raise ValueError(f"unexpected character: {spot}")

    @classmethod
    def _from_lines(cls, lines: Sequence[str]) -> Warehouse:
        warehouse = cls()
        for y, line in enumerate(lines):
            for x, spot in enumerate(line):
                warehouse._place((x, y), spot)
        return warehouse

    def render(self) -> str:
        """Draw the warehouse as text, one line per row."""
        positions = [*self.empty_spots, *self.walls, *self.boxes, self.robot]
        max_x = max((x for x, _ in positions), default=0)
        max_y = max((y for _, y in positions), default=0)

        rows = []
        for y in range(max_y + 1):
            row = []
            for x in range(max_x + 1):
                position = (x, y)
                if self.robot == position:
                    row.append("@")
                elif position in self.boxes:
                    row.append("O")
                elif position in self.walls:
                    row.append("#")
                elif position in self.empty_spots:
                    row.append(".")
                elif position in self.big_boxes_l:
                    row.append("[")
                elif position in self.big_boxes_r:
                    row.append("]")
                else:
                    row.append(" ")
            rows.append("".join(row))
        return "\n".join(rows)

    def gps(self) -> int:
        """Sum of GPS coordinates of the small boxes."""
        return sum(100 * y + x for x, y in self.boxes)

    def big_box_gps(self) -> int:
        """Sum of GPS coordinates of the wide boxes, measured at their left half."""
        return sum(100 * y + x for x, y in self.big_boxes_l)

    def _shift(self, cells: set[Position], source: Position, target: Position) -> None:
        self.empty_spots.discard(target)
        self.empty_spots.add(source)
        cells.discard(source)
        cells.add(target)

    def _half(self, position: Position) -> set[Position]:
        return self.big_boxes_l if position in self.big_boxes_l else self.big_boxes_r

    def _move_box(self, position: Position, direction: str) -> bool:
        target = _step(position, direction)
        if target in self.walls:
            return False
        if target in self.empty_spots:
            self._shift(self.boxes, position, target)
            return True
        if target in self.boxes and self._move_box(target, direction):
            self._shift(self.boxes, position, target)
            return True
        return False

    def _can_move_big_box(
        self, position: Position, direction: str, moved: set[Position]
    ) -> bool:
        x, y = position
        target = _step(position, direction)

        if target in self.walls:
            return False

        is_left = position in self.big_boxes_l
        partner = (x + 1, y) if is_left else (x - 1, y)

        if target in self.empty_spots:
            if direction in _HORIZONTAL:
                return True
            if target in moved:
                return True
            moved.add(target)
            return self._can_move_big_box(partner, direction, moved)

        if direction in _HORIZONTAL:
            return self._can_move_big_box(target, direction, moved)

        if target in moved:
            return True

        if not self._can_move_big_box(target, direction, moved):
            return False
        moved.add(target)
        return self._can_move_big_box(partner, direction, moved)

    def _move_big_box(self, position: Position, direction: str, can_move: bool) -> bool:
        x, y = position
        target = _step(position, direction)

        if target in self.walls:
            return False

        if direction in _HORIZONTAL:
            if target in self.empty_spots:
                self._shift(self._half(position), position, target)
                return True
            half = self._half(position)
            if self._move_big_box(target, direction, False):
                self._shift(half, position, target)
                return True

        is_left = position in self.big_boxes_l
        half = self.big_boxes_l if is_left else self.big_boxes_r
        partner = (x + 1, y) if is_left else (x - 1, y)

        if target in self.empty_spots:
            if can_move:
                self._shift(half, position, target)
                return True
            if self._move_big_box(partner, direction, True):
                self._shift(half, position, target)
                return True

        if self._move_big_box(target, direction, False) and self._move_big_box(
            partner, direction, True
        ):
            self._shift(half, position, target)
            return True

        return False

    def move_robot(self, direction: str) -> None:
        """Move the robot one step, pushing any boxes in the way if they can move."""
        target = _step(self.robot, direction)

        if target in self.walls:
            return

        if target in self.empty_spots:
            self.empty_spots.discard(target)
            self.empty_spots.add(self.robot)
            self.robot = target
            return

        if target in self.boxes and self._move_box(target, direction):
            self.empty_spots.discard(target)
            self.empty_spots.add(self.robot)
            self.robot = target

        if target in self.big_boxes_l or target in self.big_boxes_r:
            if self._can_move_big_box(target, direction, set()):
                self._move_big_box(target, direction, False)
                self.empty_spots.discard(target)
                self.empty_spots.add(self.robot)
                self.robot = target


def duplicate(line: str) -> str:
    """Widen a map line: every tile becomes two."""
    try:
        return "".join(_WIDENED[spot] for spot in line)
    except KeyError as exc:
        raise ValueError(f"unexpected character: {exc.args[0]}") from None


def _split(input_text: str) -> tuple[list[str], str]:
    parts = input_text.split("\n\n")
    if len(parts) < 2:
        raise ValueError("expected a map and a list of movements separated by a blank line")
    return parts[0].splitlines(), parts[1].replace("\n", "")


def parse_input(input_text: str) -> tuple[Warehouse, str, int, int]:
    """Parse the map and movements; also return the map's width and height."""
    lines, movements = _split(input_text)
    if not lines:
        raise ValueError("empty warehouse map")
    width = max(len(line) for line in lines)
    height = len(lines)
    return Warehouse._from_lines(lines), movements, width, height


def parse_input_with_dedup(input_text: str) -> tuple[Warehouse, str]:
    """Parse the map widened to double width, and the movements."""
    lines, movements = _split(input_text)
    return Warehouse._from_lines([duplicate(line) for line in lines]), movements


def part_one(input_text: str) -> int | None:
    """Sum of box GPS coordinates after all moves."""
    warehouse, movements, _, _ = parse_input(input_text)
    logger.debug("warehouse before moving:\n%s", warehouse.render())
    for movement in movements:
        warehouse.move_robot(movement)
    return warehouse.gps()


def part_two(input_text: str) -> int | None:
    """Sum of wide-box GPS coordinates after all moves on the widened map."""
    warehouse, movements = parse_input_with_dedup(input_text)
    for movement in movements:
        warehouse.move_robot(movement)
    return warehouse.big_box_gps()


def main(argv: Sequence[str] | None = None) -> None:
    """Solve both parts on this day's input."""
    run_day(DAY, part_one, part_two, argv)


if __name__ == "__main__":
    main()