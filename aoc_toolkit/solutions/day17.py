"""Day 17: a three-bit computer and the register value that makes it print itself."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from aoc_toolkit.day import Day
from aoc_toolkit.runner import run_day

DAY = Day(17)

logger = logging.getLogger(__name__)

_REGISTERS = re.compile(r"Register A: (\d+)\nRegister B: (\d+)\nRegister C: (\d+)")


@dataclass
class Computer:
    """Three registers and a program of three-bit numbers."""

    register_a: int
    register_b: int
    register_c: int
    program: list[int] = field(default_factory=list)

    def _fetch(self, index: int) -> int:
        try:
            return self.program[index]
        except IndexError:
            raise ValueError(f"no instruction at position {index}") from None

    def _combo(self, index: int) -> int:
        value = self._fetch(index)
        # Even positions hold opcodes, which are taken literally.
        if index % 2 == 0:
            return value
        if value == 4:
            return self.register_a
        if value == 5:
            return self.register_b
        if value == 6:
            return self.register_c
        if value == 7:
            raise ValueError("Invalid operand")
        return value

    def _step(self, pointer: int, output: list[int]) -> int:
        """Execute the instruction at ``pointer`` and return the next pointer."""
        opcode = self._combo(pointer)
        operand = pointer + 1

        if opcode == 0:
            self.register_a //= 2 ** self._combo(operand)
        elif opcode == 1:
            self.register_b ^= self._fetch(operand)
        elif opcode == 2:
            self.register_b = self._combo(operand) % 8
        elif opcode == 3:
            target = self._fetch(operand)
            if self.register_a != 0:
                return target
        elif opcode == 4:
            self.register_b ^= self.register_c
        elif opcode == 5:
            output.append(self._combo(operand) % 8)
        elif opcode == 6:
            self.register_b = self.register_a // 2 ** self._combo(operand)
        elif opcode == 7:
            self.register_c = self.register_a // 2 ** self._combo(operand)
        return pointer + 2

    def run_program(self) -> str:
        """Run until the pointer leaves the program; return the output comma separated."""
        output: list[int] = []
        pointer = 0
        while pointer < len(self.program):
            pointer = self._step(pointer, output)
        return ",".join(str(value) for value in output)

    def reverse_engineer_program(self) -> int:
        """Smallest register A value for which :func:`my_program` yields the program."""
        candidates = {0}
        for digit in reversed(self.program):
            candidates = {
                value
                for current in candidates
                for value in ((current << 3) + low for low in range(8))
                if my_program(value) == digit
            }
        if not candidates:
            raise ValueError("no register value reproduces the program")
        return min(candidates)


def parse_input(input_text: str) -> Computer:
    """Parse the register block and the program line."""
    parts = input_text.split("\n\n")
    if len(parts) < 2:
        raise ValueError("expected registers and a program separated by a blank line")

    match = _REGISTERS.search(parts[0])
    if match is None:
        raise ValueError("could not read the registers")
    register_a, register_b, register_c = (int(group) for group in match.groups())

    words = [word.replace(",", "") for word in parts[1].split()]
    if len(words) < 2:
        raise ValueError("could not read the program")
    try:
        program = [int(char) for char in words[1]]
    except ValueError:
        raise ValueError(f"program must be digits: {words[1]}") from None

    return Computer(register_a, register_b, register_c, program)


def my_program(value: int) -> int:
    """One loop of the puzzle program: the digit printed for register A = ``value``."""
    b = (value % 8) ^ 5
    c = value // 2**b
    b ^= 6
    b ^= c
    return b % 8


def part_one(input_text: str) -> str | None:
    """Output of the program."""
    return parse_input(input_text).run_program()


def part_two(input_text: str) -> int | None:
    """Lowest register A value that makes the program print itself."""
    computer = parse_input(input_text)
    reversed_value = computer.reverse_engineer_program()
    logger.info("reversed is: %d", reversed_value)
    computer.register_a = reversed_value
    result = computer.run_program()
    logger.info("Program %s printed: %s", computer.program, result)
    return reversed_value


def main(argv: Sequence[str] | None = None) -> None:
    """Solve both parts on this day's input."""
    run_day(DAY, part_one, part_two, argv)


if __name__ == "__main__":
    main()