from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, TypeVar

from puzzle_cli import (
    InputFormatError,
    PuzzleError,
    build_parser,
    format_answers,
    load_input,
    setup_logging,
)

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "day-12-input.txt"

ACTIONS = frozenset("NSEWLRF")
HEADINGS: Tuple[str, ...] = ("N", "E", "S", "W")     # im Uhrzeigersinn
VECTORS: Dict[str, Tuple[int, int]] = {
    "N": (0, 1),
    "E": (1, 0),
    "S": (0, -1),
    "W": (-1, 0),
}
START_HEADING = "E"
START_WAYPOINT: Tuple[int, int] = (10, 1)

EXAMPLE: Tuple[str, ...] = ("F10", "N3", "F7", "R90", "F11")


class UnknownActionError(InputFormatError):
    """Aktionszeichen ausserhalb von N/S/E/W/L/R/F."""


class InvalidRotationError(InputFormatError):
    """Drehung ist kein Vielfaches von 90 Grad."""


# Datenstrukturen, alle immutable
@dataclass(frozen=True)
class Instruction:
    action: str     # N/S/E/W/L/R/F
    value: int      # Distanz bzw. Grad


@dataclass(frozen=True)
class Ship:
    """Schiff mit Blickrichtung (Teil 1)."""
    x: int = 0                      # Ost positiv
    y: int = 0                      # Nord positiv
    heading: str = START_HEADING


@dataclass(frozen=True)
class WaypointShip:
    """
    Schiff mit Wegpunkt (Teil 2).
    wx/wy sind relativ zum Schiff, bewegen sich also mit.
    """
    x: int = 0
    y: int = 0
    wx: int = START_WAYPOINT[0]
    wy: int = START_WAYPOINT[1]


State = TypeVar("State", Ship, WaypointShip)


# Parsing
def parse_instruction(line: str, line_no: Optional[int] = None) -> Instruction:
    text = line.strip()
    if not text:
        raise InputFormatError("Leere Anweisung.", line_no)
    action, magnitude = text[0], text[1:]
    if action not in ACTIONS:
        raise UnknownActionError(f"Unbekannte Aktion {action!r}.", line_no)
    if not magnitude.isdecimal():
        raise InputFormatError(f"Ungültiger Wert {magnitude!r}.", line_no)
    value = int(magnitude)
    if action in "LR" and value % 90 != 0:
        raise InvalidRotationError(
            f"Drehung um {value} Grad ist kein Vielfaches von 90.", line_no
        )
    return Instruction(action, value)


def parse_instructions(lines: Iterable[str]) -> Tuple[Instruction, ...]:
    return tuple(
        parse_instruction(line, line_no)
        for line_no, line in enumerate(lines, start=1)
    )


# Geometrie
def clockwise_turns(instruction: Instruction) -> int:
    """Anzahl 90-Grad-Schritte im Uhrzeigersinn (0..3); L wird umgerechnet."""
    turns = (instruction.value % 360) // 90
    return turns if instruction.action == "R" else (4 - turns) % 4


def rotate_clockwise(x: int, y: int, turns: int) -> Tuple[int, int]:
    for _ in range(turns % 4):
        x, y = y, -x
    return x, y


def manhattan(x: int, y: int) -> int:
    return abs(x) + abs(y)


# Interpreter (pure functions, je Anweisung ein neuer Zustand)
def step_heading(ship: Ship, instruction: Instruction) -> Ship:
    action, value = instruction.action, instruction.value
    if action in "LR":
        index = HEADINGS.index(ship.heading) + clockwise_turns(instruction)
        return replace(ship, heading=HEADINGS[index % len(HEADINGS)])
    dx, dy = VECTORS[ship.heading if action == "F" else action]
    return replace(ship, x=ship.x + dx * value, y=ship.y + dy * value)


def step_waypoint(ship: WaypointShip, instruction: Instruction) -> WaypointShip:
    action, value = instruction.action, instruction.value
    if action == "F":
        # Wegpunkt bleibt relativ zum Schiff unverändert
        return replace(ship, x=ship.x + ship.wx * value, y=ship.y + ship.wy * value)
    if action in "LR":
        wx, wy = rotate_clockwise(ship.wx, ship.wy, clockwise_turns(instruction))
        return replace(ship, wx=wx, wy=wy)
    dx, dy = VECTORS[action]
    return replace(ship, wx=ship.wx + dx * value, wy=ship.wy + dy * value)


def trace(start: State, step: Callable[[State, Instruction], State],
          instructions: Iterable[Instruction]) -> Iterator[State]:
    """Liefert den Zustand nach jeder verarbeiteten Anweisung."""
    state = start
    for instruction in instructions:
        state = step(state, instruction)
        yield state


def navigate(start: State, step: Callable[[State, Instruction], State],
             instructions: Iterable[Instruction]) -> State:
    state = start
    for state in trace(start, step, instructions):
        logger.debug("%s", state)
    return state


def part_one(instructions: Iterable[Instruction]) -> int:
    ship = navigate(Ship(), step_heading, instructions)
    return manhattan(ship.x, ship.y)


def part_two(instructions: Iterable[Instruction]) -> int:
    ship = navigate(WaypointShip(), step_waypoint, instructions)
    return manhattan(ship.x, ship.y)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser("Day 12: Rain Risk", DEFAULT_INPUT).parse_args(argv)
    setup_logging(args.verbose)

    try:
        instructions = parse_instructions(load_input(args, EXAMPLE))
    except (PuzzleError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    logger.info("%d Anweisungen geladen", len(instructions))
    print(format_answers(part_one(instructions), part_two(instructions)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
