from __future__ import annotations

import logging
import sys
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from puzzle_cli import (
    InputFormatError,
    PuzzleError,
    build_parser,
    format_answers,
    load_input,
    setup_logging,
)

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "day-11-input.txt"
DEFAULT_MAX_ROUNDS = 10_000

FLOOR = "."
EMPTY = "L"
OCCUPIED = "#"
SYMBOLS = frozenset((FLOOR, EMPTY, OCCUPIED))

# Typen (endliches Grid, eine Zeile pro String)
Grid = Tuple[str, ...]                          # immutable, neue Generation = neues Tupel
Counter = Callable[[Grid, int, int], int]       # (grid, row, col) -> besetzte relevante Nachbarn
Rule = Callable[[str, int], str]                # (zustand_jetzt, besetzte_nachbarn) -> zustand_next

DIRECTIONS: Tuple[Tuple[int, int], ...] = tuple(
    (dr, dc)
    for dr in (-1, 0, 1)
    for dc in (-1, 0, 1)
    if (dr, dc) != (0, 0)
)

EXAMPLE: Tuple[str, ...] = (
    "L.LL.LL.LL",
    "LLLLLLL.LL",
    "L.L.L..L..",
    "LLLL.LL.LL",
    "L.LL.LL.LL",
    "L.LLLLL.LL",
    "..L.L.....",
    "LLLLLLLLLL",
    "L.LLLLLL.L",
    "L.LLLLL.LL",
)


class GridShapeError(InputFormatError):
    """Grid ist leer oder nicht rechteckig."""


class SimulationDidNotConverge(PuzzleError):
    """Kein Fixpunkt innerhalb der erlaubten Runden."""


# Nachbarschaften (pure functions)
def _inside(grid: Grid, row: int, col: int) -> bool:
    return 0 <= row < len(grid) and 0 <= col < len(grid[0])


def adjacent_occupied(grid: Grid, row: int, col: int) -> int:
    """Besetzte Plätze unter den 8 direkt angrenzenden Zellen."""
    return sum(
        grid[row + dr][col + dc] == OCCUPIED
        for dr, dc in DIRECTIONS
        if _inside(grid, row + dr, col + dc)
    )


def _first_seat(grid: Grid, row: int, col: int, dr: int, dc: int) -> Optional[str]:
    r, c = row + dr, col + dc
    while _inside(grid, r, c):
        if grid[r][c] != FLOOR:
            return grid[r][c]
        r, c = r + dr, c + dc
    return None


def visible_occupied(grid: Grid, row: int, col: int) -> int:
    """
    Pro Richtung zählt nur der erste sichtbare Sitz (Boden wird übersprungen).
    Ergebnis: Anzahl Richtungen, in denen dieser Sitz besetzt ist.
    """
    return sum(
        _first_seat(grid, row, col, dr, dc) == OCCUPIED
        for dr, dc in DIRECTIONS
    )


# Regeln
def seat_rule(threshold: int) -> Rule:
    def rule(state: str, n: int) -> str:
        if state == EMPTY and n == 0:
            return OCCUPIED
        if state == OCCUPIED and n >= threshold:
            return EMPTY
        return state
    return rule


# Kernlogik: synchroner Step über das ganze Grid
def step_func(count: Counter, threshold: int) -> Callable[[Grid], Grid]:
    """
    Factory: gibt eine Step-Funktion zurück, parametrisiert mit Nachbarschaft und Schwelle.
    Alle Zählungen lesen nur die vorherige Generation, geschrieben wird ein neues Grid.
    """
    rule = seat_rule(threshold)

    def step(grid: Grid) -> Grid:
        return tuple(
            "".join(
                state if state == FLOOR else rule(state, count(grid, r, c))
                for c, state in enumerate(line)
            )
            for r, line in enumerate(grid)
        )
    return step


# Generator, unendliche Generationen
def generations(start: Grid, step: Callable[[Grid], Grid]) -> Iterator[Grid]:
    grid = start
    while True:
        yield grid
        grid = step(grid)


def settle(start: Grid, step: Callable[[Grid], Grid],
           max_rounds: int = DEFAULT_MAX_ROUNDS) -> Grid:
    """
    Wendet 'step' an, bis sich keine Zelle mehr ändert (Fixpunkt).
    Schleife statt Rekursion, mit Obergrenze 'max_rounds'.
    """
    gen = generations(start, step)
    previous = next(gen)
    for rounds, current in enumerate(gen, start=1):
        if current == previous:
            logger.info("Fixpunkt nach %d Runden erreicht", rounds - 1)
            return current
        if rounds >= max_rounds:
            break
        logger.debug("Runde %d: %d besetzt", rounds, count_occupied(current))
        previous = current
    raise SimulationDidNotConverge(
        f"Kein Fixpunkt nach {max_rounds} Runden."
    )


def count_occupied(grid: Grid) -> int:
    return sum(line.count(OCCUPIED) for line in grid)


# Varianten
adjacent_step = step_func(adjacent_occupied, 4)
visible_step = step_func(visible_occupied, 5)


def part_one(grid: Grid, max_rounds: int = DEFAULT_MAX_ROUNDS) -> int:
    return count_occupied(settle(grid, adjacent_step, max_rounds))


def part_two(grid: Grid, max_rounds: int = DEFAULT_MAX_ROUNDS) -> int:
    return count_occupied(settle(grid, visible_step, max_rounds))


# Parsing & Anzeige
def grid_from_strings(lines: Iterable[str]) -> Grid:
    grid = tuple(line.strip() for line in lines)
    if not grid or not grid[0]:
        raise GridShapeError("Leeres Grid.")
    width = len(grid[0])
    for line_no, line in enumerate(grid, start=1):
        if len(line) != width:
            raise GridShapeError(
                f"Zeilenlänge {len(line)} statt {width}.", line_no
            )
        unknown = set(line) - SYMBOLS
        if unknown:
            raise InputFormatError(
                f"Unbekannte Zeichen {''.join(sorted(unknown))!r}.", line_no
            )
    return grid


def render(grid: Grid) -> str:
    return "\n".join(grid)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser("Day 11: Seating System", DEFAULT_INPUT)
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=DEFAULT_MAX_ROUNDS,
        help=f"Abort if no fixpoint is reached after this many rounds "
             f"(default: {DEFAULT_MAX_ROUNDS})",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the settled grid of both variants.",
    )
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        grid = grid_from_strings(load_input(args, EXAMPLE))
        logger.info("Grid %dx%d geladen", len(grid), len(grid[0]))
        settled = [
            settle(grid, adjacent_step, args.max_rounds),
            settle(grid, visible_step, args.max_rounds),
        ]
    except (PuzzleError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    if args.show:
        for final in settled:
            print(render(final))
            print()
    print(format_answers(*(count_occupied(final) for final in settled)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
