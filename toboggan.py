from __future__ import annotations

import logging
import math
import sys
from typing import Iterable, Iterator, List, Optional, Tuple

from puzzle_cli import (
    InputFormatError,
    PuzzleError,
    build_parser,
    format_answers,
    load_input,
    setup_logging,
)

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "day-3-input.txt"

TREE = "#"
OPEN = "."

# Typen
Cell = Tuple[int, int]          # (row, col), col bereits modulo Breite
Slope = Tuple[int, int]         # (rechts, runter)
Forest = Tuple[str, ...]        # wiederholt sich unendlich nach rechts

PART_ONE_SLOPE: Slope = (3, 1)
SLOPES: Tuple[Slope, ...] = ((1, 1), (3, 1), (5, 1), (7, 1), (1, 2))

EXAMPLE: Tuple[str, ...] = (
    "..##.......",
    "#...#...#..",
    ".#....#..#.",
    "..#.#...#.#",
    ".#...##..#.",
    "..#.##.....",
    ".#.#.#....#",
    ".#........#",
    "#.##...#...",
    "#...##....#",
    ".#..#...#.#",
)


class InvalidSlope(PuzzleError):
    """Steigung muss nach unten zeigen (down > 0, right >= 0)."""


def parse_map(lines: Iterable[str]) -> Forest:
    rows = tuple(line.strip() for line in lines)
    if not rows or not rows[0]:
        raise InputFormatError("Leere Karte.")
    width = len(rows[0])
    for line_no, row in enumerate(rows, start=1):
        if len(row) != width:
            raise InputFormatError(f"Zeilenlänge {len(row)} statt {width}.", line_no)
        if set(row) - {TREE, OPEN}:
            raise InputFormatError(f"Unbekannte Zeichen in {row!r}.", line_no)
    return rows


def trajectory(rows: Forest, slope: Slope) -> Iterator[Cell]:
    """
    Besuchte Zellen ab (0, 0), der Startpunkt selbst zählt nicht.
    Endet, sobald die Zeile unterhalb der Karte liegt.
    """
    right, down = slope
    if down <= 0 or right < 0:
        raise InvalidSlope(f"Ungültige Steigung {slope!r}.")
    width = len(rows[0])
    row, col = down, right
    while row < len(rows):
        yield row, col % width
        row, col = row + down, col + right


def count_trees(rows: Forest, slope: Slope) -> int:
    trees = sum(rows[r][c] == TREE for r, c in trajectory(rows, slope))
    logger.debug("Steigung %s: %d Bäume", slope, trees)
    return trees


def part_one(rows: Forest) -> int:
    return count_trees(rows, PART_ONE_SLOPE)


def part_two(rows: Forest) -> int:
    return math.prod(count_trees(rows, slope) for slope in SLOPES)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser("Day 3: Toboggan Trajectory", DEFAULT_INPUT).parse_args(argv)
    setup_logging(args.verbose)

    try:
        rows = parse_map(load_input(args, EXAMPLE))
    except (PuzzleError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Karte %dx%d geladen", len(rows), len(rows[0]))
    print(format_answers(part_one(rows), part_two(rows)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
