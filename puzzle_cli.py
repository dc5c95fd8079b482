from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


# Exceptions, klare Fehlerfälle signalisieren
class PuzzleError(Exception):
    """Allgemeiner Fehler beim Lösen eines Rätsels."""


class InputFormatError(PuzzleError):
    """Eingabe entspricht nicht dem erwarteten Format."""

    def __init__(self, message: str, line_no: Optional[int] = None):
        if line_no is not None:
            message = f"Zeile {line_no}: {message}"
        super().__init__(message)
        self.line_no = line_no


def setup_logging(verbose: bool = False) -> None:
    """Logging konfigurieren (DEBUG bei verbose, sonst INFO)."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def read_lines(path: str) -> List[str]:
    """
    Liest die Eingabedatei zeilenweise.
    Leere Zeilen am Ende (z.B. abschliessender Zeilenumbruch) werden entfernt.
    """
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    logger.debug("%d Zeilen aus %s gelesen", len(lines), path)
    return lines


def build_parser(description: str, default_input: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "input",
        nargs="?",
        default=default_input,
        help=f"Path to the puzzle input (default: {default_input})",
    )
    parser.add_argument(
        "--example",
        action="store_true",
        help="Use the example from the puzzle statement instead of the input file.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def load_input(args: argparse.Namespace, example: Sequence[str]) -> List[str]:
    if args.example:
        logger.info("Verwende Beispiel-Eingabe")
        return list(example)
    return read_lines(args.input)


def format_answers(part_one: int, part_two: int) -> str:
    return f"Part one: {part_one}\nPart two: {part_two}"
