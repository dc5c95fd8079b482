from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from puzzle_cli import (
    InputFormatError,
    PuzzleError,
    build_parser,
    format_answers,
    read_lines,
    setup_logging,
)

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "day-14-input.txt"

# Bit-Konvention: Bit 0 = niederwertigstes Bit = letztes Zeichen des Masken-Strings.
WIDTH = 36
FIELD = (1 << WIDTH) - 1

MASK_LINE = re.compile(r"^mask\s*=\s*(\S+)$")
MEM_LINE = re.compile(r"^mem\[(\d+)\]\s*=\s*(\d+)$")

EXAMPLE: Tuple[str, ...] = (
    "mask = XXXXXXXXXXXXXXXXXXXXXXXXXXXXX1XXXX0X",
    "mem[8] = 11",
    "mem[7] = 101",
    "mem[8] = 0",
)

EXAMPLE_FLOATING: Tuple[str, ...] = (
    "mask = 000000000000000000000000000000X1001X",
    "mem[42] = 100",
    "mask = 00000000000000000000000000000000X0XX",
    "mem[26] = 1",
)

Memory = Dict[int, int]     # sparse: Adresse -> Wert, nie geschriebene Adressen fehlen


class MaskFormatError(InputFormatError):
    """Maske hat nicht 36 Zeichen aus 0/1/X."""


class MissingMaskError(InputFormatError):
    """Speicherzugriff vor der ersten Maske."""


@dataclass(frozen=True)
class Mask:
    """
    Maske als drei disjunkte Bitfelder (jeweils WIDTH Bits breit):
      - ones:     Positionen mit '1'
      - zeros:    Positionen mit '0'
      - floating: Positionen mit 'X'
    """
    ones: int
    zeros: int
    floating: int

    @classmethod
    def from_string(cls, text: str) -> "Mask":
        if len(text) != WIDTH:
            raise MaskFormatError(f"Maske hat {len(text)} statt {WIDTH} Zeichen.")
        bits = {"0": 0, "1": 0, "X": 0}
        # reversed: Index i entspricht Bit i (2**i)
        for i, ch in enumerate(reversed(text)):
            if ch not in bits:
                raise MaskFormatError(f"Ungültiges Maskenzeichen {ch!r}.")
            bits[ch] |= 1 << i
        return cls(ones=bits["1"], zeros=bits["0"], floating=bits["X"])

    def floating_bits(self) -> List[int]:
        return [1 << i for i in range(WIDTH) if self.floating >> i & 1]

    # Decoder Version 1: Maske wirkt auf den Wert
    def apply_to_value(self, value: int) -> int:
        """'0'/'1' überschreiben das Bit, 'X' lässt es unverändert."""
        return (value | self.ones) & ~self.zeros & FIELD

    # Decoder Version 2: Maske wirkt auf die Adresse
    def decode_addresses(self, address: int) -> Iterator[int]:
        """
        '0' lässt das Adressbit unverändert, '1' setzt es, 'X' ist schwebend.
        Liefert alle 2**k konkreten Adressen (k = Anzahl 'X').
        """
        base = (address | self.ones) & ~self.floating & FIELD
        # alle Teilmengen der schwebenden Bits, von floating abwärts bis 0
        subset = self.floating
        while True:
            yield base | subset
            if subset == 0:
                return
            subset = (subset - 1) & self.floating


@dataclass(frozen=True)
class Write:
    address: int
    value: int


@dataclass(frozen=True)
class Program:
    """Eine Maske samt den folgenden Schreibzugriffen."""
    mask: Mask
    writes: Tuple[Write, ...]


def _check_width(number: int, what: str, line_no: int) -> int:
    if number > FIELD:
        raise InputFormatError(f"{what} {number} passt nicht in {WIDTH} Bits.", line_no)
    return number


# Parsing
def parse_programs(lines: Iterable[str]) -> List[Program]:
    programs: List[Program] = []
    mask: Optional[Mask] = None
    writes: List[Write] = []

    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        mask_match = MASK_LINE.match(line)
        if mask_match:
            if mask is not None:
                programs.append(Program(mask, tuple(writes)))
            try:
                mask = Mask.from_string(mask_match.group(1))
            except MaskFormatError as exc:
                raise MaskFormatError(str(exc), line_no) from exc
            writes = []
            continue
        mem_match = MEM_LINE.match(line)
        if not mem_match:
            raise InputFormatError(f"Unbekannte Anweisung {line!r}.", line_no)
        if mask is None:
            raise MissingMaskError("Schreibzugriff vor der ersten Maske.", line_no)
        writes.append(Write(
            address=_check_width(int(mem_match.group(1)), "Adresse", line_no),
            value=_check_width(int(mem_match.group(2)), "Wert", line_no),
        ))

    if mask is not None:
        programs.append(Program(mask, tuple(writes)))
    return programs


# Emulation, Speicher wird pro Lauf neu angelegt
def run_value_decoder(programs: Iterable[Program]) -> Memory:
    memory: Memory = {}
    for program in programs:
        for write in program.writes:
            memory[write.address] = program.mask.apply_to_value(write.value)
    return memory


def run_address_decoder(programs: Iterable[Program]) -> Memory:
    memory: Memory = {}
    for program in programs:
        logger.debug("Maske mit %d schwebenden Bits",
                     len(program.mask.floating_bits()))
        for write in program.writes:
            for address in program.mask.decode_addresses(write.address):
                memory[address] = write.value
    return memory


def memory_sum(memory: Memory) -> int:
    return sum(memory.values())


def part_one(programs: List[Program]) -> int:
    return memory_sum(run_value_decoder(programs))


def part_two(programs: List[Program]) -> int:
    memory = run_address_decoder(programs)
    logger.info("%d Adressen beschrieben", len(memory))
    return memory_sum(memory)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser("Day 14: Docking Data", DEFAULT_INPUT).parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.example:
            # zwei Beispiele: Teil 2 hätte mit dem ersten 2**34 Adressen
            answers = (part_one(parse_programs(EXAMPLE)),
                       part_two(parse_programs(EXAMPLE_FLOATING)))
        else:
            programs = parse_programs(read_lines(args.input))
            logger.info("%d Programme geladen", len(programs))
            answers = (part_one(programs), part_two(programs))
    except (PuzzleError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    print(format_answers(*answers))
    return 0


if __name__ == "__main__":
    sys.exit(main())
