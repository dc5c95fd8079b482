import pytest

from docking import (
    EXAMPLE,
    EXAMPLE_FLOATING,
    FIELD,
    Mask,
    MaskFormatError,
    MissingMaskError,
    Program,
    Write,
    memory_sum,
    parse_programs,
    part_one,
    part_two,
    run_address_decoder,
    run_value_decoder,
)
from puzzle_cli import InputFormatError


def mask_with(symbols_from_right: str, fill: str = "X") -> Mask:
    """Maske, deren rechte Zeichen vorgegeben sind, Rest mit 'fill'."""
    return Mask.from_string(symbols_from_right.rjust(36, fill))


def test_mask_rightmost_symbol_is_bit_zero():
    mask = mask_with("1")
    assert mask.ones == 1
    assert mask.apply_to_value(0) == 1


def test_mask_leftmost_symbol_is_bit_35():
    mask = Mask.from_string("1" + "X" * 35)
    assert mask.ones == 1 << 35
    assert mask.apply_to_value(0) == 1 << 35


def test_mask_zero_clears_single_bit():
    mask = mask_with("0X")
    assert mask.apply_to_value(0b11) == 0b01


def test_mask_rejects_wrong_length():
    with pytest.raises(MaskFormatError):
        Mask.from_string("X" * 35)


def test_mask_rejects_unknown_symbol():
    with pytest.raises(MaskFormatError):
        Mask.from_string("2" + "X" * 35)


def test_apply_to_value_examples():
    mask = Mask.from_string("XXXXXXXXXXXXXXXXXXXXXXXXXXXXX1XXXX0X")
    assert mask.apply_to_value(11) == 73
    assert mask.apply_to_value(101) == 101
    assert mask.apply_to_value(0) == 64


def test_all_ones_mask_stays_within_36_bits():
    mask = Mask.from_string("1" * 36)
    assert mask.apply_to_value(0) == FIELD


def test_decode_addresses_example():
    mask = Mask.from_string("000000000000000000000000000000X1001X")
    assert sorted(mask.decode_addresses(42)) == [26, 27, 58, 59]


def test_decode_addresses_expands_to_two_power_k():
    mask = Mask.from_string("00000000000000000000000000000000X0XX")
    addresses = list(mask.decode_addresses(26))
    assert len(addresses) == 2 ** 3
    assert set(addresses) == {16, 17, 18, 19, 24, 25, 26, 27}
    # nur schwebende Bits unterscheiden sich
    assert {a & ~mask.floating for a in addresses} == {16}


def test_decode_addresses_without_floating_bits_is_single_address():
    mask = Mask.from_string("0" * 35 + "1")
    assert list(mask.decode_addresses(8)) == [9]


def test_parse_programs_groups_writes_by_mask():
    programs = parse_programs(EXAMPLE_FLOATING)
    assert len(programs) == 2
    assert programs[0].writes == (Write(42, 100),)
    assert programs[1].writes == (Write(26, 1),)


def test_parse_programs_rejects_write_before_mask():
    with pytest.raises(MissingMaskError):
        parse_programs(["mem[8] = 11"])


def test_parse_programs_rejects_garbage_line():
    with pytest.raises(InputFormatError) as excinfo:
        parse_programs([EXAMPLE[0], "mem[8] == 11"])
    assert excinfo.value.line_no == 2


def test_parse_programs_rejects_value_wider_than_36_bits():
    with pytest.raises(InputFormatError):
        parse_programs([EXAMPLE[0], f"mem[1] = {FIELD + 1}"])


def test_value_decoder_example_sum():
    memory = run_value_decoder(parse_programs(EXAMPLE))
    assert memory == {7: 101, 8: 64}
    assert part_one(parse_programs(EXAMPLE)) == 165


def test_address_decoder_example_sum():
    assert part_two(parse_programs(EXAMPLE_FLOATING)) == 208


def test_later_write_wins():
    writes = (Write(3, 5), Write(3, 9))
    # nur '0': Adresse bleibt unverändert
    assert run_address_decoder([Program(Mask.from_string("0" * 36), writes)]) == {3: 9}
    # nur 'X': Wert bleibt unverändert
    assert memory_sum(run_value_decoder([Program(Mask.from_string("X" * 36), writes)])) == 9


def test_each_run_starts_with_empty_memory():
    programs = parse_programs(EXAMPLE)
    assert run_value_decoder(programs) == run_value_decoder(programs)
    assert memory_sum({}) == 0
