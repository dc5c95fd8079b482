import docking
import navigation
import seating
import toboggan
from puzzle_cli import InputFormatError, format_answers, read_lines


def test_input_format_error_prefixes_line_number():
    error = InputFormatError("kaputt", 3)
    assert str(error) == "Zeile 3: kaputt"
    assert error.line_no == 3


def test_read_lines_drops_trailing_blank_lines(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("F10\nN3\n\n\n", encoding="utf-8")
    assert read_lines(str(path)) == ["F10", "N3"]


def test_format_answers():
    assert format_answers(7, 336) == "Part one: 7\nPart two: 336"


def test_toboggan_main_prints_example_answers(capsys):
    assert toboggan.main(["--example"]) == 0
    assert capsys.readouterr().out == "Part one: 7\nPart two: 336\n"


def test_seating_main_prints_example_answers(capsys):
    assert seating.main(["--example"]) == 0
    assert capsys.readouterr().out == "Part one: 37\nPart two: 26\n"


def test_navigation_main_reads_input_file(tmp_path, capsys):
    path = tmp_path / "day-12-input.txt"
    path.write_text("\n".join(navigation.EXAMPLE) + "\n", encoding="utf-8")
    assert navigation.main([str(path)]) == 0
    assert capsys.readouterr().out == "Part one: 25\nPart two: 286\n"


def test_docking_main_prints_example_answers(capsys):
    assert docking.main(["--example"]) == 0
    assert capsys.readouterr().out == "Part one: 165\nPart two: 208\n"


def test_main_returns_one_on_malformed_input(tmp_path, capsys):
    path = tmp_path / "day-14-input.txt"
    path.write_text("mem[8] = 11\n", encoding="utf-8")
    assert docking.main([str(path)]) == 1
    assert capsys.readouterr().out == ""


def test_main_returns_one_on_missing_file(tmp_path):
    assert seating.main([str(tmp_path / "missing.txt")]) == 1
