import pytest

from lijnstatus.components.lines import read_lines, split_lines


@pytest.mark.parametrize(
    "text",
    [
        "",
        "\n",
        "a",
        "a\nb",
        "\nELEMENT01=3\n",
        "a\n\n\nb\n",
        "a\r\nb",
    ],
)
def test_line_count_is_one_plus_newlines(text):
    assert len(read_lines(text)) == 1 + text.count("\n")


def test_empty_text_is_one_empty_line():
    assert read_lines("") == [""]


def test_leading_and_trailing_empty_lines_are_kept():
    assert read_lines("\nA=1\n") == ["", "A=1", ""]


def test_lines_are_not_trimmed():
    assert read_lines("  A=1 \r\nB=2") == ["  A=1 \r", "B=2"]


def test_order_is_preserved():
    assert read_lines("c\nb\na") == ["c", "b", "a"]


def test_split_lines_stage():
    results, _ = split_lines().collect(["x\ny", "z"])
    assert results == ["x", "y", "z"]
