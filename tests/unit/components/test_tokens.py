import pytest

from lijnstatus.components.tokens import Token, tokenize, tokenize_lines
from lijnstatus.core.errors import ConfigurationError
from lijnstatus.typing import NOTHING, Some


def test_tokenize_key_value():
    assert tokenize("ELEMENT01=3") == Some(Token("ELEMENT01", "3"))


def test_tokenize_splits_on_first_delimiter_only():
    assert tokenize("A=b=c") == Some(Token("A", "b=c"))


def test_tokenize_without_delimiter():
    assert tokenize("discarded:incorrect") is NOTHING


def test_tokenize_empty_line():
    assert tokenize("") is NOTHING


def test_tokenize_empty_key_and_value():
    assert tokenize("=x") == Some(Token("", "x"))
    assert tokenize("x=") == Some(Token("x", ""))


def test_tokenize_custom_delimiter():
    assert tokenize("a:b", ":") == Some(Token("a", "b"))
    assert tokenize("a=b", ":") is NOTHING


@pytest.mark.parametrize("line", ["A=1", "=", "a=b=c", " k = v ", "==x", "A=1\r"])
def test_tokenize_round_trip(line):
    token = tokenize(line).value
    assert token.join("=") == line
    assert token.key + "=" + token.value == line


def test_tokenize_lines_drops_and_counts_malformed_lines():
    results, context = tokenize_lines().collect(["A=1", "", "junk", "B=2"])
    assert results == [Token("A", "1"), Token("B", "2")]
    assert context.get("malformed_lines") == 2


def test_tokenize_lines_reads_delimiter_from_config():
    results, _ = tokenize_lines().collect(
        ["a:1", "b=2"], config={"records": {"delimiter": ":"}}
    )
    assert results == [Token("a", "1")]


def test_explicit_delimiter_wins_over_config():
    results, _ = tokenize_lines("=").collect(
        ["a:1", "b=2"], config={"records": {"delimiter": ":"}}
    )
    assert results == [Token("b", "2")]


def test_empty_delimiter_is_rejected():
    with pytest.raises(ConfigurationError):
        tokenize_lines("")


def test_empty_delimiter_from_config_is_rejected():
    with pytest.raises(ConfigurationError):
        tokenize_lines().collect(["a=1"], config={"records": {"delimiter": ""}})
