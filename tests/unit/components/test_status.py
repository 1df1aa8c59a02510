import pytest

from lijnstatus.components.aggregate import ParseFailure
from lijnstatus.components.status import NO_VALUE_MESSAGE, format_aggregate, format_status
from lijnstatus.typing import Failure, Success


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "[0%] Started..."),
        (24, "[24%] Started..."),
        (25, "[25%] Running..."),
        (44, "[44%] Running..."),
        (74, "[74%] Running..."),
        (75, "[75%] Almost done..."),
        (99, "[99%] Almost done..."),
        (100, "Done"),
        (150, "Done"),
    ],
)
def test_thresholds(value, expected):
    assert format_status(Success(value)) == expected


def test_negative_total_is_started():
    assert format_status(Success(-5)) == "[-5%] Started..."


def test_failure_has_its_own_message():
    message = format_status(Failure(ParseFailure("E1", "x", 0)))
    assert message == NO_VALUE_MESSAGE
    assert not any(ch.isdigit() for ch in message)
    assert "%" not in message


def test_nan_falls_through_to_done():
    assert format_status(Success(float("nan"))) == "Done"


def test_format_aggregate_stage():
    results, _ = format_aggregate().collect([Success(80), Failure(ParseFailure("E", "x", 0))])
    assert results == ["[80%] Almost done...", NO_VALUE_MESSAGE]
    assert format_aggregate().name == "format_status"
