from .split import split
from .choose import choose
from .map import map_values
from .lines import read_lines, split_lines
from .tokens import Token, tokenize, tokenize_lines
from .keys import normalize_key, matches_prefix, select_entry, select_entries
from .aggregate import (
    ParseFailure,
    aggregate,
    aggregate_entries,
    parse_int,
    sort_entries,
    sum_entries,
    sum_entries_corrupting,
)
from .status import NO_VALUE_MESSAGE, format_status, format_aggregate

__all__ = [
    "split",
    "choose",
    "map_values",
    "read_lines",
    "split_lines",
    "Token",
    "tokenize",
    "tokenize_lines",
    "normalize_key",
    "matches_prefix",
    "select_entry",
    "select_entries",
    "ParseFailure",
    "aggregate",
    "aggregate_entries",
    "parse_int",
    "sort_entries",
    "sum_entries",
    "sum_entries_corrupting",
    "NO_VALUE_MESSAGE",
    "format_status",
    "format_aggregate",
]
