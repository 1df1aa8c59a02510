"""
Parsing record lines into key/value tokens.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.context import Context
from ..core.errors import ConfigurationError
from ..core.stage import Stage
from ..typing import NOTHING, Option, Some
from .choose import choose


@dataclass(frozen=True)
class Token:
    """A key/value pair parsed from exactly one line."""

    key: str
    value: str

    def join(self, delimiter: str = "=") -> str:
        return f"{self.key}{delimiter}{self.value}"


def tokenize(line: str, delimiter: str = "=") -> Option[Token]:
    """
    Splits `line` on the first occurrence of `delimiter`.

    Everything after the first delimiter belongs to the value, so
    ``tokenize("A=b=c")`` is ``Some(Token("A", "b=c"))``. A line without the
    delimiter (the empty line included) yields `NOTHING`.
    """
    key, found, value = line.partition(delimiter)
    if not found:
        return NOTHING
    return Some(Token(key, value))


def check_delimiter(delimiter) -> str:
    if not isinstance(delimiter, str) or not delimiter:
        raise ConfigurationError("records.delimiter", delimiter)
    return delimiter


def tokenize_lines(delimiter: Optional[str] = None, *, name: str = "tokenize") -> Stage:
    """
    Creates a stage that yields a `Token` for every line containing the
    delimiter and drops the others, counting them as 'malformed_lines'.

    Without an explicit `delimiter` the stage reads `records.delimiter` from
    the run's configuration.
    """
    if delimiter is not None:
        check_delimiter(delimiter)

    def _tokenize(context: Context, line: str) -> Option[Token]:
        if delimiter is not None:
            return tokenize(line, delimiter)
        return tokenize(line, check_delimiter(context.config.setting("records.delimiter")))

    return choose(_tokenize, name=name, counter="malformed_lines")
