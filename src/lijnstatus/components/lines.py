"""
Splitting raw record text into lines.
"""
from __future__ import annotations

from typing import List

from ..core.stage import Stage
from .split import split


def read_lines(text: str) -> List[str]:
    """
    Splits `text` on '\\n' only.

    Empty lines are kept, including a leading or trailing one, and nothing is
    trimmed (a '\\r' stays part of its line). The result always has
    ``text.count('\\n') + 1`` elements, so ``read_lines('') == ['']``.
    """
    return text.split("\n")


def split_lines(*, name: str = "read_lines") -> Stage:
    """Creates a stage that turns each raw text item into its lines."""
    return split(read_lines, name=name)
