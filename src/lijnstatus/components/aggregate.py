"""
Sorting, parsing and summing selected entries into an aggregate.

Two propagation policies exist:

* ``short_circuit`` (default): the running total is a `Result`. The first
  value that does not parse turns it into a `Failure` that stays a failure;
  the remaining entries are only counted.
* ``corrupting``: an unparseable value is coerced to NaN and added like any
  number. Every later addition stays NaN and the total still comes out as a
  `Success`. This reproduces a known defect and exists for regression tests;
  never use it for real data.
"""
from __future__ import annotations

import functools
import re
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple, Union

from ..core.context import Context
from ..core.errors import ConfigurationError
from ..core.stage import Stage, aggregator_stage
from ..typing import NOTHING, Failure, Option, Result, Some, Success
from .tokens import Token

POLICIES = ("short_circuit", "corrupting")

_INTEGER = re.compile(r"\s*[+-]?[0-9]+\s*")


@dataclass(frozen=True)
class ParseFailure:
    """Why an aggregate is unavailable.

    `position` is the index of the failing entry after sorting; `skipped` is
    how many sorted entries came after it and were not summed.
    """

    key: str
    value: str
    position: int
    skipped: int = 0


Aggregate = Union[Success, Failure]


def sort_entries(entries: Iterable[Token]) -> List[Token]:
    """Stable sort by key, comparing code points."""
    return sorted(entries, key=lambda entry: entry.key)


def parse_int(value: str) -> Option[int]:
    """Parses an optionally signed run of ASCII digits, allowing surrounding whitespace."""
    if _INTEGER.fullmatch(value) is None:
        return NOTHING
    return Some(int(value))


def _add_entry(total: Result, indexed: Tuple[int, Token]) -> Result:
    position, entry = indexed

    def _add(acc: int) -> Result:
        parsed = parse_int(entry.value)
        if not parsed.is_present:
            return Failure(ParseFailure(entry.key, entry.value, position))
        return Success(acc + parsed.value)

    return total.bind(_add)


def sum_entries(entries: Iterable[Token]) -> Aggregate:
    """Sorts and sums entries, stopping at the first unparseable value."""
    ordered = sort_entries(entries)
    total = functools.reduce(_add_entry, enumerate(ordered), Success(0))
    if total.is_success:
        return total
    failure = total.error
    return Failure(replace(failure, skipped=len(ordered) - failure.position - 1))


def sum_entries_corrupting(entries: Iterable[Token]) -> Aggregate:
    """Sorts and sums entries, adding NaN for every unparseable value."""
    total: Union[int, float] = 0
    for entry in sort_entries(entries):
        total += parse_int(entry.value).get_or(float("nan"))
    return Success(total)


def aggregate(entries: Iterable[Token], policy: str = "short_circuit") -> Aggregate:
    if policy == "short_circuit":
        return sum_entries(entries)
    if policy == "corrupting":
        return sum_entries_corrupting(entries)
    raise ConfigurationError("aggregate.policy", policy, POLICIES)


def _check_policy(policy) -> str:
    if policy not in POLICIES:
        raise ConfigurationError("aggregate.policy", policy, POLICIES)
    return policy


def aggregate_entries(policy: Optional[str] = None, *, name: str = "aggregate") -> Stage:
    """
    Creates an aggregator stage that reduces all entries to one aggregate.

    Without an explicit `policy` the stage reads `aggregate.policy` from the
    run's configuration. The number of summed entries is stored in the
    context under 'entries_summed'.
    """
    if policy is not None:
        _check_policy(policy)

    @aggregator_stage(name=name)
    def _aggregate_func(context: Context, entries: List[Token]) -> Aggregate:
        resolved = policy if policy is not None else _check_policy(
            context.config.setting("aggregate.policy")
        )
        if resolved == "corrupting":
            context.logger.warning("corrupting_policy_in_use", entries=len(entries))

        result = aggregate(entries, resolved)
        if result.is_success:
            context.set("entries_summed", len(entries))
        else:
            failure = result.error
            context.set("entries_summed", failure.position)
            context.logger.warning(
                "aggregate_short_circuited",
                key=failure.key,
                value=failure.value,
                skipped=failure.skipped,
            )
        return result

    return _aggregate_func
