"""
Key normalization and selection of the entries that feed the aggregate.

Two orderings are supported:

* ``normalize_first`` (default): keys are uppercased before matching, and the
  target is compared uppercased too, so ``element06`` matches ``ELEMENT``.
* ``filter_first``: the original key must contain the target exactly as
  configured; surviving keys are uppercased afterwards.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..core.context import Context
from ..core.errors import ConfigurationError
from ..core.stage import Stage
from ..typing import NOTHING, Option, Some
from .choose import choose
from .tokens import Token

FILTER_ORDERS = ("normalize_first", "filter_first")


def normalize_key(token: Token) -> Token:
    return replace(token, key=token.key.upper())


def matches_prefix(token: Token, target: str) -> bool:
    # Containment anywhere in the key, not only at position 0.
    return target in token.key


def select_entry(token: Token, target: str, order: str = "normalize_first") -> Option[Token]:
    """Returns the normalized token if its key matches `target` under `order`."""
    if order == "normalize_first":
        normalized = normalize_key(token)
        return Some(normalized) if matches_prefix(normalized, target.upper()) else NOTHING
    if order == "filter_first":
        return Some(normalize_key(token)) if matches_prefix(token, target) else NOTHING
    raise ConfigurationError("records.filter_order", order, FILTER_ORDERS)


def _check(key: str, value, allowed=None):
    if not isinstance(value, str) or (allowed and value not in allowed):
        raise ConfigurationError(key, value, allowed)
    return value


def select_entries(
    target: Optional[str] = None,
    order: Optional[str] = None,
    *,
    name: str = "select_entries",
) -> Stage:
    """
    Creates a stage that keeps tokens whose key contains `target`, yielding
    them with uppercased keys. Dropped tokens are counted as 'discarded_keys'.

    Unset arguments come from `records.target` and `records.filter_order`.
    """
    if target is not None:
        _check("records.target", target)
    if order is not None:
        _check("records.filter_order", order, FILTER_ORDERS)

    def _select(context: Context, token: Token) -> Option[Token]:
        config = context.config
        resolved_target = target if target is not None else _check(
            "records.target", config.setting("records.target")
        )
        resolved_order = order if order is not None else _check(
            "records.filter_order", config.setting("records.filter_order"), FILTER_ORDERS
        )
        return select_entry(token, resolved_target, resolved_order)

    return choose(_select, name=name, counter="discarded_keys")
