"""
This module provides the `choose` component: map every item to an optional
value and keep only the present ones, in a single stage.
"""

from __future__ import annotations
import inspect
from typing import Any, Callable, Iterator, Optional

from ..core.context import Context
from ..core.stage import Stage, stage
from ..typing.option import filter_present


def choose(
    func: Callable[..., Any],
    *,
    name: str = "choose",
    counter: Optional[str] = None,
    **stage_kwargs,
) -> Stage:
    """
    Creates a stage that yields `option.value` for every item whose mapped
    option is present and drops the item otherwise.

    Args:
        func: Maps an item to a `Some` or `NOTHING`. If it declares a
            parameter named `context`, the run's Context is passed first.
        name: An optional name for the stage.
        counter: If given, the context counter incremented for every
            dropped item.
        **stage_kwargs: Additional keyword arguments for the @stage decorator.

    Returns:
        A Stage that yields the present values.
    """
    wants_context = "context" in inspect.signature(func).parameters

    @stage(name=name, **stage_kwargs)
    def _choose_func(context: Context, item: Any) -> Iterator[Any]:
        option = func(context, item) if wants_context else func(item)
        if counter and not option.is_present:
            context.inc(counter)
        yield from filter_present([option])

    return _choose_func
