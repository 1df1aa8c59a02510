"""
This module provides the `split` component, which turns a single item into a
stream of multiple items.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Optional

from ..core.stage import Stage, stage


def split(
    func: Optional[Callable[[Any], Iterable[Any]]] = None,
    *,
    name: str = "split",
    **stage_kwargs,
) -> Stage:
    """
    Creates a stage that splits a single input item into multiple output items.

    Args:
        func: A function that takes one item and returns an iterable. If None,
              list-like items are flattened and anything else (including
              strings, bytes and dicts) passes through as a single item.
        name: An optional name for the stage.
        **stage_kwargs: Additional keyword arguments for the @stage decorator.

    Returns:
        A Stage that yields each element produced for an item, in order.
    """

    @stage(name=name, stage_type="itemwise", **stage_kwargs)
    def _split_func(item: Any) -> Iterator[Any]:
        if func:
            yield from func(item)
        elif hasattr(item, "__iter__") and not isinstance(item, (str, bytes, dict)):
            yield from item
        else:
            yield item

    return _split_func
