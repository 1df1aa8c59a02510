"""
This module provides the `map_values` component for applying a 1-to-1
transformation to each item in a stream.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from ..core.stage import Stage, stage


def map_values(func: Callable[[Any], Any], *, name: Optional[str] = None) -> Stage:
    """
    Creates a stage that applies a function to each item in the stream.

    Args:
        func: The function to apply to each item.
        name: An optional name for the stage. Defaults to the function's name.

    Returns:
        A Stage configured to perform the mapping operation.
    """
    if name is None:
        name = getattr(func, "__name__", "map")
        if name == "<lambda>":
            name = "map"

    @stage(name=name, stage_type="itemwise")
    def _map_func(item: Any) -> Any:
        return func(item)

    return _map_func
