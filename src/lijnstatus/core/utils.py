import types
from typing import Any, Iterable


def ensure_iterable(obj: Any) -> Iterable[Any]:
    """
    Ensures that the given object is an iterable of stage outputs.
    Lists, iterators and generators are returned as is.
    Any other value (including a tuple or a string) is wrapped in a list so
    it is treated as a single item. `None` is treated as an empty list.
    """
    if obj is None:
        return []
    if isinstance(obj, (list, types.GeneratorType)):
        return obj
    return [obj]
