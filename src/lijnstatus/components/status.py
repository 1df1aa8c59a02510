"""
Turning an aggregate into the status line shown to the user.
"""
from __future__ import annotations

from ..core.stage import Stage
from .map import map_values

NO_VALUE_MESSAGE = "No value available"


def format_status(aggregate) -> str:
    """
    Maps an aggregate to its status message.

    Bucket boundaries belong to the next bucket: 25 is Running, 75 is Almost
    done, 100 is Done. The checks are ascending '<' comparisons ending in a
    catch-all, so a NaN total (false against every threshold) reads "Done".
    """
    if not aggregate.is_success:
        return NO_VALUE_MESSAGE

    value = aggregate.value
    if value < 25:
        return f"[{value}%] Started..."
    if value < 75:
        return f"[{value}%] Running..."
    if value < 100:
        return f"[{value}%] Almost done..."
    return "Done"


def format_aggregate(*, name: str = "format_status") -> Stage:
    """Creates a stage that formats each incoming aggregate."""
    return map_values(format_status, name=name)
