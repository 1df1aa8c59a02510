from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, Dict

if TYPE_CHECKING:
    from .stage import Stage
    from .context import Context


@dataclass
class Hooks:
    """
    A collection of hook functions to monitor and trace pipeline execution.

    Attributes:
        before_stage: Called just before a stage processes an item.
        after_stage: Called just after a stage has handled an item, with the
                     elapsed time in seconds.
        on_error: Called when a stage function raises, with the attempt number.
        on_worker_init: Called once before a stage starts consuming its input.
                        It can return a dictionary to be stored in `context.worker_state`.
        on_worker_exit: Called once when the stage has finished its input.
        on_stream_end: For aggregator stages, called after the input stream is
                       exhausted, but before the stage function is called.
    """
    before_stage: Optional[Callable[["Stage", "Context", Any], None]] = None
    after_stage: Optional[Callable[["Stage", "Context", Any, Any, float], None]] = None
    on_error: Optional[Callable[["Stage", "Context", Any, BaseException, int], None]] = None
    on_worker_init: Optional[Callable[["Context"], Dict[str, Any]]] = None
    on_worker_exit: Optional[Callable[["Context"], None]] = None
    on_stream_end: Optional[Callable[["Context"], None]] = None
