"""
This module defines the `Stage` class and the `@stage` decorator.

A `Stage` is the building block of a `Pipeline`. It wraps a Python function
and records how that function is fed: one item at a time ('itemwise'), the
whole upstream stream at once ('aggregator'), or nothing at all ('source').
"""
from __future__ import annotations

import inspect
from contextlib import contextmanager
from types import GeneratorType
from typing import Any, Callable, Generator, Iterable, Iterator, List, Optional, Tuple, Union

from typeguard import typechecked

from .context import Context
from .errors import ErrorPolicy
from .hooks import Hooks
from .log import get_logger

STAGE_TYPES = ("itemwise", "aggregator", "source")


def _input_arity(func: Callable[..., Any]) -> int:
    """Counts the parameters of `func` that receive data, ignoring `context`."""
    try:
        sig = inspect.signature(func)
    except (ValueError, TypeError):
        # Some builtins have no introspectable signature; assume one input.
        return 1
    return sum(1 for name in sig.parameters if name != "context")


class Stage:
    """A single, executable step in a pipeline.

    Users typically do not create `Stage` objects directly, but rather by
    using the `@stage` or `@aggregator_stage` decorators or one of the
    component factories.

    Attributes:
        func: The callable object that this stage executes.
        name: The name of the stage, used for logging and metrics.
        stage_type: 'itemwise', 'aggregator' or 'source'.
        error_policy: How exceptions raised by `func` are handled.
        hooks: Callbacks for monitoring and tracing.
        metrics: Counters for items in/out, errors and total time of the
            latest run.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        *,
        name: Optional[str] = None,
        stage_type: str = "itemwise",
        error_policy: Optional[ErrorPolicy] = None,
        hooks: Optional[Hooks] = None,
    ):
        if stage_type not in STAGE_TYPES:
            raise ValueError(f"stage_type must be one of {list(STAGE_TYPES)}")

        self.func = func
        self.name = name or getattr(func, "__name__", "Stage")
        self.logger = get_logger(f"lijnstatus.stage.{self.name}")
        self.stage_type = stage_type
        self.error_policy = error_policy or ErrorPolicy()
        self.hooks = hooks or Hooks()
        self._inject_context = "context" in inspect.signature(func).parameters

        if _input_arity(func) == 0:
            self.stage_type = "source"

        self.metrics: dict[str, Any] = {}
        self.reset_metrics()

    def reset_metrics(self) -> None:
        """Zeroes the counters; called at the start of every pipeline run."""
        self.metrics = {
            "items_in": 0, "items_out": 0, "errors": 0, "time_total": 0.0,
        }

    def __repr__(self) -> str:
        return f"Stage(name='{self.name}', type='{self.stage_type}')"

    def __or__(self, other: Union["Stage", "Pipeline"]) -> "Pipeline":
        """Composes this stage with another using the `|` operator."""
        from .pipeline import Pipeline
        return Pipeline([self]) | other

    def __rshift__(self, other: Union["Stage", "Pipeline"]) -> "Pipeline":
        """Provides an alternative `>>` operator for composition."""
        from .pipeline import Pipeline
        return Pipeline([self]) | other

    def run(
        self,
        data: Optional[Iterable[Any]] = None,
        *,
        collect: bool = False,
        config_path: Optional[str] = None,
        config: Any = None,
    ) -> Tuple[Union[List[Any], Iterable[Any]], Context]:
        """Executes the stage as a single-stage pipeline."""
        from .pipeline import Pipeline
        return Pipeline([self], name=self.name).run(
            data, collect=collect, config_path=config_path, config=config
        )

    def collect(
        self,
        data: Optional[Iterable[Any]] = None,
        config_path: Optional[str] = None,
        config: Any = None,
    ) -> Tuple[List[Any], Context]:
        """Executes the stage and collects all results into a list."""
        from .pipeline import Pipeline
        return Pipeline([self], name=self.name).collect(
            data, config_path=config_path, config=config
        )

    @contextmanager
    def _bound_logger(self, context: Context) -> Iterator[None]:
        original_logger = context.logger
        context.logger = self.logger
        try:
            yield
        finally:
            context.logger = original_logger

    def _step_bound(self, context: Context, gen: Generator[Any, Any, Any]) -> Iterator[Any]:
        # A generator body only runs when stepped, so bind the logger per step.
        while True:
            with self._bound_logger(context):
                try:
                    item = next(gen)
                except StopIteration:
                    return
            yield item

    def _invoke(self, context: Context, *args: Any) -> Any:
        """Invokes the wrapped function, injecting context if required."""
        if not self._inject_context:
            return self.func(*args)

        with self._bound_logger(context):
            result = self.func(context, *args)
        if isinstance(result, GeneratorType):
            return self._step_bound(context, result)
        return result


def stage(
    _func: Optional[Callable[..., Any]] = None,
    *,
    name: Optional[str] = None,
    stage_type: str = "itemwise",
    error_policy: Optional[ErrorPolicy] = None,
    hooks: Optional[Hooks] = None,
) -> Union[Stage, Callable[[Callable[..., Any]], Stage]]:
    """A decorator to create a pipeline Stage from a function.

    It can be used with or without arguments. The function is wrapped with
    `typeguard.typechecked`, so its annotations are enforced at call time.

    Example:
        .. code-block:: python

            @stage
            def strip(line: str) -> str:
                return line.strip()

            @stage(error_policy=ErrorPolicy(mode="skip"))
            def parse(line: str) -> int:
                return int(line)

    Args:
        name: A custom name for the stage. Defaults to the function's name.
        stage_type: 'itemwise' (default), 'aggregator' or 'source'. A function
            without data parameters always becomes a source stage.
        error_policy: The error handling policy for this stage.
        hooks: A collection of hooks for monitoring and tracing.

    Returns:
        A `Stage` object if used as `@stage`, or a decorator that returns a
        `Stage` object if used as `@stage(...)`.
    """
    def wrapper(func: Callable[..., Any]) -> Stage:
        return Stage(
            typechecked(func),
            name=name or getattr(func, "__name__", None),
            stage_type=stage_type,
            error_policy=error_policy,
            hooks=hooks,
        )

    if _func is not None:
        return wrapper(_func)
    return wrapper


def aggregator_stage(
    _func: Optional[Callable[..., Any]] = None,
    *,
    name: Optional[str] = None,
    error_policy: Optional[ErrorPolicy] = None,
    hooks: Optional[Hooks] = None,
) -> Union[Stage, Callable[[Callable[..., Any]], Stage]]:
    """A decorator to create an aggregator stage.

    Equivalent to `@stage(stage_type="aggregator")`. Aggregator stages receive
    the entire input stream as a single list argument.

    Example:
        .. code-block:: python

            @aggregator_stage
            def count(items: List[str]) -> int:
                return len(items)
    """
    return stage(
        _func,
        name=name,
        stage_type="aggregator",
        error_policy=error_policy,
        hooks=hooks,
    )
