"""
This module defines the Pipeline class, the entry point for composing stages
and running data through them.

A Pipeline is an ordered sequence of Stages. Data flows through each stage
in turn; every run gets a fresh Context carrying the loaded configuration.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union
import time

from .context import Context
from .log import get_logger
from .runner import SerialRunner
from .stage import Stage
from ..config import Config, load_config


class Pipeline:
    """A sequence of stages that process data.

    Attributes:
        stages: A list of Stage objects that make up the pipeline.
        name: The name of the pipeline, used for logging.
        logger: A logger instance for the pipeline.
    """

    def __init__(
        self, stages: Optional[List[Stage]] = None, *, name: Optional[str] = None
    ):
        """Initializes a new Pipeline.

        Args:
            stages: A list of initial stages for the pipeline.
            name: An optional name for the pipeline.
        """
        self.stages: List[Stage] = list(stages or [])
        self.name = name or "Pipeline"
        self.logger = get_logger(f"lijnstatus.pipeline.{self.name}")

    @staticmethod
    def _as_stages(other: Any) -> List[Stage]:
        if isinstance(other, Stage):
            return [other]
        if isinstance(other, Pipeline):
            return list(other.stages)
        raise TypeError(f"Unsupported type for pipeline composition: {type(other)}")

    def _check_connection(self, incoming: List[Stage]) -> None:
        combined = self.stages + incoming
        if any(s.stage_type == "source" for s in combined[1:]):
            raise TypeError("A 'source' stage can only be the first stage of a pipeline.")

    def add(self, other: Union[Stage, "Pipeline"]) -> "Pipeline":
        """Appends a Stage, or all stages of a Pipeline, to this pipeline in place.

        Returns:
            The pipeline instance, allowing for method chaining.

        Raises:
            TypeError: If the object is not a `Stage` or `Pipeline`, or if a
                'source' stage would end up anywhere but first.
        """
        incoming = self._as_stages(other)
        self._check_connection(incoming)
        self.stages.extend(incoming)
        return self

    def __or__(self, other: Union[Stage, "Pipeline"]) -> "Pipeline":
        """Composes this pipeline with a Stage or Pipeline using the `|` operator.

        Returns:
            A new `Pipeline`; neither operand is modified.
        """
        incoming = self._as_stages(other)
        self._check_connection(incoming)
        return Pipeline(self.stages + incoming, name=self.name)

    def __rshift__(self, other: Union[Stage, "Pipeline"]) -> "Pipeline":
        """Provides an alternative `>>` operator for pipeline composition."""
        return self.__or__(other)

    def _build_context(
        self,
        config_path: Optional[str],
        config: Union[Config, Dict[str, Any], None],
    ) -> Context:
        loaded = load_config(config_path).merged(config)
        return Context(config=loaded, pipeline_name=self.name)

    def run(
        self,
        data: Optional[Iterable[Any]] = None,
        *,
        collect: bool = False,
        config_path: Optional[str] = None,
        config: Union[Config, Dict[str, Any], None] = None,
    ) -> Tuple[Union[List[Any], Iterable[Any]], Context]:
        """Runs the pipeline.

        Args:
            data: An iterable of input data. If the first stage is a 'source'
                stage, this can be `None`.
            collect: If `True`, the output is collected into a list. If `False`
                (default), a lazy iterator is returned.
            config_path: Path to a YAML configuration file made available to
                stages via `context.config`.
            config: Settings layered over the file contents (a dict or Config).

        Returns:
            A tuple of the pipeline's output and the run's `Context`.
        """
        self.logger.info("pipeline_run_started", stages=len(self.stages))
        start_time = time.perf_counter()
        context = self._build_context(config_path, config)

        if data is None:
            if not self.stages or self.stages[0].stage_type != "source":
                raise TypeError(
                    "Pipeline.run() requires a data argument unless the first stage is a source stage."
                )
            data = []

        stream: Iterable[Any] = data
        runner = SerialRunner()
        for stage_obj in self.stages:
            stage_obj.reset_metrics()
            stream = runner.run(stage_obj, context, stream)

        if collect:
            try:
                return list(stream), context
            finally:
                self._log_run_finished(start_time, collected=True)
        return self._finish_when_exhausted(stream, start_time), context

    def _finish_when_exhausted(self, stream: Iterable[Any], start_time: float) -> Iterator[Any]:
        try:
            yield from stream
        finally:
            self._log_run_finished(start_time, collected=False)

    def _log_run_finished(self, start_time: float, *, collected: bool) -> None:
        self.logger.info(
            "pipeline_run_finished",
            collected=collected,
            duration=round(time.perf_counter() - start_time, 4),
        )

    def collect(
        self,
        data: Optional[Iterable[Any]] = None,
        config_path: Optional[str] = None,
        config: Union[Config, Dict[str, Any], None] = None,
    ) -> Tuple[List[Any], Context]:
        """Runs the pipeline and collects all results into a list."""
        results, context = self.run(
            data, collect=True, config_path=config_path, config=config
        )
        return results, context  # type: ignore

    @property
    def metrics(self) -> dict[str, Any]:
        """A dictionary containing metrics for each stage in the pipeline."""
        return {"stages": {s.name: dict(s.metrics) for s in self.stages}}

    def __repr__(self) -> str:
        stage_names = " | ".join(s.name for s in self.stages)
        return f"Pipeline(name='{self.name}', stages=[{stage_names}])"
