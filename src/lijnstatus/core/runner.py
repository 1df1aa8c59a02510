"""
The serial runner drives a single Stage over its input stream in the calling
thread. Item-wise stages are consumed lazily, so a pipeline of runners forms
a chain of generators that is only pulled when the final output is iterated.
"""
from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Iterable, Iterator, List

from .utils import ensure_iterable

if TYPE_CHECKING:
    from .context import Context
    from .stage import Stage


class SerialRunner:
    """Executes stages sequentially in the calling thread."""

    def run(
        self, stage: "Stage", context: "Context", iterable: Iterable[Any]
    ) -> Iterator[Any]:
        """
        Executes the stage. Delegates to the appropriate method based on the
        stage type.
        """
        if stage.stage_type == "source":
            # Source stages ignore the input iterable and generate their own data.
            return iter(ensure_iterable(stage._invoke(context)))
        if stage.stage_type == "aggregator":
            return self._run_aggregator(stage, context, iterable)
        return self._run_itemwise(stage, context, iterable)

    def _run_itemwise(
        self, stage: "Stage", context: "Context", iterable: Iterable[Any]
    ) -> Iterator[Any]:
        stage.logger.info("stream_started")
        total_items_in = 0
        total_items_out = 0
        stream_start_time = time.perf_counter()

        if stage.hooks.on_worker_init:
            context.worker_state = stage.hooks.on_worker_init(context) or {}

        try:
            for item in iterable:
                total_items_in += 1
                stage.metrics["items_in"] += 1
                item_start_time = time.perf_counter()
                attempts = 0

                if stage.hooks.before_stage:
                    stage.hooks.before_stage(stage, context, item)

                while True:
                    outputs: List[Any] = []
                    try:
                        # Materialize per item so a retry never re-emits
                        # outputs that were already yielded downstream.
                        outputs = list(ensure_iterable(stage._invoke(context, item)))
                    except Exception as e:
                        attempts += 1
                        stage.metrics["errors"] += 1
                        stage.logger.warning(
                            "item_error",
                            item_in=total_items_in,
                            error=str(e),
                            attempts=attempts,
                            duration=round(time.perf_counter() - item_start_time, 4),
                        )

                        if stage.hooks.on_error:
                            stage.hooks.on_error(stage, context, item, e, attempts)

                        policy = stage.error_policy
                        if policy.mode == "retry" and attempts <= policy.retries:
                            if policy.backoff > 0:
                                time.sleep(policy.backoff * attempts)
                            continue
                        if policy.mode == "skip":
                            break
                        raise
                    finally:
                        elapsed = time.perf_counter() - item_start_time
                        stage.metrics["time_total"] += elapsed
                        if stage.hooks.after_stage:
                            stage.hooks.after_stage(stage, context, item, outputs, elapsed)

                    stage.logger.debug(
                        "item_processed",
                        item_in=total_items_in,
                        items_out=len(outputs),
                        duration=round(time.perf_counter() - item_start_time, 4),
                    )
                    for res in outputs:
                        stage.metrics["items_out"] += 1
                        total_items_out += 1
                        yield res
                    break
        finally:
            if stage.hooks.on_worker_exit:
                stage.hooks.on_worker_exit(context)

            stage.logger.info(
                "stream_finished",
                items_in=total_items_in,
                items_out=total_items_out,
                errors=stage.metrics["errors"],
                duration=round(time.perf_counter() - stream_start_time, 4),
            )

    def _run_aggregator(
        self, stage: "Stage", context: "Context", iterable: Iterable[Any]
    ) -> Iterator[Any]:
        """
        Consumes the whole input stream, then calls the stage function once
        with the materialized list.
        """
        stage.logger.info("aggregator_started")
        start_time = time.perf_counter()
        materialized_items: List[Any] = []
        items_out = 0

        if stage.hooks.on_worker_init:
            context.worker_state = stage.hooks.on_worker_init(context) or {}

        try:
            materialized_items = list(iterable)
            stage.metrics["items_in"] += len(materialized_items)
            stage.logger.debug(
                "aggregation_input_materialized", items_in=len(materialized_items)
            )

            if stage.hooks.on_stream_end:
                stage.hooks.on_stream_end(context)

            for res in ensure_iterable(stage._invoke(context, materialized_items)):
                stage.metrics["items_out"] += 1
                items_out += 1
                yield res

        except Exception as e:
            stage.metrics["errors"] += 1
            stage.logger.error("aggregator_error", error=str(e))
            if stage.hooks.on_error:
                # For aggregators, the "item" is the whole list
                stage.hooks.on_error(stage, context, materialized_items, e, 1)
            raise
        finally:
            if stage.hooks.on_worker_exit:
                stage.hooks.on_worker_exit(context)

            duration = time.perf_counter() - start_time
            stage.metrics["time_total"] += duration
            stage.logger.info(
                "aggregator_finished",
                items_in=len(materialized_items),
                items_out=items_out,
                errors=stage.metrics["errors"],
                duration=round(duration, 4),
            )
