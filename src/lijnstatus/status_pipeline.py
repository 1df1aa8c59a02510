"""
The assembled status pipeline:

    raw text -> lines -> tokens -> entries -> aggregate -> status message

Every setting can be passed explicitly; anything left as None is read from
the run's configuration (a YAML file and/or a dict of overrides).
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .components import (
    aggregate_entries,
    format_aggregate,
    select_entries,
    split_lines,
    tokenize_lines,
)
from .config import Config
from .core.pipeline import Pipeline


def build_status_pipeline(
    *,
    delimiter: Optional[str] = None,
    target: Optional[str] = None,
    order: Optional[str] = None,
    policy: Optional[str] = None,
    name: str = "status",
) -> Pipeline:
    return Pipeline(
        [
            split_lines(),
            tokenize_lines(delimiter),
            select_entries(target, order),
            aggregate_entries(policy),
            format_aggregate(),
        ],
        name=name,
    )


def evaluate(
    text: str,
    *,
    config_path: Optional[str] = None,
    config: Union[Config, Dict[str, Any], None] = None,
    **settings: Any,
) -> str:
    """
    Runs the status pipeline over one raw text and returns its status message.

    `settings` are passed to `build_status_pipeline`. The same text and
    settings always produce the same message.
    """
    pipeline = build_status_pipeline(**settings)
    results, _ = pipeline.collect([text], config_path=config_path, config=config)
    # The aggregator emits exactly one aggregate, so exactly one message.
    return results[0]


def evaluate_file(path: Union[str, Path], **kwargs: Any) -> str:
    """Reads `path` once as UTF-8, keeping line endings as-is, and evaluates it."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        text = f.read()
    return evaluate(text, **kwargs)
