"""
Command line interface for lijnstatus.
"""
import logging
import sys
from typing import Optional

import click
import structlog

from .components.aggregate import POLICIES
from .components.keys import FILTER_ORDERS
from .core.errors import ConfigurationError
from .core.log import processors
from .status_pipeline import evaluate, evaluate_file


def _configure_logging(level: int) -> None:
    """Sends structured JSON logs to stderr so stdout carries only the status."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    structlog.configure(
        processors=processors(),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at INFO level.")
def cli(verbose: bool):
    """lijnstatus command-line interface."""
    _configure_logging(logging.INFO if verbose else logging.WARNING)


@cli.command()
@click.argument(
    "input_path", type=click.Path(exists=True, dir_okay=False, allow_dash=True), default="-"
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML configuration file.",
)
@click.option(
    "--policy",
    type=click.Choice(POLICIES),
    default=None,
    help="How an unparseable value affects the total (default: short_circuit).",
)
@click.option(
    "--order",
    type=click.Choice(FILTER_ORDERS),
    default=None,
    help="Normalize keys before or after matching the target (default: normalize_first).",
)
def run(input_path: str, config_path: Optional[str], policy: Optional[str], order: Optional[str]):
    """
    Compute the status line for a file of KEY=VALUE records.

    INPUT_PATH defaults to stdin. The whole input is read once before the
    pipeline runs.
    """
    try:
        if input_path == "-":
            text = click.get_text_stream("stdin").read()
            status = evaluate(text, config_path=config_path, policy=policy, order=order)
        else:
            status = evaluate_file(input_path, config_path=config_path, policy=policy, order=order)
    except ConfigurationError as e:
        raise click.ClickException(str(e))
    click.echo(status)


if __name__ == "__main__":
    cli()
