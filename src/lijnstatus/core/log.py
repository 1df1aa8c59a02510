import logging
import sys

import structlog


def processors() -> list:
    """The processor chain shared by the fallback setup and the CLI."""
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def _configure_structlog():
    """Configures structlog to produce JSON-formatted logs via stdlib."""
    if structlog.is_configured():
        return

    # Fallback configuration. Applications are free to configure logging themselves.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.set_name("lijnstatus_fallback_handler")

    root_logger = logging.getLogger()
    if "lijnstatus_fallback_handler" not in [h.get_name() for h in root_logger.handlers]:
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.INFO)

    structlog.configure(
        processors=processors(),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


_structlog_configured = False


def get_logger(name: str):
    """
    Returns a structlog logger for the given name.

    The logger is routed through the standard library's logging system, so the
    name ends up as the stdlib logger name (e.g. 'lijnstatus.stage.tokenize').
    """
    global _structlog_configured
    if not _structlog_configured:
        _configure_structlog()
        _structlog_configured = True
    return structlog.get_logger(name)
