from .core.pipeline import Pipeline
from .core.stage import Stage, stage, aggregator_stage
from .core.context import Context
from .core.errors import ErrorPolicy, LijnstatusError, ConfigurationError
from .core.hooks import Hooks
from .config import Config, load_config

from .components.choose import choose
from .components.map import map_values
from .components.split import split
from .components.lines import read_lines
from .components.tokens import Token, tokenize
from .components.keys import normalize_key, matches_prefix
from .components.aggregate import ParseFailure, aggregate
from .components.status import NO_VALUE_MESSAGE, format_status
from .status_pipeline import build_status_pipeline, evaluate, evaluate_file

__all__ = [
    "Pipeline",
    "Stage",
    "stage",
    "aggregator_stage",
    "Context",
    "ErrorPolicy",
    "LijnstatusError",
    "ConfigurationError",
    "Hooks",
    "Config",
    "load_config",
    "choose",
    "map_values",
    "split",
    "read_lines",
    "Token",
    "tokenize",
    "normalize_key",
    "matches_prefix",
    "ParseFailure",
    "aggregate",
    "NO_VALUE_MESSAGE",
    "format_status",
    "build_status_pipeline",
    "evaluate",
    "evaluate_file",
]

__version__ = "0.1.0"
