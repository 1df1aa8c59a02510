# lijnstatus.core
# The composable stage/pipeline machinery the status stages run on.

from .pipeline import Pipeline
from .stage import stage, Stage, aggregator_stage
from .context import Context
from .errors import ErrorPolicy, LijnstatusError, ConfigurationError
from .hooks import Hooks

__all__ = [
    "Pipeline",
    "stage",
    "aggregator_stage",
    "Stage",
    "Context",
    "ErrorPolicy",
    "LijnstatusError",
    "ConfigurationError",
    "Hooks",
]
