# lijnstatus.typing
# Tagged value types used to carry absence and failure through stages.

from .option import Some, NOTHING, Option, filter_present, from_nullable
from .result import Success, Failure, Result

__all__ = [
    "Some",
    "NOTHING",
    "Option",
    "filter_present",
    "from_nullable",
    "Success",
    "Failure",
    "Result",
]
