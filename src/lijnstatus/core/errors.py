from __future__ import annotations
from dataclasses import dataclass


class LijnstatusError(Exception):
    """Base class for all exceptions raised by lijnstatus."""

    pass


class ConfigurationError(LijnstatusError, ValueError):
    """Raised when a setting (delimiter, filter order, policy) has an unusable value."""

    def __init__(self, key: str, value: object, allowed=None):
        self.key = key
        self.value = value
        self.allowed = allowed
        message = f"Invalid value for '{key}': {value!r}"
        if allowed:
            message += f" (expected one of {list(allowed)})"
        super().__init__(message)


ERROR_MODES = ("fail", "skip", "retry")


@dataclass
class ErrorPolicy:
    """
    Defines how a Stage reacts when its function raises an exception.

    Data problems such as malformed lines or unparseable values never raise;
    they travel through the pipeline as values. This policy only covers
    genuine exceptions.

    Attributes:
        mode (str): The strategy to use when an error occurs.

            - **fail**: (Default) Stop execution and raise the exception.
            - **skip**: Drop the item that caused the error and continue.
            - **retry**: Re-run the stage on the failing item.

        retries (int): How many times to retry when mode is 'retry'.
        backoff (float): Seconds to wait per attempt between retries.
    """

    mode: str = "fail"
    retries: int = 3
    backoff: float = 0.1

    def __post_init__(self):
        if self.mode not in ERROR_MODES:
            raise ValueError(f"ErrorPolicy mode must be one of {list(ERROR_MODES)}")

        if self.mode == "retry" and self.retries <= 0:
            raise ValueError("Retries must be a positive integer for retry mode")

        if self.backoff < 0:
            raise ValueError("Backoff must not be negative")
