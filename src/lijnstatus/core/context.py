from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from .log import get_logger
from ..config import Config


class Context:
    """
    A dict-like context for sharing counters and state across pipeline stages.

    Stage functions receive it by declaring a parameter named ``context``.
    While a stage function runs, ``context.logger`` is that stage's logger.
    """

    def __init__(
        self,
        initial_data: Optional[Dict[str, Any]] = None,
        config: Optional[Config] = None,
        *,
        pipeline_name: Optional[str] = None,
    ):
        self.logger = get_logger("lijnstatus.context")
        self.worker_state: Dict[str, Any] = {}
        self.config = config if config is not None else Config({})
        self.pipeline_name = pipeline_name
        self._data: Dict[str, Any] = {}
        self._lock = threading.Lock()

        if initial_data:
            self.update(initial_data)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def update(self, other: Dict[str, Any]) -> None:
        with self._lock:
            for k, v in other.items():
                self._data[k] = v

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._data)

    def inc(self, key: str, amount: int = 1) -> int:
        with self._lock:
            current_value = self._data.get(key, 0)
            new_value = int(current_value) + amount
            self._data[key] = new_value
            return new_value

    def __repr__(self) -> str:
        return f"Context(pipeline={self.pipeline_name!r}, data={self.to_dict()})"
