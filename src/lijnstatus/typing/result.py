"""
A two-track result type: `Success(value)` or `Failure(error)`.

Once a computation is on the failure track, `map` and `bind` leave it there,
which is what lets a fold stop at the first bad value without raising.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    def map(self, func: Callable[[T], U]) -> "Success[U]":
        return Success(func(self.value))

    def bind(self, func: Callable[[T], "Result[U, Any]"]) -> "Result[U, Any]":
        return func(self.value)

    def get_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    error: E

    @property
    def is_success(self) -> bool:
        return False

    def map(self, func: Callable[[Any], Any]) -> "Failure[E]":
        return self

    def bind(self, func: Callable[[Any], Any]) -> "Failure[E]":
        return self

    def get_or(self, default: U) -> U:
        return default


Result = Union[Success[T], Failure[E]]
