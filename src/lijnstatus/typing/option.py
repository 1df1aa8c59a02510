"""
An explicit optional value: either `Some(value)` or the `NOTHING` marker.

Absence is an ordinary value here, so stages can pass it around and drop it
with `filter_present` instead of checking for `None` at every step.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Some(Generic[T]):
    """A present value."""

    value: T

    @property
    def is_present(self) -> bool:
        return True

    def map(self, func: Callable[[T], U]) -> "Some[U]":
        return Some(func(self.value))

    def bind(self, func: Callable[[T], "Option[U]"]) -> "Option[U]":
        return func(self.value)

    def filter(self, predicate: Callable[[T], bool]) -> "Option[T]":
        return self if predicate(self.value) else NOTHING

    def get_or(self, default: Any) -> T:
        return self.value


class _Nothing:
    """The absent value. Use the `NOTHING` singleton."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_present(self) -> bool:
        return False

    def map(self, func: Callable[[Any], Any]) -> "_Nothing":
        return self

    def bind(self, func: Callable[[Any], Any]) -> "_Nothing":
        return self

    def filter(self, predicate: Callable[[Any], bool]) -> "_Nothing":
        return self

    def get_or(self, default: U) -> U:
        return default

    def __repr__(self) -> str:
        return "NOTHING"

    def __bool__(self) -> bool:
        return False


NOTHING = _Nothing()

Option = Union[Some[T], _Nothing]


def from_nullable(value: T | None) -> Option[T]:
    """Wraps a value that may be `None`."""
    return NOTHING if value is None else Some(value)


def filter_present(options: Iterable[Option[T]]) -> Iterator[T]:
    """Yields the values of the present options, in order, and drops the rest."""
    for option in options:
        if option.is_present:
            yield option.value
