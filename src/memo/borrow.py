"""
Runtime-checked shared borrows.

Python cannot stop a caller from mutating an object it has handed out.
``Shared`` wraps a value and counts outstanding read-only borrows; its
mutation entry points refuse to run while any borrow is alive. ``MemoOnce``
takes a borrow for its lifetime when given a ``Shared``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

P = TypeVar("P")


class BorrowError(RuntimeError):
    """Mutation attempted while a value is borrowed, or use after release."""


class Shared(Generic[P]):
    __slots__ = ("_value", "_borrows")

    def __init__(self, value: P) -> None:
        self._value = value
        self._borrows = 0

    @property
    def value(self) -> P:
        return self._value

    @property
    def borrow_count(self) -> int:
        return self._borrows

    @property
    def is_borrowed(self) -> bool:
        return self._borrows > 0

    def borrow(self) -> "Borrow[P]":
        self._borrows += 1
        return Borrow(self)

    def _check_unborrowed(self, action: str) -> None:
        if self._borrows:
            raise BorrowError(
                f"cannot {action} {type(self._value).__name__}: "
                f"{self._borrows} outstanding borrow(s)"
            )

    def mutate(self) -> P:
        """Return the value for in-place mutation; only while unborrowed."""
        self._check_unborrowed("mutate")
        return self._value

    def update(self, op: Callable[[P], Any]) -> None:
        self._check_unborrowed("update")
        op(self._value)

    def set(self, value: P) -> None:
        self._check_unborrowed("replace")
        self._value = value

    def _release_one(self) -> None:
        self._borrows -= 1

    def __repr__(self) -> str:
        return f"Shared({self._value!r}, borrows={self._borrows})"


class Borrow(Generic[P]):
    """A read-only claim on a ``Shared`` value."""

    __slots__ = ("_owner", "_active")

    def __init__(self, owner: Shared[P]) -> None:
        self._owner = owner
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def get(self) -> P:
        if not self._active:
            raise BorrowError("borrow already released")
        return self._owner.value

    def release(self) -> None:
        if self._active:
            self._active = False
            self._owner._release_one()
            logger.debug(f"Released borrow of {type(self._owner.value).__name__}")

    def __enter__(self) -> "Borrow[P]":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()
