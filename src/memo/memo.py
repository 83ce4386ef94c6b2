#!/usr/bin/env python3
"""
Memo Cells
Lazy evaluation and memoization over a single computed value

Implements:
- MemoExt: parameter supplied by the caller on every access
- Memo: owns the parameter, invalidates on any mutable access
- MemoOnce: holds a read-only reference to the parameter for its lifetime

Access is always an explicit call (get / try_get). Nothing here forwards
attribute access or operators to the cached value.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Callable, Optional

from .borrow import Borrow, BorrowError, Shared
from .cell import MemoCell
from .config import MemoConfig

logger = logging.getLogger(__name__)


def _identity(param: Any) -> Any:
    return param


class MemoExt(MemoCell):
    """
    Memoized value with the parameter provided externally.

    The simplest cell and the trickiest to use. It does not keep track of
    the parameter; pass it to every ``get()``, and call ``clear()`` yourself
    whenever the value must be recomputed (typically after changing the
    parameter).

    WARNING: a cached value is returned as-is no matter which parameter is
    passed. ``get(420)`` followed by ``get(42)`` returns the value computed
    from 420 until ``clear()`` is called. Prefer ``Memo`` or ``MemoOnce``
    unless you need this flexibility.
    """

    __slots__ = ()

    def __init__(self, compute: Any, config: Optional[MemoConfig] = None) -> None:
        super().__init__(compute, config)

    def ensure_ready(self, param: Any) -> None:
        """Compute and cache the value if it is not ready."""
        self._ensure(lambda: param)

    def force_update(self, param: Any) -> None:
        """
        Recompute the value now, discarding any cached one.

        ``clear()`` is usually better: it defers the work until the value
        is needed.
        """
        self._force(param)

    def get(self, param: Any) -> Any:
        """Return the cached value, computing it from ``param`` if needed."""
        self.ensure_ready(param)
        return self._slot

    ready = ensure_ready
    update = force_update


class Memo(MemoCell):
    """
    Memoized value that owns the parameter for its computation.

    The safest cell: parameter and value live together. Every accessor that
    can change the parameter (``mutate_param``, ``update_param``,
    ``set_param``) clears the cached value first, whether or not the
    parameter really changes.

    ``view`` maps the stored object to what the computation receives, so the
    stored object can be a wrapper around the actual parameter.

        memo = Memo(sum, [1, 2])
        memo.get()                       # 3
        memo.mutate_param().append(3)
        memo.update_param(lambda p: p.append(4))
        memo.get()                       # 10
    """

    __slots__ = ("_param", "_view")

    def __init__(
        self,
        compute: Any,
        param: Any,
        view: Optional[Callable[[Any], Any]] = None,
        config: Optional[MemoConfig] = None,
    ) -> None:
        super().__init__(compute, config)
        self._param = param
        self._view = view or _identity

    def _computation_param(self) -> Any:
        return self._view(self._param)

    def ensure_ready(self) -> None:
        """Compute and cache the value if it is not ready."""
        self._ensure(self._computation_param)

    def force_update(self) -> None:
        """Recompute the value now, discarding any cached one."""
        self._force(self._computation_param())

    def get(self) -> Any:
        """Return the cached value, computing it if needed."""
        self.ensure_ready()
        return self._slot

    ready = ensure_ready
    update = force_update

    @property
    def param(self) -> Any:
        return self._param

    def read_param(self) -> Any:
        """The stored parameter. Does not touch the cached value."""
        return self._param

    def mutate_param(self) -> Any:
        """
        Return the stored parameter for in-place mutation.

        Clears the cached value immediately; the cell cannot tell whether
        the caller ends up changing anything.
        """
        self.clear()
        return self._param

    param_mut = mutate_param

    def update_param(self, op: Callable[[Any], Any]) -> None:
        """Clear the cached value, then apply ``op`` to the parameter in place."""
        self.clear()
        op(self._param)

    def set_param(self, value: Any) -> None:
        """Clear the cached value and replace the parameter."""
        self.clear()
        self._param = value


class MemoOnce(MemoCell):
    """
    Memoized value holding a read-only reference to its parameter.

    Meant for short, one-off lazy scopes. There is no way to mutate the
    parameter through the cell. Pass a ``Shared`` to have that enforced:
    the cell borrows it until ``release()``, the end of a ``with`` block
    or the cell being garbage collected, and ``Shared.mutate()`` raises
    ``BorrowError`` meanwhile. A plain object is accepted too; then
    leaving it alone is up to you.

        text = Shared("My length is important!")
        with MemoOnce(len, text) as length:
            length.get()         # 23
        text.set("Not anymore!")
    """

    __slots__ = ("_param", "_borrow", "_finalizer", "_released", "__weakref__")

    def __init__(self, compute: Any, param: Any, config: Optional[MemoConfig] = None) -> None:
        super().__init__(compute, config)
        self._borrow: Optional[Borrow] = None
        self._finalizer: Optional[weakref.finalize] = None
        if isinstance(param, Shared):
            self._borrow = param.borrow()
            # Dropping the cell ends the borrow too.
            self._finalizer = weakref.finalize(self, self._borrow.release)
            self._param = None
        else:
            self._param = param
        self._released = False

    def _computation_param(self) -> Any:
        if self._released:
            raise BorrowError(f"{type(self).__name__} used after release")
        if self._borrow is not None:
            return self._borrow.get()
        return self._param

    def ensure_ready(self) -> None:
        """Compute and cache the value if it is not ready."""
        self._ensure(self._computation_param)

    def force_update(self) -> None:
        """Recompute the value now, discarding any cached one."""
        self._force(self._computation_param())

    def get(self) -> Any:
        """Return the cached value, computing it if needed."""
        self.ensure_ready()
        return self._slot

    ready = ensure_ready
    update = force_update

    @property
    def param(self) -> Any:
        return self._computation_param()

    def read_param(self) -> Any:
        return self._computation_param()

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """End the borrow. The cached value stays readable through ``try_get()``."""
        if self._released:
            return
        self._released = True
        if self._finalizer is not None:
            self._finalizer()
        self._param = None

    def __enter__(self) -> "MemoOnce":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


if __name__ == "__main__":
    # python -m memo.memo
    logging.basicConfig(level=logging.DEBUG)

    memo = Memo(sum, [1, 2], config=MemoConfig(trace=True))
    print(f"sum: {memo.get()}")
    memo.mutate_param().append(3)
    memo.update_param(lambda p: p.append(4))
    print(f"sum: {memo.get()}")
    print(f"stats: {memo.stats_dict()}")
