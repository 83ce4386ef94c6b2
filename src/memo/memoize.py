"""Computation contract for memoized values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable


class Memoize(ABC):
    """
    Represents a computation that is to be memoized.

    Subclass this with a type representing the *output* of your computation
    and implement ``memoize`` to say how it is built from the parameter. Then
    wrap the subclass in a ``Memo``, ``MemoExt`` or ``MemoOnce``.

    Notes:
    - More than one input: use a tuple or a small dataclass as the parameter.
    - No input at all: the parameter is ``None``.
    - The parameter can be variable-length (a list, a str, a memoryview).
    - ``memoize`` must be a pure function of the parameter. If it can fail,
      encode the failure in the returned value; the cells have no error channel.

    Example:
        class Repeater(Memoize):
            def __init__(self, text):
                self.text = text

            @classmethod
            def memoize(cls, param):
                string, count = param
                return cls(string * count)

        memo = Memo(Repeater, ("abc", 3))
        memo.get().text  # "abcabcabc"
    """

    @classmethod
    @abstractmethod
    def memoize(cls, param: Any) -> "Memoize":
        raise NotImplementedError


def resolve_computation(compute: Any) -> Callable[[Any], Any]:
    """Turn a ``Memoize`` subclass or a plain callable into ``param -> value``."""
    if isinstance(compute, type) and issubclass(compute, Memoize):
        return compute.memoize
    if callable(compute):
        return compute
    raise TypeError(
        f"computation must be a Memoize subclass or a callable, got {type(compute).__name__}"
    )


def computation_name(compute: Callable[[Any], Any]) -> str:
    """Readable name for log lines and reprs."""
    owner = getattr(compute, "__self__", None)
    if isinstance(owner, type):
        return owner.__name__
    return getattr(compute, "__qualname__", None) or type(compute).__name__
