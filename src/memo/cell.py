"""Slot and state machine shared by every memo variant."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .config import MemoConfig, get_config
from .memoize import computation_name, resolve_computation
from .observability import MemoStats

logger = logging.getLogger(__name__)

# Marks an empty slot; None is a legal cached value.
_ABSENT = object()

VARIANTS = ("Memo", "MemoExt", "MemoOnce")
VARIANT_MODULE = f"{__package__}.memo"


class CellState(Enum):
    STALE = "stale"
    FRESH = "fresh"


class MemoCell:
    """
    Holds at most one computed value.

    The slot is filled only by computing and emptied by ``clear()`` (or by a
    variant's mutation accessors). Subclasses decide where the parameter
    comes from.
    """

    __slots__ = ("_compute", "_slot", "_config", "_stats")

    def __init__(self, compute: Any, config: Optional[MemoConfig] = None) -> None:
        self._compute: Callable[[Any], Any] = resolve_computation(compute)
        self._slot: Any = _ABSENT
        self._config = config or get_config()
        self._stats = MemoStats()

    @property
    def state(self) -> CellState:
        return CellState.FRESH if self._slot is not _ABSENT else CellState.STALE

    @property
    def stats(self) -> MemoStats:
        return self._stats

    def stats_dict(self) -> Dict[str, Any]:
        return self._stats.to_dict(self._variant(), ready=self.is_ready())

    def _variant(self) -> str:
        # Subclasses report the library cell they extend.
        for klass in type(self).__mro__:
            if klass.__module__ == VARIANT_MODULE and klass.__name__ in VARIANTS:
                return klass.__name__
        return type(self).__name__

    def clear(self) -> None:
        """Drop any cached value; it is recomputed the next time it is needed."""
        if self._slot is _ABSENT:
            return
        self._slot = _ABSENT
        if self._config.track_stats:
            self._stats.invalidations += 1
        if self._config.trace:
            logger.debug(f"{self._label()} invalidated")

    def is_ready(self) -> bool:
        """True if the next ``get()`` will return a stored value without computing."""
        return self._slot is not _ABSENT

    def try_get(self) -> Any:
        """
        Return the cached value, or None if it would have to be computed.

        Never computes. When None is a possible output, check ``is_ready()``.
        """
        if self._slot is _ABSENT:
            return None
        return self._slot

    def _ensure(self, load_param: Callable[[], Any]) -> None:
        if self._slot is not _ABSENT:
            if self._config.track_stats:
                self._stats.hits += 1
            if self._config.trace:
                logger.debug(f"{self._label()} hit")
            return
        self._fill(load_param(), forced=False)

    def _force(self, param: Any) -> None:
        # Emptied first so a raising computation leaves the cell stale.
        self._slot = _ABSENT
        self._fill(param, forced=True)

    def _fill(self, param: Any, forced: bool) -> None:
        value = self._compute(param)
        self._slot = value
        if self._config.track_stats:
            self._stats.computations += 1
            if forced:
                self._stats.forced += 1
            else:
                self._stats.misses += 1
        if self._config.trace:
            kind = "forced" if forced else "lazy"
            logger.debug(f"{self._label()} computed ({kind})")

    def _label(self) -> str:
        return f"{type(self).__name__}[{computation_name(self._compute)}]"

    def __repr__(self) -> str:
        if self._slot is _ABSENT:
            return f"<{self._label()} stale>"
        return f"<{self._label()} fresh value={self._slot!r}>"
