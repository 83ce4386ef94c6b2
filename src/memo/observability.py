"""Per-cell counters with schema enforcement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from jsonschema import Draft7Validator

_COUNTER = {"type": "integer", "minimum": 0}

STATS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["variant", "computations", "forced", "hits", "misses", "invalidations"],
    "properties": {
        "variant": {"type": "string", "enum": ["Memo", "MemoExt", "MemoOnce"]},
        "computations": _COUNTER,
        "forced": _COUNTER,
        "hits": _COUNTER,
        "misses": _COUNTER,
        "invalidations": _COUNTER,
        "ready": {"type": "boolean"},
    },
    "additionalProperties": False,
}

_validator = Draft7Validator(STATS_SCHEMA)


def validate_stats(payload: Dict[str, Any]) -> None:
    errors = sorted(_validator.iter_errors(payload), key=lambda e: list(e.path))
    if errors:
        messages = ", ".join(error.message for error in errors)
        raise ValueError(f"memo stats validation failed: {messages}")


@dataclass
class MemoStats:
    computations: int = 0
    forced: int = 0
    hits: int = 0
    misses: int = 0
    invalidations: int = 0

    def reset(self) -> None:
        self.computations = 0
        self.forced = 0
        self.hits = 0
        self.misses = 0
        self.invalidations = 0

    def to_dict(self, variant: str, ready: bool = False) -> Dict[str, Any]:
        payload = {
            "variant": variant,
            "computations": self.computations,
            "forced": self.forced,
            "hits": self.hits,
            "misses": self.misses,
            "invalidations": self.invalidations,
            "ready": ready,
        }
        validate_stats(payload)
        return payload
