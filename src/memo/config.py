"""Configuration loader for memo cells."""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class MemoConfig:
    trace: bool = False
    track_stats: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MemoConfig":
        log_level = str(data.get("log_level", "WARNING")).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {log_level}")
        return cls(
            trace=_to_bool(data.get("trace", False)),
            track_stats=_to_bool(data.get("track_stats", True)),
            log_level=log_level,
        )


ENV_MAP = {
    "trace": "MEMO_TRACE",
    "track_stats": "MEMO_TRACK_STATS",
    "log_level": "MEMO_LOG_LEVEL",
}


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Expected a boolean, got {value!r}")


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def merge_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(config_data)

    for key, env_name in ENV_MAP.items():
        if env_name not in os.environ:
            continue
        merged[key] = os.environ[env_name]

    return merged


DEFAULT_CONFIG_PATH = Path(__file__).with_name("memo.defaults.yml")


def load_config(config_path: Optional[str | Path] = DEFAULT_CONFIG_PATH) -> MemoConfig:
    """Load YAML config, then apply env overrides. ``None`` skips the file."""
    data: Dict[str, Any] = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        data = load_yaml(path)

    data = merge_env_overrides(data)
    return MemoConfig.from_dict(data)


_current = MemoConfig()


def get_config() -> MemoConfig:
    return _current


def set_config(config: MemoConfig) -> MemoConfig:
    """Install ``config`` as the process default; returns the previous one."""
    global _current
    previous = _current
    _current = config
    return previous


def configure_logging(config: Optional[MemoConfig] = None) -> None:
    config = config or get_config()
    logging.getLogger("memo").setLevel(config.log_level)
