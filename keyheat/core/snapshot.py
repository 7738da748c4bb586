"""Statistics snapshot consumed by the heatmap, as produced by the stats backend."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


def _as_int(value: Any, name: str) -> int:
    """Coerce a numeric field, falling back to 0 on missing or malformed data."""
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Malformed %s value %r; using 0", name, value)
        return 0


def _as_float(value: Any, name: str) -> float:
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Malformed %s value %r; using 0.0", name, value)
        return 0.0


@dataclass(frozen=True)
class KeyStats:
    key_name: str
    count: int
    percentage: float

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "KeyStats":
        return cls(
            key_name=str(raw.get("key_name", "")),
            count=_as_int(raw.get("count"), "count"),
            percentage=_as_float(raw.get("percentage"), "percentage"),
        )


@dataclass(frozen=True)
class ComboStats:
    combo: str
    count: int

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ComboStats":
        return cls(combo=str(raw.get("combo", "")), count=_as_int(raw.get("count"), "count"))


@dataclass(frozen=True)
class HourlyStats:
    hour: int
    count: int

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "HourlyStats":
        return cls(hour=_as_int(raw.get("hour"), "hour"), count=_as_int(raw.get("count"), "count"))


@dataclass(frozen=True)
class DailyStats:
    day: str
    count: int

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "DailyStats":
        return cls(day=str(raw.get("day", "")), count=_as_int(raw.get("count"), "count"))


def _optional(factory, raw: Any):
    if isinstance(raw, dict):
        return factory(raw)
    return None


def _list_of(factory, raw: Any) -> tuple:
    if not isinstance(raw, list):
        return ()
    return tuple(factory(item) for item in raw if isinstance(item, dict))


def sanitize_frequencies(raw: Any) -> Dict[str, int]:
    """Coerce an upstream key-frequency mapping into ``{str: int >= 0}``.

    Negative counts are clamped to 0 and non-numeric values become 0; both are
    logged as data faults rather than raised.
    """
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        logger.warning("key_frequency_map is not a mapping (%s); ignoring it", type(raw).__name__)
        return {}

    clean: Dict[str, int] = {}
    for key, value in raw.items():
        name = key if isinstance(key, str) else str(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning("Non-numeric count %r for key %r; using 0", value, name)
            clean[name] = 0
            continue
        if isinstance(value, float):
            if not math.isfinite(value):
                logger.warning("Non-finite count %r for key %r; using 0", value, name)
                clean[name] = 0
                continue
            value = int(value)
        if value < 0:
            logger.warning("Negative count %d for key %r; clamping to 0", value, name)
            value = 0
        clean[name] = value
    return clean


@dataclass(frozen=True)
class AllStats:
    total_keys: int = 0
    total_combos: int = 0
    total_sessions: int = 0
    total_time_minutes: float = 0.0
    most_pressed_key: Optional[KeyStats] = None
    most_pressed_combo: Optional[ComboStats] = None
    top_keys: tuple = ()
    top_combos: tuple = ()
    spacebar_count: int = 0
    enter_count: int = 0
    backspace_count: int = 0
    delete_count: int = 0
    escape_count: int = 0
    tab_count: int = 0
    arrow_keys_count: int = 0
    modifier_keys_count: int = 0
    letter_keys_count: int = 0
    number_keys_count: int = 0
    special_keys_count: int = 0
    hourly_distribution: tuple = ()
    daily_distribution: tuple = ()
    most_active_hour: Optional[HourlyStats] = None
    most_active_day: Optional[DailyStats] = None
    average_keys_per_session: float = 0.0
    average_typing_speed: float = 0.0
    max_typing_speed: float = 0.0
    key_frequency_map: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    first_recorded: Optional[str] = None
    last_recorded: Optional[str] = None
    unique_keys_used: int = 0
    keys_per_minute_avg: float = 0.0

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "AllStats":
        """Build a snapshot from the decoded JSON document; missing fields keep their defaults."""
        int_fields = (
            "total_keys",
            "total_combos",
            "total_sessions",
            "spacebar_count",
            "enter_count",
            "backspace_count",
            "delete_count",
            "escape_count",
            "tab_count",
            "arrow_keys_count",
            "modifier_keys_count",
            "letter_keys_count",
            "number_keys_count",
            "special_keys_count",
            "unique_keys_used",
        )
        float_fields = (
            "total_time_minutes",
            "average_keys_per_session",
            "average_typing_speed",
            "max_typing_speed",
            "keys_per_minute_avg",
        )
        values: Dict[str, Any] = {}
        for name in int_fields:
            if raw.get(name) is not None:
                values[name] = _as_int(raw[name], name)
        for name in float_fields:
            if raw.get(name) is not None:
                values[name] = _as_float(raw[name], name)
        for name in ("first_recorded", "last_recorded"):
            if raw.get(name) is not None:
                values[name] = str(raw[name])

        return cls(
            most_pressed_key=_optional(KeyStats.from_dict, raw.get("most_pressed_key")),
            most_pressed_combo=_optional(ComboStats.from_dict, raw.get("most_pressed_combo")),
            top_keys=_list_of(KeyStats.from_dict, raw.get("top_keys")),
            top_combos=_list_of(ComboStats.from_dict, raw.get("top_combos")),
            hourly_distribution=_list_of(HourlyStats.from_dict, raw.get("hourly_distribution")),
            daily_distribution=_list_of(DailyStats.from_dict, raw.get("daily_distribution")),
            most_active_hour=_optional(HourlyStats.from_dict, raw.get("most_active_hour")),
            most_active_day=_optional(DailyStats.from_dict, raw.get("most_active_day")),
            key_frequency_map=MappingProxyType(sanitize_frequencies(raw.get("key_frequency_map"))),
            **values,
        )


def load_snapshot(path: Path) -> AllStats:
    """Read a statistics JSON document from *path*."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path.name}: invalid JSON ({e})") from e
    if not isinstance(payload, dict):
        raise ValueError(f"{path.name}: expected a JSON object")
    stats = AllStats.from_dict(payload)
    logger.info(
        "Loaded snapshot %s: %d keys, %d distinct key names",
        path,
        stats.total_keys,
        len(stats.key_frequency_map),
    )
    return stats
