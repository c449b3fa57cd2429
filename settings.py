from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from models.measurement import WeightUnit


_LOG_LEVEL_ENV = "LOG_LEVEL"
_DEFAULT_WEIGHT_UNIT_ENV = "DEFAULT_WEIGHT_UNIT"


@dataclass(frozen=True)
class Settings:
    log_level: str
    default_weight_unit: WeightUnit


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


def _read_weight_unit(default: WeightUnit) -> WeightUnit:
    value = os.getenv(_DEFAULT_WEIGHT_UNIT_ENV)
    if value is None:
        return default
    candidate = value.strip().lower()
    if not candidate:
        return default
    try:
        return WeightUnit(candidate)
    except ValueError:
        return default


@lru_cache
def get_settings() -> Settings:
    return Settings(
        log_level=_read_log_level("INFO"),
        default_weight_unit=_read_weight_unit(WeightUnit.kilogram),
    )
