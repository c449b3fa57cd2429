"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from models.measurement import Weight


class ComparisonOperator(str, Enum):
    """Comparison modes understood by range conditions."""

    greater_than_or_equal = ">="
    greater_than = ">"
    less_than_or_equal = "<="
    less_than = "<"
    equal = "=="
    between_exclusive = "> <"
    between_inclusive = ">= <="

    @property
    def is_range(self) -> bool:
        return self in _RANGE_OPERATORS


_RANGE_OPERATORS = frozenset(
    {ComparisonOperator.between_exclusive, ComparisonOperator.between_inclusive}
)


@dataclass(frozen=True)
class WeightConditionConfig:
    """Validated configuration of a shipment weight condition."""

    operator: str
    weight: Optional[Weight] = None
    max_weight: Optional[Weight] = None


@dataclass(frozen=True, slots=True)
class Shipment:
    """The subject a shipment condition is evaluated against."""

    shipment_id: str
    weight: Optional[Weight] = None
