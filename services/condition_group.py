"""Combination of configured conditions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Tuple

from models.records import Shipment
from services.conditions import ConditionPlugin


@dataclass
class ConditionGroup:
    """Conditions joined with AND or OR; an empty group always passes."""

    conditions: List[Tuple[ConditionPlugin, Any]] = field(default_factory=list)
    operator: str = "AND"

    def __post_init__(self) -> None:
        self.operator = self.operator.upper()
        if self.operator not in {"AND", "OR"}:
            raise ValueError(f"Invalid condition group operator {self.operator!r}.")

    def add(self, plugin: ConditionPlugin, configuration: Any) -> None:
        self.conditions.append((plugin, configuration))

    def evaluate(self, shipment: Shipment) -> bool:
        if not self.conditions:
            return True
        results = (
            plugin.evaluate_shipment(configuration, shipment)
            for plugin, configuration in self.conditions
        )
        if self.operator == "AND":
            return all(results)
        return any(results)
