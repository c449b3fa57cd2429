"""Condition plugins and the registry that resolves them by id."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from models.measurement import Weight
from models.records import ComparisonOperator, Shipment, WeightConditionConfig
from services.errors import (
    ConditionConfigurationError,
    InvalidRangeBound,
    MissingRangeBound,
    UnknownOperator,
)

logger = logging.getLogger(__name__)

_OPERATOR_LABELS: Dict[ComparisonOperator, str] = {
    ComparisonOperator.greater_than_or_equal: "Greater than or equal",
    ComparisonOperator.greater_than: "Greater than",
    ComparisonOperator.less_than_or_equal: "Less than or equal",
    ComparisonOperator.less_than: "Less than",
    ComparisonOperator.equal: "Equals",
}

_SINGLE_BOUND_CHECKS: Dict[ComparisonOperator, Callable[[Weight, Weight], bool]] = {
    ComparisonOperator.greater_than_or_equal: Weight.greater_than_or_equal,
    ComparisonOperator.greater_than: Weight.greater_than,
    ComparisonOperator.less_than_or_equal: Weight.less_than_or_equal,
    ComparisonOperator.less_than: Weight.less_than,
    ComparisonOperator.equal: Weight.equals,
}


def _resolve_operator(operator: object) -> ComparisonOperator:
    try:
        return ComparisonOperator(operator)
    except ValueError as exc:
        raise UnknownOperator(operator) from exc


class ConditionPlugin(ABC):
    """Base class for conditions evaluated against a shipment."""

    plugin_id: str = ""
    label: str = ""
    category: str = ""
    entity_type: str = ""

    @abstractmethod
    def default_configuration(self) -> Any:
        """Configuration used before anything has been submitted."""

    def comparison_operators(self) -> Dict[str, str]:
        return {operator.value: label for operator, label in _OPERATOR_LABELS.items()}

    @abstractmethod
    def configure(self, operator: str, *values: Any) -> Any:
        """Validate submitted values; raise ConditionConfigurationError on rejection."""

    @abstractmethod
    def evaluate(self, configuration: Any, subject: Any) -> bool:
        """Decide whether ``subject`` satisfies ``configuration``."""

    @abstractmethod
    def evaluate_shipment(self, configuration: Any, shipment: Shipment) -> bool:
        """Evaluate against the relevant attribute of ``shipment``."""


class ShipmentWeightCondition(ConditionPlugin):
    """Compares a shipment's weight against one or two configured weights."""

    plugin_id = "shipment_weight"
    label = "Shipment weight"
    category = "Shipment"
    entity_type = "commerce_shipment"

    def default_configuration(self) -> WeightConditionConfig:
        return WeightConditionConfig(operator=ComparisonOperator.greater_than.value)

    def comparison_operators(self) -> Dict[str, str]:
        operators = super().comparison_operators()
        operators[ComparisonOperator.between_exclusive.value] = "Between (exclusive)"
        operators[ComparisonOperator.between_inclusive.value] = "Between (inclusive)"
        return operators

    def configure(
        self,
        operator: str,
        weight: Optional[Weight],
        max_weight: Optional[Weight] = None,
    ) -> WeightConditionConfig:
        """Validate form values and return a normalised configuration.

        For the between operators the max weight is converted into the unit
        of ``weight`` before it is stored. Every other operator drops the max
        weight entirely.
        """
        resolved = _resolve_operator(operator)
        if weight is None:
            raise ConditionConfigurationError("weight", '"Weight" is required')

        if not resolved.is_range:
            return WeightConditionConfig(operator=resolved, weight=weight, max_weight=None)

        if max_weight is None or max_weight.is_empty():
            raise MissingRangeBound("max_weight", '"Max weight" cannot be empty')

        try:
            converted_max = max_weight.convert(weight.unit)
        except ValueError as exc:
            raise InvalidRangeBound("max_weight", str(exc)) from exc
        if (
            resolved is ComparisonOperator.between_exclusive
            and converted_max.less_than_or_equal(weight)
        ):
            raise InvalidRangeBound(
                "max_weight", '"Max weight" cannot be less or equal to "Weight"'
            )
        if converted_max.less_than(weight):
            raise InvalidRangeBound("max_weight", '"Max weight" cannot be less than "Weight"')

        return WeightConditionConfig(operator=resolved, weight=weight, max_weight=converted_max)

    def evaluate(self, configuration: WeightConditionConfig, subject: Optional[Weight]) -> bool:
        if subject is None:
            # Not satisfiable until the shipment weight is known.
            return False
        if configuration.weight is None:
            raise ConditionConfigurationError("weight", '"Weight" is not configured')

        condition_unit = configuration.weight.unit
        subject = subject.convert(condition_unit)
        operator = _resolve_operator(configuration.operator)

        max_weight = configuration.max_weight
        if max_weight is not None and max_weight.is_empty():
            max_weight = None

        single_check = _SINGLE_BOUND_CHECKS.get(operator)
        if single_check is not None:
            result = single_check(subject, configuration.weight)
        else:
            if max_weight is None:
                raise MissingRangeBound("max_weight", "Max weight is not defined")
            max_weight = max_weight.convert(condition_unit)
            if operator is ComparisonOperator.between_exclusive:
                result = subject.greater_than(configuration.weight) and subject.less_than(max_weight)
            else:
                result = subject.greater_than_or_equal(
                    configuration.weight
                ) and subject.less_than_or_equal(max_weight)

        logger.debug(
            "Evaluated weight condition",
            extra={
                "plugin_id": self.plugin_id,
                "operator": operator.value,
                "weight": configuration.weight,
                "max_weight": max_weight,
                "subject_weight": subject,
                "result": result,
            },
        )
        return result

    def evaluate_shipment(self, configuration: WeightConditionConfig, shipment: Shipment) -> bool:
        return self.evaluate(configuration, shipment.weight)


_REGISTRY: Dict[str, ConditionPlugin] = {
    plugin.plugin_id: plugin for plugin in (ShipmentWeightCondition(),)
}


def get_condition_plugin(plugin_id: str) -> ConditionPlugin:
    plugin = _REGISTRY.get(plugin_id)
    if plugin is None:
        raise KeyError(f"Condition plugin {plugin_id!r} not found.")
    return plugin


def list_condition_plugins() -> List[ConditionPlugin]:
    return [_REGISTRY[plugin_id] for plugin_id in sorted(_REGISTRY)]
