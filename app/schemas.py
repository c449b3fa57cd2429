"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, Field

from models.measurement import Weight, WeightUnit
from models.records import WeightConditionConfig


class WeightPayload(BaseModel):
    """A weight as exchanged over HTTP."""

    number: Decimal = Field(..., ge=0, allow_inf_nan=False)
    unit: Optional[WeightUnit] = Field(
        default=None, description="Falls back to the configured default unit when omitted."
    )

    def to_weight(self, default_unit: WeightUnit) -> Weight:
        return Weight(self.number, self.unit or default_unit)

    @classmethod
    def from_weight(cls, weight: Optional[Weight]) -> Optional["WeightPayload"]:
        if weight is None:
            return None
        return cls(number=Decimal(format(weight.number.normalize(), "f")), unit=weight.unit)


class ConditionConfiguration(BaseModel):
    """Configuration values of the shipment weight condition."""

    operator: str = Field(..., description="Comparison operator tag, e.g. '>' or '> <'.")
    weight: Optional[WeightPayload] = None
    max_weight: Optional[WeightPayload] = None

    @classmethod
    def from_config(cls, config: WeightConditionConfig) -> "ConditionConfiguration":
        operator = getattr(config.operator, "value", config.operator)
        return cls(
            operator=operator,
            weight=WeightPayload.from_weight(config.weight),
            max_weight=WeightPayload.from_weight(config.max_weight),
        )


class ConditionPluginInfo(BaseModel):
    """Metadata describing a registered condition plugin."""

    plugin_id: str
    label: str
    category: str
    entity_type: str
    operators: Dict[str, str] = Field(default_factory=dict)
    default_configuration: Optional[ConditionConfiguration] = None


class EvaluationRequest(BaseModel):
    """A stored configuration plus the shipment weight to test it against."""

    configuration: ConditionConfiguration
    weight: Optional[WeightPayload] = Field(
        default=None, description="Shipment weight; null while it is not yet known."
    )


class EvaluationResponse(BaseModel):
    result: bool


class ConfigurationErrorDetail(BaseModel):
    """Field-level error returned when a configuration is rejected."""

    field: str
    error: str
    message: str
