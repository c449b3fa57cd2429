"""Weight measurements and unit conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Union


class WeightUnit(str, Enum):
    """Weight units recognised by shipment conditions."""

    milligram = "mg"
    gram = "g"
    kilogram = "kg"
    ounce = "oz"
    pound = "lb"

    @property
    def base_factor(self) -> Decimal:
        """Multiplier that converts a number in this unit to kilograms."""
        return _BASE_FACTORS[self]


_BASE_FACTORS = {
    WeightUnit.milligram: Decimal("0.000001"),
    WeightUnit.gram: Decimal("0.001"),
    WeightUnit.kilogram: Decimal("1"),
    WeightUnit.ounce: Decimal("0.028349523125"),
    WeightUnit.pound: Decimal("0.45359237"),
}

_WEIGHT_PATTERN = re.compile(r"^\s*(?P<number>[0-9]*\.?[0-9]+)\s*(?P<unit>[a-zA-Z]+)?\s*$")

NumberLike = Union[Decimal, int, float, str]


def _to_decimal(value: NumberLike) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid weight number {value!r}.") from exc


@dataclass(frozen=True)
class Weight:
    """An immutable weight: a non-negative decimal number and its unit."""

    number: Decimal
    unit: WeightUnit

    def __init__(self, number: NumberLike, unit: WeightUnit | str) -> None:
        parsed = _to_decimal(number)
        if not parsed.is_finite():
            raise ValueError(f"Weight number must be finite, got {number!r}.")
        if parsed < 0:
            raise ValueError(f"Weight number cannot be negative, got {number!r}.")
        try:
            resolved_unit = WeightUnit(unit)
        except ValueError as exc:
            raise ValueError(f"Unknown weight unit {unit!r}.") from exc
        object.__setattr__(self, "number", parsed)
        object.__setattr__(self, "unit", resolved_unit)

    def __str__(self) -> str:
        return f"{self.number.normalize():f} {self.unit.value}"

    def is_empty(self) -> bool:
        return self.number == 0

    def convert(self, unit: WeightUnit | str) -> "Weight":
        target = WeightUnit(unit)
        if target is self.unit:
            return self
        try:
            number = self.number * self.unit.base_factor / target.base_factor
        except ArithmeticError as exc:
            raise ValueError(f"Weight {self.number} {self.unit.value} cannot be expressed in {target.value}.") from exc
        return Weight(number, target)

    def _compare(self, other: "Weight") -> int:
        other_number = other.convert(self.unit).number
        if self.number < other_number:
            return -1
        if self.number > other_number:
            return 1
        return 0

    def equals(self, other: "Weight") -> bool:
        return self._compare(other) == 0

    def greater_than(self, other: "Weight") -> bool:
        return self._compare(other) > 0

    def greater_than_or_equal(self, other: "Weight") -> bool:
        return self._compare(other) >= 0

    def less_than(self, other: "Weight") -> bool:
        return self._compare(other) < 0

    def less_than_or_equal(self, other: "Weight") -> bool:
        return self._compare(other) <= 0


def parse_weight(text: str, default_unit: WeightUnit | str = WeightUnit.kilogram) -> Weight:
    """Parse text such as ``"5 kg"`` or ``"1.5lb"`` into a :class:`Weight`."""
    match = _WEIGHT_PATTERN.match(text or "")
    if match is None:
        raise ValueError(f"Cannot parse weight from {text!r}.")
    unit = match.group("unit")
    return Weight(match.group("number"), unit.lower() if unit else default_unit)
