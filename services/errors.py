"""Errors raised while configuring or evaluating conditions."""

from __future__ import annotations


class ConditionConfigurationError(ValueError):
    """A configuration value was rejected; ``field`` names the offending input."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class MissingRangeBound(ConditionConfigurationError):
    """A between operator was used without a max weight."""


class InvalidRangeBound(ConditionConfigurationError):
    """The max weight does not exceed (or meet) the primary weight."""


class UnknownOperator(ValueError):

    def __init__(self, operator: object) -> None:
        super().__init__(f"Invalid operator {operator}")
        self.operator = operator
