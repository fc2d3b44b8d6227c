"""
Range Validation Rule

Checks that a comparable value lies inside an inclusive range. The result
message always states the value and both bounds so a failure can be shown to
the user as-is.
"""

from typing import Generic, TypeVar

from uow_rules_engine.domain.entities.work_result import WorkResult
from uow_rules_engine.domain.entities.work_rule import WorkRule
from uow_rules_engine.domain.exceptions import RuleArgumentError

T = TypeVar("T")


class RangeValidationRule(WorkRule, Generic[T]):
    """Valid iff ``minimum <= value <= maximum``."""

    def __init__(self, name: str, message: str, value: T, minimum: T, maximum: T) -> None:
        """
        Initialize range rule.

        Args:
            name: Rule name
            message: Rule description
            value: Value under test
            minimum: Inclusive lower bound
            maximum: Inclusive upper bound

        Raises:
            RuleArgumentError: If minimum is greater than maximum
        """
        super().__init__(name, message)
        if minimum > maximum:  # type: ignore[operator]
            raise RuleArgumentError("minimum", f"must not exceed maximum ({minimum} > {maximum})")

        self.value = value
        self.minimum = minimum
        self.maximum = maximum

    def verify(self) -> WorkResult:
        self.is_valid = bool(self.minimum <= self.value <= self.maximum)  # type: ignore[operator]
        placement = "within" if self.is_valid else "out of"
        return WorkResult(
            name=self.name,
            message=f"Value {self.value} is {placement} the range {self.minimum} to {self.maximum}.",
            is_valid=self.is_valid,
        )
