"""Rules checking a target for presence or absence."""

from typing import Any

from uow_rules_engine.domain.entities.work_result import WorkResult
from uow_rules_engine.domain.entities.work_rule import WorkRule


class NotNullRule(WorkRule):
    """Valid when the target is not None."""

    def __init__(self, name: str, message: str, target: Any) -> None:
        super().__init__(name, message)
        self.target = target

    def verify(self) -> WorkResult:
        self.is_valid = self.target is not None
        return self._to_result()


class NullRule(WorkRule):
    """Valid when the target is None."""

    def __init__(self, name: str, message: str, target: Any) -> None:
        super().__init__(name, message)
        self.target = target

    def verify(self) -> WorkResult:
        self.is_valid = self.target is None
        return self._to_result()
