"""Rules comparing two values under value semantics."""

from typing import Any

from uow_rules_engine.domain.entities.work_result import WorkResult
from uow_rules_engine.domain.entities.work_rule import WorkRule


class ValuesAreEqualRule(WorkRule):
    """Valid when both values compare equal."""

    def __init__(self, name: str, message: str, first: Any, second: Any) -> None:
        super().__init__(name, message)
        self.first = first
        self.second = second

    def verify(self) -> WorkResult:
        self.is_valid = bool(self.first == self.second)
        return self._to_result()


class ValuesAreNotEqualRule(WorkRule):
    """Valid when the values compare not equal."""

    def __init__(self, name: str, message: str, first: Any, second: Any) -> None:
        super().__init__(name, message)
        self.first = first
        self.second = second

    def verify(self) -> WorkResult:
        self.is_valid = bool(self.first != self.second)
        return self._to_result()
