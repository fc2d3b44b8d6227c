"""Ad-hoc rules built from callables."""

from collections.abc import Awaitable, Callable

from uow_rules_engine.domain.entities.work_result import WorkResult
from uow_rules_engine.domain.entities.work_rule import WorkRule
from uow_rules_engine.domain.exceptions import RuleExecutionError


class PredicateRule(WorkRule):
    """Valid when the predicate returns a truthy value."""

    def __init__(self, name: str, message: str, predicate: Callable[[], object]) -> None:
        super().__init__(name, message)
        self.predicate = predicate

    def verify(self) -> WorkResult:
        self.is_valid = bool(self.predicate())
        return self._to_result()


class AsyncPredicateRule(WorkRule):
    """
    Valid when the awaited predicate returns a truthy value.

    Only usable from the asynchronous validation loop.
    """

    def __init__(
        self, name: str, message: str, predicate: Callable[[], Awaitable[object]]
    ) -> None:
        super().__init__(name, message)
        self.predicate = predicate

    def verify(self) -> WorkResult:
        raise RuleExecutionError(self.name, "asynchronous predicate requires execute_async()")

    async def verify_async(self) -> WorkResult:
        self.is_valid = bool(await self.predicate())
        return self._to_result()
