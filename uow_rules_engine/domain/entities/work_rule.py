"""
Work Rule - a named, independently verifiable business precondition.

A rule runs its verification logic at most once. Executing an already
processed rule is a programming error and raises RuleReentrancyError
without touching the rule's state.
"""

import logging
from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from uow_rules_engine.domain.entities.work_result import WorkResult, _require_text
from uow_rules_engine.domain.exceptions import RuleReentrancyError

logger = logging.getLogger(__name__)


@runtime_checkable
class IWorkRule(Protocol):
    """Contract every rule registered with a validation context must satisfy."""

    name: str
    message: str
    is_valid: bool | None
    has_been_processed: bool

    def execute(self) -> WorkResult:
        """Verify the rule once and return its result."""
        ...

    async def execute_async(self) -> WorkResult:
        """Verify the rule once, allowing the verification to suspend."""
        ...

    def verify(self) -> WorkResult:
        """Rule-specific verification logic."""
        ...

    async def verify_async(self) -> WorkResult:
        """Rule-specific verification logic that may suspend."""
        ...


class WorkRule(ABC):
    """
    Base class for rules.

    Subclasses implement ``verify`` (and optionally ``verify_async``), set
    ``is_valid`` and return a WorkResult. ``execute``/``execute_async`` wrap
    verification with the at-most-once guard.
    """

    def __init__(self, name: str, message: str) -> None:
        """
        Initialize rule.

        Args:
            name: Identifier of the rule, unique within one validation run
            message: Human-readable failure/success text

        Raises:
            RuleArgumentError: If name or message is empty
        """
        _require_text("name", name)
        _require_text("message", message)

        self.name = name
        self.message = message
        self.is_valid: bool | None = None
        self.has_been_processed = False

    def execute(self) -> WorkResult:
        """
        Execute the rule.

        Returns:
            The result of verification

        Raises:
            RuleReentrancyError: If the rule has already been processed
        """
        self._mark_processed()
        result = self.verify()
        self._log_outcome(result)
        return result

    async def execute_async(self) -> WorkResult:
        """
        Execute the rule asynchronously.

        Returns:
            The result of verification

        Raises:
            RuleReentrancyError: If the rule has already been processed
        """
        self._mark_processed()
        result = await self.verify_async()
        self._log_outcome(result)
        return result

    @abstractmethod
    def verify(self) -> WorkResult:
        """Compute ``is_valid`` and return the result."""
        pass

    async def verify_async(self) -> WorkResult:
        """Asynchronous verification; defaults to the synchronous logic."""
        return self.verify()

    def _to_result(self) -> WorkResult:
        return WorkResult.from_rule(self)

    def _mark_processed(self) -> None:
        if self.has_been_processed:
            raise RuleReentrancyError(self.name)
        self.has_been_processed = True

    def _log_outcome(self, result: WorkResult) -> None:
        logger.debug(
            f"Rule {self.name} {'passed' if result.is_valid else 'failed'}",
            extra={"rule": self.name, "is_valid": result.is_valid},
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self.name!r}, is_valid={self.is_valid!r}, "
            f"has_been_processed={self.has_been_processed!r})"
        )
