"""
Domain-level exceptions for the rules engine.

This module defines exceptions raised by rules, results and the validation
context. Only UnitOfWorkError is ever absorbed by the action pipeline; every
other exception here signals a programming error in collaborator code.
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class RuleArgumentError(DomainException, ValueError):
    """Raised when a rule or result is constructed with a missing name or message."""

    def __init__(self, argument: str, reason: str = "must be a non-empty string") -> None:
        super().__init__(
            f"Argument '{argument}' {reason}",
            details={"argument": argument, "reason": reason},
        )
        self.argument = argument
        self.reason = reason


class RuleReentrancyError(DomainException):
    """
    Raised when a rule that has already been processed is executed again.

    Rules run their verification logic at most once per instance.
    """

    def __init__(self, rule_name: str) -> None:
        super().__init__(
            f"Rule '{rule_name}' has already been processed and cannot be executed again",
            details={"rule_name": rule_name},
        )
        self.rule_name = rule_name


class RuleExecutionError(DomainException):
    """Raised when a rule cannot be verified in the requested mode."""

    def __init__(self, rule_name: str, reason: str) -> None:
        super().__init__(
            f"Rule '{rule_name}' cannot be executed: {reason}",
            details={"rule_name": rule_name, "reason": reason},
        )
        self.rule_name = rule_name
        self.reason = reason


class UnitOfWorkError(DomainException):
    """
    The designated fault of the action pipeline.

    Raised by collaborator hooks when something goes wrong between the
    business logic and the repository layer. The pipeline intercepts it and
    records it as a failed result instead of letting it propagate.

    Args:
        message: Fault description, possibly shown to end users
        cause: Optional underlying exception, chained as ``__cause__``
        use_exception_message: Per-fault override of the configuration's
            ``use_exception_message_during_exception_handling``. ``None``
            defers to the configuration.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        use_exception_message: bool | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.use_exception_message = use_exception_message
        if cause is not None:
            self.__cause__ = cause

    def set_use_exception_message(self, value: bool | None) -> "UnitOfWorkError":
        """Set the per-fault message override and return self for raising inline."""
        self.use_exception_message = value
        return self
