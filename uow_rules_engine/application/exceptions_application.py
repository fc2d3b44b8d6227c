"""
Application-level exception hierarchy for the rules engine.

These exceptions are never intercepted by the action pipeline; they always
propagate to the caller of ``execute``/``execute_async``.
"""

from typing import Any


class ApplicationException(Exception):
    """Base exception for all application-level errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class WorkActionException(ApplicationException):
    """Base exception for work action errors."""

    def __init__(self, action: str, message: str, **kwargs: Any) -> None:
        details = {"action": action, **kwargs}
        super().__init__(message, details)
        self.action = action


class WorkActionStateError(WorkActionException):
    """Raised when an action that already ran is executed again."""

    def __init__(self, action: str, result: str) -> None:
        message = f"Action {action} has already been executed (result: {result})"
        super().__init__(action=action, message=message, result=result)
        self.result = result


class WorkActionTimeoutError(WorkActionException):
    """Raised when an asynchronous action exceeds its configured deadline."""

    def __init__(self, action: str, timeout_seconds: float, stage: str | None = None) -> None:
        message = f"Action timed out after {timeout_seconds}s"
        if stage:
            message += f" during {stage}"
        super().__init__(
            action=action,
            message=message,
            timeout_seconds=timeout_seconds,
            stage=stage,
        )
        self.timeout_seconds = timeout_seconds
        self.stage = stage
