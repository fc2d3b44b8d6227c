"""
Work Action Interfaces

Defines the surface callers rely on: run the action, then inspect its
result, its processing stage and the results of its validation context.
"""

from typing import Protocol, runtime_checkable

from uow_rules_engine.application.actions.base import (
    WorkActionProcessingStage,
    WorkActionResult,
)
from uow_rules_engine.domain.entities.work_validation import WorkValidation


@runtime_checkable
class IWorkAction(Protocol):
    """Synchronous work action contract."""

    result: WorkActionResult
    processing_stage: WorkActionProcessingStage | None
    validation_context: WorkValidation

    def execute(self) -> None:
        """Run the action pipeline once."""
        ...


@runtime_checkable
class IWorkActionAsync(Protocol):
    """Asynchronous work action contract."""

    result: WorkActionResult
    processing_stage: WorkActionProcessingStage | None
    validation_context: WorkValidation

    async def execute_async(self) -> None:
        """Run the action pipeline once."""
        ...
