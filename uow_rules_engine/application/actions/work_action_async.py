"""
Asynchronous Work Action

Mirrors WorkAction with every hook and the validation pass as suspension
points. Stages are awaited strictly in sequence, never concurrently.

When the configuration sets ``timeout_seconds`` the whole pipeline runs
under that deadline and expiry raises WorkActionTimeoutError. Cancellation
by the surrounding caller propagates unchanged. In both cases any work
already committed during PROCESS_ACTION is the caller's to roll back, exactly
as for an unhandled exception.
"""

import asyncio

from uow_rules_engine.application.actions.base import (
    PipelineStage,
    StageOutcome,
    WorkActionBase,
    WorkActionResult,
)
from uow_rules_engine.application.exceptions_application import WorkActionTimeoutError
from uow_rules_engine.domain.entities.work_rule import IWorkRule
from uow_rules_engine.domain.exceptions import UnitOfWorkError


class WorkActionAsync(WorkActionBase):
    """Asynchronous counterpart of WorkAction."""

    async def execute_async(self) -> None:
        """
        Run the pipeline once.

        Raises:
            WorkActionStateError: If the action has already been executed
            WorkActionTimeoutError: If the configured deadline expires
        """
        self._begin()
        timeout = self.configuration.timeout_seconds
        if timeout is None:
            await self._drive()
        else:
            deadline = asyncio.timeout(timeout)
            try:
                async with deadline:
                    await self._drive()
            except TimeoutError as exc:
                if not deadline.expired():
                    raise
                stage = self.processing_stage.value if self.processing_stage else None
                self.logger.error(
                    f"{self.name} timed out after {timeout}s",
                    extra={"action": self.name, "stage": stage},
                )
                raise WorkActionTimeoutError(self.name, timeout, stage) from exc
        self._log_completion()

    async def _drive(self) -> None:
        for stage in self._stages():
            if not self._conclude(await self._run_stage(stage)):
                return

    async def _run_stage(self, stage: PipelineStage) -> StageOutcome:
        self._enter(stage.stage)
        try:
            outcome = await stage.run()
        except UnitOfWorkError as fault:
            return StageOutcome.faulted(fault)
        if isinstance(outcome, StageOutcome):
            return outcome
        return StageOutcome.proceed()

    async def _register_rules(self) -> None:
        await self.add_rules(self.rule_context.rules)

    async def _validate(self) -> StageOutcome:
        await self.rule_context.validate_rules_async()
        return self._check_validation()

    async def _post_process(self) -> None:
        await self.post_process_action()
        self.result = await self.verify_action()

    # Hooks

    async def pre_add_rules(self) -> None:
        """Run any code needed before rules are added."""
        pass

    async def add_rules(self, rules: list[IWorkRule]) -> None:
        """
        Register the business rules to check before performing the action.

        Args:
            rules: Rule list of the owning validation context (the parent's
                when this is a child action)
        """
        pass

    async def pre_validate_rules(self) -> None:
        pass

    async def pre_process_action(self) -> None:
        pass

    async def process_action(self) -> None:
        """Perform the unit of work's actual effect."""
        pass

    async def post_process_action(self) -> None:
        pass

    async def verify_action(self) -> WorkActionResult:
        """Compute the final result; defaults to SUCCESS unless already set."""
        return self._default_verification()
