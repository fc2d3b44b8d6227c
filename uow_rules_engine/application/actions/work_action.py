"""
Work Action

Synchronous unit of work. Subclasses override the hooks they need; every
hook defaults to a no-op.
"""

from uow_rules_engine.application.actions.base import (
    PipelineStage,
    StageOutcome,
    WorkActionBase,
    WorkActionResult,
)
from uow_rules_engine.domain.entities.work_rule import IWorkRule
from uow_rules_engine.domain.exceptions import UnitOfWorkError


class WorkAction(WorkActionBase):
    """
    Validates a set of business rules, then performs the action.

    Example:
        class TransferFunds(WorkAction):
            def add_rules(self, rules):
                rules.append(RangeValidationRule("Amount", "Amount out of range", amount, 1, 1000))

            def process_action(self):
                ledger.transfer(...)

        action = TransferFunds()
        action.execute()
        if action.result is WorkActionResult.FAIL:
            report(action.validation_context.failed_results)
    """

    def execute(self) -> None:
        """
        Run the pipeline once.

        Raises:
            WorkActionStateError: If the action has already been executed
        """
        self._begin()
        for stage in self._stages():
            if not self._conclude(self._run_stage(stage)):
                break
        self._log_completion()

    def _run_stage(self, stage: PipelineStage) -> StageOutcome:
        self._enter(stage.stage)
        try:
            outcome = stage.run()
        except UnitOfWorkError as fault:
            return StageOutcome.faulted(fault)
        if isinstance(outcome, StageOutcome):
            return outcome
        return StageOutcome.proceed()

    def _register_rules(self) -> None:
        self.add_rules(self.rule_context.rules)

    def _validate(self) -> StageOutcome:
        self.rule_context.validate_rules()
        return self._check_validation()

    def _post_process(self) -> None:
        self.post_process_action()
        self.result = self.verify_action()

    # Hooks

    def pre_add_rules(self) -> None:
        """Run any code needed before rules are added."""
        pass

    def add_rules(self, rules: list[IWorkRule]) -> None:
        """
        Register the business rules to check before performing the action.

        Args:
            rules: Rule list of the owning validation context (the parent's
                when this is a child action)
        """
        pass

    def pre_validate_rules(self) -> None:
        pass

    def pre_process_action(self) -> None:
        pass

    def process_action(self) -> None:
        """Perform the unit of work's actual effect."""
        pass

    def post_process_action(self) -> None:
        pass

    def verify_action(self) -> WorkActionResult:
        """Compute the final result; defaults to SUCCESS unless already set."""
        return self._default_verification()
