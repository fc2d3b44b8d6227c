"""
Unit tests for the synchronous work action pipeline.

Tests stage ordering, the validation branch, fault handling and the
single-execution guard.
"""

from unittest.mock import patch

import pytest

from tests.helpers import ExplodingRule, RecordingWorkAction, make_fault
from uow_rules_engine.application.actions import (
    HANDLED_EXCEPTION_RULE_NAME,
    STAGE_HOOKS,
    WorkAction,
    WorkActionAsync,
    WorkActionProcessingStage,
    WorkActionResult,
)
from uow_rules_engine.application.config import (
    DEFAULT_GENERIC_EXCEPTION_MESSAGE,
    WorkActionConfiguration,
)
from uow_rules_engine.application.exceptions_application import WorkActionStateError
from uow_rules_engine.domain.entities.work_validation import WorkValidation
from uow_rules_engine.domain.exceptions import RuleReentrancyError
from uow_rules_engine.domain.rules import NotNullRule, NullRule

ALL_HOOKS = [
    "pre_add_rules",
    "add_rules",
    "pre_validate_rules",
    "pre_process_action",
    "process_action",
    "post_process_action",
    "verify_action",
]


class TestWorkActionInitialization:
    """Test initial action state."""

    def test_defaults(self):
        """Test a new action has not run and owns a fresh context."""
        action = WorkAction()

        assert action.name == "WorkAction"
        assert action.result == WorkActionResult.UNKNOWN
        assert action.processing_stage is None
        assert action.is_child_action is False
        assert action.validation_context.rules == []
        assert action.validation_context.configuration is action.configuration

    def test_custom_name_and_validation(self, validation):
        """Test an injected validation context is used as-is."""
        action = WorkAction(validation=validation, name="TransferFunds")

        assert action.name == "TransferFunds"
        assert action.validation_context is validation
        assert action.rule_context is validation

    def test_set_configuration_updates_owned_context(self, stop_on_failure_config):
        """Test an action-owned context follows a configuration change."""
        action = WorkAction()

        action.set_configuration(stop_on_failure_config)

        assert action.configuration is stop_on_failure_config
        assert action.validation_context.stop_on_first_failure is True

    def test_set_configuration_leaves_injected_context(self, validation, stop_on_failure_config):
        """Test an injected context keeps its own configuration."""
        action = WorkAction(validation=validation)

        action.set_configuration(stop_on_failure_config)

        assert validation.stop_on_first_failure is False


class TestWorkActionPipeline:
    """Test the happy path through every stage."""

    def test_empty_action_succeeds(self):
        """Test an action with no rules and no overrides succeeds."""
        action = WorkAction()

        action.execute()

        assert action.result == WorkActionResult.SUCCESS
        assert action.processing_stage == WorkActionProcessingStage.POST_PROCESS_ACTION
        assert action.validation_context.results == []

    def test_hooks_run_in_order(self, passing_rules):
        """Test every hook runs once, in pipeline order."""
        action = RecordingWorkAction(rules=passing_rules)

        action.execute()

        assert action.calls == ALL_HOOKS
        assert action.result == WorkActionResult.SUCCESS

    def test_stage_reported_during_each_hook(self):
        """Test processing_stage names the stage while its hook runs."""
        action = RecordingWorkAction()

        action.execute()

        assert action.stages_seen == [
            WorkActionProcessingStage.PRE_ADD_RULES,
            WorkActionProcessingStage.ADD_RULES,
            WorkActionProcessingStage.PRE_VALIDATE_RULES,
            WorkActionProcessingStage.PRE_PROCESS_ACTION,
            WorkActionProcessingStage.PROCESS_ACTION,
            WorkActionProcessingStage.POST_PROCESS_ACTION,
            WorkActionProcessingStage.POST_PROCESS_ACTION,
        ]

    def test_rules_registered_into_context(self, passing_rules):
        """Test rules added in add_rules are validated."""
        action = RecordingWorkAction(rules=passing_rules)

        action.execute()

        assert action.validation_context.rules == passing_rules
        assert len(action.validation_context.results) == 4
        assert all(rule.has_been_processed for rule in passing_rules)

    def test_verify_action_decides_result(self):
        """Test an overridden verify_action sets the final result."""
        action = RecordingWorkAction(final_result=WorkActionResult.FAIL)

        action.execute()

        assert action.result == WorkActionResult.FAIL

    def test_process_action_may_set_result(self):
        """Test the default verification keeps a result set earlier."""
        action = RecordingWorkAction()
        action.on_process = lambda: setattr(action, "result", WorkActionResult.FAIL)

        action.execute()

        assert action.result == WorkActionResult.FAIL

    def test_transaction_handle_untouched(self, mock_transaction):
        """Test the pipeline never calls the caller's transaction."""
        action = RecordingWorkAction(
            configuration=WorkActionConfiguration(transaction=mock_transaction)
        )

        action.execute()

        assert action.configuration.transaction is mock_transaction
        assert mock_transaction.mock_calls == []

    def test_hooks_read_transaction_from_configuration(self, mock_transaction):
        """Test hooks reach the caller's transaction through the configuration."""
        action = RecordingWorkAction(
            configuration=WorkActionConfiguration(transaction=mock_transaction)
        )
        action.on_process = lambda: action.configuration.transaction.save("order")

        action.execute()

        mock_transaction.save.assert_called_once_with("order")
        mock_transaction.commit.assert_not_called()
        mock_transaction.rollback.assert_not_called()

    def test_stage_table_covers_pipeline(self):
        """Test both pipelines build their stages from the shared table."""
        sync_stages = [s.stage for s in WorkAction()._stages()]
        async_stages = [s.stage for s in WorkActionAsync()._stages()]

        assert sync_stages == async_stages == [stage for stage, _ in STAGE_HOOKS]
        assert WorkActionProcessingStage.EXCEPTION_HANDLER not in sync_stages


class TestWorkActionValidationFailure:
    """Test the validation branch."""

    def test_short_circuit_records_first_failure(self, rules_with_failures, stop_on_failure_config):
        """Test stop-on-first-failure leaves later rules unprocessed."""
        action = RecordingWorkAction(rules=rules_with_failures, configuration=stop_on_failure_config)

        action.execute()

        context = action.validation_context
        assert action.result == WorkActionResult.FAIL
        assert len(context.results) == 2
        assert [r.name for r in context.failed_results] == ["FirstFailingRule"]
        assert rules_with_failures[2].has_been_processed is False
        assert rules_with_failures[3].has_been_processed is False

    def test_run_all_records_every_failure(self, rules_with_failures, run_all_config):
        """Test every rule is processed when short-circuit is off."""
        action = RecordingWorkAction(rules=rules_with_failures, configuration=run_all_config)

        action.execute()

        context = action.validation_context
        assert action.result == WorkActionResult.FAIL
        assert len(context.results) == 4
        assert [r.name for r in context.failed_results] == [
            "FirstFailingRule",
            "SecondFailingRule",
        ]

    def test_processing_skipped_after_failure(self, rules_with_failures):
        """Test no hook after validation runs when a rule fails."""
        action = RecordingWorkAction(rules=rules_with_failures)

        action.execute()

        assert action.calls == ["pre_add_rules", "add_rules", "pre_validate_rules"]
        assert action.processing_stage == WorkActionProcessingStage.VALIDATE_RULES

    def test_failure_is_logged(self, rules_with_failures):
        """Test a validation failure logs a warning naming the failed rules."""
        action = RecordingWorkAction(rules=rules_with_failures)

        with patch.object(action.logger, "warning") as mock_warning:
            action.execute()

        mock_warning.assert_called_once()
        message = mock_warning.call_args[0][0]
        assert "FirstFailingRule" in message
        assert "SecondFailingRule" in message


class TestWorkActionFaultHandling:
    """Test interception of UnitOfWorkError."""

    def test_fault_in_process_action(self, passing_rules):
        """Test a fault becomes one extra failed result carrying its message."""
        action = RecordingWorkAction(
            rules=passing_rules, failures={"process_action": make_fault("Ledger locked")}
        )

        action.execute()

        context = action.validation_context
        assert action.result == WorkActionResult.FAIL
        assert action.processing_stage == WorkActionProcessingStage.EXCEPTION_HANDLER
        assert len(context.results) == 5
        assert len(context.failed_results) == 1
        failed = context.failed_results[0]
        assert failed.name == HANDLED_EXCEPTION_RULE_NAME
        assert failed.message == "Ledger locked"
        assert "post_process_action" not in action.calls

    def test_generic_message_when_disabled(self):
        """Test the configured fallback text replaces the fault message."""
        config = WorkActionConfiguration(use_exception_message_during_exception_handling=False)
        action = RecordingWorkAction(
            configuration=config, failures={"process_action": make_fault("Secret detail")}
        )

        action.execute()

        failed = action.validation_context.failed_results[0]
        assert failed.message == DEFAULT_GENERIC_EXCEPTION_MESSAGE

    def test_custom_generic_message(self):
        """Test a custom fallback text is used verbatim."""
        config = WorkActionConfiguration(
            use_exception_message_during_exception_handling=False,
            generic_exception_message="Please try again later.",
        )
        action = RecordingWorkAction(
            configuration=config, failures={"process_action": make_fault()}
        )

        action.execute()

        assert action.validation_context.failed_results[0].message == "Please try again later."

    def test_fault_override_hides_message(self):
        """Test a fault can opt out of surfacing its message."""
        fault = make_fault("Secret detail", use_exception_message=False)
        action = RecordingWorkAction(failures={"process_action": fault})

        action.execute()

        assert action.validation_context.failed_results[0].message == (
            DEFAULT_GENERIC_EXCEPTION_MESSAGE
        )

    def test_fault_override_shows_message(self):
        """Test a fault can opt in even when the configuration hides messages."""
        config = WorkActionConfiguration(use_exception_message_during_exception_handling=False)
        fault = make_fault("Shown anyway", use_exception_message=True)
        action = RecordingWorkAction(configuration=config, failures={"process_action": fault})

        action.execute()

        assert action.validation_context.failed_results[0].message == "Shown anyway"

    def test_fault_message_includes_causes(self):
        """Test chained causes are appended to the failed result's message."""
        fault = make_fault("Save failed", cause=ConnectionError("socket closed"))
        action = RecordingWorkAction(failures={"process_action": fault})

        action.execute()

        assert action.validation_context.failed_results[0].message == (
            "Save failed\nInner Exception: ConnectionError: socket closed"
        )

    @pytest.mark.parametrize(
        "hook",
        ["pre_add_rules", "add_rules", "pre_validate_rules", "pre_process_action"],
    )
    def test_fault_in_earlier_stage(self, hook):
        """Test a fault in any stage stops the pipeline with FAIL."""
        action = RecordingWorkAction(failures={hook: make_fault()})

        action.execute()

        assert action.result == WorkActionResult.FAIL
        assert action.calls[-1] == hook
        assert "process_action" not in action.calls
        assert len(action.validation_context.failed_results) == 1

    def test_fault_in_post_process(self):
        """Test a fault after processing still overrides the result."""
        action = RecordingWorkAction(failures={"post_process_action": make_fault()})

        action.execute()

        assert action.result == WorkActionResult.FAIL
        assert "verify_action" not in action.calls

    def test_fault_raised_by_rule(self):
        """Test a fault raised while a rule verifies is handled."""
        action = RecordingWorkAction(rules=[ExplodingRule("Lookup", make_fault("No record"))])

        action.execute()

        assert action.result == WorkActionResult.FAIL
        assert action.validation_context.failed_results[-1].message == "No record"

    def test_fault_is_logged(self):
        """Test a handled fault logs a warning with the exception attached."""
        fault = make_fault()
        action = RecordingWorkAction(failures={"process_action": fault})

        with patch.object(action.logger, "warning") as mock_warning:
            action.execute()

        mock_warning.assert_called_once()
        assert mock_warning.call_args.kwargs["exc_info"] is fault
        assert mock_warning.call_args.kwargs["extra"]["stage"] == "process_action"

    def test_blank_fault_message_uses_generic_text(self):
        """Test a fault with an empty message is still handled."""
        action = RecordingWorkAction(failures={"process_action": make_fault("")})

        action.execute()

        assert action.result == WorkActionResult.FAIL
        assert action.processing_stage == WorkActionProcessingStage.EXCEPTION_HANDLER
        assert action.validation_context.failed_results[0].message == (
            DEFAULT_GENERIC_EXCEPTION_MESSAGE
        )

    def test_blank_fault_message_keeps_causes(self):
        """Test causes of an empty-message fault follow the generic headline."""
        fault = make_fault("  ", cause=OSError("read-only file system"))
        action = RecordingWorkAction(failures={"process_action": fault})

        action.execute()

        assert action.validation_context.failed_results[0].message == (
            f"{DEFAULT_GENERIC_EXCEPTION_MESSAGE}\n"
            "Inner Exception: OSError: read-only file system"
        )

    @pytest.mark.parametrize("generic_message", ["", "   "])
    def test_blank_generic_message_falls_back_to_default(self, generic_message):
        """Test an empty fallback text cannot break fault handling."""
        config = WorkActionConfiguration(
            use_exception_message_during_exception_handling=False,
            generic_exception_message=generic_message,
        )
        action = RecordingWorkAction(
            configuration=config, failures={"process_action": make_fault("Hidden")}
        )

        action.execute()

        assert action.result == WorkActionResult.FAIL
        assert action.validation_context.failed_results[0].message == (
            DEFAULT_GENERIC_EXCEPTION_MESSAGE
        )


class TestWorkActionUnhandledExceptions:
    """Test exceptions other than UnitOfWorkError."""

    def test_other_exception_propagates(self, passing_rules):
        """Test an ordinary exception escapes with state left as-is."""
        action = RecordingWorkAction(
            rules=passing_rules, failures={"process_action": RuntimeError("disk full")}
        )

        with pytest.raises(RuntimeError, match="disk full"):
            action.execute()

        assert action.processing_stage == WorkActionProcessingStage.PROCESS_ACTION
        assert action.result == WorkActionResult.UNKNOWN
        assert len(action.validation_context.results) == 4
        assert action.validation_context.is_valid

    def test_rule_exception_propagates(self):
        """Test an ordinary exception from a rule escapes validation."""
        action = RecordingWorkAction(rules=[ExplodingRule("Broken", KeyError("id"))])

        with pytest.raises(KeyError):
            action.execute()

        assert action.processing_stage == WorkActionProcessingStage.VALIDATE_RULES

    def test_rule_executed_before_registration(self):
        """Test a failing rule run ahead of time stops the action instead of passing."""
        rule = NullRule("MustBeNull", "Value must be null.", "x")
        rule.execute()
        action = RecordingWorkAction(rules=[rule])

        with pytest.raises(RuleReentrancyError):
            action.execute()

        assert action.result != WorkActionResult.SUCCESS
        assert action.processing_stage == WorkActionProcessingStage.VALIDATE_RULES
        assert "process_action" not in action.calls


class TestWorkActionReexecution:
    """Test the single-execution guard."""

    def test_second_execute_raises(self):
        """Test an action cannot run twice."""
        action = RecordingWorkAction()
        action.execute()

        with pytest.raises(WorkActionStateError, match="already been executed"):
            action.execute()

        assert action.calls.count("process_action") == 1

    def test_second_execute_after_unhandled_exception(self):
        """Test the guard also holds after an exception escaped."""
        action = RecordingWorkAction(failures={"pre_add_rules": ValueError("boom")})
        with pytest.raises(ValueError):
            action.execute()

        with pytest.raises(WorkActionStateError):
            action.execute()


class TestWorkActionLogging:
    """Test lifecycle logging."""

    def test_logs_start_and_finish(self):
        """Test info messages mark the start and result."""
        action = WorkAction(name="Checkout")

        with patch.object(action.logger, "info") as mock_info:
            action.execute()

        messages = [c[0][0] for c in mock_info.call_args_list]
        assert messages == ["Executing Checkout", "Finished Checkout with result success"]


class TestSubclassedAction:
    """Test an action written the way callers write them."""

    def test_subclass_adds_rules_and_processes(self):
        """Test a typical subclass with one rule and a side effect."""
        effects = []

        class RegisterCustomer(WorkAction):
            def __init__(self, email, **kwargs):
                super().__init__(**kwargs)
                self.email = email

            def add_rules(self, rules):
                rules.append(NotNullRule("Email", "Email is required.", self.email))

            def process_action(self):
                effects.append(self.email)

        ok = RegisterCustomer("a@example.com")
        ok.execute()
        missing = RegisterCustomer(None, validation=WorkValidation())
        missing.execute()

        assert ok.result == WorkActionResult.SUCCESS
        assert missing.result == WorkActionResult.FAIL
        assert effects == ["a@example.com"]
        assert missing.validation_context.failed_results[0].message == "Email is required."
