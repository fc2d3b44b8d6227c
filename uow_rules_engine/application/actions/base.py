"""
Base Work Action

Provides the state machine shared by synchronous and asynchronous work
actions: the ordered list of pipeline stages, the branch on validation
failure, and the conversion of a UnitOfWorkError into a failed result.

Stage order for every execution:

    PRE_ADD_RULES -> ADD_RULES -> PRE_VALIDATE_RULES -> VALIDATE_RULES
    -> PRE_PROCESS_ACTION -> PROCESS_ACTION -> POST_PROCESS_ACTION

A validation failure ends the run after VALIDATE_RULES with result FAIL.
A UnitOfWorkError raised by any stage moves the action to EXCEPTION_HANDLER.
Any other exception propagates with the action left in the stage where it
was raised.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from uow_rules_engine.application.config import (
    DEFAULT_GENERIC_EXCEPTION_MESSAGE,
    WorkActionConfiguration,
)
from uow_rules_engine.application.exceptions_application import WorkActionStateError
from uow_rules_engine.domain.entities.work_validation import WorkValidation
from uow_rules_engine.domain.exceptions import UnitOfWorkError
from uow_rules_engine.domain.rules.thrown_exception import (
    ThrownExceptionRule,
    compose_exception_message,
)

HANDLED_EXCEPTION_RULE_NAME = "HandledExceptionRule"


class WorkActionResult(Enum):
    """Terminal result of a work action."""

    SUCCESS = "success"
    FAIL = "fail"
    UNKNOWN = "unknown"


class WorkActionProcessingStage(Enum):
    """Pipeline stages in execution order, plus the fault handler."""

    PRE_ADD_RULES = "pre_add_rules"
    ADD_RULES = "add_rules"
    PRE_VALIDATE_RULES = "pre_validate_rules"
    VALIDATE_RULES = "validate_rules"
    PRE_PROCESS_ACTION = "pre_process_action"
    PROCESS_ACTION = "process_action"
    POST_PROCESS_ACTION = "post_process_action"
    EXCEPTION_HANDLER = "exception_handler"


# Pipeline order; each stage names the method that runs it
STAGE_HOOKS: tuple[tuple[WorkActionProcessingStage, str], ...] = (
    (WorkActionProcessingStage.PRE_ADD_RULES, "pre_add_rules"),
    (WorkActionProcessingStage.ADD_RULES, "_register_rules"),
    (WorkActionProcessingStage.PRE_VALIDATE_RULES, "pre_validate_rules"),
    (WorkActionProcessingStage.VALIDATE_RULES, "_validate"),
    (WorkActionProcessingStage.PRE_PROCESS_ACTION, "pre_process_action"),
    (WorkActionProcessingStage.PROCESS_ACTION, "process_action"),
    (WorkActionProcessingStage.POST_PROCESS_ACTION, "_post_process"),
)


class StageStatus(Enum):
    """How a stage ended."""

    CONTINUE = "continue"
    RULE_FAILURE = "rule_failure"
    FAULT = "fault"


@dataclass(frozen=True)
class StageOutcome:
    """Result of running one pipeline stage."""

    status: StageStatus
    fault: UnitOfWorkError | None = None

    @classmethod
    def proceed(cls) -> "StageOutcome":
        return cls(StageStatus.CONTINUE)

    @classmethod
    def rule_failure(cls) -> "StageOutcome":
        return cls(StageStatus.RULE_FAILURE)

    @classmethod
    def faulted(cls, fault: UnitOfWorkError) -> "StageOutcome":
        return cls(StageStatus.FAULT, fault)


@dataclass(frozen=True)
class PipelineStage:
    """A processing stage bound to the callable that runs it."""

    stage: WorkActionProcessingStage
    run: Callable[[], Any]


class WorkActionBase:
    """
    State shared by WorkAction and WorkActionAsync.

    A child action (one constructed with a parent) registers its rules into
    the parent's validation context and validates against it, so the whole
    action tree is checked against one shared result set. Only one action
    tree may execute against a given context at a time; this is the caller's
    responsibility and is not guarded by a lock.
    """

    def __init__(
        self,
        validation: WorkValidation | None = None,
        configuration: WorkActionConfiguration | None = None,
        parent: "WorkActionBase | None" = None,
        name: str | None = None,
    ) -> None:
        """
        Initialize work action.

        Args:
            validation: Validation context to use; a new one is created when omitted.
                Ignored for rule registration and validation when ``parent`` is given.
            configuration: Pipeline policy (defaults to WorkActionConfiguration())
            parent: Parent action whose validation context this action shares
            name: Optional name for the action (defaults to class name)
        """
        self.name = name or self.__class__.__name__
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

        self.configuration = configuration or WorkActionConfiguration()
        self.parent = parent

        self._owns_validation = validation is None and parent is None
        if validation is not None:
            self.validation_context = validation
        elif parent is not None:
            self.validation_context = parent.rule_context
        else:
            self.validation_context = WorkValidation(self.configuration)

        self.result = WorkActionResult.UNKNOWN
        self.processing_stage: WorkActionProcessingStage | None = None
        self._executed = False

    @property
    def is_child_action(self) -> bool:
        return self.parent is not None

    @property
    def rule_context(self) -> WorkValidation:
        """The context this action registers rules into and validates."""
        if self.parent is not None:
            return self.parent.rule_context
        return self.validation_context

    def set_configuration(self, configuration: WorkActionConfiguration) -> None:
        """Replace the configuration; an action-owned context follows it."""
        self.configuration = configuration
        if self._owns_validation:
            self.validation_context.set_configuration(configuration)

    def _stages(self) -> list[PipelineStage]:
        return [PipelineStage(stage, getattr(self, hook)) for stage, hook in STAGE_HOOKS]

    def _begin(self) -> None:
        if self._executed:
            raise WorkActionStateError(self.name, self.result.value)
        self._executed = True
        self.logger.info(
            f"Executing {self.name}",
            extra={"action": self.name, "is_child_action": self.is_child_action},
        )

    def _enter(self, stage: WorkActionProcessingStage) -> None:
        self.processing_stage = stage
        self.logger.debug(
            f"{self.name} entering {stage.value}",
            extra={"action": self.name, "stage": stage.value},
        )

    def _check_validation(self) -> StageOutcome:
        context = self.rule_context
        if context.is_valid:
            return StageOutcome.proceed()

        self.result = WorkActionResult.FAIL
        self.logger.warning(
            f"Validation failed for {self.name}: "
            f"{', '.join(result.name for result in context.failed_results)}",
            extra={"action": self.name, **context.summary()},
        )
        return StageOutcome.rule_failure()

    def _default_verification(self) -> WorkActionResult:
        if self.result == WorkActionResult.UNKNOWN:
            return WorkActionResult.SUCCESS
        return self.result

    def _conclude(self, outcome: StageOutcome) -> bool:
        """
        Apply a stage outcome.

        Returns:
            True when the pipeline should move on to the next stage
        """
        match outcome:
            case StageOutcome(status=StageStatus.CONTINUE):
                return True
            case StageOutcome(status=StageStatus.FAULT, fault=UnitOfWorkError() as fault):
                self._handle_fault(fault)
                return False
            case _:
                return False

    def _handle_fault(self, fault: UnitOfWorkError) -> None:
        """Record a handled fault as a failed result in the rule context."""
        failed_stage = self.processing_stage
        self.processing_stage = WorkActionProcessingStage.EXCEPTION_HANDLER

        message = self._fault_message(fault)
        exception_rule = ThrownExceptionRule(HANDLED_EXCEPTION_RULE_NAME, message, fault)
        self.rule_context.add_result(exception_rule.execute())
        self.result = WorkActionResult.FAIL

        self.logger.warning(
            f"Handled fault in {self.name}: {fault}",
            extra={
                "action": self.name,
                "stage": failed_stage.value if failed_stage else None,
            },
            exc_info=fault,
        )

    def _fault_message(self, fault: UnitOfWorkError) -> str:
        fallback = self.configuration.generic_exception_message
        if not fallback or not fallback.strip():
            fallback = DEFAULT_GENERIC_EXCEPTION_MESSAGE

        if not self.configuration.resolve_use_exception_message(fault):
            return fallback
        # A blank fault message keeps its causes under the fallback headline
        if not str(fault).strip():
            return compose_exception_message(fault, headline=fallback)
        return compose_exception_message(fault)

    def _log_completion(self) -> None:
        self.logger.info(
            f"Finished {self.name} with result {self.result.value}",
            extra={"action": self.name, "result": self.result.value},
        )
