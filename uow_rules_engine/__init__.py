"""
uow_rules_engine - unit of work execution pipeline.

A work action validates a collection of named business rules before its
side-effecting logic runs, and reports pass/fail outcomes uniformly through
its result and the results of its validation context.
"""

from .application.actions import (
    WorkAction,
    WorkActionAsync,
    WorkActionProcessingStage,
    WorkActionResult,
)
from .application.config import WorkActionConfiguration
from .domain.entities import IWorkRule, WorkResult, WorkRule, WorkValidation
from .domain.exceptions import (
    RuleArgumentError,
    RuleExecutionError,
    RuleReentrancyError,
    UnitOfWorkError,
)
from .domain.rules import (
    AsyncPredicateRule,
    FailureOutsideMainProcessRule,
    NotNullRule,
    NullRule,
    PredicateRule,
    RangeValidationRule,
    ThrownExceptionRule,
    ValuesAreEqualRule,
    ValuesAreNotEqualRule,
)

__version__ = "1.0.0"

__all__ = [
    "AsyncPredicateRule",
    "FailureOutsideMainProcessRule",
    "IWorkRule",
    "NotNullRule",
    "NullRule",
    "PredicateRule",
    "RangeValidationRule",
    "RuleArgumentError",
    "RuleExecutionError",
    "RuleReentrancyError",
    "ThrownExceptionRule",
    "UnitOfWorkError",
    "ValuesAreEqualRule",
    "ValuesAreNotEqualRule",
    "WorkAction",
    "WorkActionAsync",
    "WorkActionConfiguration",
    "WorkActionProcessingStage",
    "WorkActionResult",
    "WorkResult",
    "WorkRule",
    "WorkValidation",
]
