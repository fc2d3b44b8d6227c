"""Domain entities."""

from .work_result import WorkResult
from .work_rule import IWorkRule, WorkRule
from .work_validation import IValidationConfiguration, WorkValidation

__all__ = [
    "IValidationConfiguration",
    "IWorkRule",
    "WorkResult",
    "WorkRule",
    "WorkValidation",
]
