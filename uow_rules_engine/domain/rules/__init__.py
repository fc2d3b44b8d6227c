"""Concrete rule kinds."""

from .equality import ValuesAreEqualRule, ValuesAreNotEqualRule
from .null_checks import NotNullRule, NullRule
from .predicate import AsyncPredicateRule, PredicateRule
from .range_validation import RangeValidationRule
from .thrown_exception import (
    FailureOutsideMainProcessRule,
    ThrownExceptionRule,
    compose_exception_message,
)

__all__ = [
    "AsyncPredicateRule",
    "FailureOutsideMainProcessRule",
    "NotNullRule",
    "NullRule",
    "PredicateRule",
    "RangeValidationRule",
    "ThrownExceptionRule",
    "ValuesAreEqualRule",
    "ValuesAreNotEqualRule",
    "compose_exception_message",
]
