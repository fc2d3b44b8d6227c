"""Test helper utilities for the rules engine test suite."""

from tests.helpers.actions import (
    RecordingAsyncAction,
    RecordingWorkAction,
)
from tests.helpers.factories import (
    ExplodingRule,
    SlowRule,
    get_rules_list,
    make_fault,
)

__all__ = [
    "ExplodingRule",
    "RecordingAsyncAction",
    "RecordingWorkAction",
    "SlowRule",
    "get_rules_list",
    "make_fault",
]
