"""Work actions: the staged validate-then-process pipeline."""

from .base import (
    HANDLED_EXCEPTION_RULE_NAME,
    STAGE_HOOKS,
    PipelineStage,
    StageOutcome,
    StageStatus,
    WorkActionBase,
    WorkActionProcessingStage,
    WorkActionResult,
)
from .work_action import WorkAction
from .work_action_async import WorkActionAsync

__all__ = [
    "HANDLED_EXCEPTION_RULE_NAME",
    "STAGE_HOOKS",
    "PipelineStage",
    "StageOutcome",
    "StageStatus",
    "WorkAction",
    "WorkActionAsync",
    "WorkActionBase",
    "WorkActionProcessingStage",
    "WorkActionResult",
]
