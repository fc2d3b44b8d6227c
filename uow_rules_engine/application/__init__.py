"""
Application Layer - Work Actions and Configuration

This layer contains:
- Actions: the synchronous and asynchronous work action pipelines
- Configuration: pipeline policy, logging settings and their loader
- Interfaces: protocols for work actions

Depends on domain layer, orchestrates rule validation and business logic.
"""

from .actions import WorkAction, WorkActionAsync, WorkActionProcessingStage, WorkActionResult
from .config import ApplicationConfig, LoggingConfig, WorkActionConfiguration
from .exceptions_application import (
    ApplicationException,
    WorkActionException,
    WorkActionStateError,
    WorkActionTimeoutError,
)

__all__ = [
    "ApplicationConfig",
    "ApplicationException",
    "LoggingConfig",
    "WorkAction",
    "WorkActionAsync",
    "WorkActionConfiguration",
    "WorkActionException",
    "WorkActionProcessingStage",
    "WorkActionResult",
    "WorkActionStateError",
    "WorkActionTimeoutError",
]
