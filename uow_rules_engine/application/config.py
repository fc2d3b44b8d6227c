"""
Application Configuration - Central configuration management.

This module provides the policy object that drives the action pipeline and
the validation loop, together with logging settings and a process-wide
configuration singleton.
"""

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from uow_rules_engine.domain.exceptions import UnitOfWorkError

DEFAULT_GENERIC_EXCEPTION_MESSAGE = "An exception occurred while processing request."


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class WorkActionConfiguration:
    """
    Policy for work actions and their validation context.

    ``transaction`` is an opaque handle owned by the caller. Hooks that need
    it read ``self.configuration.transaction``; the pipeline itself never
    opens, commits or rolls it back.
    """

    stop_rule_processing_on_first_failure: bool = False
    use_exception_message_during_exception_handling: bool = True
    generic_exception_message: str = DEFAULT_GENERIC_EXCEPTION_MESSAGE
    timeout_seconds: float | None = None
    transaction: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def from_env(cls) -> "WorkActionConfiguration":
        """Create configuration from environment variables."""
        timeout = os.getenv("UOW_TIMEOUT_SECONDS")
        return cls(
            stop_rule_processing_on_first_failure=_env_flag("UOW_STOP_ON_FIRST_FAILURE", "false"),
            use_exception_message_during_exception_handling=_env_flag(
                "UOW_USE_EXCEPTION_MESSAGE", "true"
            ),
            generic_exception_message=os.getenv(
                "UOW_GENERIC_EXCEPTION_MESSAGE", DEFAULT_GENERIC_EXCEPTION_MESSAGE
            ),
            timeout_seconds=float(timeout) if timeout else None,
        )

    def with_changes(self, **changes: Any) -> "WorkActionConfiguration":
        """Return a copy of this configuration with the given fields replaced."""
        return replace(self, **changes)

    def resolve_use_exception_message(self, fault: "UnitOfWorkError") -> bool:
        """
        Decide whether a handled fault's own message may be shown.

        The fault's override wins over this configuration when it is set.
        """
        override = getattr(fault, "use_exception_message", None)
        if override is not None:
            return bool(override)
        return self.use_exception_message_during_exception_handling

    def validate(self) -> bool:
        """
        Validate the configuration.

        Returns:
            True if valid, raises exception otherwise
        """
        if not self.generic_exception_message or not self.generic_exception_message.strip():
            raise ValueError("Generic exception message cannot be empty")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("Timeout must be positive")
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary (the transaction handle is omitted)."""
        return {
            "stop_rule_processing_on_first_failure": self.stop_rule_processing_on_first_failure,
            "use_exception_message_during_exception_handling": (
                self.use_exception_message_during_exception_handling
            ),
            "generic_exception_message": self.generic_exception_message,
            "timeout_seconds": self.timeout_seconds,
        }


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str | None = None
    max_bytes: int = 10485760  # 10MB
    backup_count: int = 5

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create configuration from environment variables."""
        file_path = os.getenv("LOG_FILE")
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            file=file_path if file_path else None,
            max_bytes=int(os.getenv("LOG_MAX_BYTES", "10485760")),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "format": self.format,
            "file": self.file,
            "max_bytes": self.max_bytes,
            "backup_count": self.backup_count,
        }


@dataclass
class ApplicationConfig:
    """Main application configuration."""

    environment: Environment = Environment.DEVELOPMENT
    work_action: WorkActionConfiguration = field(default_factory=WorkActionConfiguration)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment.value,
            "work_action": self.work_action.to_dict(),
            "logging": self.logging.to_dict(),
        }

    def validate(self) -> bool:
        """
        Validate the configuration.

        Returns:
            True if valid, raises exception otherwise
        """
        self.work_action.validate()

        # Raw fault messages may leak internals to end users
        if self.environment == Environment.PRODUCTION:
            if self.work_action.use_exception_message_during_exception_handling:
                raise ValueError("Exception messages must not be surfaced in production")

        if self.logging.level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {self.logging.level}")

        return True


# Global configuration singleton
_config: ApplicationConfig | None = None


def get_config() -> ApplicationConfig:
    """
    Get the application configuration singleton.

    Returns:
        ApplicationConfig: The application configuration
    """
    global _config
    if _config is None:
        from uow_rules_engine.application.config_loader import ConfigLoader

        _config = ConfigLoader.from_env()
    return _config


def set_config(config: ApplicationConfig) -> None:
    """
    Set the application configuration.

    Args:
        config: The new configuration
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the configuration singleton."""
    global _config
    _config = None
