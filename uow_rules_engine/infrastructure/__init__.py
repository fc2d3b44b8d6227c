"""Infrastructure Layer - logging setup."""

from .logging_config import configure_logging

__all__ = ["configure_logging"]
