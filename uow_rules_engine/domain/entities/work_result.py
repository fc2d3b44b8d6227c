"""
Work Result - the recorded outcome of executing one rule.

Results are immutable once built. A validation context keeps them in
execution order, and every derived view (failed, passed, warnings) is a
filter over that ordered list.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from uow_rules_engine.domain.exceptions import RuleArgumentError

if TYPE_CHECKING:
    from uow_rules_engine.domain.entities.work_rule import IWorkRule


def _require_text(argument: str, value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        raise RuleArgumentError(argument)


@dataclass(frozen=True)
class WorkResult:
    """Outcome of a single rule execution."""

    name: str
    message: str
    is_valid: bool
    is_warning: bool = False
    warning_message: str | None = None

    def __post_init__(self) -> None:
        _require_text("name", self.name)
        _require_text("message", self.message)

    @classmethod
    def from_rule(cls, rule: "IWorkRule") -> "WorkResult":
        """Create a result carrying the rule's current name, message and validity."""
        return cls(name=rule.name, message=rule.message, is_valid=bool(rule.is_valid))

    @classmethod
    def passed(cls, name: str, message: str) -> "WorkResult":
        """Create a passing result."""
        return cls(name=name, message=message, is_valid=True)

    @classmethod
    def failed(cls, name: str, message: str) -> "WorkResult":
        """Create a failing result."""
        return cls(name=name, message=message, is_valid=False)

    @classmethod
    def warning(cls, name: str, message: str, warning_message: str) -> "WorkResult":
        """Create a passing result flagged as a warning."""
        return cls(
            name=name,
            message=message,
            is_valid=True,
            is_warning=True,
            warning_message=warning_message,
        )

    def with_warning(self, warning_message: str) -> "WorkResult":
        """Return a copy of this result flagged as a warning."""
        return replace(self, is_warning=True, warning_message=warning_message)

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary representation."""
        return {
            "name": self.name,
            "message": self.message,
            "is_valid": self.is_valid,
            "is_warning": self.is_warning,
            "warning_message": self.warning_message,
        }
