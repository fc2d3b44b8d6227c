"""
Rules that always fail.

ThrownExceptionRule records an exception as a failed result; the action
pipeline uses it to report intercepted faults. FailureOutsideMainProcessRule
lets collaborators record a failure discovered outside the validation pass.
"""

from uow_rules_engine.domain.entities.work_result import WorkResult
from uow_rules_engine.domain.entities.work_rule import WorkRule

INNER_EXCEPTION_PREFIX = "Inner Exception: "


def _chained_causes(exception: BaseException) -> list[BaseException]:
    causes: list[BaseException] = []
    seen = {id(exception)}
    current = exception.__cause__ or (
        None if exception.__suppress_context__ else exception.__context__
    )
    while current is not None and id(current) not in seen:
        causes.append(current)
        seen.add(id(current))
        current = current.__cause__ or (
            None if current.__suppress_context__ else current.__context__
        )
    return causes


def compose_exception_message(exception: BaseException, headline: str | None = None) -> str:
    """
    Build a message from an exception and its chain of causes.

    The first line is ``headline`` or the exception's own message. Each
    chained cause follows on its own line, indented two spaces per level of
    nesting.

    Args:
        exception: The outermost exception
        headline: Optional replacement for the first line

    Returns:
        Multi-line message describing the whole chain
    """
    lines = [headline if headline is not None else str(exception)]
    for depth, cause in enumerate(_chained_causes(exception)):
        indent = "  " * depth
        lines.append(f"{indent}{INNER_EXCEPTION_PREFIX}{type(cause).__name__}: {cause}")
    return "\n".join(lines)


class ThrownExceptionRule(WorkRule):
    """Always invalid; carries the exception it reports."""

    def __init__(self, name: str, message: str, exception: BaseException | None) -> None:
        super().__init__(name, message)
        self.exception = exception

    @classmethod
    def from_exception(cls, name: str, exception: BaseException) -> "ThrownExceptionRule":
        """Create a rule whose message describes the exception and its causes."""
        return cls(name, compose_exception_message(exception), exception)

    def verify(self) -> WorkResult:
        self.is_valid = False
        return self._to_result()


class FailureOutsideMainProcessRule(WorkRule):
    """Always invalid."""

    def verify(self) -> WorkResult:
        self.is_valid = False
        return self._to_result()
