"""
Work Validation - owner of a rule set and its accumulated results.

A validation context runs its rules strictly in registration order and
records one result per executed rule. When the configuration asks to stop
on the first failure, rules after the first invalid result are left
unprocessed and produce no result.

A context is not safe for concurrent use. Parent and child actions may share
one context, but the caller must ensure only one action tree executes against
it at a time; no lock guards it.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Protocol

from uow_rules_engine.domain.entities.work_result import WorkResult
from uow_rules_engine.domain.entities.work_rule import IWorkRule

logger = logging.getLogger(__name__)


class IValidationConfiguration(Protocol):
    """The part of a configuration the validation loop reads."""

    stop_rule_processing_on_first_failure: bool


class WorkValidation:
    """Validation context for one logical unit of work."""

    def __init__(self, configuration: IValidationConfiguration | None = None) -> None:
        """
        Initialize validation context.

        Args:
            configuration: Policy for the validation loop. Without one every
                rule is processed regardless of failures.
        """
        self.rules: list[IWorkRule] = []
        self.results: list[WorkResult] = []
        self.configuration = configuration
        self._next_rule = 0
        self._stopped = False

    @property
    def is_valid(self) -> bool:
        """True when every recorded result is valid (vacuously true when empty)."""
        return all(result.is_valid for result in self.results)

    @property
    def failed_results(self) -> list[WorkResult]:
        return [result for result in self.results if not result.is_valid]

    @property
    def passed_results(self) -> list[WorkResult]:
        return [result for result in self.results if result.is_valid]

    @property
    def warnings(self) -> list[WorkResult]:
        return [result for result in self.results if result.is_warning]

    @property
    def stop_on_first_failure(self) -> bool:
        if self.configuration is None:
            return False
        return bool(self.configuration.stop_rule_processing_on_first_failure)

    @property
    def is_stopped(self) -> bool:
        """True once a pass has stopped at the first failure."""
        return self._stopped

    def set_configuration(self, configuration: IValidationConfiguration | None) -> None:
        """Swap the configuration used by subsequent validation passes."""
        self.configuration = configuration

    def add_rule(self, rule: IWorkRule) -> None:
        self.rules.append(rule)

    def add_rules(self, rules: Iterable[IWorkRule]) -> None:
        self.rules.extend(rules)

    def add_result(self, result: WorkResult) -> None:
        self.results.append(result)

    def validate_rules(self) -> None:
        """
        Execute the rules registered since the previous pass, in order.

        A context remembers how far through ``rules`` it has run, so a child
        action validating a shared context only executes the rules added
        after the parent's pass. Every rule from that point on is executed;
        one that already ran elsewhere raises RuleReentrancyError. After a
        short-circuit the context stays stopped and later passes run nothing.

        Exceptions raised by a rule propagate to the caller.
        """
        self._log_start()
        for rule in self._pending():
            result = rule.execute()
            self.results.append(result)
            if self._should_stop(result):
                self._stop(rule)
                return
        self._log_end()

    async def validate_rules_async(self) -> None:
        """
        Asynchronous counterpart of validate_rules.

        Rules are never run concurrently; the next rule starts only after the
        previous one has completed.
        """
        self._log_start()
        for rule in self._pending():
            result = await rule.execute_async()
            self.results.append(result)
            if self._should_stop(result):
                self._stop(rule)
                return
        self._log_end()

    def summary(self) -> dict[str, Any]:
        """Counts describing the current state of the context."""
        return {
            "total_rules": len(self.rules),
            "processed": sum(1 for rule in self.rules if rule.has_been_processed),
            "passed": len(self.passed_results),
            "failed": len(self.failed_results),
            "warnings": len(self.warnings),
            "is_valid": self.is_valid,
        }

    def _pending(self) -> Iterator[IWorkRule]:
        if self._stopped:
            return
        while self._next_rule < len(self.rules):
            rule = self.rules[self._next_rule]
            self._next_rule += 1
            yield rule

    def _should_stop(self, result: WorkResult) -> bool:
        return not result.is_valid and self.stop_on_first_failure

    def _stop(self, rule: IWorkRule) -> None:
        self._stopped = True
        self._log_short_circuit(rule)

    def _log_start(self) -> None:
        logger.debug(
            f"Validating {len(self.rules)} rules",
            extra={"rule_count": len(self.rules), "stop_on_first_failure": self.stop_on_first_failure},
        )

    def _log_short_circuit(self, rule: IWorkRule) -> None:
        logger.info(
            f"Rule processing stopped after first failure: {rule.name}",
            extra={"rule": rule.name, **self.summary()},
        )

    def _log_end(self) -> None:
        logger.debug("Validation pass complete", extra=self.summary())
