from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Literal

from .errors import UnconfiguredRuleError
from .models import ConfigurationEntry, EvaluationReport, RuleOutcome, Subject
from .registry import registry
from .rule import Rule
from .store import ConfigurationStore, ensure_unique_keys

logger = logging.getLogger(__name__)

UnconfiguredRules = Literal["skip", "error"]
UNCONFIGURED_RULE_MODES = ("skip", "error")


@dataclass(frozen=True)
class _Selection:
    # Each active rule with the entry that activated it.
    active: tuple[tuple[Rule, ConfigurationEntry], ...]
    inactive: tuple[str, ...]
    unconfigured: tuple[str, ...]


class PolicyEvaluator:
    """Runs every rule whose configuration entry is active; all must pass.

    Rules without any configuration entry are skipped (and logged) by default.
    With `unconfigured_rules="error"` they raise `UnconfiguredRuleError`
    before any rule runs.
    """

    def __init__(
        self,
        rules: Iterable[Rule],
        store: ConfigurationStore,
        *,
        unconfigured_rules: UnconfiguredRules = "skip",
    ):
        if unconfigured_rules not in UNCONFIGURED_RULE_MODES:
            raise ValueError(f"unconfigured_rules must be one of {UNCONFIGURED_RULE_MODES}, got {unconfigured_rules!r}")
        self._rules = tuple(rules)
        seen: set[str] = set()
        for rule in self._rules:
            if rule.rule_id in seen:
                raise ValueError(f"Duplicate rule_id in evaluator: {rule.rule_id}")
            seen.add(rule.rule_id)
        self._store = store
        self._unconfigured_rules = unconfigured_rules

    @classmethod
    def from_registry(
        cls,
        store: ConfigurationStore,
        *,
        unconfigured_rules: UnconfiguredRules = "skip",
    ) -> "PolicyEvaluator":
        return cls(registry.create_all(store), store, unconfigured_rules=unconfigured_rules)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def evaluate(self, subject: Subject) -> bool:
        if subject.is_blank:
            return False
        selection = self._select()
        for rule, entry in selection.active:
            if not rule.evaluate(subject, entry):
                logger.debug("Rule %s rejected subject", rule.rule_id)
                return False
        return True

    def run(self, subject: Subject) -> EvaluationReport:
        """Evaluate every active rule (no short-circuit) and report each outcome."""
        if subject.is_blank:
            return EvaluationReport(subject=subject.value, passed=False, blank_subject=True)

        selection = self._select()
        results = [
            RuleOutcome(rule_id=rule.rule_id, passed=rule.evaluate(subject, entry)) for rule, entry in selection.active
        ]
        return EvaluationReport(
            subject=subject.value,
            passed=all(r.passed for r in results),
            results=results,
            inactive=list(selection.inactive),
            unconfigured=list(selection.unconfigured),
        )

    def _select(self) -> _Selection:
        snapshot = self._store.get_all()
        ensure_unique_keys(snapshot)
        by_key = {entry.key: entry for entry in snapshot}

        active: list[tuple[Rule, ConfigurationEntry]] = []
        inactive: list[str] = []
        unconfigured: list[str] = []
        for rule in self._rules:
            entry = by_key.get(rule.rule_id)
            if entry is None:
                unconfigured.append(rule.rule_id)
            elif entry.active:
                active.append((rule, entry))
            else:
                inactive.append(rule.rule_id)

        if unconfigured:
            if self._unconfigured_rules == "error":
                raise UnconfiguredRuleError(unconfigured)
            logger.warning("Skipping rules with no configuration entry: %s", ", ".join(unconfigured))

        known = {rule.rule_id for rule in self._rules}
        unknown = [key for key in by_key if key not in known]
        if unknown:
            logger.debug("Ignoring configuration entries with no matching rule: %s", ", ".join(unknown))

        logger.debug("Active rules: %s", [rule.rule_id for rule, _ in active])
        return _Selection(active=tuple(active), inactive=tuple(inactive), unconfigured=tuple(unconfigured))
