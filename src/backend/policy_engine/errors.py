from __future__ import annotations

from typing import Any, Iterable


class PolicyEngineError(RuntimeError):
    """Validation could not run. Distinct from a rejected value."""


class ConfigurationConflictError(PolicyEngineError):
    def __init__(self, keys: Iterable[str]):
        self.keys = tuple(sorted(set(keys)))
        super().__init__(f"Duplicate configuration entries for key(s): {', '.join(self.keys)}")


class StoreUnavailableError(PolicyEngineError):
    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


class ConfigCoercionError(PolicyEngineError):
    def __init__(self, rule_id: str, value: Any, expected: str):
        self.rule_id = rule_id
        self.value = value
        self.expected = expected
        super().__init__(f"Configuration value {value!r} for {rule_id} is not a valid {expected}.")


class UnconfiguredRuleError(PolicyEngineError):
    def __init__(self, rule_ids: Iterable[str]):
        self.rule_ids = tuple(rule_ids)
        super().__init__(f"No configuration entry for rule(s): {', '.join(self.rule_ids)}")
