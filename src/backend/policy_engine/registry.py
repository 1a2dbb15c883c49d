from __future__ import annotations

from typing import Dict, Iterable, Type

from .rule import ConfiguredRule, Rule
from .store import ConfigurationStore


class RuleRegistry:
    """Rule classes keyed by `rule_id`; instances are built per store."""

    def __init__(self):
        self._rules: Dict[str, Type[Rule]] = {}

    def register(self, rule_cls: Type[Rule]) -> None:
        rule_id = getattr(rule_cls, "rule_id", None)
        if not rule_id:
            raise ValueError(f"Rule class {rule_cls.__name__} missing rule_id")
        existing = self._rules.get(rule_id)
        if existing is not None:
            raise ValueError(f"Duplicate rule_id registered: {rule_id} ({existing.__name__}, {rule_cls.__name__})")
        self._rules[rule_id] = rule_cls

    def create_all(self, store: ConfigurationStore) -> list[Rule]:
        # Only rules that read thresholds get the store.
        return [cls(store) if issubclass(cls, ConfiguredRule) else cls() for cls in self._rules.values()]

    def get(self, rule_id: str) -> Type[Rule]:
        return self._rules[rule_id]

    def ids(self) -> Iterable[str]:
        return self._rules.keys()

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules


registry = RuleRegistry()


def register_rule(rule_cls: Type[Rule]) -> Type[Rule]:
    """Class decorator: add `rule_cls` to the package-wide registry."""
    registry.register(rule_cls)
    return rule_cls
