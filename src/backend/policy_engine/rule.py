from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Type

from .config import RuleConfigBase
from .models import ConfigurationEntry, Subject
from .store import ConfigurationStore


class Rule(ABC):
    # Configuration key; must stay stable across renames of the class.
    rule_id: str
    rule_title: str
    description: str = ""
    config_model: Optional[Type[RuleConfigBase]] = None

    def __init__(self):
        if not getattr(self, "rule_id", None):
            raise ValueError("Rule must define rule_id")

    @abstractmethod
    def evaluate(self, subject: Subject, entry: Optional[ConfigurationEntry] = None) -> bool:  # pragma: no cover
        """`entry` is this rule's entry from the snapshot the evaluator selected on."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rule_id={self.rule_id!r})"


class ConfiguredRule(Rule):
    """A rule that reads its parameters from the configuration store."""

    def __init__(self, store: ConfigurationStore):
        super().__init__()
        self._store = store

    def _entry(self, entry: Optional[ConfigurationEntry] = None) -> Optional[ConfigurationEntry]:
        # Standalone calls have no snapshot entry; read the store directly.
        if entry is not None:
            return entry
        return self._store.get_by_name(self.rule_id)
