import os
import sys
from typing import Optional


# Ensure `src/backend` is on sys.path so imports like `import policy_engine...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from policy_engine.evaluator import PolicyEvaluator
from policy_engine.models import ConfigurationEntry, Subject
from policy_engine.rule import Rule
from policy_engine.store import InMemoryConfigurationStore


class SpyRule(Rule):
    """Records every call; returns a fixed verdict."""

    def __init__(self, rule_id: str, verdict: bool = True):
        self.rule_id = rule_id
        self.rule_title = f"Spy {rule_id}"
        super().__init__()
        self.verdict = verdict
        self.calls: list[Subject] = []
        self.entries: list[Optional[ConfigurationEntry]] = []

    def evaluate(self, subject: Subject, entry: Optional[ConfigurationEntry] = None) -> bool:
        self.calls.append(subject)
        self.entries.append(entry)
        return self.verdict


@pytest.fixture
def make_spy():
    def _make(rule_id: str, verdict: bool = True) -> SpyRule:
        return SpyRule(rule_id, verdict)

    return _make


@pytest.fixture
def make_store():
    def _make(*entries) -> InMemoryConfigurationStore:
        built = [e if isinstance(e, ConfigurationEntry) else ConfigurationEntry(**e) for e in entries]
        return InMemoryConfigurationStore(built)

    return _make


@pytest.fixture
def default_store() -> InMemoryConfigurationStore:
    return InMemoryConfigurationStore.default()


@pytest.fixture
def make_evaluator():
    def _make(store, rules=None, **kwargs) -> PolicyEvaluator:
        if rules is None:
            return PolicyEvaluator.from_registry(store, **kwargs)
        return PolicyEvaluator(rules, store, **kwargs)

    return _make
