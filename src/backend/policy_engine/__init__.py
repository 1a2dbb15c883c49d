"""Configurable username policy engine.

This package intentionally contains only domain logic:
- Rules are predicates over a `Subject`; parameters come from a configuration store.
- Which rules run is decided per call by matching rule ids to active entries.
- No HTTP, DI container, or persistence concerns live here.
"""

from .errors import (
    ConfigCoercionError,
    ConfigurationConflictError,
    PolicyEngineError,
    StoreUnavailableError,
    UnconfiguredRuleError,
)
from .evaluator import PolicyEvaluator
from .models import ConfigurationEntry, EvaluationReport, RuleOutcome, Subject
from .rule import ConfiguredRule, Rule
from .store import (
    ConfigurationStore,
    FileConfigurationStore,
    InMemoryConfigurationStore,
    default_entries,
)

# Import built-in rules so they self-register with the global registry.
from . import rules as _builtin_rules  # noqa: F401
