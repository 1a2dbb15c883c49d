from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

# Opaque configuration value. Rules coerce it to the type they expect.
ConfigValue = Optional[Union[StrictInt, StrictStr]]


@dataclass(frozen=True)
class Subject:
    """The value under validation. No checks happen at construction time."""

    value: Optional[str]

    @property
    def is_blank(self) -> bool:
        return not self.value


class ConfigurationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1)
    value: ConfigValue = None
    active: bool = True


class RuleOutcome(BaseModel):
    rule_id: str
    passed: bool


class EvaluationReport(BaseModel):
    subject: Optional[str] = None
    passed: bool
    blank_subject: bool = False

    results: List[RuleOutcome] = Field(default_factory=list)
    # Rules with an entry whose `active` flag is off.
    inactive: List[str] = Field(default_factory=list)
    # Rules with no entry at all in the snapshot.
    unconfigured: List[str] = Field(default_factory=list)

    @property
    def failed_rules(self) -> List[str]:
        return [r.rule_id for r in self.results if not r.passed]
