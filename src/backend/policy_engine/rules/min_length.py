from __future__ import annotations

from typing import Optional

from ..models import ConfigurationEntry, Subject
from ..registry import register_rule
from .length import LengthThresholdRule


@register_rule
class MinLengthPolicy(LengthThresholdRule):
    rule_id = "MinLengthPolicy"
    rule_title = "Username is at least the configured minimum length"
    description = "Passes when the value has at least `threshold` characters."
    default_threshold = 3

    def evaluate(self, subject: Subject, entry: Optional[ConfigurationEntry] = None) -> bool:
        return len(subject.value or "") >= self.threshold(entry)
