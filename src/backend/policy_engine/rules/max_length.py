from __future__ import annotations

from typing import Optional

from ..models import ConfigurationEntry, Subject
from ..registry import register_rule
from .length import LengthThresholdRule


@register_rule
class MaxLengthPolicy(LengthThresholdRule):
    rule_id = "MaxLengthPolicy"
    rule_title = "Username is not longer than the configured maximum"
    description = "Passes when the value has at most `threshold` characters."
    default_threshold = 50

    def evaluate(self, subject: Subject, entry: Optional[ConfigurationEntry] = None) -> bool:
        return len(subject.value or "") <= self.threshold(entry)
