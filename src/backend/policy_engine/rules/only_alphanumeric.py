from __future__ import annotations

from typing import Optional

from ..models import ConfigurationEntry, Subject
from ..registry import register_rule
from ..rule import Rule


def _is_letter_or_digit(ch: str) -> bool:
    # Unicode letters (all L* categories) and decimal digits (Nd).
    return ch.isalpha() or ch.isdecimal()


@register_rule
class OnlyAlphanumericCharacters(Rule):
    rule_id = "OnlyAlphanumericCharacters"
    rule_title = "Username contains only letters and digits"
    description = "Passes when every character is a Unicode letter or decimal digit."

    def evaluate(self, subject: Subject, entry: Optional[ConfigurationEntry] = None) -> bool:
        return all(_is_letter_or_digit(ch) for ch in subject.value or "")
