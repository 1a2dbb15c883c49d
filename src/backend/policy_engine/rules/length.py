from __future__ import annotations

from typing import Optional

from ..config import LengthThresholdConfig, get_rule_config
from ..models import ConfigurationEntry
from ..rule import ConfiguredRule


class LengthThresholdRule(ConfiguredRule):
    config_model = LengthThresholdConfig
    default_threshold: int

    def threshold(self, entry: Optional[ConfigurationEntry] = None) -> int:
        cfg = get_rule_config(
            self.rule_id,
            self._entry(entry),
            LengthThresholdConfig,
            field="threshold",
            default=LengthThresholdConfig(threshold=self.default_threshold),
        )
        return cfg.threshold
