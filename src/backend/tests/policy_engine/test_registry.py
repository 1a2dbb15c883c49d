import json

import pytest
import yaml

from policy_engine.catalog import build_catalog, main as catalog_main
from policy_engine.registry import RuleRegistry, registry
from policy_engine.rule import ConfiguredRule, Rule
from policy_engine.rules import MaxLengthPolicy, MinLengthPolicy, OnlyAlphanumericCharacters


class _Plain(Rule):
    rule_id = "Plain"
    rule_title = "Plain"

    def evaluate(self, subject, entry=None):
        return True


class _Configured(ConfiguredRule):
    rule_id = "Configured"
    rule_title = "Configured"

    def evaluate(self, subject, entry=None):
        return self._entry(entry) is not None


def test_builtin_rules_are_registered():
    assert set(registry.ids()) >= {"MaxLengthPolicy", "MinLengthPolicy", "OnlyAlphanumericCharacters"}
    assert registry.get("MaxLengthPolicy") is MaxLengthPolicy
    assert registry.get("MinLengthPolicy") is MinLengthPolicy
    assert registry.get("OnlyAlphanumericCharacters") is OnlyAlphanumericCharacters


def test_register_rejects_duplicates():
    reg = RuleRegistry()
    reg.register(_Plain)
    with pytest.raises(ValueError):
        reg.register(_Plain)


def test_register_rejects_missing_rule_id():
    class Nameless(Rule):
        def evaluate(self, subject, entry=None):
            return True

    with pytest.raises(ValueError):
        RuleRegistry().register(Nameless)


def test_create_all_binds_store_to_configured_rules(make_store):
    reg = RuleRegistry()
    reg.register(_Plain)
    reg.register(_Configured)
    store = make_store({"key": "Configured"})
    rules = {r.rule_id: r for r in reg.create_all(store)}
    assert isinstance(rules["Plain"], _Plain)
    assert rules["Configured"].evaluate(None)


def test_catalog_describes_builtin_rules():
    by_id = {e.rule_id: e for e in build_catalog()}
    assert by_id["MaxLengthPolicy"].default_threshold == 50
    assert by_id["MinLengthPolicy"].default_threshold == 3
    assert by_id["MaxLengthPolicy"].config_model == "LengthThresholdConfig"
    assert "threshold" in by_id["MaxLengthPolicy"].config_schema["properties"]
    assert by_id["OnlyAlphanumericCharacters"].config_model == ""
    assert by_id["OnlyAlphanumericCharacters"].default_threshold is None
    assert by_id["OnlyAlphanumericCharacters"].class_name == "OnlyAlphanumericCharacters"


def test_catalog_is_sorted_by_rule_id():
    ids = [e.rule_id for e in build_catalog()]
    assert ids == sorted(ids)


def test_catalog_cli_json(capsys):
    catalog_main(["--format", "json"])
    data = json.loads(capsys.readouterr().out)
    assert {"MaxLengthPolicy", "MinLengthPolicy", "OnlyAlphanumericCharacters"} <= {e["rule_id"] for e in data}


def test_catalog_cli_yaml(capsys):
    catalog_main([])
    data = yaml.safe_load(capsys.readouterr().out)
    assert any(e["rule_id"] == "MinLengthPolicy" for e in data)


def test_duplicate_error_names_both_classes():
    class _PlainAgain(_Plain):
        pass

    reg = RuleRegistry()
    reg.register(_Plain)
    with pytest.raises(ValueError, match="_Plain, _PlainAgain"):
        reg.register(_PlainAgain)


def test_membership_by_rule_id():
    assert "MinLengthPolicy" in registry
    assert "minlengthpolicy" not in registry
