"""Test suite for Rule and RuleSet classes and helper functions."""
import pytest
from schema import SchemaError

from soundchanger import rule_objects
from soundchanger.correlator import MalformedRuleError, Position


class TestRule:

    def test_rule_constructor(self, rule_fixture):
        assert isinstance(rule_fixture, rule_objects.Rule)
        assert rule_fixture.name == "1062284643"
        assert len(rule_fixture.variants) == 1
        assert rule_fixture.position is Position.ANY

    def test_malformed_notation_fails_on_construction(self):
        with pytest.raises(MalformedRuleError):
            rule_objects.Rule(name="bad", notation="[abc] > [ab]")

    def test_from_dict(self):
        # given
        rule_dict = {"name": "ms", "notation": "[{mn}s] > [ss]", "order_id": "00600"}
        # when
        result = rule_objects.Rule.from_dict(rule_dict)
        # then
        assert result.name == "ms"
        assert result.order_id == "00600"
        assert result.skip is False

    def test_from_dict_rejects_unexpected_keys(self):
        with pytest.raises(SchemaError):
            rule_objects.Rule.from_dict(
                {"name": "ms", "notation": "[{mn}s] > [ss]", "pattern": "x"})

    def test_to_dict(self, rule_fixture):
        # when
        result = rule_fixture.to_dict()
        # then
        assert result["name"] == "1062284643"
        assert result["notation"] == "[ln] > [ll]"
        assert result["condition"] is None

    def test_apply(self, rule_fixture):
        assert rule_fixture.apply("olna") == "olla"

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("kwende", "pende"),
            ("gwath", "bath"),
            ("kʰwen", "pʰen"),
            ("ŋwalme", "malme"),
            ("alkwa", "alkwa"),
        ]
    )
    def test_apply_tries_variants_in_order(self, word, expected):
        # given
        rule = rule_objects.Rule(
            name="171120983",
            notation="[kw|kʰw|gw|ŋgw|ŋkw|ŋw-] > [p|pʰ|b|mb|mp|m-]",
        )
        # when
        result = rule.apply(word)
        # then
        assert result == expected

    def test_condition_is_checked_on_syllables(self):
        # given
        rule = rule_objects.Rule(
            name="981459769",
            notation="[-V{ptks}] > [-Vø]",
            condition=lambda syllables: len(syllables) > 1,
        )
        # when / then
        assert rule.apply("kalat") == "kala"
        assert rule.apply("tat") == "tat"

    def test_condition_sees_compound_boundaries(self):
        # given
        rule = rule_objects.Rule(
            name="final_an",
            notation="[-an] > [-on]",
            condition=lambda syllables: not syllables[0].is_heavy,
        )
        # when / then
        assert rule.apply("athan") == "athon"
        assert rule.apply("athan", compound=True) == "athan"

    def test_equality(self, rule_fixture):
        # given
        other = rule_objects.Rule(name="1062284643", notation="[ln] > [ll]")
        # then
        assert rule_fixture == other

    def test_rules_are_hashable(self, rule_fixture):
        # given
        other = rule_objects.Rule(name="1062284643", notation="[ln] > [ll]")
        # when
        result = {rule_fixture, other}
        # then
        assert len(result) == 1


class TestRuleSet:

    def test_ruleset_constructor(self, ruleset_fixture, rule_fixture):
        assert ruleset_fixture.name == "test_rule_set"
        assert ruleset_fixture.rules == [rule_fixture]
        assert len(ruleset_fixture) == 1

    def test_rules_are_sorted_by_order_id(self, ruleset_list):
        # when
        result = rule_objects.RuleSet.from_dict(ruleset_list[0])
        # then
        assert [rule.name for rule in result] == ["reduction", "ln", "final_stops"]

    def test_add_rule_skips_duplicates(self, ruleset_fixture, rule_fixture):
        # when
        ruleset_fixture.add_rule(rule_fixture)
        # then
        assert len(ruleset_fixture) == 1

    def test_add_rule_dict(self, ruleset_fixture):
        # when
        ruleset_fixture.add_rule({"name": "ms", "notation": "[{mn}s] > [ss]"})
        # then
        assert [rule.name for rule in ruleset_fixture] == ["1062284643", "ms"]

    @pytest.mark.parametrize("invalid", [1, {"pattern": "ln"}, None])
    def test_add_rule_raises_error(self, ruleset_fixture, invalid):
        with pytest.raises(ValueError):
            ruleset_fixture.add_rule(invalid)

    def test_add_multiple_rules_skips_invalid(self, ruleset_fixture):
        # given
        rules = [
            {"name": "ms", "notation": "[{mn}s] > [ss]"},
            {"name": "bad", "notation": "[abc] > [ab]"},
            {"unexpected_key": "unexpected_value"},
        ]
        # when
        ruleset_fixture.add_multiple_rules(rules)
        # then
        assert [rule.name for rule in ruleset_fixture] == ["1062284643", "ms"]

    def test_get_rule(self, ruleset_fixture, rule_fixture):
        assert ruleset_fixture.get_rule("1062284643") is rule_fixture
        with pytest.raises(KeyError):
            ruleset_fixture.get_rule("missing")

    def test_to_dict(self, ruleset_fixture):
        # when
        result = ruleset_fixture.to_dict()
        # then
        assert result["name"] == "test_rule_set"
        assert [rule["name"] for rule in result["rules"]] == ["1062284643"]

    def test_apply(self, ruleset_list):
        # given
        ruleset = rule_objects.RuleSet.from_dict(ruleset_list[0])
        # when
        result, changes = ruleset.apply("barálnat")
        # then
        assert result == "bralla"
        assert [change.rule for change in changes] == ["reduction", "ln", "final_stops"]
        assert [(c.before, c.after) for c in changes] == [
            ("barálnat", "bralnat"),
            ("bralnat", "brallat"),
            ("brallat", "bralla"),
        ]
        assert changes[1].description == "[ln] became [ll]"

    def test_apply_without_changes(self, ruleset_list):
        # given
        ruleset = rule_objects.RuleSet.from_dict(ruleset_list[0])
        # when
        result, changes = ruleset.apply("tat")
        # then
        assert result == "tat"
        assert changes == []

    def test_apply_carries_the_spelling_mode(self):
        # given
        ruleset = rule_objects.RuleSet(
            name="spirants",
            rules=[
                {"name": "t", "order_id": "1", "notation": "[t] > [th]"},
                {"name": "a", "order_id": "2", "notation": "[a] > [o]"},
            ],
        )
        # when
        result, _ = ruleset.apply("aθat")
        # then
        assert result == "oθaθ"

    def test_apply_to_compound(self):
        # given
        from dummy_rules import test3
        ruleset = rule_objects.RuleSet.from_dict(test3)
        # when
        simple = ruleset.apply("athan")
        compound = ruleset.apply("athan", compound=True)
        # then
        assert simple[0] == "athon"
        assert compound == ("athan", [])

    def test_skipped_rules(self, ruleset_list):
        # given
        ruleset = rule_objects.RuleSet.from_dict(ruleset_list[1])
        # when
        skipped = ruleset.skipped
        result, _ = ruleset.apply("tjamsa")
        # then
        assert [rule.name for rule in skipped] == ["j_loss"]
        assert result == "tjassa"

    def test_toggle_rule(self, ruleset_list):
        # given
        ruleset = rule_objects.RuleSet.from_dict(ruleset_list[1])
        # when
        ruleset.toggle_rule("j_loss", True)
        ruleset.toggle_rule("ms", False)
        result, _ = ruleset.apply("tjamsa")
        # then
        assert result == "tamsa"
        assert [rule.name for rule in ruleset.skipped] == ["ms"]

    def test_toggle_rule_flips_state(self, ruleset_fixture):
        # when
        ruleset_fixture.toggle_rule("1062284643")
        # then
        assert ruleset_fixture.apply("olna") == ("olna", [])
        # and
        ruleset_fixture.toggle_rule("1062284643")
        assert ruleset_fixture.apply("olna")[0] == "olla"


def test_change_to_dict():
    # given
    change = rule_objects.Change("ln", "00400", "[ln] became [ll]", "olna", "olla")
    # then
    assert change.to_dict() == {
        "rule": "ln",
        "order_id": "00400",
        "description": "[ln] became [ll]",
        "before": "olna",
        "after": "olla",
    }


def test_construct_rulesets(ruleset_list):
    # when
    result = list(rule_objects.construct_rulesets(ruleset_list))
    # then
    assert [ruleset.name for ruleset in result] == ["dummy_telerin", "dummy_skip"]
    assert all(isinstance(r, rule_objects.RuleSet) for r in result)


@pytest.mark.parametrize(
    "ruleset,expected",
    [
        (None, ["dummy_telerin", "dummy_skip", "dummy_compound"]),
        ("dummy_skip", ["dummy_skip"]),
        ("missing", []),
    ]
)
def test_preprocess_rules(ruleset, expected):
    # when
    result = rule_objects.preprocess_rules("tests/dummy_rules.py", ruleset)
    # then
    assert [r.name for r in result] == expected


def test_default_rules_file():
    # when
    [result] = rule_objects.preprocess_rules(
        "soundchanger/config/rules.py", "ancient_telerin")
    # then
    assert len(result) == 6
    assert [rule.order_id for rule in result] == [
        "00100", "00200", "00300", "00400", "00500", "00600"]
    assert [rule.name for rule in result.skipped] == ["1532676669"]
