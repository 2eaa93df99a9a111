"""Test suite for compiling rule notation into rewrite steps."""
import pytest
from schema import SchemaError

from soundchanger.correlator import (
    CompiledRule,
    MalformedRuleError,
    Position,
    RewriteStep,
    compile_notation,
    correlate,
)
from soundchanger.notation import parse_form


def test_compile_simple_rule():
    # when
    result = compile_notation("[ln] > [ll]")
    # then
    assert len(result) == 1
    assert result[0].position is Position.ANY
    assert [step.find for step in result[0].steps] == [("l",), ("n",)]
    assert [step.replace for step in result[0].steps] == [("l",), ("l",)]


def test_compile_coindexed_rule(coindexed_notation):
    # when
    [result] = compile_notation(coindexed_notation)
    # then
    assert result.position is Position.INITIAL
    first, vowel, liquid, stressed, rest = result.steps
    assert first.find == ("p", "t", "k", "pʰ", "kʰ", "b", "d", "g", "m")
    assert first.replace == first.find
    assert vowel.find == ("a", "e", "i", "o", "u")
    assert vowel.replace == ()
    assert vowel.old_coindex == 1
    assert liquid.find == ("r", "l")
    assert stressed.old_mark == stressed.new_mark == "\u0301"
    assert stressed.old_coindex == stressed.new_coindex == 1
    assert rest.wildcard
    assert result.width == 4


def test_compile_pipe_segments():
    # when
    result = compile_notation("[kw|kʰw|gw|ŋgw|ŋkw|ŋw-] > [p|pʰ|b|mb|mp|m-]")
    # then
    assert len(result) == 6
    assert all(variant.position is Position.INITIAL for variant in result)
    assert result[1].steps[0].find == ("kʰw",)
    assert result[1].steps[0].replace == ("pʰ",)
    assert [step.find for step in result[3].steps] == [("ng",), ("gw",)]
    assert [step.replace for step in result[3].steps] == [("m",), ("b",)]
    assert result[5].steps[-1].wildcard


def test_compile_deletion():
    # when
    [result] = compile_notation("[-V{ptks}] > [-Vø]")
    # then
    assert result.position is Position.FINAL
    assert result.steps[0].wildcard
    assert result.steps[1].replace == ("a", "e", "i", "o", "u")
    assert result.steps[2].find == ("p", "t", "k", "s")
    assert result.steps[2].replace == ()


def test_compile_insertion():
    # when
    [result] = compile_notation("[sø-] > [se-]")
    # then
    assert result.steps[1].find == ()
    assert result.steps[1].replace == ("e",)


def test_group_broadcasts_to_one_literal():
    # when
    [result] = compile_notation("[{mn}s] > [ss]")
    # then
    assert result.steps[0].find == ("m", "n")
    assert result.steps[0].replace == ("s",)


@pytest.mark.parametrize(
    "rule",
    [
        "[abc] > [ab]",
        "[{ptk}] > [{pt}]",
        "[a-] > [ab]",
        "[a] > [b₁]",
        "[kw|gw] > [p]",
        "[ln] [ll]",
        "[aø₁] > [ab₁]",
        "[ab₁] > [aø₁]",
        "[a-₁] > [a-]",
    ]
)
def test_malformed_rules_fail_at_compile_time(rule):
    with pytest.raises(MalformedRuleError):
        compile_notation(rule)


def test_malformed_rule_error_is_a_value_error():
    assert issubclass(MalformedRuleError, ValueError)


def test_correlate_parsed_forms():
    # given
    old, new = parse_form("{ptk}a"), parse_form("{bdg}a")
    # when
    result = correlate(old, new, Position.FINAL)
    # then
    assert isinstance(result, CompiledRule)
    assert result.steps[0].replace == ("b", "d", "g")
    assert result.position is Position.FINAL


def test_to_dict():
    # given
    [rule] = compile_notation("[ln] > [ll]")
    # when
    result = rule.to_dict()
    # then
    assert result == {
        "position": "any",
        "steps": [
            {"find": ["l"], "replace": ["l"]},
            {"find": ["n"], "replace": ["l"]},
        ],
    }


def test_step_to_dict_with_coindex_and_marks():
    # given
    step = RewriteStep(
        find=("a",), replace=("a",), old_coindex=1, new_coindex=1,
        old_mark="\u0301")
    # when
    result = step.to_dict()
    # then
    assert result == {
        "find": ["a"], "replace": ["a"], "old_coindex": 1, "new_coindex": 1,
        "old_mark": "\u0301",
    }


def test_to_dict_rejects_corrupt_steps():
    # given
    step = RewriteStep(find=("a",), replace=("b",), old_coindex="one")
    # when / then
    with pytest.raises(SchemaError):
        step.to_dict()
