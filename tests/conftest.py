"""Configuration values for the unit tests."""

import pandas as pd
import pytest

from soundchanger.rule_objects import Rule, RuleSet
from soundchanger.syllables import SyllableAnalyser


@pytest.fixture
def analyser():
    """Syllable analyser with the default vowel set."""
    return SyllableAnalyser()


@pytest.fixture
def rule_fixture():
    """Dummy rule to be used in tests."""
    return Rule(
        name="1062284643",
        notation="[ln] > [ll]",
        order_id="00400",
        description="[ln] became [ll]",
    )


@pytest.fixture
def ruleset_fixture(rule_fixture):
    """Dummy rule set object."""
    return RuleSet(name="test_rule_set", rules=[rule_fixture])


@pytest.fixture(scope="session")
def ruleset_list():
    """Set up a test value for the rules."""
    from dummy_rules import test1, test2
    return [test1, test2]


@pytest.fixture(scope="session")
def coindexed_notation():
    """Rule where the two vowels around the liquid must agree."""
    return "[{ptkpʰkʰbdgm}V₁{rl}V́₁-] > [{ptkpʰkʰbdgm}ø{rl}V́₁-]"


@pytest.fixture
def wordlist_fixture():
    """A test example of a wellformed word list"""
    return pd.DataFrame({
        "word": ["barálnat", "olna", "tat"],
        "compound": [False, False, False],
    })
