"""Test suite for helper functions in utils.py."""
import logging
from typing import Generator

import pandas as pd
import pytest
from pandera.errors import SchemaError

from soundchanger.constants import ruleset_schema
from soundchanger import utils


@pytest.mark.parametrize(
    "char,include_y,include_w,expected",
    [
        ("a", True, False, True),
        ("Ā", True, False, True),
        ("œ", True, False, True),
        ("y", True, False, True),
        ("y", False, False, False),
        ("w", True, False, False),
        ("w", True, True, True),
        ("θ", True, False, False),
        ("", True, False, False),
    ]
)
def test_is_vowel(char, include_y, include_w, expected):
    assert utils.is_vowel(char, include_y, include_w) is expected


def test_is_consonant():
    assert utils.is_consonant("θ")
    assert not utils.is_consonant("e")
    assert not utils.is_consonant("")


@pytest.mark.parametrize(
    "index,expected", [(0, "t"), (-1, "n"), (2, "l"), (10, ""), (-10, "")])
def test_nth(index, expected):
    assert utils.nth("talan", index) == expected


def test_get_mark():
    assert utils.get_mark("á") == "´"
    assert utils.get_mark("ā") == "¯"
    assert utils.get_mark("a") == ""


def test_add_mark():
    assert utils.add_mark("a", "´") == "á"
    assert utils.add_mark("o", "\u0304") == "ō"


def test_remove_marks():
    assert utils.remove_marks("kalā\u0301t") == "kalat"


def test_remove_vowel_marks_keeps_consonant_marks():
    assert utils.remove_vowel_marks("ṃā") == "ṃa"


def test_subscripts():
    assert utils.is_subscript_digit("₁")
    assert not utils.is_subscript_digit("1")
    assert utils.subscript_to_normal("V₁V₂") == "V1V2"


def test_break_into_vowels_and_consonants():
    assert utils.break_into_vowels_and_consonants("banana") == "CVCVCV"


def test_write_table(tmp_path):
    # given
    output_file = tmp_path / "some_file.csv"
    data = pd.DataFrame({"word": ["olna"], "evolved": ["olla"]})
    # when
    utils.write_table(output_file, data)
    # then
    assert output_file.exists()
    assert output_file.read_text() == "word,evolved\nolna,olla\n"


def test_load_module_dict():
    # when
    result = utils.load_module_dict("tests/dummy_config.py")
    # then
    assert result["RULESET"] == "dummy_telerin"
    assert "INCLUDE_Y" not in result


def test_load_config():
    # when
    result = utils.load_config("tests/dummy_config.py")
    # then
    assert result["rules_file"] == "tests/dummy_rules.py"
    assert result["output_dir"] == "tests/delete_me"


def test_load_config_missing_file():
    assert utils.load_config("non_existent_config.py") == {}


def test_load_rules():
    # when
    result = utils.load_rules("tests/dummy_rules.py")
    # then
    assert isinstance(result, Generator)
    rulesets = list(result)
    assert [r["name"] for r in rulesets] == [
        "dummy_telerin", "dummy_skip", "dummy_compound"]
    assert all(ruleset_schema.is_valid(r) for r in rulesets)


def test_load_rules_logs_invalid_rulesets(caplog):
    # when
    with caplog.at_level(logging.ERROR):
        list(utils.load_rules("tests/dummy_rules.py"))
    # then
    assert "SKIPPING RULESET broken" in caplog.text


def test_load_wordlist(tmp_path):
    # given
    csv_file = tmp_path / "words.csv"
    csv_file.write_text("word,compound,gloss\nbarálnat,False,x\nFingon,True,y\n")
    # when
    result = utils.load_wordlist(csv_file)
    # then
    assert list(result.columns) == ["word", "compound"]
    assert list(result["word"]) == ["barálnat", "Fingon"]


def test_load_wordlist_without_compound_column(tmp_path):
    # given
    csv_file = tmp_path / "words.csv"
    csv_file.write_text("word\nolna\n")
    # when
    result = utils.load_wordlist(csv_file)
    # then
    assert list(result["compound"]) == [False]


def test_load_wordlist_without_word_column(tmp_path):
    # given
    csv_file = tmp_path / "words.csv"
    csv_file.write_text("token\nolna\n")
    # when / then
    with pytest.raises(SchemaError):
        utils.load_wordlist(csv_file)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("ln,ms", ["ln", "ms"]),
        (["ln"], ["ln"]),
        ("ln", ["ln"]),
        (("ln", "ms"), ["ln", "ms"]),
    ]
)
def test_make_list(value, expected):
    assert utils.make_list(value) == expected


@pytest.mark.parametrize("verbosity,expected", [(0, 30), (1, 20), (2, 10), (5, 10)])
def test_log_level(verbosity, expected):
    assert utils.log_level(verbosity) == expected
