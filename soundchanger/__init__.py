"""Rule-based simulation of historical sound change."""

from .correlator import MalformedRuleError, compile_notation
from .matcher import apply_rule
from .normalizer import SpellingMode, to_digraphs, to_single
from .rule_objects import Rule, RuleSet
from .syllables import SyllableAnalyser, analyse, syllabify
