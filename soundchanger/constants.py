"""Constant values used by soundchanger.

* Lookup tables for digraphs, vowels, diphthongs and legal onset clusters.
* Maps between combining and spacing diacritics.
* Validation schemas for rule definitions, compiled rules and word lists.
"""

import pandera as pa
from pandera import Column, DataFrameSchema, Check
from schema import Schema, Optional, Or, And

# Multi-character spellings and the single code point each one stands for.
# 'ch'/'kh' and 'hw'/'wh' are alternate spellings of the same phoneme.
DIGRAPH_MAP = {
    "kʰw": "ꝃ",
    "ch": "x",
    "dh": "ð",
    "gw": "ƣ",
    "hw": "ʍ",
    "kh": "x",
    "kw": "ƙ",
    "kʰ": "ꝁ",
    "lh": "λ",
    "ng": "ŋ",
    "ph": "ɸ",
    "pʰ": "ƥ",
    "rh": "ꝛ",
    "ss": "ſ",
    "th": "θ",
    "tʰ": "ŧ",
    "wh": "ʍ",
    "ŋw": "ꞑ",
}
"""Digraphs recognised by the phoneme normalizer."""

SINGLE_TO_DIGRAPH_MAP = {
    "ꝃ": "kʰw",
    "x": "ch",
    "ð": "dh",
    "ƣ": "gw",
    "ʍ": "hw",
    "ƙ": "kw",
    "ꝁ": "kʰ",
    "λ": "lh",
    "ŋ": "ng",
    "ɸ": "ph",
    "ƥ": "pʰ",
    "ꝛ": "rh",
    "ſ": "ss",
    "θ": "th",
    "ŧ": "tʰ",
    "ꞑ": "ŋw",
}
"""Canonical spelling of each stand-in: 'x' is 'ch' (not 'kh'), 'ʍ' is 'hw'."""

STAND_INS = frozenset(DIGRAPH_MAP.values())

# Rule notation spells a geminate as two slots, e.g. [{mn}s] > [ss].
NOTATION_DIGRAPH_MAP = {k: v for k, v in DIGRAPH_MAP.items() if k != "ss"}

# The analyser never merges 'ss' either, and knows two three-letter
# clusters that only matter for syllable division.
ANALYSER_DIGRAPH_MAP = {
    **NOTATION_DIGRAPH_MAP,
    "chw": "ꭓ",
    "nth": "ꞥ",
}

VOWELS = "aeiouœ"
"""Base vowels, compared after decomposition and lower-casing."""

VOWEL_CLASS = ("a", "e", "i", "o", "u")
"""Members of the 'V' slot in rule notation."""

LEGAL_DIPHTHONGS = ("ae", "ai", "au", "aw", "ei", "oe", "ui")

LONG_VOWEL_MARKS = frozenset({"\u0304", "\u0301", "\u0302"})
"""Macron, acute and circumflex mark a long vowel."""

VALID_INITIAL_CLUSTERS = (
    "bl", "br", "cl", "cr", "dr", "fl", "gl", "gr", "gw", "kl", "kr", "pr",
    "tr",
)
LENITED_INITIAL_CLUSTERS = (
    "br", "xl", "xr", "dr", "ðr", "fl", "fr", "ml", "mr", "θl", "θr", "vl",
    "vr",
)
ONSET_CLUSTERS = frozenset(VALID_INITIAL_CLUSTERS + LENITED_INITIAL_CLUSTERS)
"""Two-consonant clusters that may begin a syllable."""

COMBINING_TO_SPACING = {
    "\u0301": "´",
    "\u0300": "`",
    "\u0302": "^",
    "\u0303": "~",
    "\u0308": "¨",
    "\u0304": "¯",
    "\u0306": "˘",
    "\u0307": "˙",
    "\u0327": "¸",
    "\u030b": "˝",
    "\u030c": "ˇ",
    "\u030a": "˚",
}
SPACING_TO_COMBINING = {v: k for k, v in COMBINING_TO_SPACING.items()}

# Grave, acute, circumflex, tilde, macron, breve and diaeresis
VOWEL_MARKS = frozenset("\u0300\u0301\u0302\u0303\u0304\u0306\u0308")

SUBSCRIPT_DIGITS = "₀₁₂₃₄₅₆₇₈₉"

# Rule notation symbols
VOWEL_SYMBOL = "V"
DELETION_SYMBOL = "ø"
WILDCARD_SYMBOL = "-"
PIPE_SYMBOL = "|"
ARROW_SYMBOL = ">"
GROUP_PLACEHOLDER = "\ufffc"

POSITIONS = ("initial", "medial", "final", "any")

# Define validation Schemas
step_schema = Schema({
    "find": [str],
    "replace": [str],
    Optional("old_coindex"): int,
    Optional("new_coindex"): int,
    Optional("old_mark"): str,
    Optional("new_mark"): str,
    Optional("wildcard"): bool,
})

compiled_rule_schema = Schema({
    "position": Or(*POSITIONS),
    "steps": [step_schema.schema],
})

rule_schema = Schema({
    "name": And(str, len),
    "notation": And(str, lambda s: ARROW_SYMBOL in s),
    Optional("order_id"): Or(str, None),
    Optional("description"): str,
    Optional("url"): Or(str, None),
    Optional("skip"): bool,
    Optional("condition"): Or(callable, None),
})

ruleset_schema = Schema({
    "name": And(str, len),
    "rules": [rule_schema.schema],
})

wordlist_schema = DataFrameSchema({
    "word": Column(pa.String, Check.str_length(min_value=1)),
    "compound": Column(pa.Bool, required=False),
})

wordlist_column_names = ["word", "compound"]

EVOLVED_PREFIX = "evolved"
