"""Configure the input data and defaults for soundchanger."""

RULES_FILE = "soundchanger/config/rules.py"
"""Path to a file with sound change rulesets.

Note that the rules of a ruleset are applied in the order of their order_id,
and that each rule sees the output of the rules before it.
"""

RULESET = "ancient_telerin"
"""Name of the ruleset that the evolve command applies."""

OUTPUT_DIR = "data/output"
"""Path to the output folder for evolved word lists"""

INCLUDE_Y = False
"""Whether 'y' counts as a vowel when syllabifying."""

INCLUDE_W = False
"""Whether 'w' counts as a vowel when syllabifying."""
