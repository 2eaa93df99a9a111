import logging
from dataclasses import dataclass, asdict
from typing import Callable, Iterable, Generator, List, Optional, Tuple

from schema import SchemaError

from .constants import rule_schema, ruleset_schema
from .correlator import CompiledRule, compile_notation
from .matcher import rewrite
from .normalizer import SpellingMode
from .syllables import DEFAULT_ANALYSER, SyllableAnalyser
from .utils import load_rules


@dataclass(frozen=True)
class Change:
    """A rule that changed a word during a pass."""

    rule: str
    order_id: Optional[str]
    description: str
    before: str
    after: str

    def to_dict(self) -> dict:
        return asdict(self)


class Rule:
    """A named sound change.

    The notation is compiled once, into one variant per ``|``-separated
    segment. Variants are tried in order, and the first one that matches
    rewrites the word.

    Parameters
    ----------
    name: str
        Identifier of the rule
    notation: str
        Rule notation, e.g. "[ln] > [ll]"
    order_id: str
        Sort key of the rule within its rule set
    description: str
    url: str
        Reference to a description of the sound change
    skip: bool
        Whether the rule is disabled by default
    condition: callable
        Takes the analysed syllables of a word and returns whether the
        rule may apply to it, e.g. ``lambda syllables: len(syllables) > 1``
    """
    def __init__(
            self,
            name: str,
            notation: str,
            order_id: str = None,
            description: str = "",
            url: str = None,
            skip: bool = False,
            condition: Callable = None,
    ):
        self.name = name
        self.notation = notation
        self.order_id = order_id
        self.description = description
        self.url = url
        self.skip = skip
        self.condition = condition
        self.variants: List[CompiledRule] = compile_notation(notation)

    @classmethod
    def from_dict(cls, rule_dict: dict):
        """Instantiate a Rule object from a valid rule dictionary.

        Parameters
        ----------
        rule_dict: dict
            Format is {"name": str, "notation": str, "order_id": str, ...}
        """
        return cls(**rule_schema.validate(rule_dict))

    def to_dict(self):
        """Create a well-formed rule dict."""
        rule_dict = {
            "name": self.name,
            "notation": self.notation,
            "order_id": self.order_id,
            "description": self.description,
            "url": self.url,
            "skip": self.skip,
            "condition": self.condition,
        }
        return rule_schema.validate(rule_dict)

    def __repr__(self):
        return "{}(name={!r}, notation={!r}, order_id={!r})".format(
            self.__class__.__name__, self.name, self.notation, self.order_id)

    def __str__(self):
        return f"{self.order_id or '-'} {self.name}: {self.notation}"

    def __eq__(self, other):
        if not isinstance(other, Rule):
            return NotImplemented
        return (self.name, self.notation) == (other.name, other.notation)

    def __hash__(self):
        return hash((self.name, self.notation))

    @property
    def position(self):
        """Position anchor shared by all variants of the rule."""
        return self.variants[0].position

    def applies_to(self, word: str, analyser: SyllableAnalyser = None,
                   compound: bool = False) -> bool:
        """Whether the prosodic condition of the rule holds for a word.

        Compound words are analysed without merging digraphs, which may
        span the boundary between their parts.
        """
        if self.condition is None:
            return True
        analyser = DEFAULT_ANALYSER if analyser is None else analyser
        return bool(self.condition(analyser.analyse(word, compound=compound)))

    def apply(self, word: str, mode: SpellingMode = None,
              analyser: SyllableAnalyser = None, compound: bool = False) -> str:
        """Apply the first matching variant of the rule to a word."""
        if not self.applies_to(word, analyser, compound):
            logging.debug("Condition of %s does not hold for %r", self.name, word)
            return word
        for variant in self.variants:
            result = rewrite(variant, word, mode)
            if result is not None:
                return result
        return word


class RuleSet:
    """An ordered collection of sound changes, applied as one pass."""
    def __init__(self, name: str, rules: list = None):
        self.name: str = name
        self._rules: List[Rule] = []
        self._overrides: dict = {}
        if rules is not None:
            self.add_multiple_rules(rules)

    @classmethod
    def from_dict(cls, ruleset_dict: dict):
        """Instantiate a RuleSet object from a valid ruleset dictionary.

        Parameters
        ----------
        ruleset_dict: dict
            Format is {"name": str, "rules": list}
        """
        return cls(**ruleset_dict)

    def to_dict(self):
        """Create a rule set dict with validated rule dicts."""
        ruleset = {
            "name": self.name,
            "rules": [rule.to_dict() for rule in self.rules],
        }
        return ruleset_schema.validate(ruleset)

    def __repr__(self):
        return "{}(name={!r}, rules={!r})".format(
            self.__class__.__name__, self.name, self.rules)

    def __len__(self):
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    @property
    def rules(self) -> List[Rule]:
        """Rules sorted by their order id. Rules without one come last."""
        return self._rules

    def get_rule(self, name: str) -> Rule:
        for rule in self._rules:
            if rule.name == name:
                return rule
        raise KeyError(f"No rule named {name!r} in {self.name}")

    def add_rule(self, rule):
        """Add a Rule object or a valid rule dict to self.rules.

        Raises
        ------
        ValueError
            If the rule is neither a Rule object nor a valid rule dict,
            or its notation is malformed.
        """
        if isinstance(rule, dict) and rule_schema.is_valid(rule):
            rule = Rule.from_dict(rule)
        elif not isinstance(rule, Rule):
            raise ValueError(f"Invalid rule arguments: {rule}")
        if any(rule.name == existing.name for existing in self._rules):
            logging.debug("Skipping: Rule %s already exists in %s",
                          rule.name, self.name)
            return
        self._rules.append(rule)
        self._rules.sort(key=lambda r: (r.order_id is None, r.order_id or ""))
        logging.debug("Adding %s to self.rules", rule)

    def add_multiple_rules(self, rule_list: Iterable):
        """Add a collection of rules to self.rules, skipping invalid ones."""
        for rule_obj in rule_list:
            try:
                self.add_rule(rule_obj)
            except (SchemaError, ValueError) as error:
                logging.error(
                    "Skipping invalid rule: %s due to %s. "
                    "The rule_list must contain either Rule objects "
                    "or dicts in this format: %s",
                    rule_obj, error, rule_schema.schema)

    def toggle_rule(self, name: str, enabled: bool = None):
        """Enable or disable a rule by name, or flip its state."""
        rule = self.get_rule(name)
        if enabled is None:
            enabled = not self.is_enabled(rule)
        if enabled == (not rule.skip):
            self._overrides.pop(name, None)
        else:
            self._overrides[name] = enabled
        logging.debug("Rule %s enabled: %s", name, enabled)

    def is_enabled(self, rule: Rule) -> bool:
        """Rules run unless skipped by default or toggled off."""
        return self._overrides.get(rule.name, not rule.skip)

    @property
    def skipped(self) -> List[Rule]:
        return [rule for rule in self._rules if not self.is_enabled(rule)]

    def apply(self, word: str, analyser: SyllableAnalyser = None,
              compound: bool = False) -> Tuple[str, List[Change]]:
        """Run every enabled rule in order over a word.

        The spelling mode is decided once from the input and used by
        every rule of the pass.

        Returns
        -------
        tuple
            The resulting word, and the changes made by each rule that fired.
        """
        mode = SpellingMode.detect(word)
        changes = []
        result = word
        for rule in self._rules:
            if not self.is_enabled(rule):
                continue
            before = result
            result = rule.apply(
                before, mode=mode, analyser=analyser, compound=compound)
            if result != before:
                changes.append(Change(
                    rule.name, rule.order_id, rule.description, before, result))
        return result, changes


def construct_rulesets(rulesets: Iterable) -> Generator:
    """Create RuleSet objects from a collection of ruleset dicts."""
    for ruleset in rulesets:
        if isinstance(ruleset, RuleSet):
            logging.error("Already a RuleSet: %s", ruleset.name)
            yield ruleset
            continue
        yield RuleSet.from_dict(ruleset)


def preprocess_rules(rules_file, ruleset: str = None) -> List[RuleSet]:
    """Load the rulesets of a rules file, optionally only the one named."""
    rulesets = list(construct_rulesets(load_rules(rules_file)))
    if ruleset is not None:
        rulesets = [r for r in rulesets if r.name == ruleset]
        if not rulesets:
            logging.error("No ruleset named %s in %s", ruleset, rules_file)
    return rulesets
