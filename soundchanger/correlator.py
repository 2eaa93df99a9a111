"""Align the old and new half of a rule into rewrite steps."""

import enum
import logging
import unicodedata
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import VOWEL_CLASS, compiled_rule_schema, step_schema
from .normalizer import to_digraphs
from .notation import (
    MalformedRuleError,
    ParsedForm,
    Slot,
    SlotKind,
    extract_position,
    parse_form,
    split_halves,
    split_notation,
)
from .utils import is_mark, is_subscript_digit

__all__ = [
    "MalformedRuleError",
    "Position",
    "RewriteStep",
    "CompiledRule",
    "correlate",
    "compile_notation",
]


class Position(str, enum.Enum):
    """Where in a word a rule may match."""

    INITIAL = "initial"
    MEDIAL = "medial"
    FINAL = "final"
    ANY = "any"


@dataclass(frozen=True)
class RewriteStep:
    """Rewrite of one slot.

    ``find`` and ``replace`` hold literals in digraph spelling. An empty
    ``replace`` deletes the matched phoneme, an empty ``find`` inserts
    the replacement. Wildcard steps match nothing and rewrite nothing.
    """

    find: Tuple[str, ...]
    replace: Tuple[str, ...]
    old_coindex: Optional[int] = None
    new_coindex: Optional[int] = None
    old_mark: str = ""
    new_mark: str = ""
    wildcard: bool = False

    def to_dict(self) -> dict:
        step = {"find": list(self.find), "replace": list(self.replace)}
        if self.old_coindex is not None:
            step["old_coindex"] = self.old_coindex
        if self.new_coindex is not None:
            step["new_coindex"] = self.new_coindex
        if self.old_mark:
            step["old_mark"] = self.old_mark
        if self.new_mark:
            step["new_mark"] = self.new_mark
        if self.wildcard:
            step["wildcard"] = True
        return step_schema.validate(step)


@dataclass(frozen=True)
class CompiledRule:
    """Executable form of one segment of a rule notation."""

    steps: Tuple[RewriteStep, ...]
    position: Position = Position.ANY

    def to_dict(self) -> dict:
        compiled = {
            "position": self.position.value,
            "steps": [step.to_dict() for step in self.steps],
        }
        return compiled_rule_schema.validate(compiled)

    @property
    def width(self) -> int:
        """Number of steps that consume a phoneme."""
        return sum(1 for step in self.steps if step.find)


CONSUMES_NOTHING = (SlotKind.WILDCARD, SlotKind.DELETION)


def split_alternatives(content: str) -> List[str]:
    """Split group content into phonemes, each with its own diacritics."""
    units: List[str] = []
    for char in content:
        if char.isspace() or is_subscript_digit(char):
            continue
        if is_mark(char) and units:
            units[-1] += char
        else:
            units.append(char)
    return units


def as_literal(unit: str) -> str:
    """Spell a parsed phoneme the way rule objects store it."""
    return unicodedata.normalize("NFC", to_digraphs(unit))


def slot_literals(slot: Slot) -> Tuple[str, ...]:
    if slot.kind is SlotKind.LITERAL:
        return (as_literal(slot.text),)
    if slot.kind is SlotKind.GROUP:
        return tuple(as_literal(unit) for unit in split_alternatives(slot.text))
    if slot.kind is SlotKind.VOWEL:
        return VOWEL_CLASS
    return ()


def make_step(old: Slot, new: Slot, declared: set) -> RewriteStep:
    for slot in (old, new):
        if slot.coindex is not None and slot.kind in CONSUMES_NOTHING:
            raise MalformedRuleError(
                f"Coindex {slot.coindex} cannot follow a {slot.kind.value} slot")
    if SlotKind.WILDCARD in (old.kind, new.kind):
        if old.kind is not new.kind:
            raise MalformedRuleError(
                f"A wildcard must be on both sides of the rule: {old} / {new}")
        return RewriteStep(find=(), replace=(), wildcard=True)

    find = slot_literals(old)
    replace = slot_literals(new)
    if new.coindex is not None and new.coindex not in declared:
        raise MalformedRuleError(
            f"Coindex {new.coindex} is not declared in the old form")
    if len(replace) > 1 and len(replace) != len(find):
        raise MalformedRuleError(
            f"Cannot align {len(find)} alternatives with {len(replace)}: "
            f"{find} > {replace}")
    return RewriteStep(
        find=find,
        replace=replace,
        old_coindex=old.coindex,
        new_coindex=new.coindex,
        old_mark=old.mark,
        new_mark=new.mark,
    )


def correlate(old: ParsedForm, new: ParsedForm,
              position: Position = Position.ANY) -> CompiledRule:
    """Walk two parsed segments in step and compile one rule variant.

    Raises
    ------
    MalformedRuleError
        If the slot streams differ in length, or a pair of slots cannot
        be aligned.
    """
    if len(old) != len(new):
        raise MalformedRuleError(
            f"Mismatched lengths after extracting group patterns: "
            f"{len(old)} != {len(new)}")
    declared = set(old.coindex.values())
    steps = tuple(
        make_step(old_slot, new_slot, declared)
        for old_slot, new_slot in zip(old.slots, new.slots)
    )
    return CompiledRule(steps=steps, position=Position(position))


def compile_notation(notation: str) -> List[CompiledRule]:
    """Compile a rule notation into one CompiledRule per pipe segment.

    Examples
    --------
    >>> [rule] = compile_notation("[ln] > [ll]")
    >>> rule.steps[0].find, rule.steps[1].replace
    (('l',), ('l',))
    """
    old_half, _ = split_halves(notation)
    position = Position(extract_position(old_half))
    old_segments, new_segments = split_notation(notation)
    compiled = [
        correlate(parse_form(old), parse_form(new), position)
        for old, new in zip(old_segments, new_segments)
    ]
    logging.debug("Compiled %r into %s variant(s), position %s",
                  notation, len(compiled), position.value)
    return compiled
