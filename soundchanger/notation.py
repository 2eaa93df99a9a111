"""Parse the bracket notation of sound change rules.

A rule is written ``[old] > [new]``, e.g. ``[{ptk}V₁{rl}V́₁-] > [{ptk}ø{rl}V́₁-]``.
Each half may hold several ``|``-separated segments, and each segment is
parsed into a linear stream of slots:

* a literal phoneme, e.g. ``l`` or ``kʰ``,
* a group of alternatives, e.g. ``{ptk}``,
* the vowel class ``V``,
* the deletion marker ``ø``,
* the wildcard ``-``, marking the rest of the word.

A combining diacritic after a slot is the slot's mark, and a subscript
digit after a slot is its coindex.
"""

import enum
import logging
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .constants import (
    ARROW_SYMBOL,
    DELETION_SYMBOL,
    GROUP_PLACEHOLDER,
    NOTATION_DIGRAPH_MAP,
    PIPE_SYMBOL,
    VOWEL_SYMBOL,
    WILDCARD_SYMBOL,
)
from .normalizer import to_single
from .utils import is_mark, is_subscript_digit, subscript_to_normal

GROUP_PATTERN = re.compile(r"\{([^}]*)\}")


class MalformedRuleError(ValueError):
    """The notation of a rule cannot be compiled."""


class SlotKind(enum.Enum):
    LITERAL = "literal"
    GROUP = "group"
    VOWEL = "vowel"
    WILDCARD = "wildcard"
    DELETION = "deletion"


SYMBOL_KINDS = {
    GROUP_PLACEHOLDER: SlotKind.GROUP,
    VOWEL_SYMBOL: SlotKind.VOWEL,
    WILDCARD_SYMBOL: SlotKind.WILDCARD,
    DELETION_SYMBOL: SlotKind.DELETION,
}


@dataclass
class Slot:
    """One position in a parsed rule segment.

    ``text`` is the single-character phoneme of a literal slot, or the
    concatenated alternatives of a group slot, in decomposed form.
    """

    kind: SlotKind
    text: str = ""
    mark: str = ""
    coindex: Optional[int] = None


@dataclass
class ParsedForm:
    """The slot stream of one segment, with the group contents in order."""

    slots: List[Slot] = field(default_factory=list)
    elements: List[str] = field(default_factory=list)

    @property
    def marks(self) -> Dict[int, str]:
        return {i: slot.mark for i, slot in enumerate(self.slots) if slot.mark}

    @property
    def coindex(self) -> Dict[int, int]:
        return {
            i: slot.coindex for i, slot in enumerate(self.slots)
            if slot.coindex is not None
        }

    def __len__(self):
        return len(self.slots)


def prepare(text: str) -> str:
    """Fold digraphs into stand-ins, then decompose all diacritics."""
    composed = unicodedata.normalize("NFC", text)
    return unicodedata.normalize(
        "NFD", to_single(composed, NOTATION_DIGRAPH_MAP))


def count_units(text: str) -> int:
    """Number of phonemes in a prepared string, ignoring marks and coindices."""
    return sum(
        1 for char in text
        if not is_mark(char) and not is_subscript_digit(char)
        and not char.isspace()
    )


def extract_group_patterns(segment: str) -> Tuple[str, List[str]]:
    """Replace each group of alternatives with a placeholder.

    Returns the segment with placeholders, and the contents of the
    replaced groups in left-to-right order. A group with only one
    phoneme, e.g. ``{e}``, is just that phoneme.
    """
    elements = []

    def replace(match):
        content = match.group(1)
        if count_units(content) > 1:
            elements.append(content)
            return GROUP_PLACEHOLDER
        return content

    return GROUP_PATTERN.sub(replace, segment), elements


def extract_marks(segment: str, elements: List[str] = None) -> List[Slot]:
    """Walk a group-free segment and build its slots.

    Combining marks and subscript digits attach to the previous slot.
    """
    queue = list(elements or [])
    slots: List[Slot] = []
    for char in segment:
        if char.isspace():
            continue
        if is_mark(char) or is_subscript_digit(char):
            if not slots:
                raise MalformedRuleError(
                    f"{char!r} does not follow a phoneme in {segment!r}")
            if is_mark(char):
                slots[-1].mark += char
            else:
                slots[-1].coindex = int(subscript_to_normal(char))
            continue

        kind = SYMBOL_KINDS.get(char, SlotKind.LITERAL)
        if kind is SlotKind.GROUP:
            slots.append(Slot(kind, queue.pop(0)))
        elif kind is SlotKind.LITERAL:
            slots.append(Slot(kind, char))
        else:
            slots.append(Slot(kind))
    return slots


def parse_form(segment: str) -> ParsedForm:
    """Parse one segment of either half of a rule into slots."""
    prepared = prepare(segment)
    leftover = GROUP_PATTERN.sub("", prepared)
    if "{" in leftover or "}" in leftover:
        raise MalformedRuleError(f"Unbalanced braces in {segment!r}")
    flattened, elements = extract_group_patterns(prepared)
    slots = extract_marks(flattened, elements)
    logging.debug("Parsed %r into %s slots", segment, len(slots))
    return ParsedForm(slots, elements)


def strip_brackets(text: str) -> str:
    text = text.strip()
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]
    return text.strip()


def split_halves(notation: str) -> Tuple[str, str]:
    """Split a notation into its old and new half, without brackets."""
    if notation.count(ARROW_SYMBOL) != 1:
        raise MalformedRuleError(
            f"A rule needs exactly one {ARROW_SYMBOL!r}: {notation!r}")
    old, new = notation.split(ARROW_SYMBOL)
    return strip_brackets(old), strip_brackets(new)


def split_notation(notation: str) -> Tuple[List[str], List[str]]:
    """Split a notation into its old and new segments, pairwise.

    Examples
    --------
    >>> split_notation("[kw|gw-] > [p|b-]")
    (['kw', 'gw-'], ['p', 'b-'])
    """
    old, new = split_halves(notation)
    old_segments = [strip_brackets(s) for s in old.split(PIPE_SYMBOL)]
    new_segments = [strip_brackets(s) for s in new.split(PIPE_SYMBOL)]
    if len(old_segments) != len(new_segments):
        raise MalformedRuleError(
            f"Mismatched number of {PIPE_SYMBOL!r}-separated options: "
            f"{len(old_segments)} != {len(new_segments)} in {notation!r}")
    return old_segments, new_segments


def extract_position(old_half: str) -> str:
    """Position anchor of a rule, from the wildcards around its old half.

    A trailing wildcard anchors the rule at the start of a word, a
    leading one at the end, and both in the middle.
    """
    old_half = strip_brackets(old_half)
    leading = old_half.startswith(WILDCARD_SYMBOL)
    trailing = old_half.endswith(WILDCARD_SYMBOL)
    if leading and trailing and len(old_half) > 1:
        return "medial"
    if trailing:
        return "initial"
    if leading:
        return "final"
    return "any"
