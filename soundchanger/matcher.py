"""Find and rewrite the first span of a word that a compiled rule matches."""

import logging
import unicodedata
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .constants import NOTATION_DIGRAPH_MAP
from .correlator import CompiledRule, Position, RewriteStep
from .normalizer import Phoneme, SpellingMode, tokenize, to_single
from .utils import add_mark, is_mark, is_vowel, remove_vowel_marks


@dataclass(frozen=True)
class Binding:
    """A step bound to a phoneme of the word.

    ``choice`` is the index of the matched ``find`` literal. Steps that
    consume nothing (wildcards and insertions) have no phoneme.
    """

    step: RewriteStep
    phoneme: Optional[Phoneme] = None
    choice: int = 0


@dataclass(frozen=True)
class Match:
    """Phoneme span ``[start, end)`` matched by all steps of a rule."""

    start: int
    end: int
    bindings: Tuple[Binding, ...]
    captured: Dict[int, str]


def literal_key(literal: str) -> Tuple[str, str]:
    """Phoneme key and decomposed marks of a rule literal."""
    decomposed = unicodedata.normalize(
        "NFD", to_single(literal, NOTATION_DIGRAPH_MAP))
    base = "".join(c for c in decomposed if not is_mark(c))
    marks = "".join(c for c in decomposed if is_mark(c))
    return base.lower(), marks


def has_marks(phoneme: Phoneme, marks: str) -> bool:
    required = unicodedata.normalize("NFD", marks)
    return all(mark in phoneme.marks for mark in required)


def choose_literal(step: RewriteStep, phoneme: Phoneme) -> Optional[int]:
    """Index of the find literal matching a phoneme, preferring marked literals."""
    candidates = []
    for idx, literal in enumerate(step.find):
        key, marks = literal_key(literal)
        if key == phoneme.key and has_marks(phoneme, marks):
            candidates.append((-len(marks), idx))
    if not candidates:
        return None
    return min(candidates)[1]


def bind(compiled: CompiledRule, phonemes: List[Phoneme], offset: int) -> Optional[Match]:
    """Bind every step of a rule starting at a phoneme offset."""
    bindings = []
    captured: Dict[int, str] = {}
    cursor = offset
    for step in compiled.steps:
        if step.wildcard or not step.find:
            bindings.append(Binding(step))
            continue
        if cursor >= len(phonemes):
            return None
        phoneme = phonemes[cursor]
        choice = choose_literal(step, phoneme)
        if choice is None:
            return None
        if step.old_mark and not has_marks(phoneme, step.old_mark):
            return None
        if step.old_coindex is not None:
            bound = captured.setdefault(step.old_coindex, phoneme.key)
            if bound != phoneme.key:
                logging.debug("Coindex %s holds %r, not %r",
                              step.old_coindex, bound, phoneme.key)
                return None
        bindings.append(Binding(step, phoneme, choice))
        cursor += 1
    return Match(offset, cursor, tuple(bindings), captured)


def candidate_offsets(position: Position, length: int) -> range:
    if position is Position.INITIAL:
        return range(0, 1)
    if position is Position.MEDIAL:
        return range(1, length)
    return range(0, length + 1)


def find_match(compiled: CompiledRule, phonemes: List[Phoneme]) -> Optional[Match]:
    """Find the leftmost match consistent with the rule's position anchor."""
    length = len(phonemes)
    for offset in candidate_offsets(compiled.position, length):
        match = bind(compiled, phonemes, offset)
        if match is None:
            continue
        if compiled.position is Position.FINAL and match.end != length:
            continue
        if compiled.position is Position.MEDIAL and match.end >= length:
            continue
        return match
    return None


def base_spelling(phoneme: Phoneme) -> str:
    decomposed = unicodedata.normalize("NFD", phoneme.text)
    return "".join(c for c in decomposed if not is_mark(c))


def render_binding(binding: Binding, captured: Dict[int, str],
                   mode: SpellingMode) -> str:
    """Build the replacement text of one bound step."""
    step, phoneme = binding.step, binding.phoneme
    if step.new_coindex is not None:
        literal = captured[step.new_coindex]
    elif not step.replace:
        return ""
    elif len(step.replace) == 1:
        literal = step.replace[0]
    else:
        literal = step.replace[binding.choice]

    key, own_marks = literal_key(literal)
    if phoneme is not None and key == phoneme.key:
        text = base_spelling(phoneme)
    else:
        base = unicodedata.normalize("NFD", literal)
        base = "".join(c for c in base if not is_mark(c))
        text = mode.render(base)

    if own_marks:
        text += own_marks
    elif phoneme is not None:
        dropped = set(step.old_mark)
        if step.find:
            dropped |= set(literal_key(step.find[binding.choice])[1])
        carried = "".join(m for m in phoneme.marks if m not in dropped)
        if not is_vowel(key):
            carried = remove_vowel_marks(carried)
        text += carried
    if step.new_mark and step.new_mark != step.old_mark:
        text = add_mark(text, step.new_mark)

    if phoneme is not None and phoneme.is_upper:
        text = text[:1].upper() + text[1:]
    return unicodedata.normalize("NFC", text)


def rewrite(compiled: CompiledRule, word: str,
            mode: SpellingMode = None) -> Optional[str]:
    """Rewrite the first match of a rule in a word.

    Returns ``None`` if the rule does not match anywhere.
    """
    word = unicodedata.normalize("NFC", word)
    if mode is None:
        mode = SpellingMode.detect(word)
    phonemes = tokenize(word, NOTATION_DIGRAPH_MAP)
    match = find_match(compiled, phonemes)
    if match is None:
        return None

    replacement = "".join(
        render_binding(binding, match.captured, mode)
        for binding in match.bindings
    )
    start = phonemes[match.start].start if match.start < len(phonemes) else len(word)
    end = phonemes[match.end - 1].end if match.end > match.start else start
    result = unicodedata.normalize("NFC", word[:start] + replacement + word[end:])
    logging.debug("%r -> %r", word, result)
    return result


def apply_rule(compiled: CompiledRule, word: str,
               mode: SpellingMode = None) -> str:
    """Apply a compiled rule to a word.

    The word is returned unchanged when the rule does not match.

    Parameters
    ----------
    compiled: CompiledRule
    word: str
    mode: SpellingMode
        Spelling of newly written phonemes. Detected from the word if
        not given.

    Examples
    --------
    >>> from soundchanger.correlator import compile_notation
    >>> [rule] = compile_notation("[ln] > [ll]")
    >>> apply_rule(rule, "olna")
    'olla'
    """
    result = rewrite(compiled, word, mode)
    if result is None:
        return word
    return result
