"""Convert between digraph spellings and single-character phonemes.

Every multi-character spelling in the digraph table stands for one
phoneme, and is replaced by one dedicated code point so that later
steps can treat one phoneme as one character. The reverse mapping is
lossy ('kh' and 'ch' both become 'x', which is spelled 'ch' again), so a
word's spelling convention is decided once, from the input, and carried
along with the word as a :class:`SpellingMode`.
"""

import enum
import re
import unicodedata
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern

from .constants import DIGRAPH_MAP, SINGLE_TO_DIGRAPH_MAP, STAND_INS
from .utils import is_mark


def digraph_pattern(table: Dict[str, str]) -> Optional[Pattern]:
    """Compile a case-insensitive pattern matching the longest digraph first.

    An empty table gives ``None``: nothing is merged.
    """
    if not table:
        return None
    keys = sorted(table, key=len, reverse=True)
    return re.compile("|".join(re.escape(k) for k in keys), re.IGNORECASE)


DIGRAPH_PATTERN = digraph_pattern(DIGRAPH_MAP)


def to_single(word: str, table: Dict[str, str] = None) -> str:
    """Replace every digraph in ``word`` with its single-character stand-in."""
    if table is None:
        table = DIGRAPH_MAP
        pattern = DIGRAPH_PATTERN
    else:
        pattern = digraph_pattern(table)
    if pattern is None:
        return word
    return pattern.sub(lambda m: table[m.group(0).lower()], word)


def to_digraphs(normalized: str) -> str:
    """Spell every stand-in with its canonical digraph."""
    return "".join(SINGLE_TO_DIGRAPH_MAP.get(c, c) for c in normalized)


class SpellingMode(enum.Enum):
    """Spelling convention of a word: digraphs, or single-character stand-ins."""

    DIGRAPH = "digraph"
    SINGLE = "single"

    @classmethod
    def detect(cls, word: str) -> "SpellingMode":
        """Words that already contain a stand-in are spelled with single characters."""
        if any(c in STAND_INS for c in word):
            return cls.SINGLE
        return cls.DIGRAPH

    def render(self, text: str) -> str:
        """Spell ``text`` according to this convention."""
        if self is SpellingMode.SINGLE:
            return to_single(text)
        return to_digraphs(text)


@dataclass(frozen=True)
class Phoneme:
    """One phoneme of a word, as spelled in the word.

    ``key`` is the lower-case base character or digraph stand-in,
    ``marks`` holds its combining diacritics in decomposed form, and
    ``start``/``end`` locate ``text`` in the tokenized string.
    """

    text: str
    key: str
    marks: str
    start: int
    end: int

    @property
    def is_upper(self) -> bool:
        return self.text[:1].isupper()


def _split_marks(text: str):
    decomposed = unicodedata.normalize("NFD", text)
    base = "".join(c for c in decomposed if not is_mark(c))
    marks = "".join(c for c in decomposed if is_mark(c))
    return base, marks


def tokenize(word: str, table: Dict[str, str] = None) -> List[Phoneme]:
    """Split a word into phonemes without changing its spelling.

    Digraphs from ``table`` are matched longest first; every unit takes
    the combining marks that follow it. Offsets refer to ``word`` itself,
    so ``"".join(p.text for p in tokenize(word)) == word``.
    """
    if table is None:
        table = DIGRAPH_MAP
        pattern = DIGRAPH_PATTERN
    else:
        pattern = digraph_pattern(table)

    phonemes = []
    i = 0
    while i < len(word):
        match = pattern.match(word, i) if pattern else None
        if match:
            end = match.end()
            key = table[match.group(0).lower()]
        else:
            end = i + 1
            key = None
        while end < len(word) and is_mark(word[end]):
            end += 1
        text = word[i:end]
        base, marks = _split_marks(text)
        if key is None:
            key = base.lower()
        phonemes.append(Phoneme(text, key, marks, i, end))
        i = end
    return phonemes
