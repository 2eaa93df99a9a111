"""Syllabification and prosody.

Syllable rules:

* A word with zero or one vowel nucleus is a single syllable.
* A nucleus is a legal diphthong or else a single vowel; the elements of
  a diphthong are never split between two syllables.
* Vowels in hiatus split between syllables.
* A single consonant between vowels begins the next syllable.
* Two consonants between vowels are split between the syllables.
* Three consonants split after the first one when the other two form a
  legal onset cluster, else after the second one.
* Longer consonant runs split in the middle.

Weight and stress:

* A syllable is heavy if it has a long vowel, a diphthong, or ends in a
  consonant. All other syllables are light.
* A syllable is closed if it ends in a consonant, otherwise open.
* Monosyllables are unstressed, disyllables are stressed on the first
  syllable. Longer words are stressed on the penultimate syllable if it is
  heavy, on the antepenultimate syllable otherwise.
"""

import logging
from dataclasses import dataclass, asdict
from typing import List, Tuple

from .constants import (
    ANALYSER_DIGRAPH_MAP,
    LEGAL_DIPHTHONGS,
    LONG_VOWEL_MARKS,
    ONSET_CLUSTERS,
)
from .normalizer import Phoneme, tokenize
from .utils import is_consonant, is_vowel, nth, remove_marks

LIGHT = "light"
HEAVY = "heavy"
OPEN = "open"
CLOSED = "closed"


@dataclass(frozen=True)
class Syllable:
    """A syllable of an analysed word."""

    syllable: str
    onset: str
    nucleus: str
    coda: str
    weight: str
    structure: str
    stressed: bool = False

    @property
    def is_heavy(self) -> bool:
        return self.weight == HEAVY

    def to_dict(self) -> dict:
        return asdict(self)


class SyllableAnalyser:
    """Split words into syllables and assign weight and stress.

    Parameters
    ----------
    include_y: bool
        Count 'y' as a vowel when looking for syllable nuclei
    include_w: bool
        Count 'w' as a vowel when looking for syllable nuclei
    """

    def __init__(self, include_y: bool = False, include_w: bool = False):
        self.include_y = include_y
        self.include_w = include_w

    def __repr__(self):
        return "{}(include_y={!r}, include_w={!r})".format(
            self.__class__.__name__, self.include_y, self.include_w)

    def tokenize(self, word: str, compound: bool = False) -> List[Phoneme]:
        """Split a word into phonemes.

        Compound words keep every letter separate, because a digraph
        such as 'ng' or 'nth' may span the morpheme boundary.
        """
        table = {} if compound else ANALYSER_DIGRAPH_MAP
        return tokenize(word, table)

    def is_nucleus_vowel(self, phoneme: Phoneme) -> bool:
        return is_vowel(phoneme.key, self.include_y, self.include_w)

    @staticmethod
    def is_diphthong(pair: str) -> bool:
        return pair.lower() in LEGAL_DIPHTHONGS

    @staticmethod
    def is_valid_onset(cluster: List[Phoneme]) -> bool:
        """Whether a two-consonant cluster may begin a syllable."""
        return "".join(p.key for p in cluster) in ONSET_CLUSTERS

    def find_nuclei(self, phonemes: List[Phoneme]) -> List[Tuple[int, int]]:
        """Locate nuclei as (start, end) phoneme indices, left to right."""
        nuclei = []
        i = 0
        while i < len(phonemes):
            pair = "".join(p.text for p in phonemes[i:i + 2])
            if i + 1 < len(phonemes) and self.is_diphthong(pair):
                nuclei.append((i, i + 2))
                i += 2
                continue
            if self.is_nucleus_vowel(phonemes[i]):
                nuclei.append((i, i + 1))
            i += 1
        return nuclei

    def find_boundaries(self, phonemes: List[Phoneme], nuclei) -> List[int]:
        """Phoneme indices where a new syllable starts, including 0 and the end."""
        boundaries = [0]
        for (_, left_end), (right_start, _) in zip(nuclei, nuclei[1:]):
            between = phonemes[left_end:right_start]
            if len(between) == 0:
                boundaries.append(right_start)
            elif len(between) == 1:
                boundaries.append(left_end)
            elif len(between) == 2:
                boundaries.append(left_end + 1)
            elif len(between) == 3:
                if self.is_valid_onset(between[1:]):
                    boundaries.append(left_end + 1)
                else:
                    boundaries.append(left_end + 2)
            else:
                logging.debug("Splitting a run of %s consonants in the middle",
                              len(between))
                boundaries.append(left_end + len(between) // 2)
        boundaries.append(len(phonemes))
        return boundaries

    def syllabify(self, word: str, compound: bool = False) -> List[str]:
        """Split a word into syllables.

        The syllables are slices of the input, so digraph spelling and
        letter case are kept and ``"".join(syllables) == word``.

        Examples
        --------
        >>> SyllableAnalyser().syllabify("Galadriel")
        ['Ga', 'lad', 'ri', 'el']
        """
        return [text for text, _ in self._split(word, compound)]

    def _split(self, word: str, compound: bool):
        phonemes = self.tokenize(word, compound)
        nuclei = self.find_nuclei(phonemes)
        if len(nuclei) < 2:
            nucleus = nuclei[0] if nuclei else None
            return [(word, (phonemes, nucleus))]

        boundaries = self.find_boundaries(phonemes, nuclei)
        syllables = []
        for (start, end), (n_start, n_end) in zip(
                zip(boundaries, boundaries[1:]), nuclei):
            units = phonemes[start:end]
            text = word[units[0].start:units[-1].end]
            syllables.append((text, (units, (n_start - start, n_end - start))))
        return syllables

    @staticmethod
    def has_long_vowel(syllable: str) -> bool:
        """Whether a vowel in the syllable carries a macron, acute or circumflex."""
        for phoneme in tokenize(syllable, {}):
            if is_vowel(phoneme.key, False, False) and (
                    set(phoneme.marks) & LONG_VOWEL_MARKS):
                return True
        return False

    @staticmethod
    def contains_diphthong(syllable: str) -> bool:
        bare = remove_marks(syllable).lower()
        return any(diphthong in bare for diphthong in LEGAL_DIPHTHONGS)

    @staticmethod
    def ends_in_consonant(syllable: str) -> bool:
        return is_consonant(remove_marks(nth(syllable.rstrip(), -1)) or "")

    def analyse(self, word: str, compound: bool = False) -> List[Syllable]:
        """Analyse a word and return detailed data on each syllable."""
        syllables = []
        for text, (units, nucleus) in self._split(word, compound):
            if nucleus is None:
                onset, core, coda = text, "", ""
            else:
                n_start, n_end = nucleus
                onset = "".join(p.text for p in units[:n_start])
                core = "".join(p.text for p in units[n_start:n_end])
                coda = "".join(p.text for p in units[n_end:])

            closed = self.ends_in_consonant(text)
            if self.has_long_vowel(text) or self.contains_diphthong(text) or closed:
                weight = HEAVY
            else:
                weight = LIGHT
            syllables.append(dict(
                syllable=text,
                onset=onset,
                nucleus=core,
                coda=coda,
                weight=weight,
                structure=CLOSED if closed else OPEN,
            ))

        stressed = self.stressed_index(syllables)
        return [
            Syllable(**fields, stressed=(i == stressed))
            for i, fields in enumerate(syllables)
        ]

    @staticmethod
    def stressed_index(syllables: List[dict]):
        """Index of the stressed syllable, or None for monosyllables."""
        if len(syllables) < 2:
            return None
        if len(syllables) == 2:
            return 0
        if syllables[-2]["weight"] == HEAVY:
            return len(syllables) - 2
        return len(syllables) - 3


DEFAULT_ANALYSER = SyllableAnalyser()


def syllabify(word: str, compound: bool = False) -> List[str]:
    """Split a word into syllables with the default analyser.

    If ``compound`` is set, digraphs are not merged, so that e.g. 'ng' in
    a compound is read as n + g.
    """
    return DEFAULT_ANALYSER.syllabify(word, compound)


def analyse(word: str, compound: bool = False) -> List[Syllable]:
    """Analyse the syllables of a word with the default analyser."""
    return DEFAULT_ANALYSER.analyse(word, compound)
