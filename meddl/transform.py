#!/usr/bin/env python3
"""
Word & Punctuation Transformers
===============================
Rule application for single tokens:
- WordTransformer: dictionary override, suffix/prefix rewrites, substring
  twists, case restoration, ignore list
- PunctuationTransformer: random replacements for ".", "!" and "?"
- InterludeInjector: occasionally appends the interlude fragment to a word

None of these hold per-call state. Randomness is passed in on every call.
"""

import logging

from .entropy import TrueRandom, get_rng
from .rules import RuleTable

logger = logging.getLogger(__name__)


class WordTransformer:
    """
    Applies the rule chain of a RuleTable to a bare word.

    Order of steps:
        1. leading double quote -> quotationMark
        2. ignored words are returned as they are
        3. dictionary lookup (random candidate) - or - 4. suffix rewrites
        5. lower-case
        6. first matching prefix rewrite
        7. all substring twists, in order
        8. restore an upper-case first letter
    """

    def __init__(self, table: RuleTable):
        self.table = table

    def transform(self, word: str, rng: TrueRandom = None) -> str:
        if not word:
            return word
        rng = rng or get_rng()

        is_capitalized = word[0].isupper()

        word = self._replace_quotation_mark(word)

        if self.table.is_ignored(word):
            return word

        candidates = self.table.dictionary.get(word)
        if candidates:
            word = rng.choice(candidates)
        else:
            word = self._rewrite_suffixes(word)

        word = word.lower()
        word = self._rewrite_prefix(word)
        word = self._twist(word)

        if is_capitalized:
            word = capitalize_first(word)
        return word

    def _replace_quotation_mark(self, word: str) -> str:
        if word.startswith('"'):
            return word.replace('"', self.table.quotation_mark, 1)
        return word

    def _rewrite_suffixes(self, word: str) -> str:
        # Every matching rule fires; later rules see earlier results.
        for suffix, replacement in self.table.suffix_rewrites:
            if word.endswith(suffix):
                word = word[:-len(suffix)] + replacement
        return word

    def _rewrite_prefix(self, word: str) -> str:
        for prefix, replacement in self.table.prefix_rewrites:
            if word.startswith(prefix):
                return replacement + word[len(prefix):]
        return word

    def _twist(self, word: str) -> str:
        for pattern, replacement in self.table.substring_twists:
            word = word.replace(pattern.lower(), replacement.lower())
        return word


def capitalize_first(word: str) -> str:
    """Upper-case the first character only ("ßa" -> "SSa", "über" -> "Über")."""
    if not word:
        return word
    return word[0].upper() + word[1:]


class PunctuationTransformer:
    """Replaces ".", "!" and "?" with a random entry of their pool."""

    def __init__(self, table: RuleTable):
        self.table = table

    def transform(self, mark: str, rng: TrueRandom = None) -> str:
        pool = self.table.pool_for(mark)
        if not pool:
            return mark
        return (rng or get_rng()).choice(pool)


class InterludeInjector:
    """
    Appends the interlude fragment to a word with a fixed probability.

    The draw happens independently for every word of every call. Without an
    interlude nothing is drawn.
    """

    def __init__(self, interlude: str = None, probability: float = 0.01):
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"probability must be between 0 and 1, got {probability}")
        self.interlude = interlude
        self.probability = probability

    @property
    def enabled(self) -> bool:
        return bool(self.interlude) and self.probability > 0.0

    def inject(self, word: str, rng: TrueRandom = None) -> str:
        if not word or not self.enabled:
            return word
        if (rng or get_rng()).random() < self.probability:
            logger.debug(f"Interlude after {word!r}")
            return word + self.interlude
        return word
