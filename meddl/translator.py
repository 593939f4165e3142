#!/usr/bin/env python3
"""
Translator
==========
Turns a German sentence into Meddlfraengisch.

Usage:
    from meddl import translate, Translator

    translate("Hallo Leute!")             # packaged rule table

    translator = Translator(rng=TrueRandom(seed=7))
    translator.translate("Das ist gut.")
"""

from functools import lru_cache
from typing import List

from .entropy import TrueRandom, get_rng
from .rules import RuleTable, load_rule_table
from .settings import get_interlude_probability
from .tokenizer import split_punctuation, tokenize
from .transform import InterludeInjector, PunctuationTransformer, WordTransformer


class Translator:
    """
    Sentence-level translator.

    Parameters
    ----------
    table : RuleTable, optional
        Rule table to use (default: packaged table from app.yaml)
    rng : TrueRandom, optional
        Random source for all draws (default: global system random).
        Any object with random() and choice() works.
    interlude_probability : float, optional
        Chance per word of appending the interlude (default: app.yaml)
    """

    def __init__(self,
                 table: RuleTable = None,
                 rng: TrueRandom = None,
                 interlude_probability: float = None):
        self.table = table or load_rule_table()
        self.rng = rng or get_rng()
        if interlude_probability is None:
            interlude_probability = get_interlude_probability()

        self.words = WordTransformer(self.table)
        self.punctuation = PunctuationTransformer(self.table)
        self.interlude = InterludeInjector(self.table.interlude, interlude_probability)

    def translate(self, sentence: str) -> str:
        """Translate one sentence. Word count and order are preserved."""
        if not sentence:
            return ""

        parts: List[str] = []
        for raw in tokenize(sentence):
            token = split_punctuation(raw)
            word = self.words.transform(token.word, self.rng)
            mark = self.punctuation.transform(token.punctuation, self.rng)
            word = self.interlude.inject(word, self.rng)
            parts.append(word + mark + " ")

        return "".join(parts).strip()


@lru_cache(maxsize=1)
def get_translator() -> Translator:
    """Shared translator over the packaged rule table."""
    return Translator()


def translate(sentence: str) -> str:
    """Translate a sentence with the packaged rule table."""
    return get_translator().translate(sentence)
