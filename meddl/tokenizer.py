#!/usr/bin/env python3
"""
Tokenizer
=========
Splits a sentence into tokens and each token into word body + punctuation.
"""

import re
from dataclasses import dataclass
from typing import List

# Characters treated as punctuation. The double quote is not one of them;
# a leading quote stays on the word and is rewritten there.
PUNCTUATION_RE = re.compile(r"[.,\\/#!?$%\^&*;:{}=\-_`~()]")


@dataclass(frozen=True)
class Token:
    """One space-delimited piece of a sentence."""
    raw: str
    word: str
    punctuation: str = ""


def tokenize(sentence: str) -> List[str]:
    """
    Split on the single space character.

    Runs of spaces are not collapsed: "a  b" gives ['a', '', 'b'].
    """
    return sentence.split(" ")


def split_punctuation(token: str) -> Token:
    """
    Separate the first punctuation character from a token.

    Every occurrence of that character is removed from the word body. If
    nothing is left (a lone "&", "." ...), the whole token is kept as the
    word and no punctuation is reported.
    """
    match = PUNCTUATION_RE.search(token)
    if not match:
        return Token(raw=token, word=token)

    mark = match.group(0)
    word = token.replace(mark, "")
    if not word:
        return Token(raw=token, word=token)
    return Token(raw=token, word=word, punctuation=mark)
