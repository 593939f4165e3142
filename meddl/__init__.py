#!/usr/bin/env python3
"""
meddl - German to Meddlfraengisch Translator
=============================================

Rewrites German sentences into the Meddlfraengisch dialect using a rule
table of word translations, suffix/prefix rewrites, character twists and
random punctuation.

Quick Start
-----------
    from meddl import translate

    translate("Hallo Leute, wie geht's?")

    # Reproducible output
    from meddl import Translator, TrueRandom
    Translator(rng=TrueRandom(seed=42)).translate("Das ist nicht gut.")

    # Custom rule table
    from meddl import load_rule_table
    Translator(table=load_rule_table("my_rules.yaml"))

Modules
-------
    meddl.rules      - Rule table loading and validation
    meddl.tokenizer  - Sentence and punctuation splitting
    meddl.transform  - Word, punctuation and interlude transformers
    meddl.translator - Sentence translator
    meddl.settings   - App configuration (configs/app.yaml)

CLI Usage
---------
    python -m meddl translate "Hallo Welt!"
    echo "Das ist gut." | python -m meddl translate
    python -m meddl rules
"""

__version__ = "0.2.0"

from .entropy import TrueRandom, get_rng
from .rules import (
    RuleTable,
    RuleTableError,
    build_rule_table,
    load_rule_table,
    reload_rules,
)
from .tokenizer import Token, tokenize, split_punctuation
from .transform import WordTransformer, PunctuationTransformer, InterludeInjector
from .translator import Translator, get_translator, translate

__all__ = [
    "__version__",
    # Translation
    "translate",
    "Translator",
    "get_translator",
    # Rule tables
    "RuleTable",
    "RuleTableError",
    "build_rule_table",
    "load_rule_table",
    "reload_rules",
    # Pipeline pieces
    "Token",
    "tokenize",
    "split_punctuation",
    "WordTransformer",
    "PunctuationTransformer",
    "InterludeInjector",
    # Randomness
    "TrueRandom",
    "get_rng",
]
