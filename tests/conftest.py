"""
Shared fixtures: a small in-memory rule table and a scripted random source.
"""

import copy
import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from meddl.rules import build_rule_table


BASE_RULES = {
    'translations': {
        'Hallo': ['Meddl'],
        'Leute': ['Loide', 'Leude'],
        'nicht': ['ned'],
    },
    'en': {'en': 'n'},
    'twistedChars': {'ck': 'gg', 't': 'd'},
    'twistBeginning': {'ver': 'fer'},
    'ignored': ['Drache'],
    'dot': ['.', '. Meddl.'],
    'exclamationMark': ['!', '!!'],
    'questionMark': ['?', '??'],
    'quotationMark': '„',
    'interlude': ' *schnauf*',
}


class StubRandom:
    """
    Scripted random source.

    choice() always picks `index` (modulo the sequence length); random()
    always returns `value`.
    """

    def __init__(self, index: int = 0, value: float = 0.5):
        self.index = index
        self.value = value
        self.choice_calls = 0
        self.random_calls = 0

    def choice(self, seq):
        self.choice_calls += 1
        return seq[self.index % len(seq)]

    def random(self):
        self.random_calls += 1
        return self.value


@pytest.fixture
def raw_rules():
    """A fresh, mutable copy of the base rule document."""
    return copy.deepcopy(BASE_RULES)


@pytest.fixture
def make_table():
    """Build a validated table from the base rules with some sections replaced."""
    def _make(**sections):
        raw = copy.deepcopy(BASE_RULES)
        raw.update(sections)
        return build_rule_table(raw, name='test')
    return _make


@pytest.fixture
def table(make_table):
    return make_table()


@pytest.fixture
def stub_rng():
    return StubRandom
