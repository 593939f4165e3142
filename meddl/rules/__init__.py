#!/usr/bin/env python3
"""
Rule Table Loader
=================
Loads dialect rule tables from YAML files and validates them into an
immutable RuleTable.

Usage:
    from meddl.rules import load_rule_table, reload_rules

    table = load_rule_table()                 # packaged default (app.yaml)
    table = load_rule_table('my_rules.yaml')  # any other table

A rule table is a mapping with these keys:

    translations    word -> list of candidate replacements
    en              suffix -> replacement suffix
    twistedChars    substring -> replacement substring
    twistBeginning  prefix -> replacement prefix
    ignored         list of words that are never touched
    dot             replacement pool for "."
    exclamationMark replacement pool for "!"
    questionMark    replacement pool for "?"
    quotationMark   replacement for a leading double quote
    interlude       optional fragment appended to random words

JSON files are valid YAML, so both formats load the same way.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union

import yaml

from ..settings import RULES_DIR, get_default_rules_path, resolve_path

logger = logging.getLogger(__name__)


# =============================================================================
# Table Keys
# =============================================================================

REQUIRED_KEYS = (
    'translations',
    'en',
    'twistedChars',
    'twistBeginning',
    'ignored',
    'dot',
    'exclamationMark',
    'questionMark',
    'quotationMark',
)

# Punctuation mark -> RuleTable attribute holding its replacement pool
POOL_ATTRS = {
    '.': 'dot',
    '!': 'exclamation_mark',
    '?': 'question_mark',
}

RewriteRules = Tuple[Tuple[str, str], ...]


class RuleTableError(ValueError):
    """A rule table is missing a key or has a value of the wrong shape."""


# =============================================================================
# Data Classes for Typed Access
# =============================================================================

@dataclass(frozen=True)
class RuleTable:
    """Container for a validated rule table. Never mutated after loading."""
    dictionary: Mapping[str, Tuple[str, ...]]
    suffix_rewrites: RewriteRules
    substring_twists: RewriteRules
    prefix_rewrites: RewriteRules
    ignored_words: FrozenSet[str]
    dot: Tuple[str, ...]
    exclamation_mark: Tuple[str, ...]
    question_mark: Tuple[str, ...]
    quotation_mark: str
    interlude: Optional[str] = None
    name: str = "<memory>"

    def pool_for(self, mark: str) -> Optional[Tuple[str, ...]]:
        """Replacement pool for a punctuation mark, None if it has none."""
        attr = POOL_ATTRS.get(mark)
        return getattr(self, attr) if attr else None

    def is_ignored(self, word: str) -> bool:
        return word.lower() in self.ignored_words

    def summary(self) -> Dict[str, Any]:
        """Section sizes, for logging and the CLI."""
        return {
            'name': self.name,
            'translations': len(self.dictionary),
            'en': len(self.suffix_rewrites),
            'twistedChars': len(self.substring_twists),
            'twistBeginning': len(self.prefix_rewrites),
            'ignored': len(self.ignored_words),
            'dot': len(self.dot),
            'exclamationMark': len(self.exclamation_mark),
            'questionMark': len(self.question_mark),
            'interlude': self.interlude is not None,
        }


# =============================================================================
# Validation
# =============================================================================

def _require(raw: Dict[str, Any], key: str, name: str) -> Any:
    if key not in raw or raw[key] is None:
        raise RuleTableError(f"{name}: missing required key '{key}'")
    return raw[key]


def _string_list(value: Any, key: str, name: str, allow_empty: bool = False) -> Tuple[str, ...]:
    if not isinstance(value, list):
        raise RuleTableError(f"{name}: '{key}' must be a list of strings")
    if not value and not allow_empty:
        raise RuleTableError(f"{name}: '{key}' must not be empty")
    for item in value:
        if not isinstance(item, str):
            raise RuleTableError(f"{name}: '{key}' contains non-string entry {item!r}")
    return tuple(value)


def _string_pairs(value: Any, key: str, name: str) -> RewriteRules:
    """Mapping of str -> str, kept in document order."""
    if not isinstance(value, dict):
        raise RuleTableError(f"{name}: '{key}' must be a mapping of strings")
    pairs = []
    for pattern, replacement in value.items():
        if not isinstance(pattern, str) or not isinstance(replacement, str):
            raise RuleTableError(
                f"{name}: '{key}' entry {pattern!r}: {replacement!r} must map a string to a string"
            )
        if not pattern:
            raise RuleTableError(f"{name}: '{key}' contains an empty pattern")
        pairs.append((pattern, replacement))
    return tuple(pairs)


def _translations(value: Any, name: str) -> Mapping[str, Tuple[str, ...]]:
    if not isinstance(value, dict):
        raise RuleTableError(f"{name}: 'translations' must be a mapping of word -> list of strings")
    dictionary = {}
    for word, candidates in value.items():
        if not isinstance(word, str):
            raise RuleTableError(f"{name}: 'translations' key {word!r} is not a string")
        dictionary[word] = _string_list(candidates, f"translations.{word}", name)
    return MappingProxyType(dictionary)


def build_rule_table(raw: Any, name: str = "<memory>") -> RuleTable:
    """
    Validate a parsed rule table and freeze it into a RuleTable.

    Parameters
    ----------
    raw : Any
        Parsed YAML/JSON document
    name : str
        Label used in error messages and logs

    Returns
    -------
    RuleTable
        Validated, immutable table

    Raises
    ------
    RuleTableError
        If a required key is missing, a pool is empty or a value has the
        wrong shape
    """
    if not isinstance(raw, dict):
        raise RuleTableError(f"{name}: rule table must be a mapping, got {type(raw).__name__}")

    for key in REQUIRED_KEYS:
        _require(raw, key, name)

    quotation_mark = raw['quotationMark']
    if not isinstance(quotation_mark, str):
        raise RuleTableError(f"{name}: 'quotationMark' must be a string")

    interlude = raw.get('interlude')
    if interlude is not None and not isinstance(interlude, str):
        raise RuleTableError(f"{name}: 'interlude' must be a string")

    ignored = _string_list(raw['ignored'], 'ignored', name, allow_empty=True)

    return RuleTable(
        dictionary=_translations(raw['translations'], name),
        suffix_rewrites=_string_pairs(raw['en'], 'en', name),
        substring_twists=_string_pairs(raw['twistedChars'], 'twistedChars', name),
        prefix_rewrites=_string_pairs(raw['twistBeginning'], 'twistBeginning', name),
        ignored_words=frozenset(word.lower() for word in ignored),
        dot=_string_list(raw['dot'], 'dot', name),
        exclamation_mark=_string_list(raw['exclamationMark'], 'exclamationMark', name),
        question_mark=_string_list(raw['questionMark'], 'questionMark', name),
        quotation_mark=quotation_mark,
        interlude=interlude or None,
        name=name,
    )


# =============================================================================
# Loader Functions
# =============================================================================

def _resolve_rules_path(path: Union[str, Path, None]) -> Path:
    """
    None means the app.yaml default. Bare names are looked up in the packaged
    rules directory first, other relative paths against the working directory.
    """
    if path is None:
        return get_default_rules_path()
    candidate = RULES_DIR / str(path)
    if not Path(path).is_absolute() and candidate.exists():
        return candidate
    return resolve_path(str(path), base=Path.cwd())


def _load_yaml(filepath: Path) -> Any:
    """Load a YAML (or JSON) rule file."""
    if not filepath.exists():
        raise FileNotFoundError(f"Rule table not found: {filepath}")

    with open(filepath, 'r', encoding='utf-8') as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise RuleTableError(f"{filepath.name}: could not parse rule table: {e}") from e


@lru_cache(maxsize=8)
def load_rule_table(path: Union[str, Path, None] = None) -> RuleTable:
    """Load and validate a rule table. Defaults to rules.default in app.yaml."""
    filepath = _resolve_rules_path(path)
    table = build_rule_table(_load_yaml(filepath), name=filepath.name)
    logger.debug(f"Loaded rule table {table.name}: {table.summary()}")
    return table


def reload_rules():
    """Clear cached rule tables and the shared translator built on them."""
    from ..translator import get_translator

    load_rule_table.cache_clear()
    get_translator.cache_clear()


def list_rule_tables() -> Tuple[str, ...]:
    """Names of the rule tables shipped with the package."""
    return tuple(sorted(
        p.name for p in RULES_DIR.iterdir()
        if p.suffix in ('.yaml', '.yml', '.json')
    ))


__all__ = [
    "RuleTable",
    "RuleTableError",
    "POOL_ATTRS",
    "REQUIRED_KEYS",
    "build_rule_table",
    "load_rule_table",
    "reload_rules",
    "list_rule_tables",
]
