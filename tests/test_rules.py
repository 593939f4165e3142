"""
Tests for Rule Table Loading
============================
Validation, ordering, immutability and the packaged de_oger table.
"""

import dataclasses
import json
import pytest
import sys
from pathlib import Path
from unittest.mock import patch

import yaml

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from meddl import settings
from meddl.rules import (
    REQUIRED_KEYS,
    RuleTableError,
    build_rule_table,
    list_rule_tables,
    load_rule_table,
    reload_rules,
)


class TestPackagedTable:
    """Tests for the de_oger.yaml table shipped with the package."""

    @pytest.fixture
    def table(self):
        return load_rule_table()

    def test_loads(self, table):
        assert table.name == "de_oger.yaml"
        assert table.dictionary["Hallo"] == ("Meddl",)

    def test_pools_not_empty(self, table):
        assert table.dot
        assert table.exclamation_mark
        assert table.question_mark

    def test_pool_entries_contain_their_mark(self, table):
        assert all("." in entry for entry in table.dot)
        assert all("!" in entry for entry in table.exclamation_mark)
        assert all("?" in entry for entry in table.question_mark)

    def test_has_interlude(self, table):
        assert table.interlude

    def test_ignored_words_are_lower_case(self, table):
        assert all(word == word.lower() for word in table.ignored_words)

    def test_listed(self):
        assert "de_oger.yaml" in list_rule_tables()

    def test_cached(self):
        assert load_rule_table() is load_rule_table()

    def test_reload_clears_cache(self):
        first = load_rule_table()
        reload_rules()
        second = load_rule_table()
        assert first is not second
        assert first == second


class TestRuleTable:
    """Tests for the RuleTable data class."""

    def test_rewrite_order_follows_document(self, make_table):
        table = make_table(twistedChars={'z': '1', 'a': '2', 'm': '3'})
        assert [p for p, _ in table.substring_twists] == ['z', 'a', 'm']

    def test_suffix_and_prefix_are_pairs(self, table):
        assert table.suffix_rewrites == (('en', 'n'),)
        assert table.prefix_rewrites == (('ver', 'fer'),)

    def test_frozen(self, table):
        with pytest.raises(dataclasses.FrozenInstanceError):
            table.quotation_mark = '"'

    def test_dictionary_read_only(self, table):
        with pytest.raises(TypeError):
            table.dictionary['neu'] = ('x',)

    def test_dictionary_candidates_are_tuples(self, table):
        assert table.dictionary['Leute'] == ('Loide', 'Leude')

    def test_ignored_case_insensitive(self, table):
        assert 'drache' in table.ignored_words
        assert table.is_ignored('DRACHE')
        assert table.is_ignored('Drache')
        assert not table.is_ignored('Drachen')

    def test_pool_for(self, table):
        assert table.pool_for('.') == ('.', '. Meddl.')
        assert table.pool_for('!') == ('!', '!!')
        assert table.pool_for('?') == ('?', '??')
        assert table.pool_for(',') is None
        assert table.pool_for('') is None

    def test_summary(self, table):
        summary = table.summary()
        assert summary['name'] == 'test'
        assert summary['translations'] == 3
        assert summary['dot'] == 2
        assert summary['interlude'] is True


class TestValidation:
    """Malformed tables are rejected at load time."""

    @pytest.mark.parametrize("key", REQUIRED_KEYS)
    def test_missing_key(self, raw_rules, key):
        del raw_rules[key]
        with pytest.raises(RuleTableError, match=key):
            build_rule_table(raw_rules)

    @pytest.mark.parametrize("key", ['dot', 'exclamationMark', 'questionMark'])
    def test_empty_pool(self, raw_rules, key):
        raw_rules[key] = []
        with pytest.raises(RuleTableError, match="must not be empty"):
            build_rule_table(raw_rules)

    def test_non_string_pool_entry(self, raw_rules):
        raw_rules['dot'] = ['.', 3]
        with pytest.raises(RuleTableError, match="non-string"):
            build_rule_table(raw_rules)

    def test_empty_translation_list(self, raw_rules):
        raw_rules['translations']['leer'] = []
        with pytest.raises(RuleTableError, match="translations.leer"):
            build_rule_table(raw_rules)

    def test_translation_not_a_list(self, raw_rules):
        raw_rules['translations']['Hallo'] = 'Meddl'
        with pytest.raises(RuleTableError):
            build_rule_table(raw_rules)

    def test_rewrite_section_must_be_mapping(self, raw_rules):
        raw_rules['en'] = ['en', 'n']
        with pytest.raises(RuleTableError, match="'en'"):
            build_rule_table(raw_rules)

    def test_rewrite_value_must_be_string(self, raw_rules):
        raw_rules['twistedChars'] = {'t': 4}
        with pytest.raises(RuleTableError, match="twistedChars"):
            build_rule_table(raw_rules)

    def test_empty_rewrite_pattern(self, raw_rules):
        raw_rules['twistBeginning'] = {'': 'x'}
        with pytest.raises(RuleTableError, match="empty pattern"):
            build_rule_table(raw_rules)

    def test_quotation_mark_must_be_string(self, raw_rules):
        raw_rules['quotationMark'] = ['„']
        with pytest.raises(RuleTableError, match="quotationMark"):
            build_rule_table(raw_rules)

    def test_interlude_optional(self, raw_rules):
        del raw_rules['interlude']
        assert build_rule_table(raw_rules).interlude is None

    def test_interlude_must_be_string(self, raw_rules):
        raw_rules['interlude'] = 42
        with pytest.raises(RuleTableError, match="interlude"):
            build_rule_table(raw_rules)

    def test_top_level_must_be_mapping(self):
        with pytest.raises(RuleTableError, match="mapping"):
            build_rule_table(['translations'])

    def test_empty_sections_allowed(self, raw_rules):
        raw_rules.update(translations={}, en={}, twistedChars={}, twistBeginning={}, ignored=[])
        table = build_rule_table(raw_rules)
        assert table.dictionary == {}
        assert table.ignored_words == frozenset()

    def test_error_is_value_error(self, raw_rules):
        del raw_rules['dot']
        with pytest.raises(ValueError):
            build_rule_table(raw_rules)


class TestLoadFromFile:
    """Loading rule tables from disk."""

    def test_yaml_file(self, tmp_path, raw_rules):
        path = tmp_path / "custom.yaml"
        path.write_text(yaml.safe_dump(raw_rules, allow_unicode=True, sort_keys=False), encoding='utf-8')
        table = load_rule_table(str(path))
        assert table.name == "custom.yaml"
        assert table.quotation_mark == "„"

    def test_json_file(self, tmp_path, raw_rules):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps(raw_rules), encoding='utf-8')
        table = load_rule_table(path)
        assert table.dictionary['Leute'] == ('Loide', 'Leude')
        assert table.substring_twists == (('ck', 'gg'), ('t', 'd'))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_rule_table(str(tmp_path / "nope.yaml"))

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("translations: [unclosed\n", encoding='utf-8')
        with pytest.raises(RuleTableError, match="broken.yaml"):
            load_rule_table(str(path))

    def test_invalid_file_names_source(self, tmp_path, raw_rules):
        del raw_rules['questionMark']
        path = tmp_path / "incomplete.yaml"
        path.write_text(yaml.safe_dump(raw_rules, allow_unicode=True, sort_keys=False), encoding='utf-8')
        with pytest.raises(RuleTableError, match="incomplete.yaml.*questionMark"):
            load_rule_table(str(path))


class TestDefaultTablePath:
    """rules.default is resolved against the package, not the working directory."""

    @pytest.fixture(autouse=True)
    def fresh_cache(self):
        reload_rules()
        yield
        reload_rules()

    def test_package_relative_setting_under_other_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch.object(settings, 'get_setting', return_value='rules/de_oger.yaml'):
            table = load_rule_table()
        assert table.name == "de_oger.yaml"

    def test_bare_name_under_other_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_rule_table().name == "de_oger.yaml"

    def test_explicit_relative_path_uses_cwd(self, tmp_path, monkeypatch, raw_rules):
        (tmp_path / "local.yaml").write_text(
            yaml.safe_dump(raw_rules, allow_unicode=True, sort_keys=False), encoding='utf-8')
        monkeypatch.chdir(tmp_path)
        assert load_rule_table("local.yaml").name == "local.yaml"
