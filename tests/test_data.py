"""
Tests for environment loading.
"""

import pytest

from stache.data import apply_overrides, load_data, parse_data
from stache.errors import DataLoadError, StacheUserError

from conftest import write


class TestParseData:

    def test_yaml_mapping(self):
        data = parse_data("title: Hello\nitems:\n  - name: a\n  - name: b\n")
        assert data == {"title": "Hello", "items": [{"name": "a"}, {"name": "b"}]}

    def test_json_document(self):
        """JSON loads through the YAML parser"""
        data = parse_data('{"flag": false, "n": 3, "foo": {"bar": "Audience"}}')
        assert data == {"flag": False, "n": 3, "foo": {"bar": "Audience"}}

    def test_empty_document(self):
        assert parse_data("") == {}

    def test_top_level_must_be_mapping(self):
        with pytest.raises(DataLoadError, match="top level must be a mapping"):
            parse_data("- 1\n- 2\n")

    def test_invalid_yaml(self):
        with pytest.raises(DataLoadError, match="Failed to parse"):
            parse_data("a: [1, 2\n")


class TestLoadData:

    def test_no_path(self):
        assert load_data(None) == {}

    def test_from_file(self, tmp_path):
        path = write(tmp_path / "data.yaml", "who: world\n")
        assert load_data(str(path)) == {"who": "world"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError, match="not found"):
            load_data(str(tmp_path / "missing.yaml"))

    def test_error_is_user_facing(self, tmp_path):
        """Loader errors are shown to the user without tracebacks"""
        with pytest.raises(StacheUserError):
            load_data(str(tmp_path / "missing.yaml"))


class TestOverrides:

    def test_typed_values(self):
        """Values are decoded as YAML scalars"""
        data = apply_overrides({}, ["n=3", "flag=true", "name=hello world", "empty="])
        assert data == {"n": 3, "flag": True, "name": "hello world", "empty": ""}

    def test_dotted_keys(self):
        """Nested mappings are created or extended"""
        original = {"a": {"keep": 1}}
        data = apply_overrides(original, ["a.b.c=x"])
        assert data == {"a": {"keep": 1, "b": {"c": "x"}}}
        assert original == {"a": {"keep": 1}}

    def test_invalid_override(self):
        with pytest.raises(DataLoadError, match="Expected 'key=value'"):
            apply_overrides({}, ["novalue"])
        with pytest.raises(DataLoadError, match="empty key"):
            apply_overrides({}, ["=1"])
