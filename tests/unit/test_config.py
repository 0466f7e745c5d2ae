#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_config.py
"""Unit tests for configuration file loading.

Tests cover:
- JSON, TOML, YAML and pyproject.toml files
- Error reporting for missing and malformed files
- Building tag dictionaries from files

"""

import json

import pytest

from blackprint.config import load_config_file, load_tag_dictionary
from blackprint.exceptions import ConfigurationError


@pytest.mark.unit
class TestLoadConfigFile:
    """Test loading mappings from files."""

    def test_json(self, tmp_path):
        """Test a JSON file."""
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"title": "Hi", "tags": ["a"]}), encoding="utf-8")
        assert load_config_file(path) == {"title": "Hi", "tags": ["a"]}

    def test_toml(self, tmp_path):
        """Test a TOML file."""
        path = tmp_path / "data.toml"
        path.write_text('title = "Hi"\n\n[site]\nname = "Blog"\n', encoding="utf-8")
        assert load_config_file(path) == {"title": "Hi", "site": {"name": "Blog"}}

    @pytest.mark.parametrize("suffix", [".yaml", ".yml"])
    def test_yaml(self, tmp_path, suffix):
        """Test a YAML file with either extension."""
        path = tmp_path / f"data{suffix}"
        path.write_text("title: Hi\nposts:\n  - one\n  - two\n", encoding="utf-8")
        assert load_config_file(path) == {"title": "Hi", "posts": ["one", "two"]}

    def test_empty_yaml(self, tmp_path):
        """Test that an empty YAML file is an empty mapping."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_pyproject(self, tmp_path):
        """Test that pyproject.toml is read from its tool table."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.blackprint]\nsite = "Blog"\n', encoding="utf-8")
        assert load_config_file(path) == {"site": "Blog"}

    def test_pyproject_without_section(self, tmp_path):
        """Test a pyproject.toml without a blackprint table."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert load_config_file(path) == {}

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(tmp_path / "missing.json")

        assert exc_info.value.source == str(tmp_path / "missing.json")

    def test_directory(self, tmp_path):
        """Test that a directory is rejected."""
        with pytest.raises(ConfigurationError):
            load_config_file(tmp_path)

    def test_unsupported_extension(self, tmp_path):
        """Test that unknown extensions are rejected."""
        path = tmp_path / "data.ini"
        path.write_text("[x]", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Unsupported"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "name,content",
        [
            ("bad.json", "{not json"),
            ("bad.toml", "title = "),
            ("bad.yaml", "a: [unclosed"),
        ],
    )
    def test_malformed_files(self, tmp_path, name, content):
        """Test that parse errors are wrapped with the original error."""
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(path)

        assert exc_info.value.original_error is not None

    def test_non_mapping_root(self, tmp_path):
        """Test that a file must hold a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config_file(path)


@pytest.mark.unit
class TestLoadTagDictionary:
    """Test building tag dictionaries from files."""

    def test_extends_default_dictionary(self, tmp_path):
        """Test that file tags are added to the default dictionary."""
        path = tmp_path / "tags.toml"
        path.write_text(
            '[config]\nglobal_allowed_classes = ["note"]\n\n[[tags]]\nname = "kbd"\ninline = { elem = "kbd" }\n',
            encoding="utf-8",
        )
        dictionary = load_tag_dictionary(path)

        assert dictionary.inline_exists("kbd")
        assert dictionary.block_exists("h1")
        assert "note" in dictionary.config.global_allowed_classes

    def test_invalid_dictionary_names_file(self, tmp_path):
        """Test that dictionary errors mention the file."""
        path = tmp_path / "tags.json"
        path.write_text(json.dumps({"tags": [{"name": "x", "block": {"colour": "red"}}]}), encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            load_tag_dictionary(path)

        assert "tags.json" in str(exc_info.value)
        assert exc_info.value.source == str(path)
