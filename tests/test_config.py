"""Unit tests for gdrive_sync/config.py — Config and parse_config()."""

import dataclasses
import os
from unittest.mock import patch

import pytest

from gdrive_sync.config import Config, ConfigError, load_config, parse_config
from gdrive_sync.utils import get_input, parse_bool

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

# Minimal set of required inputs for parse_config()
_REQUIRED_ENV = {
    "INPUT_FILENAME": "dist/*.zip",
    "INPUT_FOLDERID": "folder-123",
    "INPUT_CREDENTIALS": "ZmFrZQ==",
}


def _without(key):
    return {k: v for k, v in _REQUIRED_ENV.items() if k != key}


# ---------------------------------------------------------------------------
# Input helpers
# ---------------------------------------------------------------------------


class TestGetInput:
    def test_reads_upper_cased_input_variable(self):
        with patch.dict(os.environ, {"INPUT_FOLDERID": "abc"}, clear=True):
            assert get_input("folderId") == "abc"

    def test_spaces_in_name_become_underscores(self):
        with patch.dict(os.environ, {"INPUT_MY_INPUT": "x"}, clear=True):
            assert get_input("my input") == "x"

    def test_missing_input_is_empty_string(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_input("name") == ""

    def test_value_is_stripped(self):
        with patch.dict(os.environ, {"INPUT_NAME": "  doc \n"}, clear=True):
            assert get_input("name") == "doc"


class TestParseBool:
    @pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true_spellings(self, value):
        assert parse_bool(value) == (True, True)

    @pytest.mark.parametrize("value", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false_spellings(self, value):
        assert parse_bool(value) == (False, True)

    @pytest.mark.parametrize("value", ["", "yes", "on", "tRuE"])
    def test_unrecognised_values_are_false(self, value):
        assert parse_bool(value) == (False, False)


# ---------------------------------------------------------------------------
# Config tests
# ---------------------------------------------------------------------------


class TestConfig:
    def test_optional_fields_have_defaults(self):
        config = Config(file_pattern="*.txt", folder_id="f", credentials="c")
        assert config.name == ""
        assert config.name_prefix == ""
        assert config.mime_type == ""
        assert config.overwrite is False
        assert config.use_complete_source_name is False
        assert config.mirror_directory_structure is False

    def test_config_is_immutable(self):
        config = Config(file_pattern="*.txt", folder_id="f", credentials="c")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.folder_id = "other"  # type: ignore[misc]

    def test_shared_explicit_name_only_without_prefix_or_full_path(self):
        base = Config(file_pattern="*", folder_id="f", credentials="c", name="doc")
        assert base.shared_explicit_name is True
        assert dataclasses.replace(base, name_prefix="p-").shared_explicit_name is False
        assert dataclasses.replace(base, use_complete_source_name=True).shared_explicit_name is False
        assert dataclasses.replace(base, name="").shared_explicit_name is False


# ---------------------------------------------------------------------------
# load_config / parse_config tests
# ---------------------------------------------------------------------------


class TestParseConfig:
    def test_reads_required_inputs(self):
        with patch.dict(os.environ, _REQUIRED_ENV, clear=True):
            config = parse_config()
        assert config.file_pattern == "dist/*.zip"
        assert config.folder_id == "folder-123"
        assert config.credentials == "ZmFrZQ=="

    def test_reads_optional_inputs(self):
        env = {
            **_REQUIRED_ENV,
            "INPUT_NAME": "doc",
            "INPUT_NAMEPREFIX": "p-",
            "INPUT_MIMETYPE": "text/plain",
            "INPUT_OVERWRITE": "true",
            "INPUT_USECOMPLETESOURCEFILENAMEASNAME": "1",
            "INPUT_MIRRORDIRECTORYSTRUCTURE": "True",
        }
        with patch.dict(os.environ, env, clear=True):
            config = parse_config()
        assert config.name == "doc"
        assert config.name_prefix == "p-"
        assert config.mime_type == "text/plain"
        assert config.overwrite is True
        assert config.overwrite_set is True
        assert config.use_complete_source_name is True
        assert config.mirror_directory_structure is True

    def test_overwrite_unset_is_recorded(self):
        with patch.dict(os.environ, _REQUIRED_ENV, clear=True):
            config = load_config()
        assert config.overwrite is False
        assert config.overwrite_set is False

    def test_unparsable_flag_is_false(self):
        env = {**_REQUIRED_ENV, "INPUT_MIRRORDIRECTORYSTRUCTURE": "yes"}
        with patch.dict(os.environ, env, clear=True):
            config = parse_config()
        assert config.mirror_directory_structure is False

    @pytest.mark.parametrize(
        "missing, input_name",
        [
            ("INPUT_FILENAME", "filename"),
            ("INPUT_FOLDERID", "folderId"),
            ("INPUT_CREDENTIALS", "credentials"),
        ],
    )
    def test_missing_required_input_names_the_field(self, missing, input_name):
        with patch.dict(os.environ, _without(missing), clear=True):
            with pytest.raises(ConfigError, match=f"Input {input_name} is missing or empty"):
                parse_config()

    def test_blank_required_input_counts_as_missing(self):
        env = {**_REQUIRED_ENV, "INPUT_FOLDERID": "   "}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigError, match="folderId"):
                parse_config()
