"""Tests for app/settings.py"""
import os
import pytest
from unittest.mock import patch
from settings import Settings, _flag


def test_default_values():
    s = Settings()
    assert s.vault_path == os.getenv("VAULT_PATH", "/vault")
    assert s.remove_metadata == (os.getenv("REMOVE_METADATA", "true").lower() == "true")
    assert s.remove_block_ids == (os.getenv("REMOVE_BLOCK_IDS", "false").lower() == "true")
    assert s.file_name_prefix == os.getenv("FILE_NAME_PREFIX", "(Plain) ")
    assert s.default_save_location == os.getenv("DEFAULT_SAVE_LOCATION", "")
    assert s.use_structure_index == (os.getenv("USE_STRUCTURE_INDEX", "true").lower() == "true")
    assert s.log_embeds == (os.getenv("LOG_EMBEDS", "false").lower() == "true")


def test_custom_field_values():
    s = Settings(
        vault_path="/notes",
        remove_metadata=False,
        remove_block_ids=True,
        file_name_prefix="Export - ",
        default_save_location="out/export.md",
        use_structure_index=False,
    )
    assert s.vault_path == "/notes"
    assert s.remove_metadata is False
    assert s.remove_block_ids is True
    assert s.file_name_prefix == "Export - "
    assert s.default_save_location == "out/export.md"
    assert s.use_structure_index is False


@pytest.mark.parametrize("value,expected", [
    ("true", True),
    ("TRUE", True),
    ("True", True),
    ("false", False),
    ("1", False),
    ("", False),
])
def test_flag_parsing(value, expected):
    with patch.dict(os.environ, {"SOME_FLAG": value}):
        assert _flag("SOME_FLAG", "false") is expected


def test_flag_default():
    with patch.dict(os.environ, {}, clear=False):
        os.environ.pop("UNSET_FLAG_FOR_TEST", None)
        assert _flag("UNSET_FLAG_FOR_TEST", "true") is True
