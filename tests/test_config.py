"""Tests for configuration loading."""

import os
import tempfile
from pathlib import Path

import pytest

from blockstrings.config import load_config
from blockstrings.core.errors import ConfigError
from blockstrings.flyout import FLYOUT_TYPES


def test_load_config_defaults():
    """Test loading config with defaults when no file exists."""
    with tempfile.TemporaryDirectory() as tmpdir:
        orig_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            config = load_config()
        finally:
            os.chdir(orig_cwd)

    assert config.workspace.path == Path("workspace.yaml")
    assert config.blocks.string_field == "VAR"
    assert config.blocks.string_types == list(FLYOUT_TYPES)
    assert config.flyout.default_name == "item"
    assert config.flyout.block_types == list(FLYOUT_TYPES)
    assert config.log.level == "WARNING"


def test_load_config_from_file():
    """Test loading config from a file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "blockstrings.toml"
        config_path.write_text("""
[workspace]
path = "my-workspace.yaml"

[blocks]
string_types = ["text_var"]
string_field = "NAME"

[flyout]
default_name = "str"
block_types = ["string_get"]

[log]
level = "debug"
""")

        config = load_config(config_path=config_path)

        assert config.workspace.path == Path("my-workspace.yaml")
        assert config.blocks.string_types == ["text_var"]
        assert config.blocks.string_field == "NAME"
        assert config.flyout.default_name == "str"
        assert config.flyout.block_types == ["string_get"]
        assert config.log.level == "DEBUG"


def test_load_config_search_cwd():
    """Test config search in current working directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        orig_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            config_path = Path(tmpdir) / "blockstrings.toml"
            config_path.write_text("""
[flyout]
default_name = "word"
""")

            config = load_config()
            assert config.flyout.default_name == "word"
        finally:
            os.chdir(orig_cwd)


def test_load_config_search_next_to_workspace():
    """Test config search beside the workspace document."""
    with tempfile.TemporaryDirectory() as tmpdir:
        project = Path(tmpdir) / "project"
        project.mkdir()
        (project / "blockstrings.toml").write_text("""
[blocks]
string_field = "TEXT_VAR"
""")
        workspace_path = project / "ws.yaml"

        config = load_config(workspace_path=workspace_path)
        assert config.blocks.string_field == "TEXT_VAR"
        assert config.workspace.path == workspace_path


def test_load_config_invalid_toml():
    """Test that a broken config file raises ConfigError."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "blockstrings.toml"
        config_path.write_text("[flyout\ndefault_name = ")

        with pytest.raises(ConfigError):
            load_config(config_path=config_path)


def test_load_config_unknown_log_level():
    """Test that only real logging level names are accepted."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "blockstrings.toml"
        config_path.write_text('[log]\nlevel = "basic_format"\n')

        with pytest.raises(ConfigError, match="BASIC_FORMAT"):
            load_config(config_path=config_path)

        config_path.write_text('[log]\nlevel = "info"\n')
        assert load_config(config_path=config_path).log.level == "INFO"
