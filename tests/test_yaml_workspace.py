"""Tests for the YAML workspace document codec."""

import tempfile
from pathlib import Path

import pytest
import yaml

from blockstrings.adapters.yaml_workspace import FileWorkspace, YamlWorkspaceCodec
from blockstrings.core.errors import WorkspaceFormatError
from blockstrings.core.model import Block, StringBlock
from blockstrings.core.strings import all_strings, rename_string

DOC = """
blocks:
  - type: string_set
    id: s1
    fields: {VAR: Greeting}
    children:
      - type: text
        fields: {TEXT: hello}
      - type: string_get
        fields: {VAR: greeting}
  - type: string_declare
    fields: {VAR: ~}
  - type: custom_pair
    string_fields: [LEFT, RIGHT]
    fields: {LEFT: a, RIGHT: b}
"""


def _codec():
    return YamlWorkspaceCodec(string_types=["string_set", "string_get", "string_declare"])


def test_decode_block_classes():
    """Test that string block types become StringBlocks."""
    ws = _codec().decode(DOC)
    blocks = ws.get_all_blocks()

    assert [b.type for b in blocks] == [
        "string_set", "text", "string_get", "string_declare", "custom_pair"
    ]
    assert isinstance(blocks[0], StringBlock)
    assert type(blocks[1]) is Block
    assert isinstance(blocks[4], StringBlock)
    assert blocks[4].string_fields == ("LEFT", "RIGHT")
    assert blocks[3].fields == {"VAR": None}


def test_decode_then_collect():
    """Test collecting names from a decoded document."""
    ws = _codec().decode(DOC)
    assert all_strings(ws) == ["Greeting", "a", "b"]


def test_encode_after_rename():
    """Test that renamed fields are written back."""
    codec = _codec()
    ws = codec.decode(DOC)
    rename_string("greeting", "salutation", ws)

    data = yaml.safe_load(codec.encode(ws))
    top = data["blocks"]
    assert top[0]["fields"] == {"VAR": "salutation"}
    assert top[0]["children"][1]["fields"] == {"VAR": "salutation"}
    assert top[0]["children"][0] == {"type": "text", "fields": {"TEXT": "hello"}}
    assert "string_fields" not in top[0]
    assert top[2]["string_fields"] == ["LEFT", "RIGHT"]
    assert top[1]["fields"] == {"VAR": None}


def test_decode_empty_document():
    """Test that an empty document is an empty workspace."""
    assert _codec().decode("").get_all_blocks() == []
    assert _codec().decode("blocks: []\n").get_all_blocks() == []


@pytest.mark.parametrize("text", [
    "blocks: [unclosed",
    "- just\n- a list\n",
    "blocks: {type: x}\n",
    "blocks:\n  - fields: {VAR: a}\n",
    "blocks:\n  - type: string_set\n    fields: [VAR]\n",
    "blocks:\n  - type: t\n    children: 5\n",
    "blocks:\n  - type: t\n    children: {type: string_get}\n",
    "blocks:\n  - type: t\n    string_fields: 5\n",
    "blocks:\n  - type: t\n    string_fields: VAR\n",
    "blocks:\n  - type: string_set\n    fields: {VAR: [a, b]}\n",
    "blocks:\n  - type: string_set\n    fields: {VAR: {a: b}}\n",
])
def test_decode_malformed(text):
    """Test that malformed documents raise WorkspaceFormatError."""
    with pytest.raises(WorkspaceFormatError):
        _codec().decode(text)


def test_file_workspace_load_and_save():
    """Test reading and writing a workspace file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "ws" / "workspace.yaml"
        store = FileWorkspace(path, _codec())

        # Missing file loads as an empty workspace
        assert store.load().get_all_blocks() == []

        ws = _codec().decode(DOC)
        rename_string("a", "left", ws)
        store.save(ws)

        assert path.exists()
        reloaded = store.load()
        assert all_strings(reloaded) == ["Greeting", "left", "b"]


def test_file_workspace_invalid_utf8():
    """Test that undecodable bytes are reported as a format error."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "workspace.yaml"
        path.write_bytes(b"blocks:\n  - type: string_get\n    fields: {VAR: \xff}\n")

        with pytest.raises(WorkspaceFormatError, match="UTF-8"):
            FileWorkspace(path, _codec()).load()
