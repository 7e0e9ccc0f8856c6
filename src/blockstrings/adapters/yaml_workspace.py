import io
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from ..core.errors import WorkspaceFormatError
from ..core.model import DEFAULT_STRING_FIELD, Block, StringBlock
from ..core.workspace import Workspace


class YamlWorkspaceCodec:
    """
    Round-trip a workspace through a YAML document:

        blocks:
          - type: string_set
            id: b1
            fields: {VAR: greeting}
            children: [...]
    """

    def __init__(
        self,
        string_types: Iterable[str] = (),
        string_field: str = DEFAULT_STRING_FIELD,
    ):
        self.string_types = frozenset(string_types)
        self.string_field = string_field

    def decode(self, text: str) -> Workspace:
        try:
            data = yaml.safe_load(io.StringIO(text)) or {}
        except yaml.YAMLError as e:
            raise WorkspaceFormatError(f"Invalid workspace YAML: {e}") from e
        if not isinstance(data, dict):
            raise WorkspaceFormatError("Workspace document must be a mapping")
        items = data.get("blocks") or []
        if not isinstance(items, list):
            raise WorkspaceFormatError("'blocks' must be a list")
        return Workspace(self._decode_block(item) for item in items)

    def _decode_block(self, item: Any) -> Block:
        if not isinstance(item, dict) or not item.get("type"):
            raise WorkspaceFormatError(f"Block needs a 'type': {item!r}")
        fields = item.get("fields") or {}
        if not isinstance(fields, dict):
            raise WorkspaceFormatError(f"'fields' must be a mapping: {item!r}")
        for key, value in fields.items():
            if isinstance(value, (list, dict)):
                raise WorkspaceFormatError(f"Field {key!r} must be a scalar: {item!r}")
        fields = {str(k): (None if v is None else str(v)) for k, v in fields.items()}
        child_items = item.get("children") or []
        if not isinstance(child_items, list):
            raise WorkspaceFormatError(f"'children' must be a list: {item!r}")
        children = [self._decode_block(c) for c in child_items]
        block_type = str(item["type"])
        block_id = None if item.get("id") is None else str(item["id"])

        string_fields = item.get("string_fields")
        if string_fields is not None and not isinstance(string_fields, list):
            raise WorkspaceFormatError(f"'string_fields' must be a list: {item!r}")
        if string_fields is not None or block_type in self.string_types:
            if string_fields is None:
                string_fields = [self.string_field]
            return StringBlock(
                type=block_type,
                id=block_id,
                fields=fields,
                children=children,
                string_fields=tuple(str(f) for f in string_fields),
            )
        return Block(type=block_type, id=block_id, fields=fields, children=children)

    def encode(self, workspace: Workspace) -> str:
        data = {"blocks": [self._encode_block(b) for b in workspace.get_top_blocks()]}
        buf = io.StringIO()
        yaml.safe_dump(data, buf, sort_keys=False, allow_unicode=True)
        return buf.getvalue()

    def _encode_block(self, block: Block) -> dict[str, Any]:
        out: dict[str, Any] = {"type": block.type}
        if block.id is not None:
            out["id"] = block.id
        if block.fields:
            out["fields"] = dict(block.fields)
        # only spelled out when it differs from what decode would infer
        if isinstance(block, StringBlock) and (
            block.type not in self.string_types
            or block.string_fields != (self.string_field,)
        ):
            out["string_fields"] = list(block.string_fields)
        if block.children:
            out["children"] = [self._encode_block(c) for c in block.children]
        return out


class FileWorkspace:
    """Load and save a workspace document on disk."""

    def __init__(self, path: Path, codec: YamlWorkspaceCodec):
        self.path = path
        self.codec = codec

    def load(self) -> Workspace:
        if not self.path.exists():
            return Workspace()
        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise WorkspaceFormatError(f"{self.path} is not valid UTF-8: {e}") from e
        return self.codec.decode(text)

    def save(self, workspace: Workspace) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.codec.encode(workspace), encoding="utf-8")
