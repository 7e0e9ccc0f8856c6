from __future__ import annotations
from dataclasses import dataclass, field

NAME_TYPE = "STRING"  # separates string names from variables and procedures

DEFAULT_STRING_FIELD = "VAR"


@dataclass
class Block:
    type: str  # registered block type, e.g. "string_set" or "text"
    id: str | None = None
    fields: dict[str, str | None] = field(default_factory=dict)
    children: list["Block"] = field(default_factory=list)

    def get_descendants(self) -> list["Block"]:
        """This block followed by every nested block, depth first."""
        out: list[Block] = [self]
        for child in self.children:
            out.extend(child.get_descendants())
        return out


@dataclass
class StringBlock(Block):
    string_fields: tuple[str, ...] = (DEFAULT_STRING_FIELD,)

    def get_strings(self) -> list[str | None]:
        # unset fields are reported as None, the collector skips them
        return [self.fields.get(name) for name in self.string_fields]

    def rename_string(self, old_name: str, new_name: str) -> None:
        old_key = old_name.lower()
        for name in self.string_fields:
            value = self.fields.get(name)
            if value is not None and value.lower() == old_key:
                self.fields[name] = new_name
