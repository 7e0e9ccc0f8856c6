"""Block templates for the string category flyout."""

import xml.etree.ElementTree as ET
from collections.abc import Container

from .core.model import DEFAULT_STRING_FIELD
from .core.ports import BlockCollection
from .core.strings import all_strings

DEFAULT_NAME = "item"

DECLARE_TYPE = "string_declare"
SET_TYPE = "string_set"
GET_TYPE = "string_get"

# Offered per name after the set/get pair, in this order.
OPERATION_TYPES = (
    "string_charat",
    "string_compareto",
    "string_concat",
    "string_lengthof",
    "string_endswith",
    "string_equalto",
)

FLYOUT_TYPES = (DECLARE_TYPE, SET_TYPE, GET_TYPE) + OPERATION_TYPES


def _named_block(block_type: str, name: str, gap: int | None) -> ET.Element:
    block = ET.Element("block", {"type": block_type})
    if gap is not None:
        block.set("gap", str(gap))
    field = ET.SubElement(block, "field", {"name": DEFAULT_STRING_FIELD})
    field.text = name
    return block


def sorted_strings(workspace: BlockCollection, default_name: str = DEFAULT_NAME) -> list[str]:
    """Workspace names sorted case-insensitively, default_name first and only once."""
    names = sorted(all_strings(workspace), key=str.lower)
    names = [n for n in names if n != default_name]
    return [default_name] + names


def flyout_category(
    workspace: BlockCollection,
    block_types: Container[str],
    default_name: str = DEFAULT_NAME,
) -> list[ET.Element]:
    """
    Construct the blocks shown in the flyout for the string category.

    Only types present in block_types (the editor's registry) are emitted.
    The default name leads the list but gets no per-name templates.

    Args:
        workspace: Workspace containing the string names
        block_types: Registered block type names
        default_name: Display name always listed first

    Returns:
        List of <block> elements
    """
    names = sorted_strings(workspace, default_name)
    has_set = SET_TYPE in block_types
    has_get = GET_TYPE in block_types

    out: list[ET.Element] = []
    if DECLARE_TYPE in block_types:
        out.append(ET.Element("block", {"type": DECLARE_TYPE}))

    for name in names[1:]:
        if has_set:
            out.append(_named_block(SET_TYPE, name, 8 if has_get else None))
        if has_get:
            out.append(_named_block(GET_TYPE, name, 24 if has_set else None))
        for block_type in OPERATION_TYPES:
            if block_type in block_types:
                out.append(_named_block(block_type, name, 24))
    return out


def flyout_xml(elements: list[ET.Element]) -> str:
    """Wrap flyout blocks in a single <xml> root and serialize it."""
    root = ET.Element("xml")
    root.extend(elements)
    return ET.tostring(root, encoding="unicode")
