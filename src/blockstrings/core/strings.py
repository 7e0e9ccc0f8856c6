"""Utility functions for handling string identifiers."""

import logging
from typing import Any, Iterator

from .errors import InvalidRootError
from .ports import BlockCollection, BlockTree, ReferencesStrings, RenamesStrings

logger = logging.getLogger(__name__)

# Probe order for generated names. No 'l', it reads like '1'.
LETTERS = "ijkmnopqrstuvwxyzabcdefgh"

DEFAULT_UNIQUE_NAME = "i"


def _blocks_under(root: Any) -> list[Any]:
    if isinstance(root, BlockTree):
        return list(root.get_descendants())
    if isinstance(root, BlockCollection):
        return list(root.get_all_blocks())
    raise InvalidRootError(root)


def all_strings(root: Any) -> list[str]:
    """
    Find every string identifier referenced under a block or workspace.

    Names are unique under case-insensitive comparison; each one keeps the
    spelling it had where it was first seen. Order is order of first
    appearance, callers sort if they need to.

    Args:
        root: A block (walks its descendants) or a workspace (walks all blocks)

    Returns:
        List of identifier names

    Raises:
        InvalidRootError: root is neither a block nor a workspace
    """
    blocks = _blocks_under(root)
    seen: dict[str, str] = {}
    for block in blocks:
        if not isinstance(block, ReferencesStrings):
            continue
        for name in block.get_strings():
            # None or "" while the block is only half-built
            if not name:
                continue
            seen.setdefault(name.lower(), name)
    logger.debug("collected %d string names from %d blocks", len(seen), len(blocks))
    return list(seen.values())


def rename_string(old_name: str, new_name: str, workspace: BlockCollection) -> None:
    """Ask every block in the workspace to rename old_name to new_name."""
    renamed = 0
    for block in workspace.get_all_blocks():
        if isinstance(block, RenamesStrings):
            block.rename_string(old_name, new_name)
            renamed += 1
    logger.debug("rename %r -> %r sent to %d blocks", old_name, new_name, renamed)


def _candidates() -> Iterator[str]:
    suffix = 1
    while True:
        for letter in LETTERS:
            yield letter if suffix == 1 else f"{letter}{suffix}"
        suffix += 1


def generate_unique_name(workspace: BlockCollection) -> str:
    """
    Return a string name not yet used in the workspace.

    Tries single letters 'i' to 'z' then 'a' to 'h' (skipping 'l'), then the
    same letters with suffix 2, 3, ... Comparison is case-insensitive.
    Nothing is reserved: a later call may return the same name.
    """
    existing = all_strings(workspace)
    if not existing:
        return DEFAULT_UNIQUE_NAME
    used = {name.lower() for name in existing}
    name = next(c for c in _candidates() if c not in used)
    logger.debug("generated unique name %r", name)
    return name
