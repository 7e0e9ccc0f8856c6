from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class BlockTree(Protocol):
    """
    A single block used as a traversal root.
    """

    def get_descendants(self) -> Sequence[object]:
        """Flat list of this block and every block nested under it."""
        pass


@runtime_checkable
class BlockCollection(Protocol):
    """
    A whole workspace; the flat list carries no nesting the core relies on.
    """

    def get_all_blocks(self) -> Sequence[object]:
        pass


@runtime_checkable
class ReferencesStrings(Protocol):
    """
    Block that can report the string identifiers it references.
    Half-built blocks may report None for slots not yet filled in.
    """

    def get_strings(self) -> Sequence[str | None]:
        pass


@runtime_checkable
class RenamesStrings(Protocol):
    """
    Block that can rewrite its own references to a string identifier.
    Matching policy (case, which fields) belongs to the block.
    """

    def rename_string(self, old_name: str, new_name: str) -> None:
        pass
