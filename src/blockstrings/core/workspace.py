from collections.abc import Iterable

from .model import Block


class Workspace:
    def __init__(self, blocks: Iterable[Block] | None = None):
        self.top_blocks: list[Block] = list(blocks or [])

    def add_top_block(self, block: Block) -> None:
        self.top_blocks.append(block)

    def get_top_blocks(self) -> list[Block]:
        return list(self.top_blocks)

    def get_all_blocks(self) -> list[Block]:
        out: list[Block] = []
        for block in self.top_blocks:
            out.extend(block.get_descendants())
        return out

    def get_block_by_id(self, id: str) -> Block | None:
        for block in self.get_all_blocks():
            if block.id == id:
                return block
        return None
