"""
Hand Blocks and Patterns

A Block is one structural group inside a decomposed hand. A Pattern is a
complete decomposition of 14 tiles into blocks:

- [1] * 14            thirteen orphans
- [2] * 7             seven pairs
- [3] * 4 + [2] * 1   standard (four groups and a pair)

Incomplete and orphan blocks only appear while measuring shanten.
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import Tuple

from .tiles import Tile


class BlockType(IntEnum):
    """Kinds of block a hand can be split into"""
    TRIPLET = 0     # 刻子 - 3 identical tiles
    SEQUENCE = 1    # 順子 - 3 consecutive tiles in one suit
    PAIR = 2        # 雀頭 - 2 identical tiles
    INCOMPLETE = 3  # 搭子 - 2 related tiles, one short of a group
    ORPHAN = 4      # 浮き牌 - a lone tile


@dataclass(frozen=True, order=True)
class Block:
    """
    One group of tiles within a decomposition.

    Attributes:
        tiles: The tiles of the block, sorted
        block_type: What kind of group the tiles form
    """
    tiles: Tuple[Tile, ...]
    block_type: BlockType

    def __post_init__(self):
        """Validate block"""
        tiles = self.tiles
        if list(tiles) != sorted(tiles):
            raise ValueError(f"Block tiles must be sorted, got {tiles}")
        if self.block_type == BlockType.TRIPLET:
            if len(tiles) != 3 or not all(t == tiles[0] for t in tiles):
                raise ValueError(f"Triplet must be 3 identical tiles, got {tiles}")
        elif self.block_type == BlockType.SEQUENCE:
            if len(tiles) != 3 or not _is_run(tiles):
                raise ValueError(f"Invalid sequence: {tiles}")
        elif self.block_type == BlockType.PAIR:
            if len(tiles) != 2 or tiles[0] != tiles[1]:
                raise ValueError(f"Pair must be 2 identical tiles, got {tiles}")
        elif self.block_type == BlockType.INCOMPLETE:
            if len(tiles) != 2 or not tiles[0].is_related(tiles[1]):
                raise ValueError(f"Incomplete block needs 2 related tiles, got {tiles}")
        elif len(tiles) != 1:
            raise ValueError(f"Orphan must be a single tile, got {tiles}")

    @classmethod
    def triplet(cls, tile: Tile) -> "Block":
        return cls((tile, tile, tile), BlockType.TRIPLET)

    @classmethod
    def sequence(cls, tile: Tile) -> "Block":
        """Sequence starting at the given tile"""
        return cls(
            (tile, Tile(tile.suit, tile.value + 1), Tile(tile.suit, tile.value + 2)),
            BlockType.SEQUENCE,
        )

    @classmethod
    def pair(cls, tile: Tile) -> "Block":
        return cls((tile, tile), BlockType.PAIR)

    @classmethod
    def incomplete(cls, first: Tile, second: Tile) -> "Block":
        return cls(tuple(sorted((first, second))), BlockType.INCOMPLETE)

    @classmethod
    def orphan(cls, tile: Tile) -> "Block":
        return cls((tile,), BlockType.ORPHAN)

    @property
    def base_tile(self) -> Tile:
        """The identical tile, or the lowest tile of a run"""
        return self.tiles[0]

    @property
    def is_group(self) -> bool:
        """Triplet or sequence"""
        return self.block_type in (BlockType.TRIPLET, BlockType.SEQUENCE)

    @property
    def is_triplet(self) -> bool:
        return self.block_type == BlockType.TRIPLET

    @property
    def is_sequence(self) -> bool:
        return self.block_type == BlockType.SEQUENCE

    @property
    def is_pair(self) -> bool:
        return self.block_type == BlockType.PAIR

    def income_tiles(self) -> Tuple[Tile, ...]:
        """
        Tiles whose draw would grow this block.

        A pair or identical incomplete block wants its own tile, a partial
        run wants the ranks that complete it, and an orphan accepts any
        related tile. Complete groups accept nothing.
        """
        if self.is_group:
            return ()
        first = self.tiles[0]
        if self.block_type == BlockType.ORPHAN:
            if first.is_honor:
                return (first,)
            return tuple(
                Tile(first.suit, value)
                for value in range(max(1, first.value - 2), min(9, first.value + 2) + 1)
            )
        second = self.tiles[-1]
        if first == second:
            return (first,)
        if second.value - first.value == 2:
            return (Tile(first.suit, first.value + 1),)
        return tuple(
            Tile(first.suit, value)
            for value in (first.value - 1, second.value + 1)
            if 1 <= value <= 9
        )

    def __len__(self) -> int:
        return len(self.tiles)

    def __repr__(self) -> str:
        return f"Block({self.block_type.name}, {' '.join(str(t) for t in self.tiles)})"


def _is_run(tiles: Tuple[Tile, ...]) -> bool:
    """Check if sorted tiles are consecutive ranks of one numbered suit"""
    first = tiles[0]
    if not first.is_numbered:
        return False
    return all(
        t.suit == first.suit and t.value == first.value + i
        for i, t in enumerate(tiles)
    )


@dataclass(frozen=True, order=True)
class Pattern:
    """
    A complete decomposition of a 14-tile hand.

    Attributes:
        blocks: Sorted blocks; their tiles total exactly 14
        last_draw: The tile that completed the hand
    """
    blocks: Tuple[Block, ...]
    last_draw: Tile

    STANDARD_SIZE = 5
    SEVEN_PAIRS_SIZE = 7
    THIRTEEN_ORPHANS_SIZE = 14

    def __post_init__(self):
        """Validate pattern shape"""
        total = sum(len(block) for block in self.blocks)
        if total != 14:
            raise ValueError(f"Pattern must hold 14 tiles, got {total}")
        if self.is_standard:
            pairs = sum(1 for b in self.blocks if b.is_pair)
            groups = sum(1 for b in self.blocks if b.is_group)
            if pairs != 1 or groups != 4:
                raise ValueError(f"Standard pattern needs 4 groups and 1 pair: {self.blocks}")
        elif self.is_seven_pairs:
            if not all(b.is_pair for b in self.blocks):
                raise ValueError(f"Seven pairs pattern holds a non-pair: {self.blocks}")
        elif self.is_thirteen_orphans:
            if not all(b.block_type == BlockType.ORPHAN for b in self.blocks):
                raise ValueError(f"Thirteen orphans pattern holds a group: {self.blocks}")
        else:
            raise ValueError(f"Pattern must have 5, 7 or 14 blocks, got {len(self.blocks)}")
        if not any(self.last_draw in b.tiles for b in self.blocks):
            raise ValueError(f"Last drawn tile {self.last_draw} is not in the pattern")

    @property
    def is_standard(self) -> bool:
        return len(self.blocks) == self.STANDARD_SIZE

    @property
    def is_seven_pairs(self) -> bool:
        return len(self.blocks) == self.SEVEN_PAIRS_SIZE

    @property
    def is_thirteen_orphans(self) -> bool:
        return len(self.blocks) == self.THIRTEEN_ORPHANS_SIZE

    @property
    def tiles(self) -> Tuple[Tile, ...]:
        """All 14 tiles, sorted"""
        return tuple(sorted(t for block in self.blocks for t in block.tiles))

    @property
    def groups(self) -> Tuple[Block, ...]:
        return tuple(b for b in self.blocks if b.is_group)

    @property
    def triplets(self) -> Tuple[Block, ...]:
        return tuple(b for b in self.blocks if b.is_triplet)

    @property
    def sequences(self) -> Tuple[Block, ...]:
        return tuple(b for b in self.blocks if b.is_sequence)

    @property
    def pairs(self) -> Tuple[Block, ...]:
        return tuple(b for b in self.blocks if b.is_pair)
