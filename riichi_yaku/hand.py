"""
Closed Hand State

A ReadyHand holds the 13 tiles waiting for a draw; a FullHand holds those
13 plus the drawn tile, remembering which tile came last. Both are
immutable: draw and discard return new hands.
"""

from bisect import insort
from typing import Iterator, Sequence, Tuple
import numpy as np

from .errors import TileCountError, TileNotFoundError
from .notation import format_tiles, parse_tiles
from .tiles import COPIES_PER_TYPE, NUM_TILE_TYPES, Tile

READY_HAND_SIZE = 13
FULL_HAND_SIZE = 14


def count_array(tiles: Sequence[Tile]) -> np.ndarray:
    """
    Convert tiles to a 34-element array counting each tile type.
    """
    counts = np.zeros(NUM_TILE_TYPES, dtype=np.int8)
    for tile in tiles:
        counts[tile.tile_index] += 1
    return counts


class _SortedHand:
    """Shared behaviour of the two hand sizes"""

    SIZE = 0

    def __init__(self, tiles: Sequence[Tile]):
        if len(tiles) != self.SIZE:
            raise TileCountError(self.SIZE, len(tiles))
        self._tiles: Tuple[Tile, ...] = tuple(sorted(tiles))

    @property
    def tiles(self) -> Tuple[Tile, ...]:
        return self._tiles

    def count(self, tile: Tile) -> int:
        """Count occurrences of a tile type"""
        return self._tiles.count(tile)

    def to_count_array(self) -> np.ndarray:
        return count_array(self._tiles)

    def unique_tiles(self) -> Tuple[Tile, ...]:
        """Distinct tile kinds held, in order"""
        return tuple(sorted(set(self._tiles)))

    def __contains__(self, tile) -> bool:
        return tile in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __getitem__(self, index):
        return self._tiles[index]

    def __str__(self) -> str:
        return format_tiles(self._tiles)


class ReadyHand(_SortedHand):
    """
    Thirteen tiles waiting for a draw.
    """

    SIZE = READY_HAND_SIZE

    @classmethod
    def from_string(cls, text: str) -> "ReadyHand":
        """
        Parse a hand from tile notation.

        Raises:
            NotationError: If the text is not tile notation
            TileCountError: If the text does not describe exactly 13 tiles
        """
        return cls(parse_tiles(text))

    def draw(self, tile: Tile) -> "FullHand":
        """Add a drawn tile, producing a 14-tile hand"""
        tiles = list(self._tiles)
        insort(tiles, tile)
        return FullHand(tiles, tile)

    def maybe_effective(self, tile: Tile) -> bool:
        """Check if drawing this tile could join it to something already held"""
        return any(held.is_related(tile) for held in self._tiles)

    def is_exhausted(self, tile: Tile) -> bool:
        """Check if all four copies of a tile are already in the hand"""
        return self.count(tile) >= COPIES_PER_TYPE

    def __eq__(self, other) -> bool:
        if not isinstance(other, ReadyHand):
            return NotImplemented
        return self._tiles == other._tiles

    def __hash__(self) -> int:
        return hash(self._tiles)

    def __repr__(self) -> str:
        return f"ReadyHand({self})"


class FullHand(_SortedHand):
    """
    Fourteen tiles: a ReadyHand plus the tile that was just drawn.

    Attributes:
        last_draw: The drawn tile. Wait-dependent yaku (pinfu, the
            thirteen-sided kokushi, junsei chuuren, suuankou tanki) read it.
    """

    SIZE = FULL_HAND_SIZE

    def __init__(self, tiles: Sequence[Tile], last_draw: Tile):
        super().__init__(tiles)
        if last_draw not in self._tiles:
            raise ValueError(f"Last drawn tile {last_draw} is not in the hand")
        self.last_draw = last_draw

    def discard(self, tile: Tile) -> ReadyHand:
        """
        Remove one copy of a tile, producing a 13-tile hand.

        Raises:
            TileNotFoundError: If the hand holds no such tile. The FullHand
                is unchanged and may be discarded from again.
        """
        tiles = list(self._tiles)
        try:
            tiles.remove(tile)
        except ValueError:
            raise TileNotFoundError(tile) from None
        return ReadyHand(tiles)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FullHand):
            return NotImplemented
        return self._tiles == other._tiles and self.last_draw == other.last_draw

    def __hash__(self) -> int:
        return hash((self._tiles, self.last_draw))

    def __repr__(self) -> str:
        return f"FullHand({self}, last_draw={self.last_draw})"
