"""
Hand Decomposition

Finds every way a 14-tile hand splits into a winning shape:
- Standard form (4 groups + 1 pair)
- Chiitoitsu (7 pairs)
- Kokushi musou (13 orphans)

An empty result means the hand does not win; that is not an error.
"""

from typing import Iterator, List, Optional, Sequence
import numpy as np

from .blocks import Block, Pattern
from .hand import FullHand
from .rules import DEFAULT_RULES, RuleSet
from .tiles import NUM_TILE_TYPES, Tile


def decompose(hand: FullHand, rules: Optional[RuleSet] = None) -> List[Pattern]:
    """
    Enumerate all valid decompositions of a full hand.

    Args:
        hand: The 14-tile hand to split
        rules: Which special shapes to recognise

    Returns:
        Sorted, duplicate-free list of patterns
    """
    rules = rules or DEFAULT_RULES
    tiles = hand.tiles
    patterns = set()

    if rules.check_kokushi and is_kokushi(tiles):
        patterns.add(Pattern(tuple(Block.orphan(t) for t in tiles), hand.last_draw))

    if rules.check_chiitoitsu and is_chiitoitsu(tiles):
        patterns.add(Pattern(
            tuple(Block.pair(tiles[i]) for i in range(0, len(tiles), 2)),
            hand.last_draw,
        ))

    if could_be_standard(tiles):
        for blocks in _find_standard_blocks(hand.to_count_array(), 4, 1):
            patterns.add(Pattern(tuple(sorted(blocks)), hand.last_draw))

    return sorted(patterns)


def is_kokushi(tiles: Sequence[Tile]) -> bool:
    """Check for 13 orphans: only terminals/honors, exactly one duplicate"""
    if not all(t.is_terminal_or_honor for t in tiles):
        return False
    duplicates = sum(1 for a, b in zip(tiles, tiles[1:]) if a == b)
    return duplicates == 1


def is_chiitoitsu(tiles: Sequence[Tile]) -> bool:
    """Check for 7 pairs of distinct kinds in a sorted hand"""
    if len(tiles) % 2:
        return False
    if not all(tiles[i] == tiles[i + 1] for i in range(0, len(tiles), 2)):
        return False
    # Four of a kind is not two pairs
    return all(tiles[i] != tiles[i + 2] for i in range(len(tiles) - 2))


def could_be_standard(tiles: Sequence[Tile]) -> bool:
    """
    Cheap necessary condition for the standard form.

    Splits the sorted hand wherever neighbouring tiles can never share a
    group. Every piece must then hold a multiple of three tiles, except
    exactly one piece that also carries the pair.
    """
    run_sizes = []
    size = 1
    for prev, tile in zip(tiles, tiles[1:]):
        if _connects(prev, tile):
            size += 1
        else:
            run_sizes.append(size)
            size = 1
    run_sizes.append(size)

    with_pair = 0
    for size in run_sizes:
        remainder = size % 3
        if remainder == 1:
            return False
        if remainder == 2:
            with_pair += 1
    return with_pair == 1


def _connects(prev: Tile, tile: Tile) -> bool:
    """Same kind, or next rank in the same numbered suit"""
    if prev == tile:
        return True
    return tile.is_numbered and tile.suit == prev.suit and tile.value - prev.value == 1


def _first_tile_index(counts: np.ndarray) -> int:
    for i in range(NUM_TILE_TYPES):
        if counts[i] > 0:
            return i
    return -1


def can_start_sequence(counts: np.ndarray, idx: int) -> bool:
    """Check if the counts hold a run starting at tile index idx"""
    if idx >= 27 or idx % 9 > 6:
        return False
    return counts[idx] > 0 and counts[idx + 1] > 0 and counts[idx + 2] > 0


def _find_standard_blocks(
    counts: np.ndarray,
    groups_left: int,
    pairs_left: int,
) -> Iterator[List[Block]]:
    """
    Recursively split counts into groups and a pair.

    Always consumes the lowest remaining tile, so each split is produced
    along one path per block order. Each branch works on its own copy of
    the counts.
    """
    if groups_left == 0 and pairs_left == 0:
        yield []
        return

    first_idx = _first_tile_index(counts)
    if first_idx == -1:
        return
    tile = Tile.from_index(first_idx)

    # Try triplet
    if groups_left > 0 and counts[first_idx] >= 3:
        remaining = counts.copy()
        remaining[first_idx] -= 3
        for rest in _find_standard_blocks(remaining, groups_left - 1, pairs_left):
            yield [Block.triplet(tile)] + rest

    # Try sequence
    if groups_left > 0 and can_start_sequence(counts, first_idx):
        remaining = counts.copy()
        remaining[first_idx:first_idx + 3] -= 1
        for rest in _find_standard_blocks(remaining, groups_left - 1, pairs_left):
            yield [Block.sequence(tile)] + rest

    # Try pair
    if pairs_left > 0 and counts[first_idx] >= 2:
        remaining = counts.copy()
        remaining[first_idx] -= 2
        for rest in _find_standard_blocks(remaining, groups_left, pairs_left - 1):
            yield [Block.pair(tile)] + rest
