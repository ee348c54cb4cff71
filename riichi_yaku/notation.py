"""
Tile notation: text to tiles and back.

A hand is written as space-separated groups. Each group is an honor name
(``ton nan shaa pei haku hatsu chun``) or a run of ranks followed by a
suit letter (``123p``), optionally followed by a repeat count that applies
to the whole group::

    "123p 4m3 haku"   -> 1p 2p 3p 4m 4m 4m haku
    "123p3"           -> 1p 1p 1p 2p 2p 2p 3p 3p 3p
    "haku0 chun"      -> chun
"""

import re
from typing import Iterable, List

from .errors import NotationError
from .tiles import COPIES_PER_TYPE, NUM_TILE_TYPES, Tile

TILES_REGEX = re.compile(r"((ton|nan|shaa|pei|haku|chun|hatsu)|([1-9]+)([mps]))(\d+)?")

# A full set; no hand or query needs more tiles than exist
MAX_TILES = COPIES_PER_TYPE * NUM_TILE_TYPES


def parse_tiles(text: str) -> List[Tile]:
    """
    Parse tile notation into a sorted list of tiles.

    Raises:
        NotationError: If anything other than whitespace separates groups,
            or the text names more tiles than a full set holds
    """
    tiles: List[Tile] = []
    position = 0
    for match in TILES_REGEX.finditer(text):
        _check_gap(text, position, match.start())
        position = match.end()

        repeat = int(match.group(5)) if match.group(5) else 1
        if match.group(2):
            group = [Tile.from_string(match.group(2))]
        else:
            suit = match.group(4)
            group = [Tile.from_string(rank + suit) for rank in match.group(3)]
        total = len(tiles) + len(group) * repeat
        if total > MAX_TILES:
            raise NotationError(f"too many tiles: {total} (at most {MAX_TILES})")
        tiles.extend(group * repeat)
    _check_gap(text, position, len(text))

    tiles.sort()
    return tiles


def _check_gap(text: str, start: int, end: int) -> None:
    gap = text[start:end]
    if gap.strip():
        raise NotationError(f"not a tile: {gap.strip()!r}")


def format_tiles(tiles: Iterable[Tile]) -> str:
    """Render tiles in canonical order, space-separated"""
    return " ".join(str(tile) for tile in sorted(tiles))


def parse_tile(text: str) -> Tile:
    """Parse a single tile name such as "4m" or "hatsu"."""
    try:
        return Tile.from_string(text)
    except ValueError as e:
        raise NotationError(str(e)) from e
