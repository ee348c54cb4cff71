"""
Riichi Mahjong Tiles

Defines the 34 tile kinds used by closed-hand evaluation:
- 1-9 Man (m)
- 1-9 Pin (p)
- 1-9 Sou (s)
- 4 Winds (ton, nan, shaa, pei)
- 3 Dragons (haku, hatsu, chun)

Tiles sort in exactly that order; hands are kept sorted so grouping
reduces to a linear scan.
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import List


class TileSuit(IntEnum):
    """Tile suits, in canonical sort order"""
    MAN = 0      # Characters - Numbers 1-9
    PIN = 1      # Dots - Numbers 1-9
    SOU = 2      # Bamboos - Numbers 1-9
    WINDS = 3    # ton, nan, shaa, pei
    DRAGONS = 4  # haku, hatsu, chun


class WindType(IntEnum):
    """Wind tile types"""
    EAST = 0   # ton
    SOUTH = 1  # nan
    WEST = 2   # shaa
    NORTH = 3  # pei


class DragonType(IntEnum):
    """Dragon tile types"""
    WHITE = 0  # haku
    GREEN = 1  # hatsu
    RED = 2    # chun


NUMBERED_SUITS = (TileSuit.MAN, TileSuit.PIN, TileSuit.SOU)
SUIT_LETTERS = {TileSuit.MAN: "m", TileSuit.PIN: "p", TileSuit.SOU: "s"}
WIND_NAMES = ("ton", "nan", "shaa", "pei")
DRAGON_NAMES = ("haku", "hatsu", "chun")

NUM_TILE_TYPES = 34
COPIES_PER_TYPE = 4


@dataclass(frozen=True, order=True)
class Tile:
    """
    A single tile kind.

    Attributes:
        suit: The suit of the tile (Man, Pin, Sou, Winds, Dragons)
        value: Rank 1-9 for numbered suits, 0-3 for winds, 0-2 for dragons

    Field order makes the generated comparisons follow the canonical
    enumeration, so ``sorted()`` yields ``1m..9m 1p..9p 1s..9s`` then honors.
    """
    suit: TileSuit
    value: int

    def __post_init__(self):
        """Validate tile values"""
        if self.suit in NUMBERED_SUITS:
            if not 1 <= self.value <= 9:
                raise ValueError(f"Numbered suits must have value 1-9, got {self.value}")
        elif self.suit == TileSuit.WINDS:
            if not 0 <= self.value <= 3:
                raise ValueError(f"Wind tiles must have value 0-3, got {self.value}")
        elif self.suit == TileSuit.DRAGONS:
            if not 0 <= self.value <= 2:
                raise ValueError(f"Dragon tiles must have value 0-2, got {self.value}")

    @property
    def is_honor(self) -> bool:
        """Wind or dragon"""
        return self.suit in (TileSuit.WINDS, TileSuit.DRAGONS)

    @property
    def is_numbered(self) -> bool:
        return not self.is_honor

    @property
    def is_terminal(self) -> bool:
        """1 or 9 of a numbered suit"""
        return self.is_numbered and self.value in (1, 9)

    @property
    def is_terminal_or_honor(self) -> bool:
        return self.is_terminal or self.is_honor

    @property
    def is_simple(self) -> bool:
        """2-8 of a numbered suit"""
        return self.is_numbered and 2 <= self.value <= 8

    @property
    def is_dragon(self) -> bool:
        return self.suit == TileSuit.DRAGONS

    @property
    def is_wind(self) -> bool:
        return self.suit == TileSuit.WINDS

    @property
    def is_green(self) -> bool:
        """Check if tile can appear in an all-green hand"""
        if self.suit == TileSuit.SOU:
            return self.value in (2, 3, 4, 6, 8)
        return self.suit == TileSuit.DRAGONS and self.value == DragonType.GREEN

    @property
    def tile_index(self) -> int:
        """Position of this kind in the canonical enumeration (0-33)"""
        if self.suit in NUMBERED_SUITS:
            return self.suit * 9 + self.value - 1
        elif self.suit == TileSuit.WINDS:
            return 27 + self.value
        else:
            return 31 + self.value

    def is_related(self, other: "Tile") -> bool:
        """
        Check whether two tiles could belong to the same pair or run.

        True for the same kind, or for numbered tiles of one suit whose
        ranks differ by at most two.
        """
        if self == other:
            return True
        return (
            self.is_numbered
            and self.suit == other.suit
            and abs(self.value - other.value) <= 2
        )

    def __repr__(self) -> str:
        return f"Tile({self})"

    def __str__(self) -> str:
        if self.suit in NUMBERED_SUITS:
            return f"{self.value}{SUIT_LETTERS[self.suit]}"
        elif self.suit == TileSuit.WINDS:
            return WIND_NAMES[self.value]
        return DRAGON_NAMES[self.value]

    @classmethod
    def from_index(cls, tile_index: int) -> "Tile":
        """Create a tile from its canonical index (0-33)"""
        if not 0 <= tile_index < NUM_TILE_TYPES:
            raise ValueError(f"Tile index must be 0-33, got {tile_index}")
        if tile_index < 27:
            return cls(TileSuit(tile_index // 9), tile_index % 9 + 1)
        elif tile_index < 31:
            return cls(TileSuit.WINDS, tile_index - 27)
        return cls(TileSuit.DRAGONS, tile_index - 31)

    @classmethod
    def from_string(cls, s: str) -> "Tile":
        """
        Create a tile from its short name.

        Args:
            s: String like "1m", "9s", "ton", "chun"
        """
        s = s.strip()
        if s in WIND_NAMES:
            return cls(TileSuit.WINDS, WIND_NAMES.index(s))
        if s in DRAGON_NAMES:
            return cls(TileSuit.DRAGONS, DRAGON_NAMES.index(s))
        if len(s) == 2 and s[0] in "123456789":
            for suit, letter in SUIT_LETTERS.items():
                if s[1] == letter:
                    return cls(suit, int(s[0]))
        raise ValueError(f"Cannot parse tile string: {s!r}")


# Every tile kind in canonical order
ALL_TILES: List[Tile] = [Tile.from_index(i) for i in range(NUM_TILE_TYPES)]

TERMINALS_AND_HONORS: List[Tile] = [t for t in ALL_TILES if t.is_terminal_or_honor]


def man(value: int) -> Tile:
    """Create a Man tile (1-9m)"""
    return Tile(TileSuit.MAN, value)


def pin(value: int) -> Tile:
    """Create a Pin tile (1-9p)"""
    return Tile(TileSuit.PIN, value)


def sou(value: int) -> Tile:
    """Create a Sou tile (1-9s)"""
    return Tile(TileSuit.SOU, value)


# Named wind tiles
EAST = Tile(TileSuit.WINDS, WindType.EAST)
SOUTH = Tile(TileSuit.WINDS, WindType.SOUTH)
WEST = Tile(TileSuit.WINDS, WindType.WEST)
NORTH = Tile(TileSuit.WINDS, WindType.NORTH)

# Named dragon tiles
HAKU = Tile(TileSuit.DRAGONS, DragonType.WHITE)
HATSU = Tile(TileSuit.DRAGONS, DragonType.GREEN)
CHUN = Tile(TileSuit.DRAGONS, DragonType.RED)
