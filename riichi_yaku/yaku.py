"""
Yaku Catalogue

Every scoring category a closed, self-drawn hand can earn, with its fixed
han value. Situational yaku (riichi, ippatsu, winds, dora...) need game
context this library does not model and are not listed.
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from .han import Han
from .tiles import Tile


class YakuKind(IntEnum):
    """Scoring categories, ordered roughly by value"""
    TANYAO = 0
    YAKUHAI_SANGENPAI = 1
    PINFU = 2
    IIPEIKOU = 3
    SANSHOKU_DOUKOU = 4
    TOITOIHOU = 5
    SANANKOU = 6
    SHOUSANGEN = 7
    HONROUTOU = 8
    CHIITOITSU = 9
    HONCHANTAIYAOCHUU = 10
    IKKITSUUKAN = 11
    SANSHOKU_DOUJUN = 12
    RYANPEIKOU = 13
    JUNCHANTAIYAOCHUU = 14
    HONIISOU = 15
    CHINIISOU = 16
    DAISANGEN = 17
    SUUANKOU = 18
    TSUUIISOU = 19
    RYUUIISOU = 20
    CHINROUTOU = 21
    KOKUSHIMUSOU = 22
    SHOUSUUSHII = 23
    CHUURENPOUTOU = 24
    SUUANKOUTANKI = 25
    KOKUSHIMUSOU13 = 26
    JUNSEICHUURENPOUTOU = 27
    DAISUUSHII = 28


# kind -> (name, japanese name, han)
YAKU_TABLE: Dict[YakuKind, Tuple[str, str, Han]] = {
    # 1 Han
    YakuKind.TANYAO: ("Tanyao", "断幺九", Han(1)),
    YakuKind.YAKUHAI_SANGENPAI: ("Yakuhai", "役牌 三元牌", Han(1)),
    YakuKind.PINFU: ("Pinfu", "平和", Han(1)),
    YakuKind.IIPEIKOU: ("Iipeikou", "一盃口", Han(1)),

    # 2 Han
    YakuKind.SANSHOKU_DOUKOU: ("Sanshoku Doukou", "三色同刻", Han(2)),
    YakuKind.TOITOIHOU: ("Toitoihou", "対々和", Han(2)),
    YakuKind.SANANKOU: ("Sanankou", "三暗刻", Han(2)),
    YakuKind.SHOUSANGEN: ("Shousangen", "小三元", Han(2)),
    YakuKind.HONROUTOU: ("Honroutou", "混老頭", Han(2)),
    YakuKind.CHIITOITSU: ("Chiitoitsu", "七対子", Han(2)),
    YakuKind.HONCHANTAIYAOCHUU: ("Chanta", "混全帯幺九", Han(2)),
    YakuKind.IKKITSUUKAN: ("Ittsu", "一気通貫", Han(2)),
    YakuKind.SANSHOKU_DOUJUN: ("Sanshoku Doujun", "三色同順", Han(2)),

    # 3 Han
    YakuKind.RYANPEIKOU: ("Ryanpeikou", "二盃口", Han(3)),
    YakuKind.JUNCHANTAIYAOCHUU: ("Junchan", "純全帯幺九", Han(3)),
    YakuKind.HONIISOU: ("Honitsu", "混一色", Han(3)),

    # 6 Han
    YakuKind.CHINIISOU: ("Chinitsu", "清一色", Han(6)),

    # Yakuman
    YakuKind.DAISANGEN: ("Daisangen", "大三元", Han.yakuman()),
    YakuKind.SUUANKOU: ("Suuankou", "四暗刻", Han.yakuman()),
    YakuKind.TSUUIISOU: ("Tsuuiisou", "字一色", Han.yakuman()),
    YakuKind.RYUUIISOU: ("Ryuuiisou", "緑一色", Han.yakuman()),
    YakuKind.CHINROUTOU: ("Chinroutou", "清老頭", Han.yakuman()),
    YakuKind.KOKUSHIMUSOU: ("Kokushi Musou", "国士無双", Han.yakuman()),
    YakuKind.SHOUSUUSHII: ("Shousuushii", "小四喜", Han.yakuman()),
    YakuKind.CHUURENPOUTOU: ("Chuuren Poutou", "九蓮宝燈", Han.yakuman()),

    # Double yakuman
    YakuKind.SUUANKOUTANKI: ("Suuankou Tanki", "四暗刻単騎", Han.double_yakuman()),
    YakuKind.KOKUSHIMUSOU13: ("Kokushi Musou 13-sided", "国士無双十三面", Han.double_yakuman()),
    YakuKind.JUNSEICHUURENPOUTOU: ("Junsei Chuuren Poutou", "純正九蓮宝燈", Han.double_yakuman()),
    YakuKind.DAISUUSHII: ("Daisuushii", "大四喜", Han.double_yakuman()),
}


@dataclass(frozen=True, order=True)
class Yaku:
    """
    A satisfied scoring category.

    Attributes:
        kind: Which category
        tile: The dragon for YAKUHAI_SANGENPAI, None otherwise
    """
    kind: YakuKind
    tile: Optional[Tile] = None

    def __post_init__(self):
        if self.kind == YakuKind.YAKUHAI_SANGENPAI:
            if self.tile is None or not self.tile.is_dragon:
                raise ValueError(f"Yakuhai needs a dragon tile, got {self.tile}")
        elif self.tile is not None:
            raise ValueError(f"{self.kind.name} does not take a tile")

    @property
    def name(self) -> str:
        return YAKU_TABLE[self.kind][0]

    @property
    def japanese_name(self) -> str:
        return YAKU_TABLE[self.kind][1]

    @property
    def han(self) -> Han:
        return YAKU_TABLE[self.kind][2]

    @property
    def is_yakuman(self) -> bool:
        return self.han.is_yakuman

    def __str__(self) -> str:
        if self.tile is not None:
            return f"{self.name} ({self.tile})"
        return self.name


def total_han(yakus: Iterable[Yaku]) -> Han:
    """Sum the han of a collection of yaku"""
    return sum((yaku.han for yaku in yakus), Han())
