"""
Riichi Mahjong Yaku Evaluation

Scores a closed, self-drawn 14-tile hand: every decomposition is checked
against each yaku, and the decomposition worth the most han wins.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
import numpy as np

from .blocks import Pattern
from .decompose import decompose
from .han import Han
from .hand import FullHand, count_array
from .rules import DEFAULT_RULES, RuleSet
from .tiles import CHUN, HAKU, HATSU, NUMBERED_SUITS, Tile
from .yaku import Yaku, YakuKind, total_han

logger = logging.getLogger(__name__)

# 1112345678999 in one suit
CHUUREN_COUNTS = np.array([3, 1, 1, 1, 1, 1, 1, 1, 3], dtype=np.int8)


@dataclass(frozen=True)
class ScoringResult:
    """Best scoring of a winning hand"""
    yakus: Tuple[Yaku, ...]
    han: Han
    pattern: Pattern

    @property
    def is_yakuman(self) -> bool:
        return self.han.is_yakuman


@dataclass
class PatternAnalysis:
    """Facts about one decomposition that the yaku checks read"""
    pattern: Pattern
    tiles: Tuple[Tile, ...]
    counts: np.ndarray
    last_draw: Tile
    triplets: List[Tile]
    sequences: List[Tile]
    pair: Optional[Tile]

    @classmethod
    def from_pattern(cls, pattern: Pattern) -> "PatternAnalysis":
        tiles = pattern.tiles
        pair = pattern.pairs[0].base_tile if pattern.is_standard else None
        return cls(
            pattern=pattern,
            tiles=tiles,
            counts=count_array(tiles),
            last_draw=pattern.last_draw,
            triplets=[b.base_tile for b in pattern.triplets],
            sequences=[b.base_tile for b in pattern.sequences],
            pair=pair,
        )

    @property
    def is_standard(self) -> bool:
        return self.pattern.is_standard

    @property
    def is_chiitoitsu(self) -> bool:
        return self.pattern.is_seven_pairs

    @property
    def is_kokushi(self) -> bool:
        return self.pattern.is_thirteen_orphans

    @property
    def has_honors(self) -> bool:
        return any(t.is_honor for t in self.tiles)

    @property
    def numbered_suits(self) -> set:
        return {t.suit for t in self.tiles if t.is_numbered}


class YakuScorer:
    """
    Closed-hand yaku scorer.

    Finds all decompositions of a hand and reports the yaku of the
    highest-valued one.
    """

    def __init__(self, rules: Optional[RuleSet] = None):
        self.rules = rules or DEFAULT_RULES
        self.yaku_checks = self._create_yaku_checks()

    def score(self, hand: FullHand) -> Optional[ScoringResult]:
        """
        Score a full hand.

        Returns:
            The best ScoringResult, or None if the hand has no winning
            decomposition. A winning hand may still score no yaku, in
            which case the result has an empty yaku list and 0 han.
        """
        patterns = decompose(hand, self.rules)
        if not patterns:
            return None

        results = [self.score_pattern(pattern) for pattern in patterns]
        # max() keeps the first of equal values, so ties resolve to pattern order
        best = max(results, key=lambda r: r.han)
        logger.debug(f"{hand}: {len(patterns)} patterns, best {best.han}")
        return best

    def score_pattern(self, pattern: Pattern) -> ScoringResult:
        """Score one decomposition"""
        analysis = PatternAnalysis.from_pattern(pattern)

        yakuman = self._check_yakuman(analysis)
        if yakuman:
            yakus = yakuman
        else:
            yakus = [yaku for yaku, check in self.yaku_checks if check(analysis)]

        yakus = tuple(sorted(yakus))
        return ScoringResult(yakus=yakus, han=total_han(yakus), pattern=pattern)

    def _create_yaku_checks(self) -> List[Tuple[Yaku, Callable[[PatternAnalysis], bool]]]:
        """Create list of yaku with their check functions"""
        return [
            # 1 Han
            (Yaku(YakuKind.TANYAO), self._check_tanyao),
            (Yaku(YakuKind.YAKUHAI_SANGENPAI, HAKU), lambda a: self._check_yakuhai_dragon(a, HAKU)),
            (Yaku(YakuKind.YAKUHAI_SANGENPAI, HATSU), lambda a: self._check_yakuhai_dragon(a, HATSU)),
            (Yaku(YakuKind.YAKUHAI_SANGENPAI, CHUN), lambda a: self._check_yakuhai_dragon(a, CHUN)),
            (Yaku(YakuKind.PINFU), self._check_pinfu),
            (Yaku(YakuKind.IIPEIKOU), self._check_iipeikou),

            # 2 Han
            (Yaku(YakuKind.CHIITOITSU), self._check_chiitoitsu),
            (Yaku(YakuKind.SANSHOKU_DOUJUN), self._check_sanshoku_doujun),
            (Yaku(YakuKind.IKKITSUUKAN), self._check_ittsu),
            (Yaku(YakuKind.TOITOIHOU), self._check_toitoi),
            (Yaku(YakuKind.SANANKOU), self._check_sanankou),
            (Yaku(YakuKind.SANSHOKU_DOUKOU), self._check_sanshoku_doukou),
            (Yaku(YakuKind.HONCHANTAIYAOCHUU), self._check_chanta),
            (Yaku(YakuKind.HONROUTOU), self._check_honroutou),
            (Yaku(YakuKind.SHOUSANGEN), self._check_shousangen),

            # 3 Han
            (Yaku(YakuKind.HONIISOU), self._check_honitsu),
            (Yaku(YakuKind.JUNCHANTAIYAOCHUU), self._check_junchan),
            (Yaku(YakuKind.RYANPEIKOU), self._check_ryanpeikou),

            # 6 Han
            (Yaku(YakuKind.CHINIISOU), self._check_chinitsu),
        ]

    def _check_yakuman(self, a: PatternAnalysis) -> List[Yaku]:
        """Check for yakuman hands; stronger variants shadow weaker ones"""
        yakuman = []

        if a.is_kokushi:
            if self._check_kokushi_13(a):
                yakuman.append(Yaku(YakuKind.KOKUSHIMUSOU13))
            else:
                yakuman.append(Yaku(YakuKind.KOKUSHIMUSOU))

        if self._check_suuankou_tanki(a):
            yakuman.append(Yaku(YakuKind.SUUANKOUTANKI))
        elif self._check_suuankou(a):
            yakuman.append(Yaku(YakuKind.SUUANKOU))

        if self._check_daisangen(a):
            yakuman.append(Yaku(YakuKind.DAISANGEN))

        if self._check_daisuushii(a):
            yakuman.append(Yaku(YakuKind.DAISUUSHII))
        elif self._check_shousuushii(a):
            yakuman.append(Yaku(YakuKind.SHOUSUUSHII))

        if self._check_tsuuiisou(a):
            yakuman.append(Yaku(YakuKind.TSUUIISOU))

        if self._check_chinroutou(a):
            yakuman.append(Yaku(YakuKind.CHINROUTOU))

        if self._check_ryuuiisou(a):
            yakuman.append(Yaku(YakuKind.RYUUIISOU))

        if self._check_junsei_chuuren(a):
            yakuman.append(Yaku(YakuKind.JUNSEICHUURENPOUTOU))
        elif self._check_chuuren(a):
            yakuman.append(Yaku(YakuKind.CHUURENPOUTOU))

        return yakuman

    # === Yaku Check Functions ===

    def _check_tanyao(self, a: PatternAnalysis) -> bool:
        """All simples (no terminals/honors)"""
        return all(t.is_simple for t in a.tiles)

    def _check_yakuhai_dragon(self, a: PatternAnalysis, dragon: Tile) -> bool:
        """Check for dragon triplet"""
        return dragon in a.triplets

    def _check_pinfu(self, a: PatternAnalysis) -> bool:
        """All sequences, non-dragon pair, two-sided wait"""
        if not a.is_standard or len(a.sequences) != 4:
            return False
        if a.pair.is_dragon:
            return False

        for start in a.sequences:
            if start.suit != a.last_draw.suit:
                continue
            # Won on the low end of 2-3 waiting on 1-4 (not 8-9 waiting on 7)
            if a.last_draw.value == start.value and start.value != 7:
                return True
            # Won on the high end, not the 1-2 edge wait
            if a.last_draw.value == start.value + 2 and start.value != 1:
                return True
        return False

    def _peikou_count(self, a: PatternAnalysis) -> int:
        counts = Counter(a.sequences)
        return sum(c // 2 for c in counts.values())

    def _check_iipeikou(self, a: PatternAnalysis) -> bool:
        """Two identical sequences"""
        return a.is_standard and self._peikou_count(a) == 1

    def _check_ryanpeikou(self, a: PatternAnalysis) -> bool:
        """Two sets of identical sequences"""
        return a.is_standard and self._peikou_count(a) == 2

    def _check_chiitoitsu(self, a: PatternAnalysis) -> bool:
        return a.is_chiitoitsu

    def _check_sanshoku_doujun(self, a: PatternAnalysis) -> bool:
        """Three suits, same sequence"""
        chows_by_value = {}
        for start in a.sequences:
            chows_by_value.setdefault(start.value, set()).add(start.suit)
        return any(len(suits) == 3 for suits in chows_by_value.values())

    def _check_ittsu(self, a: PatternAnalysis) -> bool:
        """1-2-3, 4-5-6, 7-8-9 in same suit"""
        for suit in NUMBERED_SUITS:
            chow_starts = {start.value for start in a.sequences if start.suit == suit}
            if {1, 4, 7}.issubset(chow_starts):
                return True
        return False

    def _check_toitoi(self, a: PatternAnalysis) -> bool:
        """All triplets"""
        return a.is_standard and len(a.triplets) == 4

    def _check_sanankou(self, a: PatternAnalysis) -> bool:
        """Three concealed triplets (every triplet of a closed drawn hand is concealed)"""
        return len(a.triplets) == 3

    def _check_sanshoku_doukou(self, a: PatternAnalysis) -> bool:
        """Same triplet in three suits"""
        pongs_by_value = {}
        for tile in a.triplets:
            if tile.is_numbered:
                pongs_by_value.setdefault(tile.value, set()).add(tile.suit)
        return any(len(suits) == 3 for suits in pongs_by_value.values())

    def _all_blocks_touch(self, a: PatternAnalysis, predicate) -> bool:
        return all(any(predicate(t) for t in block.tiles) for block in a.pattern.blocks)

    def _check_chanta(self, a: PatternAnalysis) -> bool:
        """Every block holds a terminal or honor, with honors and a sequence"""
        if not a.is_standard or not a.sequences or not a.has_honors:
            return False
        return self._all_blocks_touch(a, lambda t: t.is_terminal_or_honor)

    def _check_junchan(self, a: PatternAnalysis) -> bool:
        """Every block holds a terminal, no honors, with a sequence"""
        if not a.is_standard or not a.sequences or a.has_honors:
            return False
        return self._all_blocks_touch(a, lambda t: t.is_terminal)

    def _check_honroutou(self, a: PatternAnalysis) -> bool:
        """Only terminals and honors, with both present"""
        if a.is_kokushi:
            return False
        if not all(t.is_terminal_or_honor for t in a.tiles):
            return False
        return a.has_honors and any(t.is_terminal for t in a.tiles)

    def _check_shousangen(self, a: PatternAnalysis) -> bool:
        """Small 3 dragons (2 pongs + pair)"""
        dragon_pongs = sum(1 for t in a.triplets if t.is_dragon)
        return dragon_pongs == 2 and a.pair is not None and a.pair.is_dragon

    def _check_honitsu(self, a: PatternAnalysis) -> bool:
        """One suit + honors"""
        return len(a.numbered_suits) == 1 and a.has_honors

    def _check_chinitsu(self, a: PatternAnalysis) -> bool:
        """Pure one suit (no honors)"""
        return len(a.numbered_suits) == 1 and not a.has_honors

    # === Yakuman Checks ===

    def _check_kokushi_13(self, a: PatternAnalysis) -> bool:
        """Thirteen distinct orphans held, won on the duplicate"""
        return a.counts[a.last_draw.tile_index] == 2

    def _check_suuankou(self, a: PatternAnalysis) -> bool:
        """Four concealed triplets"""
        return len(a.triplets) == 4

    def _check_suuankou_tanki(self, a: PatternAnalysis) -> bool:
        """Four concealed triplets, won on the pair"""
        return len(a.triplets) == 4 and a.pair == a.last_draw

    def _check_daisangen(self, a: PatternAnalysis) -> bool:
        """Big 3 dragons (3 dragon pongs)"""
        return sum(1 for t in a.triplets if t.is_dragon) == 3

    def _check_shousuushii(self, a: PatternAnalysis) -> bool:
        """Small 4 winds (3 wind pongs + wind pair)"""
        wind_pongs = sum(1 for t in a.triplets if t.is_wind)
        return wind_pongs == 3 and a.pair is not None and a.pair.is_wind

    def _check_daisuushii(self, a: PatternAnalysis) -> bool:
        """Big 4 winds (4 wind pongs)"""
        return sum(1 for t in a.triplets if t.is_wind) == 4

    def _check_tsuuiisou(self, a: PatternAnalysis) -> bool:
        """All honors"""
        return all(t.is_honor for t in a.tiles)

    def _check_chinroutou(self, a: PatternAnalysis) -> bool:
        """All terminals"""
        return all(t.is_terminal for t in a.tiles)

    def _check_ryuuiisou(self, a: PatternAnalysis) -> bool:
        """All green (2,3,4,6,8 sou + hatsu)"""
        return all(t.is_green for t in a.tiles)

    def _suit_counts(self, a: PatternAnalysis) -> Optional[np.ndarray]:
        """Counts of ranks 1-9 when the hand is a single numbered suit"""
        if not a.is_standard or a.has_honors or len(a.numbered_suits) != 1:
            return None
        start = a.tiles[0].suit * 9
        return a.counts[start:start + 9]

    def _check_chuuren(self, a: PatternAnalysis) -> bool:
        """Nine gates (1112345678999 + any in same suit)"""
        suit_counts = self._suit_counts(a)
        if suit_counts is None:
            return False
        return bool(np.all(suit_counts >= CHUUREN_COUNTS))

    def _check_junsei_chuuren(self, a: PatternAnalysis) -> bool:
        """Nine gates held before the draw, so any tile of the suit won"""
        suit_counts = self._suit_counts(a)
        if suit_counts is None:
            return False
        held = suit_counts.copy()
        held[a.last_draw.value - 1] -= 1
        return bool(np.array_equal(held, CHUUREN_COUNTS))


def score(hand: FullHand, rules: Optional[RuleSet] = None) -> Optional[ScoringResult]:
    """
    Convenience function to score a hand.

    Returns:
        The best ScoringResult, or None if the hand does not win
    """
    return YakuScorer(rules).score(hand)


def yakus(hand: FullHand, rules: Optional[RuleSet] = None) -> Optional[Tuple[Yaku, ...]]:
    """Yaku of the best decomposition, or None if the hand does not win"""
    result = score(hand, rules)
    return result.yakus if result else None
