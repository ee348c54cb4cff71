"""
Shanten Calculator for Riichi Mahjong

Calculates the shanten number (distance to tenpai) of a closed 13-tile hand
and searches the draw/discard sequences that reach a win in that many
exchanges, reporting the yaku those wins would score.

Shanten values:
-  0: Tenpai (one tile away from winning)
-  1: Iishanten (one exchange away from tenpai)
-  2+: Further from tenpai

A complete 14-tile hand measures -1.
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from functools import lru_cache
from typing import Dict, FrozenSet, Iterator, List, Optional, Set, Tuple
import numpy as np

from .blocks import Block
from .decompose import can_start_sequence
from .hand import FullHand, ReadyHand
from .rules import DEFAULT_RULES, RuleSet
from .scoring import ScoringResult, YakuScorer
from .tiles import ALL_TILES, NUM_TILE_TYPES, TERMINALS_AND_HONORS, Tile
from .yaku import Yaku

logger = logging.getLogger(__name__)

# (groups, protos, pairs) a set of tiles can be split into
BlockCounts = Tuple[int, int, int]

KOKUSHI_INDICES = [t.tile_index for t in TERMINALS_AND_HONORS]

REGION_CACHE_SIZE = 65536
DISTANCE_CACHE_SIZE = 65536


class HandShape(IntEnum):
    """Winning shapes a hand can aim for"""
    STANDARD = 0    # 4 groups + 1 pair
    CHIITOITSU = 1  # 7 pairs
    KOKUSHI = 2     # 13 orphans


@dataclass
class ShantenResult:
    """Result of shanten analysis."""
    distance: int  # 0 = tenpai, 1+ = exchanges to tenpai
    waits: List[Tuple[Tile, ScoringResult]] = field(default_factory=list)  # Winning draws (tenpai only)
    outcomes: List[Tuple[Yaku, ...]] = field(default_factory=list)  # Yaku sets reachable at this distance
    progress_tiles: List[Tile] = field(default_factory=list)  # Draws that lower the distance
    shapes: List[HandShape] = field(default_factory=list)  # Shapes whose bound is the minimum

    @property
    def is_tenpai(self) -> bool:
        return self.distance == 0

    @property
    def waiting_tiles(self) -> List[Tile]:
        return [tile for tile, _ in self.waits]


def _formula(groups: int, protos: int, pairs: int) -> int:
    """Standard-form shanten; protos beyond the four group slots do not count"""
    return 8 - 2 * groups - min(protos, max(0, 4 - groups)) - pairs


def _pareto(options) -> FrozenSet[BlockCounts]:
    """
    Drop options that another option beats on groups and protos with the
    same pair count. More groups or protos never raise the formula.
    """
    kept = set()
    for g, t, p in options:
        dominated = any(
            g2 >= g and t2 >= t and p2 == p and (g2, t2) != (g, t)
            for g2, t2, p2 in options
        )
        if not dominated:
            kept.add((g, t, p))
    return frozenset(kept)


def _combine(left: FrozenSet[BlockCounts], right: FrozenSet[BlockCounts]) -> FrozenSet[BlockCounts]:
    return _pareto({
        (g1 + g2, t1 + t2, p1 + p2)
        for g1, t1, p1 in left
        for g2, t2, p2 in right
        if p1 + p2 <= 1
    })


@lru_cache(maxsize=REGION_CACHE_SIZE)
def _region_options(counts: Tuple[int, ...], allow_sequences: bool) -> FrozenSet[BlockCounts]:
    """
    Every useful way to split one suit (or the honors) into blocks.

    Recursion always takes the lowest remaining tile and tries: triplet,
    sequence, pair (as the head or as a proto-triplet), the two partial
    runs, or leaving it as an orphan.
    """
    first = next((i for i, c in enumerate(counts) if c > 0), -1)
    if first == -1:
        return frozenset({(0, 0, 0)})

    options = set()

    def extend(taken: Dict[int, int], groups: int, protos: int, pairs: int) -> None:
        rest = list(counts)
        for idx, n in taken.items():
            rest[idx] -= n
        for g, t, p in _region_options(tuple(rest), allow_sequences):
            if p + pairs <= 1:
                options.add((g + groups, t + protos, p + pairs))

    count = counts[first]
    last = len(counts) - 1
    if count >= 3:
        extend({first: 3}, 1, 0, 0)
    if allow_sequences and first + 2 <= last and counts[first + 1] and counts[first + 2]:
        extend({first: 1, first + 1: 1, first + 2: 1}, 1, 0, 0)
    if count >= 2:
        extend({first: 2}, 0, 0, 1)
        extend({first: 2}, 0, 1, 0)
    if allow_sequences:
        if first + 1 <= last and counts[first + 1]:
            extend({first: 1, first + 1: 1}, 0, 1, 0)
        if first + 2 <= last and counts[first + 2]:
            extend({first: 1, first + 2: 1}, 0, 1, 0)
    extend({first: 1}, 0, 0, 0)

    return _pareto(options)


@lru_cache(maxsize=4096)
def _hand_options(counts: Tuple[int, ...]) -> FrozenSet[BlockCounts]:
    """Block counts for a whole 34-slot count vector"""
    options = _region_options(counts[0:9], True)
    options = _combine(options, _region_options(counts[9:18], True))
    options = _combine(options, _region_options(counts[18:27], True))
    return _combine(options, _region_options(counts[27:34], False))


def _as_key(counts: np.ndarray) -> Tuple[int, ...]:
    return tuple(int(c) for c in counts)


def standard_distance(counts: np.ndarray) -> int:
    """Shanten toward 4 groups + 1 pair"""
    return min(_formula(g, t, p) for g, t, p in _hand_options(_as_key(counts)))


def chiitoitsu_distance(counts: np.ndarray) -> int:
    """
    Shanten toward 7 pairs.

    Shanten = 6 - pairs + max(0, 7 - distinct_tiles)
    """
    pairs = int(np.count_nonzero(counts >= 2))
    distinct = int(np.count_nonzero(counts >= 1))
    return 6 - pairs + max(0, 7 - distinct)


def kokushi_distance(counts: np.ndarray) -> int:
    """
    Shanten toward 13 orphans.

    Need one of each terminal/honor + one pair among them.
    """
    yaochuu = counts[KOKUSHI_INDICES]
    unique_count = int(np.count_nonzero(yaochuu >= 1))
    has_pair = bool(np.any(yaochuu >= 2))
    return 13 - unique_count - (1 if has_pair else 0)


class ShantenCalculator:
    """
    Shanten calculator and draw/discard search for closed hands.

    Calculates shanten for:
    - Standard form (4 groups + 1 pair)
    - Chiitoitsu (7 pairs)
    - Kokushi musou (13 orphans)
    """

    def __init__(self, rules: Optional[RuleSet] = None):
        self.rules = rules or DEFAULT_RULES
        self.scorer = YakuScorer(self.rules)
        # Per-calculator memo of hand -> shanten, bounded for long sessions
        self._distance = lru_cache(maxsize=DISTANCE_CACHE_SIZE)(self._measure)

    # === Distance bounds ===

    def shape_distances(self, counts: np.ndarray) -> Dict[HandShape, int]:
        """Shanten toward each enabled shape"""
        distances = {HandShape.STANDARD: standard_distance(counts)}
        if self.rules.check_chiitoitsu:
            distances[HandShape.CHIITOITSU] = chiitoitsu_distance(counts)
        if self.rules.check_kokushi:
            distances[HandShape.KOKUSHI] = kokushi_distance(counts)
        return distances

    def calculate(self, counts: np.ndarray) -> int:
        """Minimum shanten over all enabled shapes"""
        return min(self.shape_distances(counts).values())

    def distance(self, hand: ReadyHand) -> int:
        """Shanten of a ready hand, memoised on recently seen hands"""
        return self._distance(hand)

    def _measure(self, hand: ReadyHand) -> int:
        return self.calculate(hand.to_count_array())

    # === Standard-form assignments ===

    def standard_assignments(self, counts: np.ndarray) -> List[Tuple[Block, ...]]:
        """
        Every block assignment that achieves the standard-form shanten.

        Groups, the pair, partial blocks and orphans are all listed, so the
        partial blocks' income tiles show where the hand can progress.
        """
        best = standard_distance(counts)
        found: Set[Tuple[Block, ...]] = set()
        self._collect_assignments(counts.copy(), [], (0, 0, 0), best, found)
        return sorted(found)

    def _collect_assignments(
        self,
        counts: np.ndarray,
        blocks: List[Block],
        acc: BlockCounts,
        best: int,
        found: Set[Tuple[Block, ...]],
    ) -> None:
        groups, protos, pairs = acc
        reachable = min(
            (_formula(groups + g, protos + t, pairs + p)
             for g, t, p in _hand_options(_as_key(counts))
             if pairs + p <= 1),
            default=None,
        )
        # Pruning: this branch cannot reach the best shanten
        if reachable is None or reachable > best:
            return

        first_idx = next((i for i in range(NUM_TILE_TYPES) if counts[i] > 0), -1)
        if first_idx == -1:
            found.add(tuple(sorted(blocks)))
            return

        tile = Tile.from_index(first_idx)

        def branch(taken: Dict[int, int], block: Block, step: BlockCounts) -> None:
            remaining = counts.copy()
            for idx, n in taken.items():
                remaining[idx] -= n
            next_acc = (groups + step[0], protos + step[1], pairs + step[2])
            self._collect_assignments(remaining, blocks + [block], next_acc, best, found)

        count = counts[first_idx]
        numbered = first_idx < 27
        rank = first_idx % 9

        if count >= 3:
            branch({first_idx: 3}, Block.triplet(tile), (1, 0, 0))
        if can_start_sequence(counts, first_idx):
            branch({first_idx: 1, first_idx + 1: 1, first_idx + 2: 1}, Block.sequence(tile), (1, 0, 0))
        if count >= 2:
            if pairs == 0:
                branch({first_idx: 2}, Block.pair(tile), (0, 0, 1))
            branch({first_idx: 2}, Block.incomplete(tile, tile), (0, 1, 0))
        if numbered and rank <= 7 and counts[first_idx + 1]:
            other = Tile.from_index(first_idx + 1)
            branch({first_idx: 1, first_idx + 1: 1}, Block.incomplete(tile, other), (0, 1, 0))
        if numbered and rank <= 6 and counts[first_idx + 2]:
            other = Tile.from_index(first_idx + 2)
            branch({first_idx: 1, first_idx + 2: 1}, Block.incomplete(tile, other), (0, 1, 0))
        branch({first_idx: 1}, Block.orphan(tile), (0, 0, 0))

    # === Progress tiles ===

    def progress_tiles(self, hand: ReadyHand) -> List[Tile]:
        """
        Tiles whose draw lowers the hand's shanten.

        Candidates come from the income of every optimal standard-form
        assignment and from the pair/orphan needs of the special shapes;
        each candidate is then confirmed by recounting with it added.
        """
        counts = hand.to_count_array()
        distances = self.shape_distances(counts)
        current = min(distances.values())

        candidates: Set[Tile] = set()
        if distances[HandShape.STANDARD] == current:
            for assignment in self.standard_assignments(counts):
                for block in assignment:
                    candidates.update(block.income_tiles())
        if distances.get(HandShape.CHIITOITSU) == current:
            candidates.update(t for t in hand.unique_tiles() if hand.count(t) == 1)
            if np.count_nonzero(counts) < 7:
                candidates.update(t for t in ALL_TILES if t not in hand)
        if distances.get(HandShape.KOKUSHI) == current:
            has_pair = any(hand.count(t) >= 2 for t in TERMINALS_AND_HONORS)
            candidates.update(
                t for t in TERMINALS_AND_HONORS
                if t not in hand or not has_pair
            )

        progress = []
        for tile in sorted(candidates):
            if self.rules.respect_tile_limit and hand.is_exhausted(tile):
                continue
            with_tile = counts.copy()
            with_tile[tile.tile_index] += 1
            if self.calculate(with_tile) < current:
                progress.append(tile)
        return progress

    # === Search ===

    def candidate_draws(self, hand: ReadyHand, allow_orphans: bool) -> Iterator[Tile]:
        """
        Draws worth trying from this hand.

        A draw must relate to a held tile; while the thirteen-orphans shape
        is still reachable any terminal or honor is worth trying too.
        """
        for tile in ALL_TILES:
            if self.rules.respect_tile_limit and hand.is_exhausted(tile):
                continue
            if hand.maybe_effective(tile) or (allow_orphans and tile.is_terminal_or_honor):
                yield tile

    def find_waits(self, hand: ReadyHand) -> List[Tuple[Tile, ScoringResult]]:
        """Every draw that completes the hand, with its best scoring"""
        waits = []
        for tile in self.candidate_draws(hand, self.rules.check_kokushi):
            result = self.scorer.score(hand.draw(tile))
            if result is not None:
                waits.append((tile, result))
        return waits

    def analyze(self, hand: ReadyHand) -> ShantenResult:
        """
        Full shanten analysis of a ready hand.

        Returns:
            ShantenResult with the distance, the winning draws when tenpai,
            the yaku sets reachable at that distance and the progress tiles
        """
        distances = self.shape_distances(hand.to_count_array())
        lower_bound = min(distances.values())
        shapes = sorted(shape for shape, d in distances.items() if d == lower_bound)
        logger.debug(f"{hand}: shape bounds {dict((s.name, d) for s, d in distances.items())}")

        progress = self.progress_tiles(hand)

        waits = self.find_waits(hand)
        if waits:
            outcomes = sorted({result.yakus for _, result in waits})
            return ShantenResult(0, waits, outcomes, progress, shapes)

        # Not tenpai, so at least one exchange is needed whatever the bound says
        limit = max(lower_bound, 1)
        while limit <= self.rules.max_search_depth:
            found = self._search(hand, limit)
            if found is not None:
                depth, outcomes = found
                return ShantenResult(depth, [], outcomes, progress, shapes)
            logger.debug(f"{hand}: no win within {limit} exchanges, widening search")
            limit += 1

        logger.warning(
            f"{hand}: no win found within {self.rules.max_search_depth} exchanges"
        )
        return ShantenResult(lower_bound, [], [], progress, shapes)

    def _search(self, hand: ReadyHand, limit: int) -> Optional[Tuple[int, List[Tuple[Yaku, ...]]]]:
        """
        Breadth-first search over draw -> discard exchanges.

        A hand at a given depth is only kept if its shanten still fits in
        the exchanges the limit leaves, so every kept branch can still win
        within the limit. Returns the depth of the first wins and their
        yaku sets, or None if nothing wins within the limit.
        """
        frontier: Set[ReadyHand] = {hand}
        seen: Set[ReadyHand] = {hand}

        for depth in range(limit + 1):
            outcomes: Set[Tuple[Yaku, ...]] = set()
            next_frontier: Set[ReadyHand] = set()

            for ready in frontier:
                is_tenpai = self.distance(ready) == 0
                allow_orphans = (
                    self.rules.check_kokushi
                    and depth + kokushi_distance(ready.to_count_array()) <= limit
                )
                for draw in self.candidate_draws(ready, allow_orphans):
                    full = ready.draw(draw)
                    if is_tenpai:
                        result = self.scorer.score(full)
                        if result is not None:
                            outcomes.add(result.yakus)
                            continue
                    if depth < limit:
                        next_frontier.update(self._discards(full, draw, depth, limit, seen))

            logger.debug(
                f"{hand}: depth {depth}/{limit}, {len(frontier)} hands, "
                f"{len(outcomes)} outcomes"
            )
            if outcomes:
                return depth, sorted(outcomes)
            if not next_frontier:
                return None
            frontier = next_frontier

        return None

    def _discards(
        self,
        full: FullHand,
        draw: Tile,
        depth: int,
        limit: int,
        seen: Set[ReadyHand],
    ) -> Iterator[ReadyHand]:
        """Discards that keep the hand able to win within the limit"""
        for tile in full.unique_tiles():
            if tile == draw:
                continue
            ready = full.discard(tile)
            if ready in seen:
                continue
            if depth + 1 + self.distance(ready) <= limit:
                seen.add(ready)
                yield ready


def calculate_shanten(hand: ReadyHand, rules: Optional[RuleSet] = None) -> int:
    """
    Convenience function to calculate shanten.

    Returns:
        Shanten lower bound over the enabled shapes (0 = tenpai shape)
    """
    calc = ShantenCalculator(rules)
    return calc.distance(hand)


def analyze(hand: ReadyHand, rules: Optional[RuleSet] = None) -> ShantenResult:
    """
    Convenience function for a full shanten analysis.
    """
    return ShantenCalculator(rules).analyze(hand)
