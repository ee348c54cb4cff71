"""
Tests for hand decomposition
"""

import random
from collections import Counter

import pytest

from riichi_yaku.blocks import Block, BlockType, Pattern
from riichi_yaku.decompose import could_be_standard, decompose, is_chiitoitsu, is_kokushi
from riichi_yaku.hand import ReadyHand
from riichi_yaku.notation import parse_tile, parse_tiles
from riichi_yaku.rules import STANDARD_ONLY_RULES, RuleSet
from riichi_yaku.tiles import ALL_TILES, TERMINALS_AND_HONORS, man, pin, HAKU


def full_hand(text: str, draw: str):
    return ReadyHand.from_string(text).draw(parse_tile(draw))


class TestStandardDecomposition:
    """Test four groups and a pair"""

    def test_single_pattern(self):
        """Test a hand with exactly one reading"""
        patterns = decompose(full_hand("123456789p 1234m", "4m"))
        assert len(patterns) == 1
        pattern = patterns[0]
        assert pattern.is_standard
        assert pattern.pairs == (Block.pair(man(4)),)
        assert len(pattern.sequences) == 4
        assert pattern.last_draw == man(4)

    def test_triplets_or_sequences(self):
        """Test 111222333 reads as triplets or as sequences"""
        patterns = decompose(full_hand("1p3 2p3 3p 4p3 1m3", "2p"))
        assert len(patterns) == 2
        pairs = {p.pairs for p in patterns}
        assert pairs == {(Block.pair(pin(1)),), (Block.pair(pin(4)),)}

    def test_three_readings(self):
        """Test four consecutive triplets with an honor pair"""
        patterns = decompose(full_hand("1p3 2p3 3p3 4p3 haku", "haku"))
        assert len(patterns) == 3
        for pattern in patterns:
            assert pattern.pairs == (Block.pair(HAKU),)
        assert any(len(p.triplets) == 4 for p in patterns)

    def test_not_winning(self):
        """Test hands without a winning shape"""
        assert decompose(full_hand("124578p 124578m 1s", "1s")) == []
        assert decompose(full_hand("123456789p 238m hatsu", "8m")) == []

    def test_patterns_sorted_and_unique(self):
        """Test output has no duplicates"""
        patterns = decompose(full_hand("1p3 2p3 3p3 4p3 haku", "haku"))
        assert patterns == sorted(set(patterns))

    def test_every_pattern_covers_hand(self):
        """Test each pattern uses exactly the hand's tiles"""
        hand = full_hand("1p3 2p3 3p 4p3 1m3", "2p")
        for pattern in decompose(hand):
            assert pattern.tiles == hand.tiles


class TestSpecialShapes:
    """Test seven pairs and thirteen orphans"""

    def test_seven_pairs(self):
        """Test a seven pairs hand"""
        patterns = decompose(full_hand("1p2 2s2 3m2 4p2 5s2 6m2 7p", "7p"))
        assert len(patterns) == 1
        assert patterns[0].is_seven_pairs
        assert all(b.block_type == BlockType.PAIR for b in patterns[0].blocks)

    def test_seven_pairs_needs_distinct_pairs(self):
        """Test four of a kind is not two pairs"""
        assert decompose(full_hand("1p2 2s2 3m2 4p2 5s2 6m3", "6m")) == []
        assert not is_chiitoitsu(parse_tiles("1p2 2s2 3m2 4p2 5s2 6m4"))

    def test_seven_pairs_and_standard(self):
        """Test a ryanpeikou shape reads both ways"""
        patterns = decompose(full_hand("112233m 445566p 7s", "7s"))
        shapes = sorted(len(p.blocks) for p in patterns)
        assert shapes == [5, 7]

    def test_seven_pairs_disabled(self):
        """Test the rule switch"""
        rules = RuleSet(check_chiitoitsu=False)
        assert decompose(full_hand("1p2 2s2 3m2 4p2 5s2 6m2 7p", "7p"), rules) == []

    def test_thirteen_orphans(self):
        """Test the thirteen orphans shape"""
        for text, draw in [
            ("19m 19p 19s ton nan shaa pei haku hatsu chun", "1m"),
            ("1m2 9m 19p 19s ton nan shaa pei haku hatsu", "chun"),
        ]:
            patterns = decompose(full_hand(text, draw))
            assert len(patterns) == 1
            assert patterns[0].is_thirteen_orphans

    def test_thirteen_orphans_needs_one_duplicate(self):
        """Test a missing kind or a second duplicate fails"""
        assert not is_kokushi(parse_tiles("1m2 9m2 19p 19s ton nan shaa pei haku hatsu"))
        assert not is_kokushi(parse_tiles("1m2 9m 1p 2p 19s ton nan shaa pei haku hatsu chun"))

    def test_thirteen_orphans_disabled(self):
        """Test standard-only rules"""
        hand = full_hand("19m 19p 19s ton nan shaa pei haku hatsu chun", "1m")
        assert decompose(hand, STANDARD_ONLY_RULES) == []


class TestPrefilter:
    """Test the cheap standard-form check"""

    def test_accepts_winning_shapes(self):
        """Test winning hands pass"""
        assert could_be_standard(parse_tiles("123456789p 1234m 4m"))
        assert could_be_standard(parse_tiles("1p3 2p3 3p3 4p3 haku2"))
        assert could_be_standard(parse_tiles("1m3 9m3 ton3 chun3 haku2"))

    def test_rejects_disconnected(self):
        """Test runs of the wrong size are rejected"""
        assert not could_be_standard(parse_tiles("124578p 124578m 1s2"))
        # Several pieces that each need the pair
        assert not could_be_standard(parse_tiles("11m 55p 123456s 99s haku2"))

    def test_prefilter_never_rejects_a_decomposable_hand(self):
        """Test agreement with the full search"""
        for text, draw in [
            ("123456789p 1234m", "4m"),
            ("1p3 2p3 3p 4p3 1m3", "2p"),
            ("1m3 2345678m 9m3", "5m"),
        ]:
            hand = full_hand(text, draw)
            assert could_be_standard(hand.tiles)
            assert decompose(hand)


SEQUENCE_STARTS = [t for t in ALL_TILES if t.is_numbered and t.value <= 7]


def random_standard_blocks(rng):
    """Four groups and a pair drawn at random, never more than four of a tile"""
    used = Counter()
    blocks = []
    while len(blocks) < 5:
        if len(blocks) == 4:
            block = Block.pair(rng.choice(ALL_TILES))
        elif rng.random() < 0.5:
            block = Block.triplet(rng.choice(ALL_TILES))
        else:
            block = Block.sequence(rng.choice(SEQUENCE_STARTS))
        wanted = used + Counter(block.tiles)
        if all(n <= 4 for n in wanted.values()):
            used = wanted
            blocks.append(block)
    return blocks


class TestGeneratedHands:
    """Test decomposition against hands built from known blocks"""

    @pytest.mark.parametrize("seed", range(20))
    def test_construction_is_found(self, seed):
        """Test the blocks a hand was built from are one of its patterns"""
        rng = random.Random(seed)
        for _ in range(25):
            blocks = random_standard_blocks(rng)
            tiles = sorted(t for block in blocks for t in block.tiles)
            last_draw = rng.choice(tiles)
            rest = list(tiles)
            rest.remove(last_draw)
            hand = ReadyHand(rest).draw(last_draw)

            expected = Pattern(tuple(sorted(blocks)), last_draw)
            patterns = decompose(hand)
            assert expected in patterns
            assert could_be_standard(hand.tiles)
            for pattern in patterns:
                assert pattern.tiles == hand.tiles

    @pytest.mark.parametrize("seed", range(20))
    def test_special_shapes_exclusive(self, seed):
        """Test no hand is both seven pairs and thirteen orphans"""
        rng = random.Random(seed)
        for _ in range(200):
            # Drawing from orphans and a few pairs makes both shapes likely
            pool = TERMINALS_AND_HONORS * 2 + rng.sample(ALL_TILES, 7) * 2
            tiles = sorted(rng.sample(pool, 14))
            assert not (is_kokushi(tiles) and is_chiitoitsu(tiles))

    def test_special_shapes_exclusive_on_known_hands(self):
        """Test each known special hand matches exactly one shape"""
        kokushi = parse_tiles("1m2 9m 19p 19s ton nan shaa pei haku hatsu chun")
        pairs = parse_tiles("1m2 9m2 1p2 9p2 ton2 haku2 chun2")
        assert is_kokushi(kokushi) and not is_chiitoitsu(kokushi)
        assert is_chiitoitsu(pairs) and not is_kokushi(pairs)
