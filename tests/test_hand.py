"""
Tests for hand state and blocks
"""

import pytest
import numpy as np

from riichi_yaku.blocks import Block, BlockType, Pattern
from riichi_yaku.errors import HandError, TileCountError, TileNotFoundError
from riichi_yaku.hand import FullHand, ReadyHand, count_array
from riichi_yaku.tiles import man, pin, sou, EAST, HAKU, CHUN


class TestReadyHand:
    """Test 13-tile hands"""

    def test_from_string(self):
        """Test parsing a hand"""
        hand = ReadyHand.from_string("123456789p 1234m")
        assert len(hand) == 13
        assert hand[0] == man(1)
        assert str(hand) == "1m 2m 3m 4m 1p 2p 3p 4p 5p 6p 7p 8p 9p"

    def test_wrong_count(self):
        """Test hands must hold exactly 13 tiles"""
        with pytest.raises(TileCountError) as exc_info:
            ReadyHand.from_string("123456789p 123m")
        assert exc_info.value.expected == 13
        assert exc_info.value.actual == 12
        assert "expected 13, got 12" in str(exc_info.value)

        with pytest.raises(HandError):
            ReadyHand.from_string("123456789p 12345m")

    def test_huge_repeat(self):
        """Test an oversized repeat count is a hand error, not a crash"""
        with pytest.raises(HandError):
            ReadyHand.from_string("123456789m50000000")

    def test_draw(self):
        """Test drawing makes a sorted 14-tile hand"""
        hand = ReadyHand.from_string("123456789p 1234m")
        full = hand.draw(man(4))
        assert isinstance(full, FullHand)
        assert len(full) == 14
        assert full.last_draw == man(4)
        assert full.count(man(4)) == 2
        assert list(full) == sorted(full)
        # Original unchanged
        assert len(hand) == 13

    def test_maybe_effective(self):
        """Test related-tile filter"""
        hand = ReadyHand.from_string("123456789p 1m 5m ton nan")
        assert hand.maybe_effective(man(3))
        assert hand.maybe_effective(man(7))
        assert not hand.maybe_effective(man(9))
        assert hand.maybe_effective(EAST)
        assert not hand.maybe_effective(HAKU)
        assert not hand.maybe_effective(sou(5))

    def test_exhausted(self):
        """Test four-copy detection"""
        hand = ReadyHand.from_string("1m4 2m3 3m3 4m3")
        assert hand.is_exhausted(man(1))
        assert not hand.is_exhausted(man(2))

    def test_counts(self):
        """Test count array"""
        hand = ReadyHand.from_string("1m4 2m3 3m3 4m3")
        counts = hand.to_count_array()
        assert counts.dtype == np.int8
        assert counts[0] == 4
        assert counts[3] == 3
        assert counts.sum() == 13
        assert np.array_equal(counts, count_array(list(hand)))

    def test_equality(self):
        """Test hands compare by tiles"""
        a = ReadyHand.from_string("123456789p 1234m")
        b = ReadyHand.from_string("1234m 987654321p")
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_unique_tiles(self):
        """Test distinct tile kinds"""
        hand = ReadyHand.from_string("1m4 2m3 3m3 4m3")
        assert hand.unique_tiles() == (man(1), man(2), man(3), man(4))


class TestFullHand:
    """Test 14-tile hands"""

    def test_discard(self):
        """Test discarding returns a ready hand"""
        full = ReadyHand.from_string("123456789p 1234m").draw(CHUN)
        ready = full.discard(man(1))
        assert isinstance(ready, ReadyHand)
        assert CHUN in ready
        assert man(1) not in ready

    def test_discard_missing(self):
        """Test discarding an absent tile fails and leaves the hand usable"""
        full = ReadyHand.from_string("123456789p 1234m").draw(CHUN)
        with pytest.raises(TileNotFoundError) as exc_info:
            full.discard(sou(5))
        assert exc_info.value.tile == sou(5)
        assert isinstance(exc_info.value, LookupError)
        # Retry works
        assert len(full.discard(CHUN)) == 13

    def test_last_draw_must_be_held(self):
        """Test last draw validation"""
        tiles = list(ReadyHand.from_string("123456789p 1234m")) + [man(5)]
        with pytest.raises(ValueError):
            FullHand(tiles, CHUN)

    def test_wrong_count(self):
        """Test 14-tile requirement"""
        with pytest.raises(TileCountError):
            FullHand([man(1)] * 13, man(1))


class TestBlock:
    """Test block validation and income tiles"""

    def test_constructors(self):
        """Test block creation"""
        assert Block.triplet(man(1)).tiles == (man(1),) * 3
        assert Block.sequence(pin(7)).tiles == (pin(7), pin(8), pin(9))
        assert Block.pair(HAKU).is_pair
        assert Block.incomplete(sou(5), sou(3)).tiles == (sou(3), sou(5))
        assert Block.orphan(EAST).block_type == BlockType.ORPHAN

    def test_invalid_blocks(self):
        """Test invalid blocks are rejected"""
        with pytest.raises(ValueError):
            Block.sequence(pin(8))
        with pytest.raises(ValueError):
            Block((man(1), man(2), man(4)), BlockType.SEQUENCE)
        with pytest.raises(ValueError):
            Block((man(1), man(1), man(2)), BlockType.TRIPLET)
        with pytest.raises(ValueError):
            Block.incomplete(man(1), man(4))
        with pytest.raises(ValueError):
            Block((man(2), man(1)), BlockType.INCOMPLETE)
        with pytest.raises(ValueError):
            Block((EAST, EAST), BlockType.ORPHAN)

    def test_income_tiles(self):
        """Test tiles each block accepts"""
        assert Block.triplet(man(1)).income_tiles() == ()
        assert Block.sequence(man(1)).income_tiles() == ()
        assert Block.pair(man(5)).income_tiles() == (man(5),)
        assert Block.incomplete(man(5), man(5)).income_tiles() == (man(5),)
        # Two-sided
        assert Block.incomplete(man(4), man(5)).income_tiles() == (man(3), man(6))
        # Edge
        assert Block.incomplete(man(1), man(2)).income_tiles() == (man(3),)
        assert Block.incomplete(man(8), man(9)).income_tiles() == (man(7),)
        # Closed
        assert Block.incomplete(man(3), man(5)).income_tiles() == (man(4),)
        # Orphans
        assert Block.orphan(HAKU).income_tiles() == (HAKU,)
        assert Block.orphan(sou(1)).income_tiles() == (sou(1), sou(2), sou(3))
        assert Block.orphan(sou(5)).income_tiles() == tuple(sou(v) for v in range(3, 8))


class TestPattern:
    """Test pattern validation"""

    def test_standard(self):
        """Test a standard pattern"""
        blocks = (
            Block.sequence(man(1)), Block.sequence(man(4)), Block.sequence(man(7)),
            Block.triplet(EAST), Block.pair(HAKU),
        )
        pattern = Pattern(blocks, man(1))
        assert pattern.is_standard
        assert len(pattern.tiles) == 14
        assert len(pattern.sequences) == 3
        assert pattern.pairs == (Block.pair(HAKU),)

    def test_wrong_tile_total(self):
        """Test patterns must cover 14 tiles"""
        blocks = (Block.sequence(man(1)),) * 4 + (Block.triplet(HAKU),)
        with pytest.raises(ValueError):
            Pattern(blocks, man(1))

    def test_standard_needs_pair(self):
        """Test standard patterns need exactly one pair"""
        blocks = (
            Block.sequence(man(1)), Block.sequence(man(4)), Block.sequence(man(7)),
            Block.triplet(EAST), Block.incomplete(HAKU, HAKU),
        )
        with pytest.raises(ValueError):
            Pattern(blocks, man(1))

    def test_last_draw_in_pattern(self):
        """Test last draw validation"""
        blocks = (Block.pair(man(1)),) * 7
        with pytest.raises(ValueError):
            Pattern(blocks, man(2))
